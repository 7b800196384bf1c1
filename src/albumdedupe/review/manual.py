"""Review manual albums against their canonical matches."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from albumdedupe.errors import InvalidArgumentError
from albumdedupe.models import MANUAL_PREFIX, is_manual_id
from albumdedupe.reconcile.models import ManualAlbumEntry, ManualAuditResult
from albumdedupe.review.models import ActionOutcome, ReviewAction
from albumdedupe.review.session import SequentialSession
from albumdedupe.store import CatalogStore

__all__ = ["ManualReviewSession"]


class ManualReviewSession(SequentialSession[ManualAlbumEntry]):
    """Walk manual albums that have canonical matches.

    For each manual album the reviewer either merges it into one of its
    canonical matches, marks individual matches as distinct, or skips it.
    An entry whose matches are all marked distinct counts as resolved.
    """

    def __init__(
        self,
        entries: Iterable[ManualAlbumEntry],
        *,
        manual_prefix: str = MANUAL_PREFIX,
        **kwargs: Any,
    ) -> None:
        super().__init__(entries, **kwargs)
        self.manual_prefix = manual_prefix

    @classmethod
    def from_audit(cls, audit: ManualAuditResult, **kwargs: Any) -> ManualReviewSession:
        """Build a session over the audit entries that have matches."""
        return cls([entry for entry in audit.entries if entry.matches], **kwargs)

    def merge_into(
        self,
        canonical_id: str,
        store: CatalogStore,
        sync_metadata: bool = True,
    ) -> ActionOutcome:
        """Merge the current manual album into one of its matches."""
        with self._acting() as entry:
            if not is_manual_id(entry.manual_id, self.manual_prefix):
                return self._fail(
                    ReviewAction.MERGE_INTO,
                    entry.manual_id,
                    InvalidArgumentError(f"Invalid manual album ID: {entry.manual_id!r}"),
                )
            if not entry.has_match(canonical_id):
                return self._fail_unlisted(ReviewAction.MERGE_INTO, entry, canonical_id)
            return self._merge(
                ReviewAction.MERGE_INTO,
                entry,
                store,
                canonical_id,
                entry.manual_id,
                fuse_fields=sync_metadata,
            )

    def mark_distinct(self, canonical_id: str, store: CatalogStore) -> ActionOutcome:
        """Record that the current manual album is not the match ``canonical_id``."""
        with self._acting() as entry:
            if not entry.has_match(canonical_id):
                return self._fail_unlisted(ReviewAction.MARK_DISTINCT, entry, canonical_id)
            failure = self._mark_distinct(
                ReviewAction.MARK_DISTINCT, entry.manual_id, store, entry.manual_id, canonical_id
            )
            if failure is not None:
                return failure

            narrowed = entry.without_match(canonical_id)
            self._items[self._index] = narrowed
            if narrowed.matches:
                outcome = ActionOutcome(
                    ReviewAction.MARK_DISTINCT, entry.manual_id, success=True, resolved=False
                )
                return self._record(outcome)

            self.resolved_count += 1
            outcome = ActionOutcome(
                ReviewAction.MARK_DISTINCT, entry.manual_id, success=True, resolved=True
            )
            self._advance()
            return self._record(outcome)

    def _item_id(self, item: ManualAlbumEntry) -> str:
        return item.manual_id

    def _item_album_ids(self, item: ManualAlbumEntry) -> tuple[str, ...]:
        return (item.manual_id,)

    def _fail_unlisted(
        self, action: ReviewAction, entry: ManualAlbumEntry, canonical_id: str
    ) -> ActionOutcome:
        return self._fail(
            action,
            entry.manual_id,
            InvalidArgumentError(
                f"{canonical_id!r} is not a listed match of {entry.manual_id}"
            ),
        )
