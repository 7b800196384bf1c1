"""Sequential single-reviewer arbitration of candidate pairs.

A :class:`ReviewSession` is an explicit value owned by the caller. It walks an
ordered list of candidate pairs (``IDLE -> PRESENTING -> ... -> COMPLETE``)
and applies one reviewer decision at a time against a catalog store.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from albumdedupe.audit.logger import AuditLogger
from albumdedupe.candidates.models import CandidatePair, ScanResult
from albumdedupe.errors import (
    ActionInFlightError,
    ConflictError,
    DedupeError,
    InvalidArgumentError,
    SessionStateError,
)
from albumdedupe.merge.models import MergeResult
from albumdedupe.merge.resolver import merge_albums
from albumdedupe.review.models import (
    ActionOutcome,
    RecordDiff,
    ReviewAction,
    SessionState,
    diff_records,
)
from albumdedupe.store import CatalogStore

__all__ = ["ReviewSession", "SequentialSession"]

ItemT = TypeVar("ItemT")


class SequentialSession(ABC, Generic[ItemT]):
    """Shared state machine for sequential review sessions.

    Attributes
    ----------
    reviewer : str | None
        Identity recorded on distinct pairs.
    logger : AuditLogger | None
        Audit logger for review events.
    resolved_count : int
        Items merged or marked distinct (including items already merged
        elsewhere).
    skipped_count : int
        Items skipped without a decision.
    stale_count : int
        Items dropped because an earlier merge deleted one of their albums.
    """

    def __init__(
        self,
        items: Iterable[ItemT],
        *,
        reviewer: str | None = None,
        logger: AuditLogger | None = None,
    ) -> None:
        self._items: list[ItemT] = list(items)
        self._index = 0
        self._state = SessionState.IDLE
        self._deleted: set[str] = set()
        self._lock = threading.Lock()
        self.reviewer = reviewer
        self.logger = logger
        self.resolved_count = 0
        self.skipped_count = 0
        self.stale_count = 0

    # -----------------------------------------------------------------------
    # State
    # -----------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def total(self) -> int:
        """Number of items the session started with."""
        return len(self._items)

    @property
    def current(self) -> ItemT | None:
        """Item awaiting a decision, or None outside ``PRESENTING``."""
        if self._state is not SessionState.PRESENTING:
            return None
        return self._items[self._index]

    @property
    def remaining(self) -> int:
        """Live items not yet decided, including the current one."""
        if self._state is SessionState.COMPLETE:
            return 0
        return sum(1 for item in self._items[self._index :] if not self._is_stale(item))

    @property
    def deleted_album_ids(self) -> frozenset[str]:
        """Albums deleted by merges in this session."""
        return frozenset(self._deleted)

    @property
    def busy(self) -> bool:
        """Whether an action is currently in flight."""
        return self._lock.locked()

    def progress(self) -> dict[str, Any]:
        """Counters for display."""
        return {
            "state": str(self._state),
            "total": self.total,
            "resolved": self.resolved_count,
            "skipped": self.skipped_count,
            "stale": self.stale_count,
            "remaining": self.remaining,
        }

    def start(self) -> ItemT | None:
        """Present the first live item (or complete an empty session).

        Raises
        ------
        SessionStateError
            If the session was already started.
        """
        if self._state is not SessionState.IDLE:
            raise SessionStateError(f"Session already started (state {self._state})")
        self._index = -1
        self._advance()
        return self.current

    def skip(self) -> ActionOutcome:
        """Move past the current item without persisting anything."""
        with self._acting() as item:
            self.skipped_count += 1
            outcome = ActionOutcome(ReviewAction.SKIP, self._item_id(item), success=True)
            self._advance()
            return self._record(outcome)

    # -----------------------------------------------------------------------
    # Hooks for subclasses
    # -----------------------------------------------------------------------

    @abstractmethod
    def _item_id(self, item: ItemT) -> str:
        """Identifier reported in outcomes and audit events."""

    @abstractmethod
    def _item_album_ids(self, item: ItemT) -> tuple[str, ...]:
        """Albums whose deletion makes the item stale."""

    def _is_stale(self, item: ItemT) -> bool:
        return any(album_id in self._deleted for album_id in self._item_album_ids(item))

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    @contextmanager
    def _acting(self) -> Iterator[ItemT]:
        """Hold the single in-flight slot for the duration of an action."""
        if not self._lock.acquire(blocking=False):
            raise ActionInFlightError("Another review action is still in progress")
        try:
            if self._state is not SessionState.PRESENTING:
                raise SessionStateError(f"No item to act on (state {self._state})")
            yield self._items[self._index]
        finally:
            self._lock.release()

    def _advance(self) -> None:
        self._index += 1
        while self._index < len(self._items) and self._is_stale(self._items[self._index]):
            self.stale_count += 1
            self._index += 1
        if self._index >= len(self._items):
            self._state = SessionState.COMPLETE
        else:
            self._state = SessionState.PRESENTING

    def _merge(
        self,
        action: ReviewAction,
        item: ItemT,
        store: CatalogStore,
        keep_id: str,
        delete_id: str,
        *,
        fuse_fields: bool = True,
    ) -> ActionOutcome:
        """Run a merge; advance on success or conflict, stay on failure."""
        item_id = self._item_id(item)
        try:
            result: MergeResult = merge_albums(
                store, keep_id, delete_id, fuse_fields=fuse_fields, logger=self.logger
            )
        except ConflictError as exc:
            # Already merged elsewhere: the item is resolved
            self._deleted.add(delete_id)
            self.resolved_count += 1
            outcome = ActionOutcome(action, item_id, success=True, resolved=True, message=str(exc))
            self._advance()
            return self._record(outcome)
        except DedupeError as exc:
            return self._fail(action, item_id, exc)

        self._deleted.add(delete_id)
        self.resolved_count += 1
        outcome = ActionOutcome(action, item_id, success=True, resolved=True, merge_result=result)
        self._advance()
        return self._record(outcome)

    def _mark_distinct(
        self,
        action: ReviewAction,
        item_id: str,
        store: CatalogStore,
        album_id_a: str,
        album_id_b: str,
    ) -> ActionOutcome | None:
        """Persist a distinct pair; returns a failure outcome or None."""
        try:
            created = store.exclusions.add(album_id_a, album_id_b, created_by=self.reviewer)
        except DedupeError as exc:
            return self._fail(action, item_id, exc)
        if self.logger:
            first, second = sorted((album_id_a, album_id_b))
            self.logger.pair_marked_distinct(first, second, created, self.reviewer)
        return None

    def _fail(self, action: ReviewAction, item_id: str, exc: DedupeError) -> ActionOutcome:
        if self.logger:
            self.logger.error(type(exc).__name__, str(exc), stage="review")
        return self._record(ActionOutcome(action, item_id, success=False, message=str(exc)))

    def _record(self, outcome: ActionOutcome) -> ActionOutcome:
        if self.logger:
            self.logger.review_action(
                str(outcome.action),
                outcome.item_id,
                {
                    "success": outcome.success,
                    "resolved": outcome.resolved,
                    "message": outcome.message,
                    "state": str(self._state),
                },
            )
        return outcome


class ReviewSession(SequentialSession[CandidatePair]):
    """Walk candidate pairs one at a time.

    Examples
    --------
        >>> session = ReviewSession.from_scan(scan_duplicates(store))
        >>> pair = session.start()
        >>> session.keep_left(store)
    """

    @classmethod
    def from_scan(cls, scan: ScanResult, **kwargs: Any) -> ReviewSession:
        """Build a session over the pairs of a scan result."""
        return cls(scan.pairs, **kwargs)

    @property
    def current_diff(self) -> RecordDiff | None:
        """Field diff of the current pair."""
        pair = self.current
        return diff_records(pair.album_a, pair.album_b) if pair is not None else None

    def keep_left(self, store: CatalogStore) -> ActionOutcome:
        """Merge the right album into the left one."""
        with self._acting() as pair:
            return self._merge(
                ReviewAction.KEEP_LEFT, pair, store, pair.album_a.album_id, pair.album_b.album_id
            )

    def keep_right(self, store: CatalogStore) -> ActionOutcome:
        """Merge the left album into the right one."""
        with self._acting() as pair:
            return self._merge(
                ReviewAction.KEEP_RIGHT, pair, store, pair.album_b.album_id, pair.album_a.album_id
            )

    def mark_distinct(self, store: CatalogStore) -> ActionOutcome:
        """Record the current pair as two different albums."""
        with self._acting() as pair:
            failure = self._mark_distinct(
                ReviewAction.MARK_DISTINCT,
                pair.pair_id,
                store,
                pair.album_a.album_id,
                pair.album_b.album_id,
            )
            if failure is not None:
                return failure
            self.resolved_count += 1
            outcome = ActionOutcome(
                ReviewAction.MARK_DISTINCT, pair.pair_id, success=True, resolved=True
            )
            self._advance()
            return self._record(outcome)

    def apply(self, action: ReviewAction | str, store: CatalogStore) -> ActionOutcome:
        """Dispatch an action by name."""
        try:
            action = ReviewAction(action)
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown review action: {action!r}") from exc
        if action is ReviewAction.KEEP_LEFT:
            return self.keep_left(store)
        if action is ReviewAction.KEEP_RIGHT:
            return self.keep_right(store)
        if action is ReviewAction.MARK_DISTINCT:
            return self.mark_distinct(store)
        if action is ReviewAction.SKIP:
            return self.skip()
        raise SessionStateError(f"Action {action} is not available for pair review")

    def _item_id(self, item: CandidatePair) -> str:
        return item.pair_id

    def _item_album_ids(self, item: CandidatePair) -> tuple[str, ...]:
        return (item.album_a.album_id, item.album_b.album_id)
