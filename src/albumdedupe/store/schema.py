"""SQLite schema for the album catalog.

``list_items.album_id`` references ``albums`` so a list can never point at a
deleted album. Distinct pairs are stored once, in canonical order.
"""

SCHEMA_VERSION = 1

ALBUM_COLUMNS: tuple[str, ...] = (
    "album_id",
    "artist",
    "title",
    "release_date",
    "country",
    "genre_1",
    "genre_2",
    "tracks",
    "cover_image",
    "cover_image_format",
    "summary",
    "summary_source",
    "summary_fetched_at",
)

SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS albums (
    album_id            TEXT PRIMARY KEY,
    artist              TEXT,
    title               TEXT,
    release_date        TEXT,
    country             TEXT,
    genre_1             TEXT,
    genre_2             TEXT,
    tracks              TEXT,
    cover_image         BLOB,
    cover_image_format  TEXT,
    summary             TEXT,
    summary_source      TEXT,
    summary_fetched_at  TEXT,
    updated_at          TEXT
);

CREATE TABLE IF NOT EXISTS list_items (
    list_id   TEXT NOT NULL,
    position  INTEGER NOT NULL,
    album_id  TEXT NOT NULL REFERENCES albums(album_id),
    PRIMARY KEY (list_id, position)
);

CREATE INDEX IF NOT EXISTS idx_list_items_album_id ON list_items(album_id);

CREATE TABLE IF NOT EXISTS album_distinct_pairs (
    album_id_1  TEXT NOT NULL,
    album_id_2  TEXT NOT NULL,
    created_by  TEXT,
    created_at  TEXT NOT NULL,
    PRIMARY KEY (album_id_1, album_id_2),
    CHECK (album_id_1 < album_id_2)
);

CREATE INDEX IF NOT EXISTS idx_distinct_pairs_album_id_2 ON album_distinct_pairs(album_id_2);
"""
