# ABOUTME: SQL DDL statements for the quote store schema.
# ABOUTME: Defines entity tables, the quote/tag link table, and the lookup indexes.

SCHEMA_V1 = """
CREATE TABLE authors (
    id    INTEGER PRIMARY KEY AUTOINCREMENT,
    name  TEXT NOT NULL
);

CREATE UNIQUE INDEX idx_authors_name ON authors(name COLLATE NOCASE);

CREATE TABLE books (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    title      TEXT NOT NULL,
    author_id  INTEGER NOT NULL REFERENCES authors(id)
);

-- by_author: books of an author, joined to quotes through idx_quotes_book
CREATE INDEX idx_books_author ON books(author_id);
CREATE UNIQUE INDEX idx_books_natural_key ON books(author_id, title COLLATE NOCASE);

CREATE TABLE tags (
    id    INTEGER PRIMARY KEY AUTOINCREMENT,
    name  TEXT NOT NULL UNIQUE
);

CREATE TABLE quotes (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id           INTEGER NOT NULL REFERENCES books(id),
    text              TEXT NOT NULL,
    location_page     INTEGER,
    location_chapter  TEXT,
    created_at        TEXT NOT NULL
);

-- by_book
CREATE INDEX idx_quotes_book ON quotes(book_id, id);
CREATE INDEX idx_quotes_created ON quotes(created_at, id);

-- by_tag
CREATE TABLE quote_tags (
    quote_id  INTEGER NOT NULL REFERENCES quotes(id) ON DELETE CASCADE,
    tag_id    INTEGER NOT NULL REFERENCES tags(id),
    PRIMARY KEY (quote_id, tag_id)
);

CREATE INDEX idx_quote_tags_tag ON quote_tags(tag_id, quote_id);

CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# Each entry is (version, sql), applied in order to databases below that version.
MIGRATIONS: list[tuple[int, str]] = [
    (
        2,
        """
ALTER TABLE quotes ADD COLUMN favorite INTEGER NOT NULL DEFAULT 0;
CREATE INDEX idx_quotes_favorite ON quotes(favorite) WHERE favorite = 1;
INSERT INTO schema_version (version) VALUES (2);
""",
    ),
]

LATEST_VERSION = MIGRATIONS[-1][0]

REQUIRED_TABLES = frozenset({"authors", "books", "tags", "quotes", "quote_tags", "schema_version"})
