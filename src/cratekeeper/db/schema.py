# ABOUTME: SQL DDL statements for the Cratekeeper inventory database schema.
# ABOUTME: Defines the items table, its indexes, schema versioning, and migrations.

SCHEMA_V1 = """
-- Inventory items: one row per physical record, CD, or book
CREATE TABLE items (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    sku           TEXT NOT NULL,
    item_type     TEXT NOT NULL CHECK (item_type IN ('VINYL', 'CD', 'BOOK')),
    status        TEXT NOT NULL DEFAULT 'UNPROCESSED'
                  CHECK (status IN ('UNPROCESSED', 'IDENTIFIED', 'READY', 'LISTED', 'SOLD')),
    title         TEXT,
    artist        TEXT,
    catalog_no    TEXT,
    notes         TEXT NOT NULL DEFAULT '',
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    updated_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE UNIQUE INDEX idx_items_sku ON items(sku);
CREATE INDEX idx_items_status ON items(status);
CREATE INDEX idx_items_catalog_no ON items(catalog_no) WHERE catalog_no IS NOT NULL;

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# v2: rank grading and physical storage location
MIGRATION_V2 = """
ALTER TABLE items ADD COLUMN rank TEXT NOT NULL DEFAULT 'N'
    CHECK (rank IN ('N', 'R', 'SR', 'SSR', 'UR'));
ALTER TABLE items ADD COLUMN storage_location TEXT;

INSERT INTO schema_version (version) VALUES (2);
"""

MIGRATIONS: list[tuple[int, str]] = [
    (2, MIGRATION_V2),
]
