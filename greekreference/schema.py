REFERENCE_SCHEMA_SQL = r"""
PRAGMA journal_mode = WAL;

CREATE TABLE IF NOT EXISTS meta (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS lexicon (
  id INTEGER PRIMARY KEY,
  word TEXT NOT NULL,
  entry TEXT NOT NULL
);

-- One row per (entry, key). `key` is lowercased, `folded` has accents,
-- breathings and Beta-code symbols removed.
CREATE TABLE IF NOT EXISTS lexicon_keys (
  lexicon_id INTEGER NOT NULL,
  key TEXT NOT NULL,
  folded TEXT NOT NULL,
  PRIMARY KEY (lexicon_id, key),
  FOREIGN KEY (lexicon_id) REFERENCES lexicon(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS syntax (
  id INTEGER PRIMARY KEY,
  section TEXT NOT NULL,
  title TEXT NOT NULL DEFAULT '',
  xml TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_lexicon_keys_key ON lexicon_keys(key, lexicon_id);
CREATE INDEX IF NOT EXISTS idx_lexicon_keys_folded ON lexicon_keys(folded, lexicon_id);
"""

APP_DATA_SCHEMA_SQL = r"""
PRAGMA journal_mode = WAL;

CREATE TABLE IF NOT EXISTS meta (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);

-- Duplicates are allowed; re-selecting a word appends another row.
CREATE TABLE IF NOT EXISTS lexicon_history (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  lexicon_id INTEGER NOT NULL,
  word TEXT NOT NULL,
  created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS lexicon_favorites (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  lexicon_id INTEGER NOT NULL UNIQUE,
  word TEXT NOT NULL,
  created_at TEXT NOT NULL
);
"""
