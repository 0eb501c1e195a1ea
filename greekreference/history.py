import logging
import os
import sqlite3

logger = logging.getLogger("GreekReference")

from .constants import SCHEMA_VERSION
from .errors import PreconditionFailure
from .models import FavoriteItem, HistoryItem
from .paths import get_app_data_db_path
from .schema import APP_DATA_SCHEMA_SQL
from .utils import normalize_text, now_iso


class _AppDataTable:
    def __init__(self, db_path=None):
        self.db_path = db_path or get_app_data_db_path()
        os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
        self._init_db()

    def _connect(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA busy_timeout = 5000")
        return conn

    def _init_db(self):
        conn = self._connect()
        try:
            conn.executescript(APP_DATA_SCHEMA_SQL)
            conn.execute(
                "INSERT OR REPLACE INTO meta(key,value) VALUES('schema_version', ?)",
                (SCHEMA_VERSION,),
            )
            conn.commit()
        finally:
            conn.close()


class HistoryList:
    """Lazy view over the stored history.

    Each iteration runs a fresh query, so the same object can be iterated
    again after the history changes.
    """

    def __init__(self, history):
        self._history = history

    def __iter__(self):
        conn = self._history._connect()
        try:
            rows = conn.execute("SELECT * FROM lexicon_history ORDER BY id ASC").fetchall()
        finally:
            conn.close()
        for r in rows:
            yield HistoryItem(
                entry_id=r["lexicon_id"],
                display_word=r["word"],
                id=r["id"],
                created_at=r["created_at"],
            )

    def __len__(self):
        return self._history.count()


class LexiconHistory(_AppDataTable):
    def add(self, entry_id, display_word):
        word = normalize_text(display_word)
        now = now_iso()
        conn = self._connect()
        try:
            cur = conn.execute(
                "INSERT INTO lexicon_history(lexicon_id,word,created_at) VALUES(?,?,?)",
                (int(entry_id), word, now),
            )
            conn.commit()
            row_id = cur.lastrowid
        finally:
            conn.close()
        logger.debug("history add: lexicon_id=%s word=%r", entry_id, word)
        return HistoryItem(entry_id=int(entry_id), display_word=word, id=row_id, created_at=now)

    def clear(self):
        conn = self._connect()
        try:
            cur = conn.execute("DELETE FROM lexicon_history")
            conn.commit()
            removed = cur.rowcount
        finally:
            conn.close()
        logger.info("Cleared lexicon history (%d items)", removed)
        return removed

    def count(self):
        conn = self._connect()
        try:
            return int(conn.execute("SELECT COUNT(*) AS c FROM lexicon_history").fetchone()["c"])
        finally:
            conn.close()

    def list(self):
        return HistoryList(self)


class LexiconFavorites(_AppDataTable):
    """Favorite lexicon entries, one per lexicon id, ordered by lexicon id.

    Ordering by id rather than by word keeps the list alphabetical, since
    the lexicon is loaded in alphabetical order and accented words do not
    sort correctly as plain text.
    """

    def add(self, lexicon_id, display_word):
        word = normalize_text(display_word)
        conn = self._connect()
        try:
            conn.execute(
                """
                INSERT INTO lexicon_favorites(lexicon_id,word,created_at) VALUES(?,?,?)
                ON CONFLICT(lexicon_id) DO UPDATE SET word=excluded.word
                """,
                (int(lexicon_id), word, now_iso()),
            )
            conn.commit()
            row = conn.execute(
                "SELECT * FROM lexicon_favorites WHERE lexicon_id = ?", (int(lexicon_id),)
            ).fetchone()
            return self._row_to_favorite(row)
        finally:
            conn.close()

    def remove(self, lexicon_id):
        conn = self._connect()
        try:
            cur = conn.execute("DELETE FROM lexicon_favorites WHERE lexicon_id = ?", (int(lexicon_id),))
            conn.commit()
            return cur.rowcount > 0
        finally:
            conn.close()

    def contains(self, lexicon_id):
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT 1 FROM lexicon_favorites WHERE lexicon_id = ?", (int(lexicon_id),)
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def clear(self):
        conn = self._connect()
        try:
            cur = conn.execute("DELETE FROM lexicon_favorites")
            conn.commit()
            removed = cur.rowcount
        finally:
            conn.close()
        logger.info("Cleared lexicon favorites (%d items)", removed)
        return removed

    def list(self):
        conn = self._connect()
        try:
            rows = conn.execute("SELECT * FROM lexicon_favorites ORDER BY lexicon_id ASC").fetchall()
            return [self._row_to_favorite(r) for r in rows]
        finally:
            conn.close()

    def lexicon_id_for(self, favorite_id):
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT lexicon_id FROM lexicon_favorites WHERE id = ?", (favorite_id,)
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            raise PreconditionFailure(f"Invalid ID: {favorite_id}")
        return row["lexicon_id"]

    @staticmethod
    def _row_to_favorite(row):
        return FavoriteItem(
            lexicon_id=row["lexicon_id"],
            display_word=row["word"],
            id=row["id"],
            created_at=row["created_at"],
        )
