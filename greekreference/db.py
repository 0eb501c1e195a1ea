import csv
import io
import json
import logging
import os
import sqlite3
import threading

logger = logging.getLogger("GreekReference")

from .betacode import derive_search_keys
from .constants import SCHEMA_VERSION
from .errors import NotFound, PreconditionFailure
from .models import Entry
from .paths import get_reference_db_path
from .schema import REFERENCE_SCHEMA_SQL
from .utils import fold_key, normalize_query, normalize_text, to_int, unique_keys


class ReferenceStore:
    """Read-only lexicon and syntax corpus backed by SQLite.

    The corpus is bulk-loaded once at startup with `import_bundle`,
    `import_csv_text` or `import_file`; every other method only reads.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def __init__(self, db_path=None):
        self.db_path = db_path or get_reference_db_path()
        os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
        self._init_db()

    def _connect(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        conn.execute("PRAGMA busy_timeout = 5000")
        return conn

    def _init_db(self):
        conn = self._connect()
        try:
            conn.executescript(REFERENCE_SCHEMA_SQL)
            conn.execute(
                "INSERT OR REPLACE INTO meta(key,value) VALUES('schema_version', ?)",
                (SCHEMA_VERSION,),
            )
            conn.commit()
        finally:
            conn.close()

    # ── lookups ──

    def find_by_key(self, normalized_query):
        """Return the lowest-id lexicon entry with a matching search key.

        Exact (lowercased) keys are tried first; only when none match is the
        accent-insensitive folded form consulted.
        """
        q = normalize_query(normalized_query)
        if not q:
            raise NotFound("empty query")
        folded = fold_key(q)
        logger.debug("find_by_key input: q=%r folded=%r", q, folded)

        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT lexicon_id FROM lexicon_keys WHERE key = ? ORDER BY lexicon_id ASC LIMIT 1",
                (q,),
            ).fetchone()
            if row is None and folded:
                row = conn.execute(
                    "SELECT lexicon_id FROM lexicon_keys WHERE folded = ? ORDER BY lexicon_id ASC LIMIT 1",
                    (folded,),
                ).fetchone()
            if row is None:
                logger.debug("find_by_key no match for %r", q)
                raise NotFound(f"no lexicon entry for {q!r}")
            return self._load_lexicon_entry(conn, row["lexicon_id"])
        finally:
            conn.close()

    def find_by_id(self, entry_id):
        conn = self._connect()
        try:
            return self._load_lexicon_entry(conn, entry_id)
        finally:
            conn.close()

    def find_syntax_by_id(self, entry_id):
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM syntax WHERE id = ?", (entry_id,)).fetchone()
            if not row:
                raise NotFound(f"syntax section {entry_id!r} not found")
            return self._row_to_syntax(row)
        finally:
            conn.close()

    def find_by_reference(self, ref):
        """Resolve an external reference such as ``greekreference://lexicon/7``."""
        try:
            entry_id = self._parse_reference(ref)
        except ValueError as exc:
            logger.error("Failed to resolve reference %r", ref, exc_info=True)
            raise PreconditionFailure(f"invalid lexicon reference: {ref!r}") from exc
        return self.find_by_id(entry_id)

    @staticmethod
    def _parse_reference(ref):
        if isinstance(ref, int) and not isinstance(ref, bool):
            return ref
        text = normalize_text(ref).rstrip("/")
        if not text:
            raise ValueError("empty reference")
        return to_int(text.rsplit("/", 1)[-1])

    def count_lexicon(self):
        conn = self._connect()
        try:
            return int(conn.execute("SELECT COUNT(*) AS c FROM lexicon").fetchone()["c"])
        finally:
            conn.close()

    def count_syntax(self):
        conn = self._connect()
        try:
            return int(conn.execute("SELECT COUNT(*) AS c FROM syntax").fetchone()["c"])
        finally:
            conn.close()

    def list_syntax_sections(self):
        conn = self._connect()
        try:
            rows = conn.execute(
                """
                SELECT section, MIN(id) AS first_id, COUNT(*) AS n
                FROM syntax
                GROUP BY section
                ORDER BY first_id ASC
                """
            ).fetchall()
            return [{"section": r["section"], "first_id": r["first_id"], "count": r["n"]} for r in rows]
        finally:
            conn.close()

    def _load_lexicon_entry(self, conn, entry_id):
        row = conn.execute("SELECT * FROM lexicon WHERE id = ?", (entry_id,)).fetchone()
        if not row:
            raise NotFound(f"lexicon entry {entry_id!r} not found")
        keys = conn.execute(
            "SELECT key FROM lexicon_keys WHERE lexicon_id = ? ORDER BY rowid ASC",
            (entry_id,),
        ).fetchall()
        return Entry(
            id=row["id"],
            display_word=row["word"],
            body=row["entry"],
            search_keys=tuple(k["key"] for k in keys),
        )

    def _row_to_syntax(self, row):
        return Entry(
            id=row["id"],
            display_word=row["title"] or row["section"],
            body=row["xml"],
            section=row["section"],
        )

    # ── loading ──

    def import_bundle(self, bundle):
        if not isinstance(bundle, dict):
            raise ValueError("Reference bundle must be a JSON object")

        result = {"lexicon": 0, "syntax": 0, "errors": []}

        conn = self._connect()
        try:
            for record_type, loader in (
                ("lexicon", self._upsert_lexicon),
                ("syntax", self._upsert_syntax),
            ):
                records = bundle.get(record_type) or []
                if not isinstance(records, list):
                    logger.error("Skipped %s: expected a list, got %s", record_type, type(records).__name__)
                    result["errors"].append(
                        {
                            "record_type": record_type,
                            "id": "",
                            "error": f"{record_type} must be a list",
                        }
                    )
                    continue
                for payload in records:
                    record_id = str(payload.get("id") or "") if isinstance(payload, dict) else ""
                    try:
                        if not isinstance(payload, dict):
                            raise ValueError(f"{record_type} record must be a JSON object")
                        loader(conn, payload)
                        result[record_type] += 1
                    except Exception as exc:
                        logger.exception("Skipped %s record %r", record_type, record_id)
                        result["errors"].append(
                            {
                                "record_type": record_type,
                                "id": record_id,
                                "error": str(exc),
                            }
                        )
            conn.commit()
        finally:
            conn.close()

        logger.info(
            "Loaded %d lexicon entries and %d syntax sections (%d errors)",
            result["lexicon"],
            result["syntax"],
            len(result["errors"]),
        )
        return result

    def import_csv_text(self, csv_text):
        reader = csv.DictReader(io.StringIO(csv_text or ""))
        bundle = {"lexicon": [], "syntax": []}
        for row in reader:
            record_type = (row.get("record_type") or "").strip().lower()
            if record_type == "lexicon":
                bundle["lexicon"].append(
                    {
                        "id": row.get("id"),
                        "word": row.get("word"),
                        "entry": row.get("entry"),
                        "search_keys": [k for k in (row.get("search_keys") or "").split("|") if k.strip()],
                    }
                )
            elif record_type == "syntax":
                bundle["syntax"].append(
                    {
                        "id": row.get("id"),
                        "section": row.get("section"),
                        "title": row.get("title"),
                        "xml": row.get("xml"),
                    }
                )
        return self.import_bundle(bundle)

    def import_file(self, path):
        with open(path, "r", encoding="utf-8-sig") as fh:
            text = fh.read()
        if str(path).lower().endswith(".csv"):
            return self.import_csv_text(text)
        return self.import_bundle(json.loads(text or "{}"))

    def _upsert_lexicon(self, conn, payload):
        entry_id = to_int(payload.get("id"))
        word = normalize_text(payload.get("word"))
        if not word:
            raise ValueError("lexicon record needs a word")
        body = str(payload.get("entry") or "")

        explicit = payload.get("search_keys") or []
        if isinstance(explicit, str):
            explicit = explicit.split("|")
        keys = unique_keys(list(explicit) + derive_search_keys(word))

        conn.execute(
            """
            INSERT INTO lexicon(id,word,entry) VALUES(?,?,?)
            ON CONFLICT(id) DO UPDATE SET
              word=excluded.word,
              entry=excluded.entry
            """,
            (entry_id, word, body),
        )
        conn.execute("DELETE FROM lexicon_keys WHERE lexicon_id = ?", (entry_id,))
        conn.executemany(
            "INSERT OR IGNORE INTO lexicon_keys(lexicon_id,key,folded) VALUES(?,?,?)",
            [(entry_id, k, fold_key(k)) for k in keys],
        )

    def _upsert_syntax(self, conn, payload):
        entry_id = to_int(payload.get("id"))
        section = normalize_text(payload.get("section"))
        if not section:
            raise ValueError("syntax record needs a section")
        conn.execute(
            """
            INSERT INTO syntax(id,section,title,xml) VALUES(?,?,?,?)
            ON CONFLICT(id) DO UPDATE SET
              section=excluded.section,
              title=excluded.title,
              xml=excluded.xml
            """,
            (entry_id, section, normalize_text(payload.get("title")), str(payload.get("xml") or "")),
        )
