import re
import unicodedata
from datetime import datetime, timezone


def now_iso():
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


_ws_re = re.compile(r"\s+")

# Beta-code diacritics and the capital marker.
_BETA_SYMBOLS = str.maketrans("", "", ")(/\\=|+*")


def normalize_text(s):
    if s is None:
        return ""
    s = str(s).strip()
    s = _ws_re.sub(" ", s)
    return s


def normalize_query(s):
    # str.lower() applies the final-sigma rule, so "ΛΟΓΟΣ" becomes "λογος".
    return unicodedata.normalize("NFC", normalize_text(s).lower())


def fold_key(s):
    """Accent-insensitive form of a search key or query.

    Drops combining marks and Beta-code symbols and treats final sigma as
    medial, so "λόγος", "ΛΟΓΟΣ", "λογοσ" and "lo/gos"/"logos" fold to two
    stable keys ("λογοσ" and "logos").
    """
    s = unicodedata.normalize("NFD", normalize_query(s))
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = s.translate(_BETA_SYMBOLS).replace("ς", "σ")
    return unicodedata.normalize("NFC", s)


def unique_keys(keys):
    out = []
    seen = set()
    for k in keys or []:
        k = normalize_query(k)
        if not k or k in seen:
            continue
        seen.add(k)
        out.append(k)
    return out


def to_int(value):
    """Parse an id, raising ValueError for anything that is not an integer."""
    if isinstance(value, bool):
        raise ValueError(f"not an integer id: {value!r}")
    if isinstance(value, int):
        return value
    text = normalize_text(value)
    if not re.fullmatch(r"-?\d+", text):
        raise ValueError(f"not an integer id: {value!r}")
    return int(text)
