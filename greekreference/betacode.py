"""Greek to TLG Beta code transliteration.

Only the lowercase, letters-then-diacritics form is produced; that is the
form users type into the search box, and the one the lexicon keys store.

>>> greek_to_beta("λόγος")
'lo/gos'
>>> greek_to_beta("ἄνθρωπος", symbols=False)
'anqrwpos'
"""

import unicodedata

from .utils import fold_key, normalize_query, unique_keys

_LETTERS = {
    "α": "a",
    "β": "b",
    "γ": "g",
    "δ": "d",
    "ε": "e",
    "ζ": "z",
    "η": "h",
    "θ": "q",
    "ι": "i",
    "κ": "k",
    "λ": "l",
    "μ": "m",
    "ν": "n",
    "ξ": "c",
    "ο": "o",
    "π": "p",
    "ρ": "r",
    "σ": "s",
    "ς": "s",
    "τ": "t",
    "υ": "u",
    "φ": "f",
    "χ": "x",
    "ψ": "y",
    "ω": "w",
    "ϝ": "v",
}

_DIACRITICS = {
    "\u0313": ")",  # smooth breathing
    "\u0314": "(",  # rough breathing
    "\u0301": "/",  # acute
    "\u0300": "\\",  # grave
    "\u0342": "=",  # circumflex
    "\u0345": "|",  # iota subscript
    "\u0308": "+",  # diaeresis
}


def greek_to_beta(word, symbols=True):
    decomposed = unicodedata.normalize("NFD", normalize_query(word))
    out = []
    for ch in decomposed:
        if ch in _LETTERS:
            out.append(_LETTERS[ch])
        elif ch in _DIACRITICS:
            if symbols:
                out.append(_DIACRITICS[ch])
        elif unicodedata.combining(ch):
            # Macrons, breves and the like have no Beta-code form here.
            continue
        else:
            out.append(ch)
    return "".join(out)


def derive_search_keys(word):
    """Default search keys for a lexicon headword."""
    lowered = normalize_query(word)
    return unique_keys(
        [
            greek_to_beta(lowered, symbols=True),
            greek_to_beta(lowered, symbols=False),
            lowered,
            fold_key(lowered),
        ]
    )
