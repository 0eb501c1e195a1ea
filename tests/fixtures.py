LOGOS_BODY = "<def>word, reason</def>"

SAMPLE_BUNDLE = {
    "lexicon": [
        {"id": 3, "word": "ἄνθρωπος", "entry": "<def>human being</def>"},
        {"id": 7, "word": "λόγος", "entry": LOGOS_BODY, "search_keys": ["logos", "λόγος"]},
        {"id": 12, "word": "λόγος", "entry": "<def>computation, reckoning</def>"},
        {"id": 15, "word": "οἶκος", "entry": "<def>house</def>"},
    ],
    "syntax": [
        {"id": 1, "section": "Nouns > Gender", "title": "Gender", "xml": "<p>Three genders.</p>"},
        {"id": 2, "section": "Nouns > Gender", "title": "Common gender", "xml": "<p>Some nouns are common.</p>"},
        {"id": 3, "section": "Verbs > Tense", "title": "Aorist", "xml": "<p>Simple past.</p>"},
    ],
}
