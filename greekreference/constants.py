APP_NAME = "GreekReference"
VERSION = "1.0.0"
SCHEMA_VERSION = "1"

REFERENCE_DB_NAME = "reference.db"
APP_DATA_DB_NAME = "appdata.db"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8765

# Hints for how long a message should stay on screen.
DURATION_SHORT = "short"
DURATION_LONG = "long"

MSG_SEARCH_NO_RESULTS = "No results found"
