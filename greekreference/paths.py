import os

from .constants import APP_DATA_DB_NAME, REFERENCE_DB_NAME


def get_data_dir():
    base = os.environ.get("GREEKREFERENCE_DATA_DIR", "").strip()
    if not base:
        base = os.path.join(os.path.expanduser("~"), ".greekreference")

    os.makedirs(base, exist_ok=True)
    return base


def get_reference_db_path():
    return os.path.join(get_data_dir(), REFERENCE_DB_NAME)


def get_app_data_db_path():
    return os.path.join(get_data_dir(), APP_DATA_DB_NAME)
