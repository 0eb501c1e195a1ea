import argparse
import logging
import os
import sys

from aiohttp import web

from .api import create_app
from .constants import APP_NAME, DEFAULT_HOST, DEFAULT_PORT, SCHEMA_VERSION, VERSION
from .db import ReferenceStore

logger = logging.getLogger("GreekReference")


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="greekreference", description="Greek lexicon and syntax reference server")
    parser.add_argument("--load", metavar="FILE", help="reference bundle (.json or .csv) to load before serving")
    parser.add_argument("--host", default=os.environ.get("GREEKREFERENCE_HOST", DEFAULT_HOST))
    parser.add_argument("--port", type=int, default=int(os.environ.get("GREEKREFERENCE_PORT", DEFAULT_PORT)))
    parser.add_argument("--load-only", action="store_true", help="load the bundle and exit")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    banner = f" {APP_NAME} Initialization "
    logger.info("=" * 40 + banner + "=" * 40)
    logger.info(f"Version: {VERSION}")
    logger.info(f"Schema version: {SCHEMA_VERSION}")

    store = ReferenceStore.get()
    if args.load:
        result = store.import_file(args.load)
        if result["errors"]:
            logger.warning("%d records could not be loaded", len(result["errors"]))
    logger.info("Reference database: %s", store.db_path)
    logger.info("=" * (80 + len(banner)))

    if args.load_only:
        return 0

    web.run_app(create_app(reference_store=store), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
