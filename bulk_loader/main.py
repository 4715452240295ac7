# Project: bulk-loader
# Objective: Load a delimited file into a database table with a pool of concurrent workers
import argparse
import math
import sys
import time

from .core.exceptions import StartupError
from .core.pipeline import BulkLoadPipeline
from .setup.base import init_sink, init_source
from .setup.config import get_config
from .setup.logging import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load a delimited file into a database table using concurrent workers.",
        epilog="""
Examples:
  %(prog)s
    Load using settings from the environment / .env

  %(prog)s --file majestic_million.csv --table domain --workers 100
    Override input file, target table and pool size
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--file", type=str, help="Delimited file to load (LOADER_FILE)")
    parser.add_argument("--table", type=str, help="Target table (LOADER_TABLE)")
    parser.add_argument("--workers", type=int, help="Number of insert workers (LOADER_WORKERS)")
    parser.add_argument("--env-file", type=str, default=".env", help="Environment file to load")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    start = time.monotonic()

    try:
        config = get_config(
            env_file=args.env_file,
            file_path=args.file,
            table_name=args.table,
            workers=args.workers,
        )
        sink = init_sink(config)
        try:
            source = init_source(config)
        except StartupError:
            sink.close()
            raise
    except StartupError as e:
        logger.error(f"❌ {e}")
        return 1

    try:
        with source:
            BulkLoadPipeline.from_config(source, sink, config.loading).run()
    finally:
        sink.close()

    logger.info(f"Done in {int(math.ceil(time.monotonic() - start))} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
