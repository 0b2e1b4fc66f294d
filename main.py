import sys
import logging
import argparse

from core.config_loader import load_config, AppConfig
from database.database import Database

logger = logging.getLogger(__name__)


def setup_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format,
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def init_db(database: Database) -> None:
    logger.info("Initializing database...")
    try:
        database.create_all()
        logger.info("Tables created or verified.")
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="QuoteMatch - company matching and proposal service")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Run the HTTP API")
    subparsers.add_parser("init-db", help="Create database tables")

    args = parser.parse_args(argv)
    command = args.command or "serve"

    config = load_config(args.config)
    setup_logging(config)

    database = Database.from_config(config.database)
    try:
        if command == "init-db":
            init_db(database)
        else:
            from web.backend.app import run_server
            run_server(config, database)
    finally:
        database.dispose()

    return 0


if __name__ == "__main__":
    sys.exit(main())
