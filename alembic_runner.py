"""
Alembic migration runner for application startup.
This module provides functions to run Alembic migrations programmatically.
"""
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parent


def _alembic_config(database_url: str) -> Config:
    alembic_cfg = Config(str(ROOT_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    # ConfigParser interpolation would choke on '%' in encoded passwords
    alembic_cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    # The application already owns logging when migrations run at startup
    alembic_cfg.attributes["configure_logger"] = False
    return alembic_cfg


def run_migrations(engine: Engine) -> None:
    """
    Upgrade the database to the latest revision.
    Called during application startup to ensure the form tables exist.
    Runs on a connection from the given engine, so an in-memory SQLite
    store is migrated in place.
    """
    alembic_cfg = _alembic_config(engine.url.render_as_string(hide_password=False))
    try:
        logger.info("Running Alembic migrations...")
        with engine.begin() as connection:
            alembic_cfg.attributes["connection"] = connection
            command.upgrade(alembic_cfg, "head")
        logger.info("Alembic migrations completed successfully")
    except OperationalError as e:
        logger.error(f"Failed to connect to database during migrations: {e}")
        raise


def get_current_revision(engine: Engine) -> str:
    """
    Get the current database revision.
    Returns the revision string or 'None' if no migrations have been applied.
    """
    from alembic.runtime.migration import MigrationContext

    try:
        with engine.connect() as connection:
            context = MigrationContext.configure(connection)
            current_rev = context.get_current_revision()
            return current_rev if current_rev else 'None'
    except Exception as e:
        logger.error(f"Failed to get current revision: {e}")
        return 'Unknown'
