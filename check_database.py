"""
Diagnostic script: check that the record store is reachable and report
which tables exist and how many records each form table holds.

Usage:
    python check_database.py
"""
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(level=logging.INFO, format='%(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from config import ConfigurationError, get_settings, resolve_database_url
from alembic_runner import get_current_revision
from Store_module.record_store import RecordStore
from Store_module.store_errors import StoreError
from Enquiry_module.Enquiry_model import Enquiry
from Appointment_module.Appointment_model import Appointment

FORM_TABLES = {
    "enquiries": Enquiry,
    "appointments": Appointment,
}


def check_database(store: RecordStore) -> int:
    """Log connectivity, tables and record counts. Returns a process exit code."""
    if not store.connect():
        logger.error("Could not connect to the record store")
        return 1

    try:
        tables = store.table_names()
        logger.info(f"Tables: {', '.join(tables) if tables else '(none)'}")
        logger.info(f"Alembic revision: {get_current_revision(store.engine)}")

        for table_name, model in FORM_TABLES.items():
            if table_name not in tables:
                logger.warning(f"  ✗ {table_name} is missing (run the app once or `alembic upgrade head`)")
                continue
            logger.info(f"  ✓ {table_name}: {store.count(model)} records")
    except StoreError as e:
        logger.error(f"Store check failed ({e.kind.value}): {e.message}")
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    try:
        database_url = resolve_database_url(get_settings())
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    sys.exit(check_database(RecordStore(database_url)))
