"""Migration script: create the MongoDB indexes the API queries rely on.

This script creates:
1. trips (idaTripId, isReturnTrip) for return leg lookups
2. statusPagamento indexes on trips and students
3. data (descending) indexes for the date ordered listings

Usage:
    python scripts/add_indexes.py

Ensure MONGO_URI and MONGO_DB environment variables (or config files) are set.
"""
import logging
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import config
from topvan_server.exception.StoreUnavailable import StoreUnavailable
from topvan_server.repository.mongo_helper import ensure_indexes, get_db

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def list_indexes(db):
    for name in ('students', 'trips', 'fuelExpenses', 'generalExpenses'):
        index_names = sorted(db[name].index_information())
        logger.info(f'{name}: {", ".join(index_names)}')


def main():
    logger.info('=' * 60)
    logger.info('Adding database indexes')
    logger.info('=' * 60)
    db = get_db(config.MONGO_URI, config.MONGO_DB, serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS)
    try:
        ensure_indexes(db)
        list_indexes(db)
    except StoreUnavailable as e:
        logger.error(f'Index creation failed: {e}')
        return 1
    logger.info('Done')
    return 0


if __name__ == '__main__':
    sys.exit(main())
