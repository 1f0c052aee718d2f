import logging
import time

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ultmt_project.db.config import DatabaseManager

logger = logging.getLogger(__name__)

UNIQUE_INDEXES = {
    "users": ["email", "username"],
    "teams": ["teamname"],
    "onetimepasscodes": ["passcode"],
    "teamdesignations": ["description"],
}


def initialize_database(max_retries=5, retry_delay=2):
    """
    Wait for MongoDB and make sure the unique indexes exist.
    Includes retry logic for Docker environments.
    """
    db_manager = DatabaseManager()

    for attempt in range(max_retries):
        if db_manager.check_database_health():
            break
        if attempt < max_retries - 1:
            logger.warning(f"Database health check failed, attempt {attempt + 1}. Retrying in {retry_delay} seconds...")
            time.sleep(retry_delay)
        else:
            logger.error("All database connection attempts failed")
            return False

    try:
        for collection_name, fields in UNIQUE_INDEXES.items():
            collection = db_manager.get_collection(collection_name)
            for field in fields:
                collection.create_index([(field, ASCENDING)], unique=True)
        logger.info("Database initialization completed successfully")
        return True
    except PyMongoError as e:
        logger.error(f"Error initializing database: {str(e)}")
        return False
