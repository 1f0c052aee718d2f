import atexit
import logging

from testcontainers.mongodb import MongoDbContainer

logger = logging.getLogger(__name__)

MONGO_IMAGE = "mongo:7.0"

_mongo_container = None


def _cleanup_mongo_container():
    global _mongo_container
    if _mongo_container is not None:
        try:
            _mongo_container.stop()
        except Exception as e:
            logger.warning(f"Failed to stop MongoDB container: {e}")
        _mongo_container = None


def get_shared_mongo_container() -> MongoDbContainer:
    """One MongoDB container for the whole test run, stopped when the interpreter exits."""
    global _mongo_container
    if _mongo_container is None:
        container = MongoDbContainer(MONGO_IMAGE)
        container.start()
        _mongo_container = container
        atexit.register(_cleanup_mongo_container)
    return _mongo_container
