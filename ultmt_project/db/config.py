import logging
from typing import Optional

from django.conf import settings
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Process wide MongoDB access. One MongoClient is shared by every repository.
    """

    __instance: Optional["DatabaseManager"] = None

    def __new__(cls, *args, **kwargs):
        if cls.__instance is None:
            cls.__instance = super().__new__(cls, *args, **kwargs)
            cls.__instance._database_client = None
            cls.__instance._database = None
        return cls.__instance

    @classmethod
    def reset(cls):
        """Drop the cached client so the next access reconnects with current settings."""
        if cls.__instance is not None and cls.__instance._database_client is not None:
            cls.__instance._database_client.close()
        cls.__instance = None

    def _get_database_client(self) -> MongoClient:
        if self._database_client is None:
            self._database_client = MongoClient(settings.MONGODB_URI, tz_aware=True)
            logger.info("MongoDB client created")
        return self._database_client

    def get_database(self) -> Database:
        if self._database is None:
            self._database = self._get_database_client()[settings.DB_NAME]
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        return self.get_database()[collection_name]

    def check_database_health(self) -> bool:
        try:
            self._get_database_client().admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB health check failed: {e}")
            return False
