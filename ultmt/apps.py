import logging
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class UltmtConfig(AppConfig):
    name = "ultmt"

    def ready(self):
        """Make sure MongoDB is reachable and indexed when Django starts"""

        if settings.TESTING or "test" in sys.argv:
            logger.info("Test mode detected - skipping database initialization")
            return

        from ultmt_project.db.init import initialize_database

        initialize_database()
