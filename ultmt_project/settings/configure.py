import os
from dotenv import load_dotenv

load_dotenv()


def configure_settings_module():
    """
    Point Django at the settings module. Everything environment specific is read
    from environment variables (or a local .env file) by that module.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ultmt_project.settings.settings")
