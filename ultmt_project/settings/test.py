import os

os.environ.setdefault("TESTING", "True")

from .settings import *  # noqa: E402,F401,F403

ADMIN_EMAILS = ["admin@theultmtapp.com"]
