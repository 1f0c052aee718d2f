import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv(
    "SECRET_KEY",
    "django-insecure-4k!l1m2r0qu8^c6n_ultmt-dev-only-key$z7x(9e3w@v5b)",
)

DEBUG = os.getenv("DEBUG", "False").lower() == "true"

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "").split(",") if os.getenv("ALLOWED_HOSTS") else ["*"]

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "ultmt")

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "corsheaders",
    "rest_framework",
    "drf_spectacular",
    "ultmt",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "ultmt.middlewares.request_logging.RequestLoggingMiddleware",
    "ultmt.middlewares.jwt_auth.JWTAuthenticationMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "ultmt_project.urls"
WSGI_APPLICATION = "ultmt_project.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

# Documents live in MongoDB, Django itself needs no relational database
DATABASES = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "ultmt-token-blacklist",
    }
}
if os.getenv("REDIS_URL"):
    CACHES["default"] = {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.getenv("REDIS_URL"),
    }

ADMIN_EMAILS = [email.strip().lower() for email in os.getenv("ADMIN_EMAILS", "").split(",") if email.strip()]

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "EXCEPTION_HANDLER": "ultmt.exceptions.exception_handler.handle_exception",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

TESTING = "test" in sys.argv or "pytest" in sys.modules or os.getenv("TESTING") == "True"

ACCESS_TOKEN_LIFETIME = int(os.getenv("ACCESS_LIFETIME", str(12 * 60 * 60)))
REFRESH_TOKEN_LIFETIME = int(os.getenv("REFRESH_LIFETIME", str(90 * 24 * 60 * 60)))

if TESTING:
    JWT_CONFIG = {
        "ALGORITHM": "HS256",
        "PRIVATE_KEY": "test-secret-key-for-jwt-signing-very-long-key-needed-for-security",
        "PUBLIC_KEY": "test-secret-key-for-jwt-signing-very-long-key-needed-for-security",
        "ACCESS_TOKEN_LIFETIME": ACCESS_TOKEN_LIFETIME,
        "REFRESH_TOKEN_LIFETIME": REFRESH_TOKEN_LIFETIME,
    }
    PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
else:
    JWT_CONFIG = {
        "ALGORITHM": os.getenv("JWT_ALGORITHM", "HS256"),
        "PRIVATE_KEY": os.getenv("PRIVATE_KEY", SECRET_KEY),
        "PUBLIC_KEY": os.getenv("PUBLIC_KEY", os.getenv("PRIVATE_KEY", SECRET_KEY)),
        "ACCESS_TOKEN_LIFETIME": ACCESS_TOKEN_LIFETIME,
        "REFRESH_TOKEN_LIFETIME": REFRESH_TOKEN_LIFETIME,
    }
    EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")

# Seconds a logged out token stays on the blacklist
TOKEN_BLACKLIST_TTL = int(os.getenv("TOKEN_BLACKLIST_TTL", str(12 * 60 * 60)))

PASSCODE_LIFETIME = int(os.getenv("PASSCODE_LIFETIME", str(60 * 60)))
BULK_JOIN_CODE_LIFETIME = int(os.getenv("BULK_JOIN_CODE_LIFETIME", str(24 * 60 * 60)))

EMAIL_HOST = os.getenv("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "25"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "False").lower() == "true"
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "developer@theultmtapp.com")

# (methods, path regex) pairs reachable without an access token
PUBLIC_ENDPOINTS = [
    (("GET",), r"/favicon\.ico"),
    (("GET",), r"/v1/health"),
    (("GET",), r"/api/(schema|docs|redoc)/?"),
    (("GET",), r"/static/.*"),
    (("POST",), r"/v1/user"),
    (("GET",), r"/v1/user/search"),
    (("GET",), r"/v1/user/username-taken"),
    (("POST",), r"/v1/user/password-recovery"),
    (("POST",), r"/v1/user/password-reset"),
    (("GET",), r"/v1/user/(?!me$)[^/]+"),
    (("POST",), r"/v1/auth/login"),
    (("POST",), r"/v1/auth/refresh"),
    (("GET",), r"/v1/team/search"),
    (("GET",), r"/v1/team/teamname-taken"),
    (("GET",), r"/v1/team/[^/]+"),
    (("GET",), r"/v1/archive-team/[^/]+"),
    (("GET",), r"/v1/team-designations"),
    (("DELETE",), r"/v1/otp/expired"),
]

CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_ALL_ORIGINS = os.getenv("CORS_ALLOW_ALL_ORIGINS", "True").lower() == "true"
if not CORS_ALLOW_ALL_ORIGINS:
    CORS_ALLOWED_ORIGINS = [origin for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if origin]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "ultmt": {
            "handlers": ["console"],
            "level": "WARNING" if TESTING else LOG_LEVEL,
            "propagate": False,
        },
        "ultmt_project": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Ultmt API",
    "DESCRIPTION": "Teams, rosters, membership requests and season rollover",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/v1/",
    "TAGS": [
        {"name": "auth", "description": "Login, logout and token refresh"},
        {"name": "users", "description": "Accounts, profiles and membership caches"},
        {"name": "teams", "description": "Teams, rollover and archival"},
        {"name": "requests", "description": "Roster membership requests"},
        {"name": "claim-guest", "description": "Guest account claiming"},
        {"name": "verification", "description": "Team and user verification"},
        {"name": "health", "description": "Health check endpoints"},
    ],
}
