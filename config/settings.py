"""
Pyramid Books - Django Settings (Infrastructure Only)
====================================================
Django serves as the framework container for the distribution backend.
Domain rules live in core/ and engines/; Django provides ORM,
transactions and the HTTP adapter.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
# BASE_DIR = project root where manage.py lives
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "PBD_SECRET_KEY", "pbd-dev-key-replace-before-deployment"
)

DEBUG = _env_bool("PBD_DEBUG", True)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("PBD_ALLOWED_HOSTS", "").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # ── Pyramid Books modules (dependency order) ──────────
    "core.identity_store",
    "core.numbering",
    "engines.catalog",
    "engines.customer",
    "engines.promotion",
    "engines.orders",
    "engines.payments",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured via PBD_DB_* env.
DATABASES = {
    "default": {
        "ENGINE": os.environ.get("PBD_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("PBD_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("PBD_DB_USER", ""),
        "PASSWORD": os.environ.get("PBD_DB_PASSWORD", ""),
        "HOST": os.environ.get("PBD_DB_HOST", ""),
        "PORT": os.environ.get("PBD_DB_PORT", ""),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Ordering Rules ────────────────────────────────────────────
# Read through core.config.load_ordering_config(), never directly.
PBD_ORDER_NUMBER_PREFIX = os.environ.get("PBD_ORDER_NUMBER_PREFIX", "PB-")
PBD_STOCK_RECEIPT_NUMBER_PREFIX = os.environ.get(
    "PBD_STOCK_RECEIPT_NUMBER_PREFIX", "SR-"
)
PBD_PRICE_TOLERANCE = os.environ.get("PBD_PRICE_TOLERANCE", "0.01")
PBD_DEFAULT_CUSTOMER_CREDIT_LIMIT = os.environ.get(
    "PBD_DEFAULT_CUSTOMER_CREDIT_LIMIT", "0"
)
