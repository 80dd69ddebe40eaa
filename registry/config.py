"""Configuration settings for the registry server."""

import os


DATABASE_PATH = os.environ.get("REGISTRY_DATABASE_PATH", "/app/data/registry.db")

DATABASE_TIMEOUT = float(os.environ.get("REGISTRY_DB_TIMEOUT", "5.0"))

REGISTRY_HOST = os.environ.get("REGISTRY_HOST", "0.0.0.0")

REGISTRY_PORT = int(os.environ.get("REGISTRY_PORT", "8000"))

# Account that may never be granted file access. Registered accounts are
# identified by generated user_id UUIDs, so operators must set
# REGISTRY_ADMIN_ACCOUNT to the administrator's user_id; the default matches
# no registered account.
ADMIN_ACCOUNT_ID = os.environ.get("REGISTRY_ADMIN_ACCOUNT", "admin")

API_KEY_PREFIX = "fmr_"
