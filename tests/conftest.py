# tests/conftest.py

"""
Points the service at a throw-away SQLite database before any `crudapp`
module is imported, so the suite runs without a PostgreSQL server.
"""

import os
import tempfile

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite:///" + os.path.join(tempfile.gettempdir(), "crudapp_test.db"),
)
os.environ.setdefault("DB_CONNECT_RETRY_DELAY_SECONDS", "0")
