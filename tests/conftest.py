"""Point settings at an in-memory SQLite database before the app is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["JWT_EXPIRE_SECONDS"] = "3600"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["APP_ENV"] = "dev"
