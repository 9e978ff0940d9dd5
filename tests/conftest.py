"""
Test configuration: runs before any test module imports config.settings.
In-memory SQLite (fresh per TestClient lifespan) and an fsspec memory blob store.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com,Ops@Example.com")
os.environ.setdefault("STORAGE_PROTOCOL", "memory")
os.environ.setdefault("STORAGE_ROOT", "/onboarding-blobs")
os.environ.setdefault("LOG_LEVEL", "WARNING")
