"""Shared pytest fixtures for schemagate tests."""

from __future__ import annotations

import os
import tempfile

# Settings are read at import time: point the database at a throwaway file
_db_dir = tempfile.mkdtemp(prefix="schemagate-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_db_dir}/test.db")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from core.validation import SchemaRegistry


@pytest.fixture
def schema_registry() -> SchemaRegistry:
    """Empty registry so declarations in one test never leak into another."""
    return SchemaRegistry()
