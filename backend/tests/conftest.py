"""Shared fixtures for the tool directory tests."""

import asyncio
import json
from datetime import datetime

import pytest

from tool_directory.config import Settings
from tool_directory.database import ToolStore
from tool_directory.models.tool import AiTool


def _add_tool(session, name, url, category=None, description=None, last_seen=None):
    """Insert a row directly, bypassing the upsert path."""
    tool = AiTool(
        name=name,
        url=url,
        category=category,
        description=description,
        last_seen=last_seen or datetime(2024, 1, 1),
    )
    session.add(tool)
    return tool


@pytest.fixture
def add_tool():
    return _add_tool


def _run_with_store(database_url, scenario):
    async def _runner():
        store = ToolStore(database_url)
        await store.init()
        try:
            return await scenario(store)
        finally:
            await store.dispose()

    return asyncio.run(_runner())


@pytest.fixture
def run_store():
    """Run an async scenario against a fresh in-memory store."""
    return lambda scenario: _run_with_store("sqlite+aiosqlite://", scenario)


@pytest.fixture
def run_file_store(tmp_path):
    """Run an async scenario against a file-backed store."""
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'crud.db'}"
    return lambda scenario: _run_with_store(database_url, scenario)


@pytest.fixture
def catalog_file(tmp_path):
    """Write a small curated catalog and return its path."""
    path = tmp_path / "curated_tools.json"
    path.write_text(
        json.dumps(
            [
                {
                    "name": "A",
                    "url": "https://x.com",
                    "description": "Writes text",
                    "category": "Text",
                    "imageUrl": "https://logo.example/x.png",
                },
                {
                    "name": "B",
                    "url": "https://y.com",
                    "description": "Draws pictures",
                    "category": "Images",
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_settings(tmp_path, catalog_file):
    """Build isolated settings backed by a temporary SQLite file."""

    def _make(**overrides):
        values = {
            "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'tools.db'}",
            "CURATED_TOOLS_FILE": str(catalog_file),
            "SEED_ON_STARTUP": False,
            "ADMIN_TOKEN": "",
        }
        values.update(overrides)
        return Settings(**values)

    return _make
