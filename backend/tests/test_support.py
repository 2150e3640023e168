"""Tests for the auth/deadline helpers, catalog loading and settings."""

import asyncio
import json

import pytest
from pydantic import ValidationError

from tool_directory.api.deps import verify_bearer_token, with_deadline
from tool_directory.config import Settings
from tool_directory.errors import StoreUnavailable, Unauthorized
from tool_directory.services.catalog import load_curated_tools


class TestVerifyBearerToken:
    """Tests for the static bearer-token check."""

    def test_accepts_any_bearer_when_unconfigured(self):
        assert verify_bearer_token("Bearer anything") == "anything"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer    ", "Token abc", "bearer abc"])
    def test_rejects_missing_or_malformed(self, header):
        with pytest.raises(Unauthorized):
            verify_bearer_token(header)

    def test_configured_token(self):
        assert verify_bearer_token("Bearer s3cret", "s3cret") == "s3cret"
        with pytest.raises(Unauthorized):
            verify_bearer_token("Bearer wrong", "s3cret")


class TestWithDeadline:
    """Tests for the store-call timeout wrapper."""

    def test_returns_result_in_time(self):
        async def quick():
            return 42

        assert asyncio.run(with_deadline(quick(), 1.0, StoreUnavailable)) == 42

    def test_timeout_maps_to_error(self):
        async def slow():
            await asyncio.sleep(1)

        with pytest.raises(StoreUnavailable):
            asyncio.run(with_deadline(slow(), 0.01, StoreUnavailable))

    def test_non_positive_timeout_disables_deadline(self):
        async def quick():
            await asyncio.sleep(0)
            return "done"

        assert asyncio.run(with_deadline(quick(), 0, StoreUnavailable)) == "done"


class TestLoadCuratedTools:
    """Tests for the curated catalog loader."""

    def test_packaged_catalog(self):
        tools = load_curated_tools(Settings().CURATED_TOOLS_FILE)
        assert len(tools) > 50
        urls = [tool.url.lower() for tool in tools]
        assert len(urls) == len(set(urls))
        assert all(tool.name and tool.category for tool in tools)

    def test_reads_camel_case_fields(self, catalog_file):
        tools = load_curated_tools(catalog_file)
        assert [tool.name for tool in tools] == ["A", "B"]
        assert tools[0].image_url == "https://logo.example/x.png"
        assert tools[1].image_url is None

    def test_missing_file_yields_empty_catalog(self, tmp_path):
        assert load_curated_tools(tmp_path / "missing.json") == []

    def test_invalid_entry_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"name": "", "url": "https://x.com"}]), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_curated_tools(path)


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_empty_env_value_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("SEED_LIMIT", "")
        monkeypatch.setenv("ADMIN_TOKEN", "")
        settings = Settings()
        assert settings.SEED_LIMIT == 50
        assert settings.ADMIN_TOKEN == ""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MAX_PAGE_SIZE", "30")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
        settings = Settings()
        assert settings.MAX_PAGE_SIZE == 30
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
