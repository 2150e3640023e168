"""Curated tool catalog loading."""

from __future__ import annotations

from pathlib import Path
from typing import List
import json
import logging

from pydantic import TypeAdapter

from tool_directory.schemas.tool import ToolInput

logger = logging.getLogger("uvicorn.error")

_CATALOG_ADAPTER = TypeAdapter(List[ToolInput])


def load_curated_tools(path: str | Path) -> List[ToolInput]:
    """Read and validate the curated tool list from a JSON file.

    A missing file yields an empty catalog; malformed content raises.
    """
    catalog_path = Path(path)
    if not catalog_path.exists():
        logger.warning("curated-catalog-missing path=%s", catalog_path)
        return []
    with catalog_path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    tools = _CATALOG_ADAPTER.validate_python(raw)
    logger.info("curated-catalog-loaded path=%s count=%s", catalog_path, len(tools))
    return tools
