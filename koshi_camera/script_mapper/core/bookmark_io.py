"""Bookmark JSON files on disk."""
import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger("koshi.camera.bookmark")


def default_filename(track_name: str) -> str:
    """'Camera Path' -> 'Camera_Path_bookmarks.json'"""
    safe = "".join(c if c.isalnum() or c in "-_" else "_" for c in track_name.strip()) or "CameraPath"
    return f"{safe}_bookmarks.json"


def save_bookmark(document: Dict[str, Any], filepath: str) -> str:
    """Write a bookmark document, creating parent folders. Returns the path."""
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
    logger.debug("Saved bookmark JSON to %s", filepath)
    return filepath


def load_bookmark(filepath: str) -> Any:
    """Load a bookmark document. Raises OSError / json.JSONDecodeError."""
    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)


__all__ = ["default_filename", "save_bookmark", "load_bookmark"]
