"""ScriptMapper bookmark import/export nodes."""

import json
import logging
import os

from .core import (
    export_to_bookmark_json,
    import_from_bookmark_json,
    validate_bookmark_structure,
    validate_segment_bookmark_correspondence,
    format_bookmark_json,
    parse_bookmark_json,
    default_filename,
    save_bookmark,
    load_bookmark,
    DEFAULT_TRACK_NAME,
)

logger = logging.getLogger("koshi.camera.nodes")

try:
    import folder_paths
    OUTPUT_DIR_AVAILABLE = True
except ImportError:
    OUTPUT_DIR_AVAILABLE = False


def _default_output_dir() -> str:
    if OUTPUT_DIR_AVAILABLE:
        return os.path.join(folder_paths.get_output_directory(), "scriptmapper")
    return os.path.join(os.path.expanduser("~"), "ComfyUI", "output", "scriptmapper")


class KoshiBookmarkImport:
    """Import a ScriptMapper bookmark JSON (Beat Saber v3 customData) as a camera path."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Koshi/Camera Path"
    FUNCTION = "import_bookmarks"
    RETURN_TYPES = ("KOSHI_CAMERA_PATH", "STRING",)
    RETURN_NAMES = ("camera_path", "report",)

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "bookmark_json": ("STRING", {"multiline": True, "default": ""}),
            },
            "optional": {
                "file_path": ("STRING", {"default": ""}),
                "default_bpm": ("FLOAT", {"default": 120.0, "min": 1.0, "max": 1000.0, "step": 0.5}),
            }
        }

    def import_bookmarks(self, bookmark_json: str, file_path: str = "", default_bpm: float = 120.0):
        if file_path.strip():
            try:
                document = load_bookmark(file_path.strip())
            except (OSError, json.JSONDecodeError) as e:
                raise ValueError(f"Could not read bookmark file {file_path}: {e}")
        else:
            document = parse_bookmark_json(bookmark_json)
            if document is None:
                raise ValueError("bookmark_json is not valid JSON")

        errors = validate_bookmark_structure(document)
        if errors:
            raise ValueError("Invalid bookmark JSON: " + "; ".join(errors))

        path = import_from_bookmark_json(document, default_bpm)
        if path is None:
            raise ValueError("Bookmark JSON could not be converted to a camera path")

        events = document["_customData"].get("_customEvents") or []
        warnings = validate_segment_bookmark_correspondence(
            path.waypoints, events, path.total_duration / 1000
        )
        lines = [f"Imported {path.name}: {len(path.waypoints)} waypoints, {len(path.segments)} segments"]
        lines.extend(f"WARNING: {w}" for w in warnings)
        return (path, "\n".join(lines))


class KoshiBookmarkExport:
    """Export a camera path as ScriptMapper bookmark JSON and save it."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Koshi/Camera Path"
    FUNCTION = "export"
    RETURN_TYPES = ("STRING", "STRING",)
    RETURN_NAMES = ("bookmark_json", "file_path",)
    OUTPUT_NODE = True

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "camera_path": ("KOSHI_CAMERA_PATH",),
                "track_name": ("STRING", {"default": DEFAULT_TRACK_NAME}),
                "include_bookmarks": ("BOOLEAN", {"default": True}),
                "save_file": ("BOOLEAN", {"default": True}),
            },
            "optional": {
                "filename": ("STRING", {"default": ""}),
                "output_path": ("STRING", {"default": ""}),
            }
        }

    def export(self, camera_path, track_name: str, include_bookmarks: bool, save_file: bool,
               filename: str = "", output_path: str = ""):
        track = track_name.strip() or DEFAULT_TRACK_NAME
        document = export_to_bookmark_json(camera_path, track, include_bookmarks)
        text = format_bookmark_json(document)

        filepath = ""
        if save_file:
            name = filename.strip() or default_filename(track)
            if not name.endswith(".json"):
                name += ".json"
            filepath = save_bookmark(document, os.path.join(output_path or _default_output_dir(), name))

        return {"ui": {"text": [filepath or text]}, "result": (text, filepath)}


NODE_CLASS_MAPPINGS = {
    "Koshi_BookmarkImport": KoshiBookmarkImport,
    "Koshi_BookmarkExport": KoshiBookmarkExport,
}

NODE_DISPLAY_NAME_MAPPINGS = {
    "Koshi_BookmarkImport": "▀▄▀ KN ScriptMapper Bookmark Import",
    "Koshi_BookmarkExport": "▀▄▀ KN ScriptMapper Bookmark Export",
}
