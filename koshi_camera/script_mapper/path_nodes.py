"""Koshi Camera Path nodes - ScriptMapper presets, path scripts and sampling."""

import json
import logging

import numpy as np

from .core import (
    list_presets,
    get_preset_by_id,
    clone_preset,
    parse_path_script,
    path_from_commands,
    interpolate_camera_path,
    calculate_path_length,
    validate_camera_path,
    export_to_bookmark_json,
    validate_segment_bookmark_correspondence,
    generate_graph_points,
    get_segment_boundaries,
    format_short_command,
    DEFAULT_TRACK_NAME,
)

logger = logging.getLogger("koshi.camera.nodes")

DEFAULT_SCRIPT = """0: q_0_1_-5_0_0_0_60,IOSine
4: q_3_1_0_0_15_0_60,IOQuad
8: q_0_3_5_0_0_0_60,stop"""


class KoshiCameraPathPreset:
    """Load one of the built-in ScriptMapper camera paths."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Koshi/Camera Path"
    FUNCTION = "load"
    RETURN_TYPES = ("KOSHI_CAMERA_PATH", "STRING",)
    RETURN_NAMES = ("camera_path", "name",)

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "preset": (list_presets(), {"default": "preset-simple-pan"}),
            },
            "optional": {
                "make_copy": ("BOOLEAN", {"default": False}),
            }
        }

    def load(self, preset: str, make_copy: bool = False):
        path = get_preset_by_id(preset)
        if path is None:
            raise ValueError(f"Unknown camera path preset: {preset}")
        if make_copy:
            path = clone_preset(path)
        return (path, path.name)


class KoshiCameraPathScript:
    """Build a camera path from 'beat: command' lines (one ScriptMapper bookmark per line)."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Koshi/Camera Path"
    FUNCTION = "build"
    RETURN_TYPES = ("KOSHI_CAMERA_PATH",)
    RETURN_NAMES = ("camera_path",)

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "script": ("STRING", {
                    "multiline": True,
                    "default": DEFAULT_SCRIPT
                }),
                "duration_ms": ("INT", {"default": 3000, "min": 1, "max": 600000}),
            },
            "optional": {
                "bpm": ("FLOAT", {"default": 0.0, "min": 0.0, "max": 1000.0, "step": 0.5}),
                "name": ("STRING", {"default": "Path Script"}),
            }
        }

    def build(self, script: str, duration_ms: int, bpm: float = 0.0, name: str = "Path Script"):
        entries = parse_path_script(script)
        if len(entries) < 2:
            raise ValueError(f"Path script needs at least 2 'beat: command' lines, found {len(entries)}")

        path = path_from_commands(
            entries,
            name=name,
            total_duration=float(duration_ms),
            bpm=bpm if bpm > 0 else None,
        )
        for error in validate_camera_path(path):
            logger.warning("%s: %s", name, error)
        return (path,)


class KoshiCameraPathSampler:
    """Sample a camera path once per frame."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Koshi/Camera Path"
    FUNCTION = "sample"
    RETURN_TYPES = ("KOSHI_CAMERA_TRACK", "FLOAT",)
    RETURN_NAMES = ("camera_track", "path_length",)

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "camera_path": ("KOSHI_CAMERA_PATH",),
                "frames": ("INT", {"default": 90, "min": 1, "max": 10000}),
            }
        }

    def sample(self, camera_path, frames: int):
        positions = np.zeros((frames, 3), dtype=np.float64)
        rotations = []
        segment_indices = []
        times = []

        for i in range(frames):
            t = i / (frames - 1) if frames > 1 else 0.0
            result = interpolate_camera_path(camera_path, t)
            positions[i] = result.position.as_tuple()
            rotations.append(result.rotation.as_tuple() if result.rotation is not None else None)
            segment_indices.append(result.segment_index)
            times.append(t)

        track = {
            "name": camera_path.name,
            "frames": frames,
            "duration_ms": camera_path.total_duration,
            "times": times,
            "positions": positions,
            "rotations": rotations,
            "segment_indices": segment_indices,
        }
        return (track, calculate_path_length(camera_path))


class KoshiCameraPathInfo:
    """Validate a camera path and emit its easing graph."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Koshi/Camera Path"
    FUNCTION = "inspect"
    RETURN_TYPES = ("STRING", "STRING",)
    RETURN_NAMES = ("report", "graph_json",)
    OUTPUT_NODE = True

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "camera_path": ("KOSHI_CAMERA_PATH",),
                "points_per_segment": ("INT", {"default": 50, "min": 2, "max": 500}),
            }
        }

    def inspect(self, camera_path, points_per_segment: int):
        errors = validate_camera_path(camera_path)

        document = export_to_bookmark_json(camera_path, DEFAULT_TRACK_NAME, include_bookmarks=False)
        events = document["_customData"]["_customEvents"]
        errors.extend(validate_segment_bookmark_correspondence(
            camera_path.waypoints, events, camera_path.total_duration / 1000
        ))

        lines = [
            f"{camera_path.name}: {len(camera_path.waypoints)} waypoints, "
            f"{len(camera_path.segments)} segments, {camera_path.total_duration:.0f} ms",
        ]
        for i, segment in enumerate(camera_path.segments):
            token = segment.raw_command or format_short_command(
                segment.curve_id, segment.direction, segment.drift_params
            )
            lines.append(f"  segment {i}: {token if segment.easing_enabled else 'linear'}")
        lines.append("OK" if not errors else "\n".join(f"ERROR: {e}" for e in errors))
        report = "\n".join(lines)

        graph = {
            "boundaries": get_segment_boundaries(camera_path),
            "points": [
                {"x": p.x, "y": p.y, "segment": p.segment_index}
                for p in generate_graph_points(camera_path, points_per_segment)
            ],
        }

        return {"ui": {"text": [report]}, "result": (report, json.dumps(graph))}


NODE_CLASS_MAPPINGS = {
    "Koshi_CameraPathPreset": KoshiCameraPathPreset,
    "Koshi_CameraPathScript": KoshiCameraPathScript,
    "Koshi_CameraPathSampler": KoshiCameraPathSampler,
    "Koshi_CameraPathInfo": KoshiCameraPathInfo,
}

NODE_DISPLAY_NAME_MAPPINGS = {
    "Koshi_CameraPathPreset": "▀▄▀ KN Camera Path Preset",
    "Koshi_CameraPathScript": "▀▄▀ KN Camera Path Script",
    "Koshi_CameraPathSampler": "▀▄▀ KN Camera Path Sampler",
    "Koshi_CameraPathInfo": "▀▄▀ KN Camera Path Info",
}
