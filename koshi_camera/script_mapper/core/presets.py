"""Path scripts and built-in camera path presets.

A path script is one ScriptMapper bookmark per line, keyed by beat:

    0: q_0_1_-5_0_0_0_60,IOSine
    4: q_3_1_0_0_15_0_60,IOQuad
    8: q_0_3_5_0_0_0_60,stop

The command on each line configures its waypoint and the easing of the
segment leaving it. Beats are normalized over the span from the first
beat to the last, so a script may start at any beat.
"""

import dataclasses
import re
import uuid
from typing import Dict, List, Optional, Sequence, Tuple

from .commands import parse_position_command
from .easing import CurveRegistry, DEFAULT_REGISTRY
from .path_model import CameraPath, Waypoint
from .timing import beat_to_normalized
from .vectors import Vec3


ORIGIN = Vec3(0.0, 0.0, 0.0)

_LINE_PATTERN = re.compile(r'^\s*([-+]?\d*\.?\d+)\s*:\s*(.+?)\s*$')


def parse_path_script(text: str) -> List[Tuple[float, str]]:
    """Extract (beat, command) pairs sorted by beat.

    Blank lines, '#' comments and lines without a 'beat: command' shape
    are skipped. A later line with the same beat replaces the earlier one.
    """
    entries: Dict[float, str] = {}
    if not text:
        return []

    for line in text.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        match = _LINE_PATTERN.match(line)
        if not match:
            continue
        try:
            beat = float(match.group(1))
        except ValueError:
            continue
        entries[beat] = match.group(2)

    return sorted(entries.items())


def _waypoint(
    index: int,
    beat: float,
    command: str,
    fallback: Optional[Vec3] = None,
    id_prefix: str = "wp",
) -> Waypoint:
    parsed = parse_position_command(command)
    if parsed is not None:
        position, rotation = parsed.position, parsed.rotation
    else:
        position, rotation = (fallback if fallback is not None else ORIGIN), None
    return Waypoint(
        id=f"{id_prefix}-{index}",
        position=position,
        time=beat,
        beat=beat,
        command=command,
        rotation=rotation,
    )


def path_from_commands(
    entries: Sequence[Tuple[float, str]],
    name: str = "Path Script",
    total_duration: float = 3000.0,
    bpm: Optional[float] = None,
    path_id: Optional[str] = None,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> CameraPath:
    """Build a path from (beat, command) pairs.

    A command without a position (spin, stop) keeps the previous waypoint's
    position.
    """
    token = uuid.uuid4().hex[:8]
    waypoints: List[Waypoint] = []
    previous: Optional[Vec3] = None
    for i, (beat, command) in enumerate(entries):
        wp = _waypoint(i, beat, command, previous, id_prefix=f"wp-{token}")
        waypoints.append(wp)
        previous = wp.position

    first_beat = waypoints[0].beat if waypoints else 0
    span = waypoints[-1].beat - first_beat if waypoints else 0
    beat_duration = span if span > 0 else None
    normalized = [_normalize(wp, beat_duration, first_beat) for wp in waypoints]

    return CameraPath.from_waypoints(
        id=path_id or f"path-{token}",
        name=name,
        waypoints=normalized,
        total_duration=total_duration,
        segment_prefix=f"seg-{token}",
        registry=registry,
        bpm=bpm,
        beat_offset=first_beat if waypoints else None,
        beat_duration=beat_duration,
    )


def _normalize(wp: Waypoint, beat_duration: Optional[float], first_beat: float = 0) -> Waypoint:
    if not beat_duration:
        return dataclasses.replace(wp, time=0.0)
    return dataclasses.replace(wp, time=beat_to_normalized(wp.beat, beat_duration, first_beat))


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

# (id, name, beat_duration, total_duration_ms, [(beat, command, fallback position)])
PRESET_DEFINITIONS = [
    ("preset-basic-3point", "Basic 3-Point Path", 8, 3000, [
        (0, "q_0_1_-5_0_0_0_60,IOSine", None),
        (4, "q_3_1_0_0_15_0_60,IOQuad", None),
        (8, "q_0_3_5_0_0_0_60,stop", None),
    ]),
    ("preset-easein-demo", "EaseIn Demo (HOLD→EASED→HOLD)", 16, 4000, [
        (0, "q_-3_1_-5_0_0_0_60", None),
        (3.2, "q_-3_1_-5_0_0_0_60,OCubic", None),
        (12.8, "q_3_1_5_0_0_0_60", None),
        (16, "q_3_1_5_0_0_0_60,stop", None),
    ]),
    ("preset-easeout-demo", "EaseOut Demo (EASED→HOLD→LINEAR)", 16, 3500, [
        (0, "q_0_1_-5_0_0_0_60,IQuad", None),
        (6.4, "q_0_2_0_0_0_0_60", None),
        (9.6, "q_0_2_0_0_0_0_60", None),
        (16, "q_0_1_5_0_0_0_60,stop", None),
    ]),
    ("preset-complex-5point", "Complex 5-Point Path", 16, 5000, [
        (0, "q_-4_0.5_-4_0_0_0_60,IOQuad", None),
        (4, "spin45,IOCubic", Vec3(0.0, 3.0, -2.0)),
        (8, "spin-30,IOQuart", Vec3(4.0, 1.0, 0.0)),
        (12, "spin90,IOQuint", Vec3(0.0, 2.0, 2.0)),
        (16, "q_-4_0.5_4_0_0_0_60,stop", None),
    ]),
    ("preset-zigzag-quick", "Zigzag Quick Motion", 16, 3000, [
        (0, "q_-3_1_-3_0_0_0_60,OBack", None),
        (2.24, "q_3_2_-2_0_0_0_60,IBack", None),
        (4.48, "q_-3_1_-1_0_0_0_60,OElastic", None),
        (6.72, "q_3_2_0_0_0_0_60,IElastic", None),
        (9.12, "q_-3_1_1_0_0_0_60,OBounce", None),
        (11.36, "q_3_2_2_0_0_0_60,IBounce", None),
        (13.6, "q_-3_1_3_0_0_0_60,IOExpo", None),
        (16, "q_0_1.5_4_0_0_0_60,stop", None),
    ]),
    ("preset-around-block", "Around the Block (4 corners)", 16, 4000, [
        (0, "q_5_1_0_0_0_0_60,IOSine", None),
        (4, "q_0_1_5_0_90_0_60,IOSine", None),
        (8, "q_-5_1_0_0_180_0_60,IOSine", None),
        (12, "q_0_1_-5_0_270_0_60,IOSine", None),
        (16, "q_5_1_0_0_360_0_60,stop", None),
    ]),
    ("preset-cinematic-sweep", "Cinematic Sweep", 16, 4500, [
        (0, "q_-5_2_-5_-10_0_0_45,IOQuint", None),
        (8, "q_0_1_0_0_0_0_60,IOCirc", None),
        (16, "q_5_0.5_5_10_0_0_75,stop", None),
    ]),
    ("preset-simple-pan", "Simple 2-Point Pan", 8, 2000, [
        (0, "q_-3_1.5_-4_0_0_0_60,ease_6_6", None),
        (8, "q_3_1.5_4_0_0_0_60,stop", None),
    ]),
]


def _build_preset(definition) -> CameraPath:
    preset_id, name, beat_duration, total_duration, points = definition
    waypoints = [
        _normalize(_waypoint(i, beat, command, fallback, id_prefix="preset-wp"), beat_duration)
        for i, (beat, command, fallback) in enumerate(points)
    ]
    return CameraPath.from_waypoints(
        id=preset_id,
        name=name,
        waypoints=waypoints,
        total_duration=float(total_duration),
        segment_prefix="preset-seg",
        beat_duration=float(beat_duration),
    )


CAMERA_PATH_PRESETS: Tuple[CameraPath, ...] = tuple(_build_preset(d) for d in PRESET_DEFINITIONS)


def get_preset_by_id(preset_id: str) -> Optional[CameraPath]:
    for preset in CAMERA_PATH_PRESETS:
        if preset.id == preset_id:
            return preset
    return None


def list_presets() -> List[str]:
    """Preset ids in definition order."""
    return [p.id for p in CAMERA_PATH_PRESETS]


def clone_preset(preset: CameraPath, registry: CurveRegistry = DEFAULT_REGISTRY) -> CameraPath:
    """Copy of a path with fresh ids and recomputed segments."""
    token = uuid.uuid4().hex[:8]
    waypoints = [
        dataclasses.replace(wp, id=f"wp-{token}-{i}")
        for i, wp in enumerate(preset.waypoints)
    ]
    return CameraPath.from_waypoints(
        id=f"path-{token}",
        name=f"{preset.name} (Copy)",
        waypoints=waypoints,
        total_duration=preset.total_duration,
        coordinate_system=preset.coordinate_system,
        segment_prefix=f"seg-{token}",
        registry=registry,
        bpm=preset.bpm,
        beat_offset=preset.beat_offset,
        beat_duration=preset.beat_duration,
    )


DEFAULT_CAMERA_PATH = get_preset_by_id("preset-simple-pan")


__all__ = [
    "parse_path_script",
    "path_from_commands",
    "PRESET_DEFINITIONS",
    "CAMERA_PATH_PRESETS",
    "get_preset_by_id",
    "list_presets",
    "clone_preset",
    "DEFAULT_CAMERA_PATH",
]
