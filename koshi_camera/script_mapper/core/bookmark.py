"""ScriptMapper bookmark export/import.

Beat Saber v3 customData with one AssignPathAnimation event per segment:

    {
      "_version": "3.0.0",
      "_customData": {
        "_bookmarks": [{"_time": 0.0, "_name": "...", "_color": {...}}],
        "_environment": [],
        "_pointDefinitions": [{"_name": "CameraPath", "_points": [[x, y, z, t], ...]}],
        "_customEvents": [{"_time": 0.0, "_type": "AssignPathAnimation",
                           "_data": {"_track": "CameraPath", "_duration": 1.5, "_easing": "IOQuad"}}]
      }
    }

All times are seconds rounded to 6 decimals.
"""

import dataclasses
import json
import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .commands import format_short_command, parse_command
from .easing import CurveRegistry, DEFAULT_REGISTRY
from .path_model import CameraPath, Waypoint, create_waypoint, generate_segments_from_waypoints
from .timing import TIME_EPSILON, round_time, time_is_less_than, times_are_equal
from .vectors import Vec3

logger = logging.getLogger("koshi.camera.bookmark")

BOOKMARK_VERSION = "3.0.0"
DEFAULT_TRACK_NAME = "CameraPath"
EVENT_TYPE = "AssignPathAnimation"
LINEAR_EASINGS = ("easeLinear", "linear")
BOOKMARK_COLOR = {"r": 0, "g": 0.8, "b": 1, "a": 1}


# ---------------------------------------------------------------------------
# Waypoint lookup
# ---------------------------------------------------------------------------

def find_waypoint_at_time(
    waypoints: Sequence[Waypoint],
    target_time_seconds: float,
    total_duration: float,
) -> Optional[int]:
    """Index of the waypoint at an absolute time (seconds), or None.

    Binary search over waypoints sorted by time, with epsilon tolerance.
    """
    target = target_time_seconds / total_duration if total_duration > 0 else 0.0

    low, high = 0, len(waypoints) - 1
    while low <= high:
        mid = (low + high) // 2
        wp_time = waypoints[mid].time
        if times_are_equal(wp_time, target):
            return mid
        if time_is_less_than(wp_time, target):
            low = mid + 1
        else:
            high = mid - 1
    return None


def _event_data(event: Dict[str, Any]) -> Dict[str, Any]:
    data = event.get("_data")
    return data if isinstance(data, dict) else {}


def _event_duration(event: Dict[str, Any]) -> float:
    return _event_data(event).get("_duration") or 0


def _event_easing(event: Dict[str, Any]) -> str:
    return _event_data(event).get("_easing") or "easeLinear"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _split_timed_events(events: Sequence[Any]) -> Tuple[List[Dict[str, Any]], List[str]]:
    """Events with a numeric _time and _duration, plus errors for the rest."""
    timed, errors = [], []
    for i, event in enumerate(events):
        if not isinstance(event, dict):
            errors.append(f"Event {i} is not an object")
        elif not _is_number(event.get("_time")):
            errors.append(f"Event {i} has no numeric _time")
        elif not _is_number(_event_duration(event)):
            errors.append(f"Event {i} has a non-numeric _duration")
        else:
            timed.append(event)
    return timed, errors


# ---------------------------------------------------------------------------
# Correspondence validation
# ---------------------------------------------------------------------------

def validate_point_ordering(waypoints: Sequence[Waypoint]) -> List[str]:
    """Times must be strictly increasing and inside [0, 1]."""
    errors = []
    for i in range(1, len(waypoints)):
        prev, curr = waypoints[i - 1], waypoints[i]
        if not time_is_less_than(prev.time, curr.time):
            errors.append(
                f"Waypoint times not strictly increasing: point {i - 1} (t={prev.time}) "
                f">= point {i} (t={curr.time})"
            )

    if waypoints:
        if waypoints[0].time < 0:
            errors.append(f"First waypoint has negative time: {waypoints[0].time}")
        if waypoints[-1].time > 1 + TIME_EPSILON:
            errors.append(f"Last waypoint exceeds normalized time 1.0: {waypoints[-1].time}")
    return errors


def validate_event_count(waypoints: Sequence[Waypoint], events: Sequence[Dict[str, Any]]) -> List[str]:
    """N waypoints need exactly N-1 events."""
    expected = max(0, len(waypoints) - 1)
    if len(events) != expected:
        return [
            f"Event count mismatch: expected {expected} events for "
            f"{len(waypoints)} waypoints, found {len(events)}"
        ]
    return []


def validate_event_continuity(events: Sequence[Dict[str, Any]]) -> List[str]:
    """Consecutive events (sorted by _time) must neither gap nor overlap."""
    events, errors = _split_timed_events(events)
    for i in range(1, len(events)):
        prev, curr = events[i - 1], events[i]
        prev_end = prev["_time"] + _event_duration(prev)
        curr_start = curr["_time"]

        if time_is_less_than(prev_end, curr_start):
            errors.append(
                f"Gap detected between events {i - 1} and {i}: "
                f"{curr_start - prev_end:.6f}s gap at t={prev_end:.6f}s"
            )
        if time_is_less_than(curr_start, prev_end):
            errors.append(
                f"Overlap detected between events {i - 1} and {i}: "
                f"{prev_end - curr_start:.6f}s overlap at t={curr_start:.6f}s"
            )
    return errors


def validate_segment_bookmark_correspondence(
    waypoints: Sequence[Waypoint],
    events: Sequence[Dict[str, Any]],
    total_duration: float,
) -> List[str]:
    """All event/waypoint checks; every event must span two consecutive waypoints."""
    errors = []
    errors.extend(validate_point_ordering(waypoints))
    errors.extend(validate_event_count(waypoints, events))

    timed, malformed = _split_timed_events(events)
    errors.extend(malformed)
    sorted_events = sorted(timed, key=lambda e: e["_time"])
    errors.extend(validate_event_continuity(sorted_events))

    for i, event in enumerate(sorted_events):
        start = event["_time"]
        end = start + _event_duration(event)
        start_idx = find_waypoint_at_time(waypoints, start, total_duration)
        end_idx = find_waypoint_at_time(waypoints, end, total_duration)

        if start_idx is None:
            errors.append(f"Event {i} start time {start:.6f}s has no matching waypoint")
        if end_idx is None:
            errors.append(f"Event {i} end time {end:.6f}s has no matching waypoint")
        if start_idx is not None and end_idx is not None and end_idx != start_idx + 1:
            errors.append(
                f"Event {i} does not span consecutive waypoints: "
                f"spans from index {start_idx} to {end_idx}"
            )
    return errors


def validate_bookmark_structure(document: Any) -> List[str]:
    """Structural problems of a bookmark document; empty when importable."""
    errors = []
    if not document or not isinstance(document, dict):
        return ["Invalid JSON: not an object"]

    if not document.get("_version"):
        errors.append("Missing _version field")

    custom_data = document.get("_customData")
    if not custom_data or not isinstance(custom_data, dict):
        errors.append("Missing _customData field")
        return errors

    point_defs = custom_data.get("_pointDefinitions")
    if not point_defs or not isinstance(point_defs, list):
        errors.append("Missing or empty _pointDefinitions")
    else:
        points = point_defs[0].get("_points") if isinstance(point_defs[0], dict) else None
        if not isinstance(points, list) or len(points) < 2:
            errors.append("Point definition must have at least 2 waypoints")

    if not isinstance(custom_data.get("_customEvents"), list):
        errors.append("Missing _customEvents array")

    return errors


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def _segment_easing(segment, registry: CurveRegistry) -> str:
    if segment.raw_command:
        return segment.raw_command
    if not segment.easing_enabled:
        return "easeLinear"
    token = format_short_command(segment.curve_id, segment.direction, segment.drift_params, registry)
    if token is None:
        logger.warning(
            "Segment %s: curve '%s' has no ScriptMapper form, exporting as easeLinear",
            segment.id, segment.curve_id,
        )
        return "easeLinear"
    return token


def export_to_bookmark_json(
    path: CameraPath,
    track_name: str = DEFAULT_TRACK_NAME,
    include_bookmarks: bool = True,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> Dict[str, Any]:
    """Camera path -> Beat Saber v3 bookmark document."""
    total_seconds = path.total_duration / 1000

    points = [
        [wp.position.x, wp.position.y, wp.position.z, round_time(wp.time * total_seconds)]
        for wp in path.waypoints
    ]

    events = []
    for idx, segment in enumerate(path.segments):
        if idx + 1 >= len(path.waypoints):
            break
        from_wp = path.waypoints[idx]
        to_wp = path.waypoints[idx + 1]
        events.append({
            "_time": round_time(from_wp.time * total_seconds),
            "_type": EVENT_TYPE,
            "_data": {
                "_track": track_name,
                "_duration": round_time((to_wp.time - from_wp.time) * total_seconds),
                "_easing": _segment_easing(segment, registry),
            },
        })

    custom_data: Dict[str, Any] = {}
    if include_bookmarks:
        custom_data["_bookmarks"] = [
            {
                "_time": round_time(wp.time * total_seconds),
                "_name": wp.name if wp.name is not None else f"Waypoint {wp.id}",
                "_color": dict(BOOKMARK_COLOR),
            }
            for wp in path.waypoints
        ]
    custom_data["_environment"] = []
    custom_data["_pointDefinitions"] = [{"_name": track_name, "_points": points}]
    custom_data["_customEvents"] = events

    return {"_version": BOOKMARK_VERSION, "_customData": custom_data}


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def _build_path(document: Dict[str, Any], default_bpm: float, registry: CurveRegistry) -> Optional[CameraPath]:
    custom_data = document.get("_customData") or {}
    point_defs = custom_data.get("_pointDefinitions")
    if not point_defs:
        return None

    points = point_defs[0].get("_points")
    if not points or len(points) < 2:
        return None

    track_name = point_defs[0].get("_name") or "ImportedPath"
    total_seconds = float(points[-1][3])
    bookmarks = custom_data.get("_bookmarks") or []

    waypoints = []
    for idx, point in enumerate(points):
        x, y, z, time_seconds = point[:4]
        normalized = time_seconds / total_seconds if total_seconds > 0 else idx / (len(points) - 1)
        name = bookmarks[idx].get("_name") if idx < len(bookmarks) else None
        waypoints.append(create_waypoint(normalized, Vec3(float(x), float(y), float(z)), name))

    segments = generate_segments_from_waypoints(waypoints, f"seg-{uuid.uuid4().hex[:8]}")
    for i, segment in enumerate(segments):
        if i < len(bookmarks) and bookmarks[i].get("_name"):
            segments[i] = dataclasses.replace(segment, bookmark_commands=bookmarks[i]["_name"])

    for event in custom_data.get("_customEvents") or []:
        easing = _event_easing(event)
        start = event["_time"]
        end = start + _event_duration(event)

        start_idx = find_waypoint_at_time(waypoints, start, total_seconds)
        end_idx = find_waypoint_at_time(waypoints, end, total_seconds)
        if start_idx is None or end_idx is None:
            logger.debug("Event at %.6fs does not land on waypoints, skipped", start)
            continue
        if start_idx >= len(segments):
            continue

        segment = dataclasses.replace(segments[start_idx], raw_command=easing)

        if easing in LINEAR_EASINGS:
            segments[start_idx] = dataclasses.replace(segment, easing_enabled=False)
            continue

        parsed = parse_command(easing, registry)
        if parsed is None:
            segments[start_idx] = segment
            continue

        segments[start_idx] = dataclasses.replace(
            segment,
            easing_enabled=True,
            curve_id=parsed.curve_id,
            direction=parsed.direction,
            drift_params=parsed.params if parsed.params is not None else segment.drift_params,
        )

    return CameraPath(
        id=f"imported-{uuid.uuid4().hex[:10]}",
        name=f"{track_name} (Imported)",
        waypoints=tuple(waypoints),
        segments=tuple(segments),
        total_duration=total_seconds * 1000,
        coordinate_system="left-handed",
        bpm=default_bpm,
    )


def import_from_bookmark_json(
    document: Any,
    default_bpm: float = 120,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> Optional[CameraPath]:
    """Bookmark document -> camera path, or None when the document is malformed."""
    if not isinstance(document, dict):
        logger.warning("Failed to import bookmark JSON: expected an object, got %s", type(document).__name__)
        return None
    try:
        return _build_path(document, default_bpm, registry)
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
        logger.warning("Failed to import bookmark JSON: %s", e)
        return None


# ---------------------------------------------------------------------------
# JSON text
# ---------------------------------------------------------------------------

def format_bookmark_json(document: Dict[str, Any]) -> str:
    """Pretty-printed JSON, 2-space indent."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def parse_bookmark_json(text: str) -> Optional[Dict[str, Any]]:
    """JSON text -> document, or None when it is not valid JSON."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Invalid bookmark JSON: %s", e)
        return None


__all__ = [
    "BOOKMARK_VERSION",
    "DEFAULT_TRACK_NAME",
    "EVENT_TYPE",
    "BOOKMARK_COLOR",
    "find_waypoint_at_time",
    "validate_point_ordering",
    "validate_event_count",
    "validate_event_continuity",
    "validate_segment_bookmark_correspondence",
    "validate_bookmark_structure",
    "export_to_bookmark_json",
    "import_from_bookmark_json",
    "format_bookmark_json",
    "parse_bookmark_json",
]
