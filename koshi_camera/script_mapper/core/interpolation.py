"""Camera path interpolation.

ScriptMapper moves the camera linearly between waypoints, with easing
applied to the time parameter:

    position = start + (end - start) * eased_time
    eased_time = curve(local_time) if easing is enabled, else local_time
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import numpy as np

from .easing import CurveRegistry, DEFAULT_REGISTRY
from .path_model import CameraPath, Segment
from .vectors import Rotation, Vec3


DEFAULT_POSITION = Vec3(0.0, 1.0, 0.0)

FALLBACK_SEGMENT = Segment(
    id="fallback",
    from_waypoint_id="",
    to_waypoint_id="",
    easing_enabled=False,
    curve_id="linear",
    direction="easein",
    duration=1.0,
)


class SegmentLookup(NamedTuple):
    segment_index: int
    local_time: float


class GraphPoint(NamedTuple):
    x: float
    y: float
    segment_index: int


@dataclass(frozen=True)
class InterpolationResult:
    """Interpolated camera state at a global time.

    ``local_time`` is the position inside the active segment before easing.
    """
    position: Vec3
    segment: Segment
    segment_index: int
    local_time: float
    global_time: float
    rotation: Optional[Rotation] = None


def _clamp01(t: float) -> float:
    return max(0.0, min(1.0, t))


def find_segment_at_time(path: CameraPath, global_time: float) -> SegmentLookup:
    """Map a global time (0-1) to (segment index, local time 0-1).

    A time exactly on a shared boundary belongs to the earlier segment,
    at local time 1.
    """
    t = _clamp01(global_time)
    if len(path.waypoints) < 2 or t <= 0:
        return SegmentLookup(0, 0.0)
    if t >= 1:
        return SegmentLookup(len(path.segments) - 1, 1.0)

    for i in range(len(path.segments)):
        endpoints = path.segment_endpoints(i)
        if endpoints is None:
            continue
        start = endpoints[0].time
        end = endpoints[1].time
        if start <= t <= end:
            span = end - start
            return SegmentLookup(i, (t - start) / span if span > 0 else 0.0)

    return SegmentLookup(len(path.segments) - 1, 1.0)


def calculate_segment_output(
    segment: Segment,
    local_time: float,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> float:
    """Eased output of a segment at a local time; linear when easing is off."""
    t = _clamp01(local_time)
    return _eased(segment, t, registry)


def _eased(segment: Segment, t: float, registry: CurveRegistry) -> float:
    if not segment.easing_enabled:
        return t
    curve = registry.get(segment.curve_id)
    if curve is None:
        return t
    return curve.calculate(t, segment.direction, segment.drift_params)


def interpolate_camera_path(
    path: CameraPath,
    global_time: float,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> InterpolationResult:
    """Camera position along a multi-segment path at a global time (0-1)."""
    t = _clamp01(global_time)
    waypoints = path.waypoints
    first_segment = path.segments[0] if path.segments else FALLBACK_SEGMENT

    if not waypoints:
        return InterpolationResult(DEFAULT_POSITION, first_segment, 0, 0.0, t)

    if len(waypoints) == 1:
        wp = waypoints[0]
        return InterpolationResult(wp.position, first_segment, 0, 0.0, t, wp.rotation)

    if not path.segments:
        return InterpolationResult(waypoints[0].position, FALLBACK_SEGMENT, 0, 0.0, t, waypoints[0].rotation)

    if t == 0:
        wp = waypoints[0]
        return InterpolationResult(wp.position, first_segment, 0, 0.0, 0.0, wp.rotation)

    if t == 1:
        wp = waypoints[-1]
        last_index = len(path.segments) - 1
        return InterpolationResult(wp.position, path.segments[last_index], last_index, 1.0, 1.0, wp.rotation)

    segment_index, local_time = find_segment_at_time(path, t)
    segment = path.segments[segment_index]
    endpoints = path.segment_endpoints(segment_index)
    if endpoints is None:
        return InterpolationResult(DEFAULT_POSITION, segment, segment_index, local_time, t)

    from_wp, to_wp = endpoints
    eased_time = _eased(segment, local_time, registry)

    rotation = None
    if from_wp.rotation is not None and to_wp.rotation is not None:
        rotation = from_wp.rotation.lerp(to_wp.rotation, eased_time)

    return InterpolationResult(
        position=from_wp.position.lerp(to_wp.position, eased_time),
        segment=segment,
        segment_index=segment_index,
        local_time=local_time,
        global_time=t,
        rotation=rotation,
    )


def generate_path_preview_points(
    path: CameraPath,
    steps: int = 100,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> np.ndarray:
    """Positions at ``steps + 1`` evenly spaced times, shape (steps + 1, 3)."""
    if len(path.waypoints) < 2:
        return np.array([wp.position.as_tuple() for wp in path.waypoints], dtype=np.float64).reshape(-1, 3)

    steps = max(steps, 0)
    points = np.zeros((steps + 1, 3), dtype=np.float64)
    for i in range(steps + 1):
        t = i / steps if steps > 0 else 0.0
        points[i] = interpolate_camera_path(path, t, registry).position.as_tuple()
    return points


def sample_camera_path(
    path: CameraPath,
    num_frames: int,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> np.ndarray:
    """Per-frame positions, shape (num_frames, 3). First and last frame hit the end waypoints."""
    if num_frames <= 0:
        return np.zeros((0, 3))
    if num_frames == 1:
        return np.array([interpolate_camera_path(path, 0.0, registry).position.as_tuple()])
    return generate_path_preview_points(path, num_frames - 1, registry)


def generate_graph_points(
    path: CameraPath,
    points_per_segment: int = 50,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> List[GraphPoint]:
    """Easing curve of every segment laid out along the global timeline.

    x is global time; y is the eased local output scaled into the segment's
    time range, so the segments stack into one graph.
    """
    points_per_segment = max(points_per_segment, 0)
    points: List[GraphPoint] = []
    for seg_idx, segment in enumerate(path.segments):
        endpoints = path.segment_endpoints(seg_idx)
        if endpoints is None:
            continue
        start = endpoints[0].time
        span = endpoints[1].time - start

        for i in range(points_per_segment + 1):
            local_t = i / points_per_segment if points_per_segment > 0 else 0.0
            eased = calculate_segment_output(segment, local_t, registry)
            points.append(GraphPoint(start + local_t * span, start + eased * span, seg_idx))
    return points


def get_segment_boundaries(path: CameraPath) -> List[float]:
    """Normalized times where segments change."""
    return [wp.time for wp in path.waypoints]


def calculate_path_length(path: CameraPath) -> float:
    """Sum of straight-line distances between consecutive waypoints."""
    waypoints = path.waypoints
    return sum(
        waypoints[i].position.distance_to(waypoints[i + 1].position)
        for i in range(len(waypoints) - 1)
    )


__all__ = [
    "DEFAULT_POSITION",
    "FALLBACK_SEGMENT",
    "SegmentLookup",
    "GraphPoint",
    "InterpolationResult",
    "find_segment_at_time",
    "calculate_segment_output",
    "interpolate_camera_path",
    "generate_path_preview_points",
    "sample_camera_path",
    "generate_graph_points",
    "get_segment_boundaries",
    "calculate_path_length",
]
