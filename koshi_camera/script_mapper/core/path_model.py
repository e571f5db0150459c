"""N-point camera path model: waypoints, segments and the path aggregate.

N waypoints -> N-1 segments; segment i moves from waypoint i to waypoint i+1.
Paths are immutable values. To change a path, build a new one
(``CameraPath.replace`` or ``CameraPath.from_waypoints``).
"""

import dataclasses
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .commands import extract_easing
from .easing import CurveRegistry, DEFAULT_REGISTRY, DriftParams
from .timing import normalized_to_beat, times_are_equal
from .vectors import Rotation, Vec3


# Default parameter values
DEFAULTS = {
    "position": Vec3(0.0, 1.0, 0.0),
    "curve_id": "quadratic",
    "direction": "easeboth",
    "duration": 1.0,
    "total_duration": 3000.0,
    "coordinate_system": "left-handed",
    "bpm": 120.0,
}

COORDINATE_SYSTEMS = ("left-handed", "right-handed")


@dataclass(frozen=True)
class Waypoint:
    """A camera position at a normalized time (0-1).

    ``command`` is the bookmark text this waypoint came from, e.g.
    'q_0_1_-5_0_0_0_60,InOutSine'. Its easing token configures the segment
    leaving this waypoint.
    """
    id: str
    position: Vec3
    time: float
    name: Optional[str] = None
    beat: Optional[float] = None
    command: Optional[str] = None
    rotation: Optional[Rotation] = None


@dataclass(frozen=True)
class Segment:
    """Transition between two consecutive waypoints."""
    id: str
    from_waypoint_id: str
    to_waypoint_id: str
    easing_enabled: bool = True
    curve_id: str = "quadratic"
    direction: str = "easeboth"
    duration: float = 1.0
    drift_params: Optional[DriftParams] = None
    raw_command: Optional[str] = None
    bookmark_commands: Optional[str] = None


@dataclass(frozen=True)
class CameraPath:
    id: str
    name: str
    waypoints: Tuple[Waypoint, ...]
    segments: Tuple[Segment, ...]
    total_duration: float = 3000.0
    coordinate_system: str = "left-handed"
    bpm: Optional[float] = None
    beat_offset: Optional[float] = None
    beat_duration: Optional[float] = None

    _index: Mapping[str, int] = field(init=False, repr=False, compare=False)
    _endpoints: Tuple[Optional[Tuple[Waypoint, Waypoint]], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "waypoints", tuple(self.waypoints))
        object.__setattr__(self, "segments", tuple(self.segments))

        index: Dict[str, int] = {}
        for i, wp in enumerate(self.waypoints):
            index.setdefault(wp.id, i)
        object.__setattr__(self, "_index", index)

        # Resolved once so per-frame lookups never scan the waypoint list.
        endpoints = []
        for seg in self.segments:
            from_idx = index.get(seg.from_waypoint_id)
            to_idx = index.get(seg.to_waypoint_id)
            if from_idx is None or to_idx is None:
                endpoints.append(None)
            else:
                endpoints.append((self.waypoints[from_idx], self.waypoints[to_idx]))
        object.__setattr__(self, "_endpoints", tuple(endpoints))

    @classmethod
    def from_waypoints(
        cls,
        id: str,
        name: str,
        waypoints: Sequence[Waypoint],
        total_duration: float = 3000.0,
        coordinate_system: str = "left-handed",
        segment_prefix: str = "seg",
        registry: CurveRegistry = DEFAULT_REGISTRY,
        **metadata,
    ) -> "CameraPath":
        """Build a path whose segments are derived from the waypoint commands."""
        return cls(
            id=id,
            name=name,
            waypoints=tuple(waypoints),
            segments=tuple(compute_segments_from_waypoints(waypoints, segment_prefix, registry)),
            total_duration=total_duration,
            coordinate_system=coordinate_system,
            **metadata,
        )

    def replace(self, **changes) -> "CameraPath":
        return dataclasses.replace(self, **changes)

    def waypoint_index(self, waypoint_id: str) -> Optional[int]:
        return self._index.get(waypoint_id)

    def waypoint_by_id(self, waypoint_id: str) -> Optional[Waypoint]:
        idx = self._index.get(waypoint_id)
        return self.waypoints[idx] if idx is not None else None

    def segment_endpoints(self, segment_index: int) -> Optional[Tuple[Waypoint, Waypoint]]:
        """(from, to) waypoints of a segment, or None for dangling references."""
        if 0 <= segment_index < len(self._endpoints):
            return self._endpoints[segment_index]
        return None


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def create_waypoint_id() -> str:
    return f"wp-{uuid.uuid4().hex[:10]}"


def create_segment_id() -> str:
    return f"seg-{uuid.uuid4().hex[:10]}"


def create_path_id(prefix: str = "path") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}"


def create_waypoint(
    time: float,
    position: Optional[Vec3] = None,
    name: Optional[str] = None,
    command: Optional[str] = None,
    rotation: Optional[Rotation] = None,
) -> Waypoint:
    """New waypoint with a unique id; time is clamped to [0, 1]."""
    return Waypoint(
        id=create_waypoint_id(),
        position=position if position is not None else DEFAULTS["position"],
        time=max(0.0, min(1.0, time)),
        name=name,
        command=command,
        rotation=rotation,
    )


def create_segment(
    from_waypoint_id: str,
    to_waypoint_id: str,
    easing_enabled: bool = True,
    curve_id: str = "quadratic",
    direction: str = "easeboth",
) -> Segment:
    return Segment(
        id=create_segment_id(),
        from_waypoint_id=from_waypoint_id,
        to_waypoint_id=to_waypoint_id,
        easing_enabled=easing_enabled,
        curve_id=curve_id,
        direction=direction,
        duration=DEFAULTS["duration"],
    )


# ---------------------------------------------------------------------------
# Segment derivation
# ---------------------------------------------------------------------------

def generate_segments_from_waypoints(waypoints: Sequence[Waypoint], id_prefix: str = "seg") -> List[Segment]:
    """N-1 segments with the default easing (InOutQuad)."""
    if len(waypoints) < 2:
        return []
    return [
        Segment(
            id=f"{id_prefix}-{i}",
            from_waypoint_id=waypoints[i].id,
            to_waypoint_id=waypoints[i + 1].id,
            easing_enabled=True,
            curve_id=DEFAULTS["curve_id"],
            direction=DEFAULTS["direction"],
            duration=DEFAULTS["duration"],
        )
        for i in range(len(waypoints) - 1)
    ]


def compute_segments_from_waypoints(
    waypoints: Sequence[Waypoint],
    id_prefix: str = "seg",
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> List[Segment]:
    """N-1 segments, easing taken from each originating waypoint's command.

    A waypoint without an easing token yields a linear (disabled) segment.
    """
    if len(waypoints) < 2:
        return []

    segments = []
    for i, (wp, next_wp) in enumerate(zip(waypoints[:-1], waypoints[1:])):
        easing = extract_easing(wp.command, registry)
        segments.append(Segment(
            id=f"{id_prefix}-{i}",
            from_waypoint_id=wp.id,
            to_waypoint_id=next_wp.id,
            easing_enabled=easing.easing_enabled if easing else False,
            curve_id=easing.curve_id if easing else "linear",
            direction=easing.direction if easing else "easein",
            duration=next_wp.time - wp.time,
            drift_params=easing.drift_params if easing else None,
            raw_command=easing.raw_command if easing else None,
            bookmark_commands=wp.command,
        ))
    return segments


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_camera_path(path: CameraPath) -> List[str]:
    """Structural errors of a path; empty when valid. Never raises."""
    errors: List[str] = []
    waypoints = path.waypoints

    if len(waypoints) < 2:
        errors.append("Path must have at least 2 waypoints")
        return errors

    if not times_are_equal(waypoints[0].time, 0.0):
        errors.append(f"First waypoint must be at time 0 (got {waypoints[0].time})")

    if not times_are_equal(waypoints[-1].time, 1.0):
        errors.append(f"Last waypoint must be at time 1 (got {waypoints[-1].time})")

    for i in range(1, len(waypoints)):
        if waypoints[i].time <= waypoints[i - 1].time:
            errors.append(
                f"Waypoint {i} time ({waypoints[i].time}) must be > "
                f"previous time ({waypoints[i - 1].time})"
            )

    if len(path.segments) != len(waypoints) - 1:
        errors.append(f"Expected {len(waypoints) - 1} segments, got {len(path.segments)}")

    for seg in path.segments:
        if path.waypoint_index(seg.from_waypoint_id) is None:
            errors.append(f"Segment {seg.id} references invalid fromWaypointId: {seg.from_waypoint_id}")
        if path.waypoint_index(seg.to_waypoint_id) is None:
            errors.append(f"Segment {seg.id} references invalid toWaypointId: {seg.to_waypoint_id}")

    for i, seg in enumerate(path.segments):
        expected_from = waypoints[i].id if i < len(waypoints) else None
        expected_to = waypoints[i + 1].id if i + 1 < len(waypoints) else None
        if seg.from_waypoint_id != expected_from:
            errors.append(f"Segment {i} fromWaypointId should be {expected_from}, got {seg.from_waypoint_id}")
        if seg.to_waypoint_id != expected_to:
            errors.append(f"Segment {i} toWaypointId should be {expected_to}, got {seg.to_waypoint_id}")

    return errors


def get_waypoint_beat(waypoint: Waypoint, path: CameraPath) -> Optional[float]:
    """Beat number of a waypoint, or None when the path has no BPM metadata."""
    if not path.bpm or not path.beat_duration:
        return None
    if waypoint.beat is not None:
        return waypoint.beat
    return normalized_to_beat(waypoint.time, path.beat_duration, path.beat_offset or 0)


def waypoints_from_positions(
    positions: Iterable[Vec3],
    times: Optional[Iterable[float]] = None,
) -> List[Waypoint]:
    """Waypoints evenly spread over [0, 1] unless explicit times are given."""
    positions = list(positions)
    if times is None:
        count = len(positions)
        times = [i / (count - 1) if count > 1 else 0.0 for i in range(count)]
    return [create_waypoint(t, p) for p, t in zip(positions, times)]


__all__ = [
    "DEFAULTS",
    "COORDINATE_SYSTEMS",
    "Waypoint",
    "Segment",
    "CameraPath",
    "create_waypoint_id",
    "create_segment_id",
    "create_path_id",
    "create_waypoint",
    "create_segment",
    "generate_segments_from_waypoints",
    "compute_segments_from_waypoints",
    "validate_camera_path",
    "get_waypoint_beat",
    "waypoints_from_positions",
]
