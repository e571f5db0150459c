"""ScriptMapper command grammar.

A bookmark name is a comma-separated list of sub-tokens:

    q_X_Y_Z[_RX_RY_RZ[_FOV...]]   explicit position (+ rotation)
    dpos_X_Y_Z_FOV                position, rotation looks at the avatar head
    spin<deg>, stop, next, -> ... control tokens
    {In|Out|InOut|I|O|IO}<Name>   easing, e.g. InSine, OQuad, IOCubic
    ease_<x>_<y>                  drift easing

Examples:
    "q_0_1_-5_0_0_0_60,IOSine"
    "dpos_-0.5_3_-3_60,spin60,IBack"

Every sub-token classifies to exactly one of PositionCommand,
ControlCommand, EasingCommand or UnrecognizedCommand; parsing never raises.
"""

import math
import re
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple, Union

from .easing import CurveRegistry, DEFAULT_REGISTRY, DriftParams
from .vectors import Rotation, Vec3


DRIFT_CURVE_ID = "drift"

# Avatar head height, the default ScriptMapper #height target.
DEFAULT_HEAD_POSITION = Vec3(0.0, 1.5, 0.0)

# Longest prefixes first so "InOutSine" never slices as "In" + "OutSine".
PREFIX_GROUPS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("InOut", "IO"), "easeboth"),
    (("In", "I"), "easein"),
    (("Out", "O"), "easeout"),
)

_LONG_PREFIX = {"easein": "In", "easeout": "Out", "easeboth": "InOut"}
_SHORT_PREFIX = {"easein": "I", "easeout": "O", "easeboth": "IO"}

NON_EASING_PREFIXES = ("q_", "dpos_", "spin", "->")
NON_EASING_WORDS = ("next", "stop")

_NUM = r"(-?(?:\d+(?:\.\d*)?|\.\d+))"
_DRIFT_RE = re.compile(r"^ease_(\d+)_(\d+)$")
_Q_RE = re.compile(rf"^q_{_NUM}_{_NUM}_{_NUM}(?:_{_NUM}_{_NUM}_{_NUM}(?:_{_NUM})?)?")
_DPOS_RE = re.compile(rf"^dpos_{_NUM}_{_NUM}_{_NUM}_(?:{_NUM})?")


# ---------------------------------------------------------------------------
# Token types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PositionCommand:
    """Camera position from a q_ or dpos_ token."""
    x: float
    y: float
    z: float
    rotation: Optional[Rotation] = None
    fov: Optional[float] = None
    source: str = "q"

    kind: ClassVar[str] = "position"

    @property
    def position(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)


@dataclass(frozen=True)
class ControlCommand:
    """spin / stop / next / -> token. ``argument`` holds the spin degrees or arrow target."""
    name: str
    argument: Optional[str] = None

    kind: ClassVar[str] = "control"


@dataclass(frozen=True)
class EasingCommand:
    curve_id: str
    direction: str
    params: Optional[DriftParams] = None

    kind: ClassVar[str] = "easing"


@dataclass(frozen=True)
class UnrecognizedCommand:
    token: str

    kind: ClassVar[str] = "unrecognized"


Command = Union[PositionCommand, ControlCommand, EasingCommand, UnrecognizedCommand]


@dataclass(frozen=True)
class EasingExtraction:
    """Segment easing recovered from a full bookmark command."""
    curve_id: str
    direction: str
    easing_enabled: bool
    drift_params: Optional[DriftParams] = None
    raw_command: Optional[str] = None


# ---------------------------------------------------------------------------
# Easing tokens
# ---------------------------------------------------------------------------

def format_command(
    curve_id: str,
    direction: str,
    drift_params: Optional[DriftParams] = None,
    short: bool = False,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> Optional[str]:
    """Format a curve/direction as a ScriptMapper easing token.

    Returns None when the curve has no ScriptMapper name, or when it is the
    drift curve and ``drift_params`` is missing, or when ``direction`` is not
    a known direction. Drift ignores ``direction``.
    """
    curve = registry.get(curve_id)
    if curve is None or not curve.host_compatible:
        return None

    if curve.is_parametric:
        if drift_params is None:
            return None
        return f"ease_{int(drift_params.x)}_{int(drift_params.y)}"

    prefixes = _SHORT_PREFIX if short else _LONG_PREFIX
    prefix = prefixes.get(direction)
    if prefix is None:
        return None
    return f"{prefix}{curve.host_name}"


def format_short_command(
    curve_id: str,
    direction: str,
    drift_params: Optional[DriftParams] = None,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> Optional[str]:
    """Abbreviated form (ISine, OQuad, IOCubic) as written in map bookmarks."""
    return format_command(curve_id, direction, drift_params, short=True, registry=registry)


def parse_command(token: str, registry: CurveRegistry = DEFAULT_REGISTRY) -> Optional[EasingCommand]:
    """Parse an easing token, or return None for any other shape."""
    if not token:
        return None
    token = token.strip()

    drift_match = _DRIFT_RE.match(token)
    if drift_match:
        if DRIFT_CURVE_ID not in registry:
            return None
        return EasingCommand(
            DRIFT_CURVE_ID,
            "easein",
            DriftParams(int(drift_match.group(1)), int(drift_match.group(2))),
        )

    for keys, direction in PREFIX_GROUPS:
        for key in keys:
            if not token.startswith(key):
                continue
            base_name = token[len(key):]
            if not base_name:
                return None
            curve = registry.by_host_name(base_name)
            # Drift only exists in its ease_x_y form.
            if curve is None or curve.is_parametric:
                return None
            return EasingCommand(curve.id, direction)

    return None


# ---------------------------------------------------------------------------
# Position tokens
# ---------------------------------------------------------------------------

def calculate_look_at(position: Vec3, target: Vec3 = DEFAULT_HEAD_POSITION) -> Rotation:
    """Rotation (degrees) that points a camera at ``position`` toward ``target``."""
    dx = target.x - position.x
    dy = target.y - position.y
    dz = target.z - position.z

    ry = math.degrees(math.atan2(dx, dz))
    horizontal = math.sqrt(dx * dx + dz * dz)
    rx = -math.degrees(math.atan2(dy, horizontal))
    return Rotation(rx, ry, 0.0)


def _parse_position_token(token: str) -> Optional[PositionCommand]:
    q_match = _Q_RE.match(token)
    if q_match:
        x, y, z, rx, ry, rz, fov = q_match.groups()
        rotation = None
        if rx is not None:
            rotation = Rotation(float(rx), float(ry), float(rz))
        return PositionCommand(
            float(x), float(y), float(z),
            rotation=rotation,
            fov=float(fov) if fov is not None else None,
            source="q",
        )

    dpos_match = _DPOS_RE.match(token)
    if dpos_match:
        x, y, z, fov = dpos_match.groups()
        position = Vec3(float(x), float(y), float(z))
        return PositionCommand(
            position.x, position.y, position.z,
            rotation=calculate_look_at(position),
            fov=float(fov) if fov is not None else None,
            source="dpos",
        )

    return None


def parse_position_command(command: Optional[str]) -> Optional[PositionCommand]:
    """First q_/dpos_ position in a (possibly comma-separated) command.

    Returns None when the command holds only control or easing tokens.
    """
    if not command:
        return None
    for part in command.split(","):
        parsed = _parse_position_token(part.strip())
        if parsed is not None:
            return parsed
    return None


# ---------------------------------------------------------------------------
# Tagged-union classification
# ---------------------------------------------------------------------------

def _parse_control_token(token: str) -> Optional[ControlCommand]:
    if token in NON_EASING_WORDS:
        return ControlCommand(token)
    if token.startswith("spin"):
        return ControlCommand("spin", token[len("spin"):] or None)
    if token.startswith("->"):
        return ControlCommand("->", token[2:].strip() or None)
    return None


def classify_token(token: str, registry: CurveRegistry = DEFAULT_REGISTRY) -> Command:
    """Classify one sub-token: position, then control, then easing."""
    token = token.strip()

    position = _parse_position_token(token)
    if position is not None:
        return position

    control = _parse_control_token(token)
    if control is not None:
        return control

    easing = parse_command(token, registry)
    if easing is not None:
        return easing

    return UnrecognizedCommand(token)


def split_commands(full_command: str, registry: CurveRegistry = DEFAULT_REGISTRY) -> List[Command]:
    """Classify every comma-separated sub-token of a bookmark name."""
    if not full_command:
        return []
    return [classify_token(part, registry) for part in full_command.split(",")]


def _is_non_easing(part: str) -> bool:
    return part.startswith(NON_EASING_PREFIXES) or part in NON_EASING_WORDS


def extract_easing_token(full_command: Optional[str], registry: CurveRegistry = DEFAULT_REGISTRY) -> Optional[str]:
    """Last sub-token that parses as easing, scanning from the end.

    'dpos_-0.5_3_-3_60,spin60,IBack' -> 'IBack'
    'dpos_0_0_0_60'                  -> None
    """
    if not full_command:
        return None
    for part in reversed(full_command.split(",")):
        part = part.strip()
        if _is_non_easing(part):
            continue
        if parse_command(part, registry) is not None:
            return part
    return None


def extract_easing(full_command: Optional[str], registry: CurveRegistry = DEFAULT_REGISTRY) -> Optional[EasingExtraction]:
    """Easing settings for the segment that starts at a bookmark."""
    token = extract_easing_token(full_command, registry)
    if token is None:
        return None
    parsed = parse_command(token, registry)
    return EasingExtraction(
        curve_id=parsed.curve_id,
        direction=parsed.direction,
        easing_enabled=True,
        drift_params=parsed.params,
        raw_command=token,
    )


__all__ = [
    "DRIFT_CURVE_ID",
    "DEFAULT_HEAD_POSITION",
    "PREFIX_GROUPS",
    "PositionCommand",
    "ControlCommand",
    "EasingCommand",
    "UnrecognizedCommand",
    "Command",
    "EasingExtraction",
    "format_command",
    "format_short_command",
    "parse_command",
    "calculate_look_at",
    "parse_position_command",
    "classify_token",
    "split_commands",
    "extract_easing_token",
    "extract_easing",
]
