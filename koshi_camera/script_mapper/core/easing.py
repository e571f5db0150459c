"""Easing curve catalog with ScriptMapper-compatible naming."""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, List, Literal, Mapping, Optional, Tuple

import numpy as np


EaseType = Literal["easein", "easeout", "easeboth"]

EASE_TYPES: Tuple[str, ...] = ("easein", "easeout", "easeboth")


@dataclass(frozen=True)
class DriftParams:
    """Drift curve parameters, integers in [0, 10]."""
    x: int = 6
    y: int = 6


DEFAULT_DRIFT_PARAMS = DriftParams(6, 6)


def apply_ease_to_function(t: float, base: Callable[[float], float], direction: str) -> float:
    """Apply an ease direction to a base curve."""
    if direction == "easeout":
        return 1 - base(1 - t)
    if direction == "easeboth":
        if t < 0.5:
            return base(2 * t) / 2
        return 1 - base(2 * (1 - t)) / 2
    return base(t)


@dataclass(frozen=True)
class EasingCurve:
    """A named easing curve.

    ``host_name`` is the ScriptMapper base name (``Quad``, ``Expo``...) or
    None when ScriptMapper has no equivalent.
    """
    id: str
    name: str
    formula: str
    base: Callable[..., float] = field(repr=False, compare=False)
    host_name: Optional[str] = None
    is_parametric: bool = False
    default_params: Optional[DriftParams] = None

    @property
    def host_compatible(self) -> bool:
        return self.host_name is not None

    def calculate(self, t: float, direction: str = "easein", params: Optional[DriftParams] = None) -> float:
        """Evaluate the curve at ``t`` for the given direction.

        Values outside [0, 1] are not clamped; overshooting curves keep
        their overshoot.
        """
        if self.is_parametric:
            p = params or self.default_params or DEFAULT_DRIFT_PARAMS
            return apply_ease_to_function(t, lambda u: self.base(u, p), direction)
        return apply_ease_to_function(t, self.base, direction)


# ---------------------------------------------------------------------------
# Base curves (ease-in shape, t in [0, 1])
# ---------------------------------------------------------------------------

def _exponential(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    return math.pow(2, 10 * (t - 1))


def _circular(t: float) -> float:
    return 1 - math.sqrt(max(0.0, 1 - t * t))


def _sqrt(t: float) -> float:
    return math.sqrt(max(0.0, t))


def _back(t: float) -> float:
    c1 = 1.70158
    c3 = c1 + 1
    return c3 * t * t * t - c1 * t * t


def _elastic(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    c4 = (2 * math.pi) / 3
    return -math.pow(2, 10 * t - 10) * math.sin((t * 10 - 10.75) * c4)


def _bounce(t: float) -> float:
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def _drift(t: float, params: DriftParams) -> float:
    """Two-phase curve: quadratic approach to (x/10, y/10), then linear."""
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0
    px = params.x / 10
    py = params.y / 10
    if t < px:
        return (t / px) ** 2 * py
    return py + ((t - px) / (1 - px)) * (1 - py)


EASING_FUNCTIONS: Tuple[EasingCurve, ...] = (
    EasingCurve("linear", "Linear", "y = x", lambda t: t),
    EasingCurve("sine", "Sine", "y = sin(πx/2)", lambda t: math.sin(math.pi * t / 2), "Sine"),
    EasingCurve("quadratic", "Quadratic", "y = x²", lambda t: t * t, "Quad"),
    EasingCurve("cubic", "Cubic", "y = x³", lambda t: t * t * t, "Cubic"),
    EasingCurve("quartic", "Quartic", "y = x⁴", lambda t: t * t * t * t, "Quart"),
    EasingCurve("quintic", "Quintic", "y = x⁵", lambda t: t * t * t * t * t, "Quint"),
    EasingCurve("exponential", "Exponential", "y = 2^(10(x-1))", _exponential, "Expo"),
    EasingCurve("circular", "Circular", "y = 1 - √(1-x²)", _circular, "Circ"),
    EasingCurve("sqrt", "Square Root", "y = √x", _sqrt),
    EasingCurve("back", "Back", "y = x²(2.70158x - 1.70158)", _back, "Back"),
    EasingCurve("elastic", "Elastic", "y = -2^(10(x-1))sin((x-1.1)×2π/0.4)", _elastic, "Elastic"),
    EasingCurve("bounce", "Bounce", "Piecewise bounce function", _bounce, "Bounce"),
    EasingCurve("hermite", "Hermite", "y = x²(3 - 2x)", lambda t: t * t * (3 - 2 * t)),
    EasingCurve("bezier", "Bezier", "y = 3x²(1-x) + x³", lambda t: 3 * t * t * (1 - t) + t * t * t),
    EasingCurve("parabolic", "Parabolic", "y = 4x(1-x)", lambda t: 4 * t * (1 - t)),
    EasingCurve("trigonometric", "Trigonometric", "y = (1 - cos(πx))/2",
                lambda t: (1 - math.cos(math.pi * t)) / 2),
    EasingCurve("drift", "Drift", "piecewise: (x/px)²·py, then linear to 1", _drift, "Drift",
                is_parametric=True, default_params=DEFAULT_DRIFT_PARAMS),
)


class CurveRegistry:
    """Immutable id -> curve table.

    Passed explicitly to the parser, formatter and interpolator so tests
    can swap the curve set.
    """

    def __init__(self, curves: Iterable[EasingCurve]):
        table: Dict[str, EasingCurve] = {}
        for curve in curves:
            table[curve.id] = curve
        self._curves: Mapping[str, EasingCurve] = MappingProxyType(table)
        self._by_host_name: Mapping[str, EasingCurve] = MappingProxyType(
            {c.host_name: c for c in table.values() if c.host_name is not None}
        )

    def get(self, curve_id: str) -> Optional[EasingCurve]:
        return self._curves.get(curve_id)

    def by_host_name(self, host_name: str) -> Optional[EasingCurve]:
        return self._by_host_name.get(host_name)

    def host_name(self, curve_id: str) -> Optional[str]:
        curve = self._curves.get(curve_id)
        return curve.host_name if curve else None

    def is_host_compatible(self, curve_id: str) -> bool:
        return self.host_name(curve_id) is not None

    def ids(self) -> List[str]:
        return list(self._curves.keys())

    def host_compatible(self) -> List[EasingCurve]:
        return [c for c in self._curves.values() if c.host_compatible]

    def __contains__(self, curve_id: object) -> bool:
        return curve_id in self._curves

    def __iter__(self) -> Iterator[EasingCurve]:
        return iter(self._curves.values())

    def __len__(self) -> int:
        return len(self._curves)


DEFAULT_REGISTRY = CurveRegistry(EASING_FUNCTIONS)


def apply_easing(
    t: float,
    curve_id: str,
    direction: str = "easein",
    params: Optional[DriftParams] = None,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> float:
    """Apply named easing curve. Unknown ids fall back to linear."""
    curve = registry.get(curve_id)
    if curve is None:
        return t
    return curve.calculate(t, direction, params)


def apply_easing_to_range(
    t: float,
    from_val: float,
    to_val: float,
    curve_id: str = "linear",
    direction: str = "easein",
    params: Optional[DriftParams] = None,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> float:
    """Apply easing to interpolate between two values."""
    eased_t = apply_easing(t, curve_id, direction, params, registry)
    return from_val + (to_val - from_val) * eased_t


def sample_curve(
    curve_id: str,
    direction: str = "easein",
    samples: int = 100,
    params: Optional[DriftParams] = None,
    registry: CurveRegistry = DEFAULT_REGISTRY,
) -> np.ndarray:
    """Evaluate a curve at ``samples + 1`` evenly spaced inputs."""
    ts = np.linspace(0.0, 1.0, samples + 1)
    return np.array([apply_easing(float(t), curve_id, direction, params, registry) for t in ts])


def list_easings(registry: CurveRegistry = DEFAULT_REGISTRY) -> List[str]:
    """Get list of available curve ids."""
    return sorted(registry.ids())


__all__ = [
    "EaseType",
    "EASE_TYPES",
    "DriftParams",
    "DEFAULT_DRIFT_PARAMS",
    "EasingCurve",
    "EASING_FUNCTIONS",
    "CurveRegistry",
    "DEFAULT_REGISTRY",
    "apply_ease_to_function",
    "apply_easing",
    "apply_easing_to_range",
    "sample_curve",
    "list_easings",
]
