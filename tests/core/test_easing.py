"""Tests for koshi_camera.script_mapper.core.easing -- curve catalog and registry."""

import os
import sys

sys.path.insert(
    0,
    os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    ),
)

import numpy as np
import pytest

from koshi_camera.script_mapper.core.easing import (
    DEFAULT_DRIFT_PARAMS,
    DEFAULT_REGISTRY,
    EASE_TYPES,
    EASING_FUNCTIONS,
    CurveRegistry,
    DriftParams,
    EasingCurve,
    apply_ease_to_function,
    apply_easing,
    apply_easing_to_range,
    list_easings,
    sample_curve,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

ALL_CURVE_IDS = [c.id for c in EASING_FUNCTIONS]

# Parabolic returns to 0 at t=1 by definition.
ENDPOINT_CURVES = [c for c in ALL_CURVE_IDS if c != "parabolic"]

# Curves that overshoot [0, 1] or bounce back on the way.
OVERSHOOT_CURVES = {"back", "elastic", "bounce", "parabolic"}
MONOTONIC_CURVES = [c for c in ALL_CURVE_IDS if c not in OVERSHOOT_CURVES]

HOST_NAMES = {
    "sine": "Sine",
    "quadratic": "Quad",
    "cubic": "Cubic",
    "quartic": "Quart",
    "quintic": "Quint",
    "exponential": "Expo",
    "circular": "Circ",
    "back": "Back",
    "elastic": "Elastic",
    "bounce": "Bounce",
    "drift": "Drift",
}


# ===================================================================
# 1. Boundary conditions
# ===================================================================

class TestBoundaryConditions:
    """Every curve except parabolic maps 0 -> 0 and 1 -> 1 in every direction."""

    @pytest.mark.parametrize("direction", EASE_TYPES)
    @pytest.mark.parametrize("curve_id", ENDPOINT_CURVES)
    def test_zero_maps_to_zero(self, curve_id, direction):
        assert apply_easing(0.0, curve_id, direction) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("direction", EASE_TYPES)
    @pytest.mark.parametrize("curve_id", ENDPOINT_CURVES)
    def test_one_maps_to_one(self, curve_id, direction):
        assert apply_easing(1.0, curve_id, direction) == pytest.approx(1.0, abs=1e-9)

    def test_parabolic_peaks_in_the_middle(self):
        assert apply_easing(0.5, "parabolic") == pytest.approx(1.0)
        assert apply_easing(1.0, "parabolic") == pytest.approx(0.0)


# ===================================================================
# 2. Monotonicity
# ===================================================================

class TestMonotonicity:

    @pytest.mark.parametrize("curve_id", MONOTONIC_CURVES)
    def test_monotonic_non_decreasing(self, curve_id):
        steps = 50
        values = [apply_easing(i / steps, curve_id) for i in range(steps + 1)]
        for i in range(1, len(values)):
            assert values[i] >= values[i - 1] - 1e-9, (
                f"{curve_id}: value decreased at step {i}: "
                f"{values[i - 1]:.6f} -> {values[i]:.6f}"
            )

    def test_back_undershoots_at_start(self):
        assert apply_easing(0.2, "back", "easein") < 0

    def test_back_overshoots_on_easeout(self):
        assert apply_easing(0.8, "back", "easeout") > 1


# ===================================================================
# 3. Known values
# ===================================================================

class TestKnownValues:

    def test_quadratic_easein_half(self):
        assert apply_easing(0.5, "quadratic", "easein") == pytest.approx(0.25)

    def test_quadratic_easeout_half(self):
        assert apply_easing(0.5, "quadratic", "easeout") == pytest.approx(0.75)

    def test_quadratic_easeboth_quarter(self):
        # easeboth: base(2t)/2 below the midpoint
        assert apply_easing(0.25, "quadratic", "easeboth") == pytest.approx(0.125)

    def test_easeboth_is_symmetric(self):
        for t in (0.1, 0.2, 0.3, 0.4):
            a = apply_easing(t, "cubic", "easeboth")
            b = apply_easing(1 - t, "cubic", "easeboth")
            assert a + b == pytest.approx(1.0)

    def test_sine_half(self):
        assert apply_easing(0.5, "sine") == pytest.approx(np.sin(np.pi / 4))

    def test_hermite_half(self):
        assert apply_easing(0.5, "hermite") == pytest.approx(0.5)

    def test_sqrt_quarter(self):
        assert apply_easing(0.25, "sqrt") == pytest.approx(0.5)

    def test_linear_ignores_direction(self):
        for direction in EASE_TYPES:
            assert apply_easing(0.3, "linear", direction) == pytest.approx(0.3)


# ===================================================================
# 4. Drift
# ===================================================================

class TestDrift:

    def test_default_params(self):
        assert DEFAULT_DRIFT_PARAMS == DriftParams(6, 6)

    def test_defaults_at_half(self):
        assert apply_easing(0.5, "drift") == pytest.approx(0.4167, abs=1e-4)

    def test_defaults_at_seven_tenths(self):
        assert apply_easing(0.7, "drift") == pytest.approx(0.7)

    def test_breakpoint_value(self):
        # At t = x/10 the curve reaches y/10.
        assert apply_easing(0.3, "drift", params=DriftParams(3, 8)) == pytest.approx(0.8)

    def test_quadratic_phase(self):
        # (0.15 / 0.3)^2 * 0.8
        assert apply_easing(0.15, "drift", params=DriftParams(3, 8)) == pytest.approx(0.2)

    def test_endpoints_pinned(self):
        for params in (DriftParams(0, 0), DriftParams(10, 10), DriftParams(2, 9)):
            assert apply_easing(0.0, "drift", params=params) == 0.0
            assert apply_easing(1.0, "drift", params=params) == 1.0

    def test_direction_applies(self):
        ein = apply_easing(0.5, "drift", "easein")
        eout = apply_easing(0.5, "drift", "easeout")
        assert eout == pytest.approx(1 - apply_easing(0.5, "drift", "easein"))
        assert ein != pytest.approx(eout)


# ===================================================================
# 5. Registry
# ===================================================================

class TestCurveRegistry:

    def test_default_registry_has_all_curves(self):
        assert len(DEFAULT_REGISTRY) == len(EASING_FUNCTIONS) == 17

    @pytest.mark.parametrize("curve_id,host_name", list(HOST_NAMES.items()))
    def test_host_names(self, curve_id, host_name):
        assert DEFAULT_REGISTRY.host_name(curve_id) == host_name
        assert DEFAULT_REGISTRY.by_host_name(host_name).id == curve_id

    @pytest.mark.parametrize("curve_id", ["linear", "sqrt", "hermite", "bezier", "parabolic", "trigonometric"])
    def test_non_host_curves(self, curve_id):
        assert not DEFAULT_REGISTRY.is_host_compatible(curve_id)

    def test_unknown_curve(self):
        assert DEFAULT_REGISTRY.get("wobble") is None
        assert "wobble" not in DEFAULT_REGISTRY
        assert DEFAULT_REGISTRY.host_name("wobble") is None

    def test_host_compatible_list(self):
        ids = {c.id for c in DEFAULT_REGISTRY.host_compatible()}
        assert ids == set(HOST_NAMES)

    def test_only_drift_is_parametric(self):
        assert [c.id for c in DEFAULT_REGISTRY if c.is_parametric] == ["drift"]

    def test_custom_registry_is_independent(self):
        half = EasingCurve("half", "Half", "y = x/2", lambda t: t / 2, "Half")
        registry = CurveRegistry([half])
        assert apply_easing(0.5, "half", registry=registry) == pytest.approx(0.25)
        assert "half" not in DEFAULT_REGISTRY

    def test_registry_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_REGISTRY._curves["x"] = None


# ===================================================================
# 6. Helpers
# ===================================================================

class TestHelpers:

    def test_unknown_curve_is_linear(self):
        assert apply_easing(0.3, "does-not-exist") == pytest.approx(0.3)

    def test_apply_easing_to_range(self):
        assert apply_easing_to_range(0.5, 10.0, 20.0, "quadratic") == pytest.approx(12.5)

    def test_apply_ease_to_function_default_is_easein(self):
        assert apply_ease_to_function(0.5, lambda t: t * t, "unknown") == pytest.approx(0.25)

    def test_sample_curve_shape(self):
        values = sample_curve("cubic", "easeout", samples=20)
        assert isinstance(values, np.ndarray)
        assert values.shape == (21,)
        assert values[0] == pytest.approx(0.0)
        assert values[-1] == pytest.approx(1.0)

    def test_list_easings_sorted(self):
        names = list_easings()
        assert names == sorted(names)
        assert "drift" in names
