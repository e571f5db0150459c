"""Shared fixtures for the Koshi Camera Path test suite."""

import sys
import os
import pytest

# Ensure the package root is importable
PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PACKAGE_ROOT not in sys.path:
    sys.path.insert(0, PACKAGE_ROOT)

from koshi_camera.script_mapper.core.path_model import CameraPath, Segment, Waypoint
from koshi_camera.script_mapper.core.vectors import Rotation, Vec3


# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def linear_path():
    """Two waypoints (0,0,0) -> (10,10,10), easing disabled."""
    return CameraPath(
        id="linear",
        name="Linear",
        waypoints=(
            Waypoint("a", Vec3(0, 0, 0), 0.0),
            Waypoint("b", Vec3(10, 10, 10), 1.0),
        ),
        segments=(Segment("s0", "a", "b", easing_enabled=False, curve_id="linear", direction="easein"),),
        total_duration=2000.0,
    )


@pytest.fixture
def quad_in_path():
    """Same endpoints as linear_path, quadratic ease-in."""
    return CameraPath(
        id="quad",
        name="Quad In",
        waypoints=(
            Waypoint("a", Vec3(0, 0, 0), 0.0),
            Waypoint("b", Vec3(10, 10, 10), 1.0),
        ),
        segments=(Segment("s0", "a", "b", curve_id="quadratic", direction="easein"),),
        total_duration=2000.0,
    )


@pytest.fixture
def three_point_path():
    """A(0,0,0)@0 -> B(10,0,0)@0.5 -> C(10,10,0)@1, both segments linear."""
    return CameraPath(
        id="three",
        name="Three Point",
        waypoints=(
            Waypoint("a", Vec3(0, 0, 0), 0.0, name="Start", rotation=Rotation(0, 0, 0)),
            Waypoint("b", Vec3(10, 0, 0), 0.5, name="Middle", rotation=Rotation(0, 90, 0)),
            Waypoint("c", Vec3(10, 10, 0), 1.0, name="End", rotation=Rotation(0, 180, 0)),
        ),
        segments=(
            Segment("s0", "a", "b", easing_enabled=False, curve_id="linear", direction="easein", duration=0.5),
            Segment("s1", "b", "c", easing_enabled=False, curve_id="linear", direction="easein", duration=0.5),
        ),
        total_duration=4000.0,
    )


@pytest.fixture
def command_path():
    """Three waypoints built from bookmark commands (IOSine, OQuad, stop)."""
    waypoints = [
        Waypoint("w0", Vec3(0, 1, -5), 0.0, command="q_0_1_-5_0_0_0_60,IOSine"),
        Waypoint("w1", Vec3(3, 1, 0), 0.5, command="q_3_1_0_0_15_0_60,OQuad"),
        Waypoint("w2", Vec3(0, 3, 5), 1.0, command="q_0_3_5_0_0_0_60,stop"),
    ]
    return CameraPath.from_waypoints("cmd", "Command Path", waypoints, total_duration=3000.0)
