"""Performance baseline tests with generous thresholds for CI.

All tests are marked @pytest.mark.slow and excluded from default CI runs.
Run explicitly with: pytest tests/test_performance.py -m slow
"""

import sys
import os

sys.path.insert(
    0,
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
)

import dataclasses
import time

import pytest

from koshi_camera.script_mapper.core.bookmark import export_to_bookmark_json, import_from_bookmark_json
from koshi_camera.script_mapper.core.interpolation import interpolate_camera_path, sample_camera_path
from koshi_camera.script_mapper.core.path_model import CameraPath, waypoints_from_positions
from koshi_camera.script_mapper.core.vectors import Vec3


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_path(count: int) -> CameraPath:
    """Zigzag path with ``count`` waypoints, alternating easing commands."""
    waypoints = waypoints_from_positions([Vec3(i % 7, 1 + i % 3, i) for i in range(count)])
    commands = ("IOSine", "OQuad", "ease_6_6", "IBounce")
    waypoints = [
        dataclasses.replace(w, command=f"q_0_0_0,{commands[i % len(commands)]}")
        for i, w in enumerate(waypoints)
    ]
    return CameraPath.from_waypoints("perf", "Perf", waypoints, total_duration=600000.0)


# ---------------------------------------------------------------------------
# 1. Per-frame interpolation on a long path
# ---------------------------------------------------------------------------

@pytest.mark.slow
class TestInterpolationPerformance:

    def test_sample_10k_frames_500_waypoints(self):
        """10k frames over a 500-waypoint path within time limit."""
        path = _make_path(500)

        start = time.perf_counter()
        frames = sample_camera_path(path, 10000)
        elapsed = time.perf_counter() - start

        assert frames.shape == (10000, 3)
        assert elapsed < 30.0, (
            f"Sampling 10k frames took {elapsed:.2f}s, limit is 30s"
        )

    def test_single_lookup_is_fast(self):
        path = _make_path(500)

        start = time.perf_counter()
        for _ in range(1000):
            interpolate_camera_path(path, 0.999)
        elapsed = time.perf_counter() - start

        assert elapsed < 5.0, f"1000 lookups took {elapsed:.2f}s, limit is 5s"


# ---------------------------------------------------------------------------
# 2. Bookmark export/import
# ---------------------------------------------------------------------------

@pytest.mark.slow
class TestBookmarkPerformance:

    def test_round_trip_2000_waypoints(self):
        path = _make_path(2000)

        start = time.perf_counter()
        restored = import_from_bookmark_json(export_to_bookmark_json(path))
        elapsed = time.perf_counter() - start

        assert len(restored.waypoints) == 2000
        assert elapsed < 10.0, (
            f"Export/import of 2000 waypoints took {elapsed:.2f}s, limit is 10s"
        )
