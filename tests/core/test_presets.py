"""Tests for koshi_camera.script_mapper.core.presets -- path scripts and built-in paths."""

import os
import sys

sys.path.insert(
    0,
    os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    ),
)

import pytest

from koshi_camera.script_mapper.core.bookmark import (
    export_to_bookmark_json,
    import_from_bookmark_json,
    validate_segment_bookmark_correspondence,
)
from koshi_camera.script_mapper.core.easing import DriftParams
from koshi_camera.script_mapper.core.interpolation import interpolate_camera_path
from koshi_camera.script_mapper.core.path_model import validate_camera_path
from koshi_camera.script_mapper.core.presets import (
    CAMERA_PATH_PRESETS,
    DEFAULT_CAMERA_PATH,
    clone_preset,
    get_preset_by_id,
    list_presets,
    parse_path_script,
    path_from_commands,
)
from koshi_camera.script_mapper.core.vectors import Vec3


PRESET_IDS = [p.id for p in CAMERA_PATH_PRESETS]


# ===================================================================
# Path scripts
# ===================================================================

class TestParsePathScript:

    def test_basic(self):
        entries = parse_path_script("0: q_0_1_-5,IOSine\n4: q_3_1_0,stop")
        assert entries == [(0.0, "q_0_1_-5,IOSine"), (4.0, "q_3_1_0,stop")]

    def test_sorted_by_beat(self):
        entries = parse_path_script("8: stop\n0: q_0_0_0\n2.5: spin45")
        assert [b for b, _ in entries] == [0.0, 2.5, 8.0]

    def test_comments_and_blank_lines(self):
        text = "# intro\n\n0: q_0_0_0\n   \nnot a line\n1: q_1_1_1\n"
        assert len(parse_path_script(text)) == 2

    def test_duplicate_beat_keeps_last(self):
        entries = parse_path_script("0: q_0_0_0\n0: q_1_1_1")
        assert entries == [(0.0, "q_1_1_1")]

    @pytest.mark.parametrize("text", ["", None, "   "])
    def test_empty(self, text):
        assert parse_path_script(text) == []


class TestPathFromCommands:

    def test_normalizes_by_last_beat(self):
        path = path_from_commands([(0, "q_0_0_0,IOSine"), (2, "q_1_0_0"), (8, "q_2_0_0,stop")])
        assert [w.time for w in path.waypoints] == pytest.approx([0.0, 0.25, 1.0])
        assert [w.beat for w in path.waypoints] == [0, 2, 8]
        assert path.beat_duration == 8
        assert validate_camera_path(path) == []

    def test_segments_follow_commands(self):
        path = path_from_commands([(0, "q_0_0_0,IOSine"), (2, "q_1_0_0"), (8, "q_2_0_0,stop")])
        assert path.segments[0].curve_id == "sine"
        assert path.segments[1].easing_enabled is False

    def test_spin_keeps_previous_position(self):
        path = path_from_commands([(0, "q_1_2_3"), (4, "spin90,IOQuad"), (8, "q_0_0_0")])
        assert path.waypoints[1].position == Vec3(1, 2, 3)
        assert path.waypoints[1].rotation is None

    def test_rotation_from_q(self):
        path = path_from_commands([(0, "q_0_1_0_5_15_0_60"), (1, "q_1_1_0")])
        assert path.waypoints[0].rotation.ry == 15

    def test_metadata(self):
        path = path_from_commands([(0, "q_0_0_0"), (4, "q_1_1_1")], name="Mine", total_duration=1500, bpm=128)
        assert path.name == "Mine"
        assert path.total_duration == 1500
        assert path.bpm == 128

    def test_script_starting_late(self):
        path = path_from_commands([(4, "q_0_0_0"), (8, "q_10_0_0,stop")])
        assert [w.time for w in path.waypoints] == pytest.approx([0.0, 1.0])
        assert [w.beat for w in path.waypoints] == [4, 8]
        assert path.beat_offset == 4
        assert path.beat_duration == 4
        assert validate_camera_path(path) == []

    def test_script_starting_late_interpolates_forward(self):
        path = path_from_commands([(4, "q_0_0_0"), (8, "q_10_0_0,stop")])
        assert interpolate_camera_path(path, 0.25).position.x == pytest.approx(2.5)
        assert interpolate_camera_path(path, 0.75).position.x == pytest.approx(7.5)


# ===================================================================
# Presets
# ===================================================================

class TestPresets:

    def test_eight_presets(self):
        assert len(CAMERA_PATH_PRESETS) == 8
        assert list_presets() == PRESET_IDS

    @pytest.mark.parametrize("preset_id", PRESET_IDS)
    def test_presets_validate(self, preset_id):
        assert validate_camera_path(get_preset_by_id(preset_id)) == []

    @pytest.mark.parametrize("preset_id", PRESET_IDS)
    def test_presets_export_cleanly(self, preset_id):
        preset = get_preset_by_id(preset_id)
        doc = export_to_bookmark_json(preset)
        errors = validate_segment_bookmark_correspondence(
            preset.waypoints, doc["_customData"]["_customEvents"], preset.total_duration / 1000
        )
        assert errors == []

    @pytest.mark.parametrize("preset_id", PRESET_IDS)
    def test_export_import_preserves_path(self, preset_id):
        preset = get_preset_by_id(preset_id)
        imported = import_from_bookmark_json(export_to_bookmark_json(preset))
        for original, restored in zip(preset.waypoints, imported.waypoints):
            assert restored.position.as_tuple() == pytest.approx(original.position.as_tuple())
        for original, restored in zip(preset.segments, imported.segments):
            assert restored.easing_enabled == original.easing_enabled
            if original.easing_enabled:
                assert (restored.curve_id, restored.direction) == (original.curve_id, original.direction)

    @pytest.mark.parametrize("preset_id", PRESET_IDS)
    def test_endpoints(self, preset_id):
        preset = get_preset_by_id(preset_id)
        assert interpolate_camera_path(preset, 0).position == preset.waypoints[0].position
        assert interpolate_camera_path(preset, 1).position == preset.waypoints[-1].position

    def test_unknown_preset(self):
        assert get_preset_by_id("nope") is None

    def test_default_is_simple_pan(self):
        assert DEFAULT_CAMERA_PATH.id == "preset-simple-pan"
        segment = DEFAULT_CAMERA_PATH.segments[0]
        assert segment.curve_id == "drift"
        assert segment.drift_params == DriftParams(6, 6)

    def test_basic_three_point(self):
        preset = get_preset_by_id("preset-basic-3point")
        assert [w.time for w in preset.waypoints] == pytest.approx([0.0, 0.5, 1.0])
        assert [s.raw_command for s in preset.segments] == ["IOSine", "IOQuad"]
        assert [s.id for s in preset.segments] == ["preset-seg-0", "preset-seg-1"]
        assert preset.total_duration == 3000

    def test_spin_waypoints_use_fallback_positions(self):
        preset = get_preset_by_id("preset-complex-5point")
        assert preset.waypoints[1].position == Vec3(0, 3, -2)
        assert preset.waypoints[2].position == Vec3(4, 1, 0)
        assert preset.segments[1].curve_id == "cubic"
        assert preset.segments[2].curve_id == "quartic"

    def test_hold_segments_are_linear(self):
        preset = get_preset_by_id("preset-easein-demo")
        assert [s.easing_enabled for s in preset.segments] == [False, True, False]
        assert preset.segments[1].direction == "easeout"


class TestClonePreset:

    def test_fresh_ids(self):
        preset = get_preset_by_id("preset-basic-3point")
        clone = clone_preset(preset)
        assert clone.id != preset.id
        assert not {w.id for w in clone.waypoints} & {w.id for w in preset.waypoints}
        assert clone.name == "Basic 3-Point Path (Copy)"

    def test_segments_recomputed(self):
        clone = clone_preset(get_preset_by_id("preset-basic-3point"))
        assert validate_camera_path(clone) == []
        assert [s.raw_command for s in clone.segments] == ["IOSine", "IOQuad"]

    def test_original_untouched(self):
        preset = get_preset_by_id("preset-simple-pan")
        clone_preset(preset)
        assert get_preset_by_id("preset-simple-pan").waypoints[0].id == "preset-wp-0"
