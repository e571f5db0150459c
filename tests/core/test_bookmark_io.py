"""Tests for koshi_camera.script_mapper.core.bookmark_io -- bookmark files on disk."""

import sys
import os
import json

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest

from koshi_camera.script_mapper.core.bookmark import export_to_bookmark_json
from koshi_camera.script_mapper.core.bookmark_io import default_filename, load_bookmark, save_bookmark


class TestDefaultFilename:

    @pytest.mark.parametrize("track,expected", [
        ("CameraPath", "CameraPath_bookmarks.json"),
        ("Camera Path", "Camera_Path_bookmarks.json"),
        ("../evil", "___evil_bookmarks.json"),
        ("   ", "CameraPath_bookmarks.json"),
    ])
    def test_sanitized(self, track, expected):
        assert default_filename(track) == expected


class TestSaveLoad:

    def test_creates_parent_dirs(self, tmp_path, three_point_path):
        target = tmp_path / "nested" / "dir" / "out.json"
        result = save_bookmark(export_to_bookmark_json(three_point_path), str(target))
        assert result == str(target)
        assert target.exists()

    def test_written_with_two_space_indent(self, tmp_path, three_point_path):
        target = tmp_path / "out.json"
        save_bookmark(export_to_bookmark_json(three_point_path), str(target))
        lines = target.read_text(encoding="utf-8").splitlines()
        assert lines[1].startswith('  "_version"')

    def test_round_trip(self, tmp_path, three_point_path):
        document = export_to_bookmark_json(three_point_path)
        target = tmp_path / "out.json"
        save_bookmark(document, str(target))
        assert load_bookmark(str(target)) == document

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_bookmark(str(tmp_path / "missing.json"))

    def test_load_invalid_json(self, tmp_path):
        target = tmp_path / "bad.json"
        target.write_text("{nope", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_bookmark(str(target))
