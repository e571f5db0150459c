"""Core ScriptMapper camera path utilities for Koshi Camera Path nodes."""

from .easing import (
    EASE_TYPES,
    DriftParams,
    DEFAULT_DRIFT_PARAMS,
    EasingCurve,
    EASING_FUNCTIONS,
    CurveRegistry,
    DEFAULT_REGISTRY,
    apply_easing,
    apply_easing_to_range,
    sample_curve,
    list_easings,
)
from .timing import (
    TIME_EPSILON,
    times_are_equal,
    round_time,
    beat_to_seconds,
    seconds_to_beat,
    calculate_beat_duration,
)
from .vectors import Vec3, Rotation
from .commands import (
    PositionCommand,
    ControlCommand,
    EasingCommand,
    UnrecognizedCommand,
    format_command,
    format_short_command,
    parse_command,
    parse_position_command,
    split_commands,
    extract_easing,
)
from .path_model import (
    Waypoint,
    Segment,
    CameraPath,
    create_waypoint,
    validate_camera_path,
    waypoints_from_positions,
)
from .interpolation import (
    InterpolationResult,
    interpolate_camera_path,
    calculate_segment_output,
    sample_camera_path,
    generate_path_preview_points,
    generate_graph_points,
    get_segment_boundaries,
    calculate_path_length,
)
from .bookmark import (
    DEFAULT_TRACK_NAME,
    export_to_bookmark_json,
    import_from_bookmark_json,
    validate_bookmark_structure,
    validate_segment_bookmark_correspondence,
    format_bookmark_json,
    parse_bookmark_json,
)
from .bookmark_io import default_filename, save_bookmark, load_bookmark
from .presets import (
    parse_path_script,
    path_from_commands,
    CAMERA_PATH_PRESETS,
    get_preset_by_id,
    list_presets,
    clone_preset,
    DEFAULT_CAMERA_PATH,
)

__all__ = [
    # Easing
    "EASE_TYPES",
    "DriftParams",
    "DEFAULT_DRIFT_PARAMS",
    "EasingCurve",
    "EASING_FUNCTIONS",
    "CurveRegistry",
    "DEFAULT_REGISTRY",
    "apply_easing",
    "apply_easing_to_range",
    "sample_curve",
    "list_easings",
    # Timing
    "TIME_EPSILON",
    "times_are_equal",
    "round_time",
    "beat_to_seconds",
    "seconds_to_beat",
    "calculate_beat_duration",
    # Commands
    "Vec3",
    "Rotation",
    "PositionCommand",
    "ControlCommand",
    "EasingCommand",
    "UnrecognizedCommand",
    "format_command",
    "format_short_command",
    "parse_command",
    "parse_position_command",
    "split_commands",
    "extract_easing",
    # Path model
    "Waypoint",
    "Segment",
    "CameraPath",
    "create_waypoint",
    "validate_camera_path",
    "waypoints_from_positions",
    # Interpolation
    "InterpolationResult",
    "interpolate_camera_path",
    "calculate_segment_output",
    "sample_camera_path",
    "generate_path_preview_points",
    "generate_graph_points",
    "get_segment_boundaries",
    "calculate_path_length",
    # Bookmarks
    "DEFAULT_TRACK_NAME",
    "export_to_bookmark_json",
    "import_from_bookmark_json",
    "validate_bookmark_structure",
    "validate_segment_bookmark_correspondence",
    "format_bookmark_json",
    "parse_bookmark_json",
    "default_filename",
    "save_bookmark",
    "load_bookmark",
    # Presets
    "parse_path_script",
    "path_from_commands",
    "CAMERA_PATH_PRESETS",
    "get_preset_by_id",
    "list_presets",
    "clone_preset",
    "DEFAULT_CAMERA_PATH",
]
