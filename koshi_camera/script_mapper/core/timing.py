"""Time comparison and beat conversion helpers.

Bookmark times are seconds with 6 decimal places, so every time comparison
goes through an epsilon of 1e-6 and every exported time through
``round_time``.
"""

TIME_EPSILON = 1e-6


def times_are_equal(a: float, b: float, epsilon: float = TIME_EPSILON) -> bool:
    """True when ``|a - b| < epsilon``."""
    return abs(a - b) < epsilon


def time_is_less_than(a: float, b: float, epsilon: float = TIME_EPSILON) -> bool:
    """True when ``a < b - epsilon``."""
    return a < b - epsilon


def time_is_less_or_equal(a: float, b: float, epsilon: float = TIME_EPSILON) -> bool:
    """True when ``a <= b + epsilon``."""
    return a <= b + epsilon


def round_time(time: float) -> float:
    """Round a time to 6 decimal places for export."""
    return round(time * 1e6) / 1e6


# ---------------------------------------------------------------------------
# BPM / beat conversion
# ---------------------------------------------------------------------------

def beat_to_seconds(beat: float, bpm: float) -> float:
    if bpm <= 0:
        return 0.0
    return (beat / bpm) * 60


def seconds_to_beat(seconds: float, bpm: float) -> float:
    if bpm <= 0:
        return 0.0
    return (seconds * bpm) / 60


def normalized_to_beat(normalized: float, total_beats: float, offset: float = 0) -> float:
    return normalized * total_beats + offset


def beat_to_normalized(beat: float, total_beats: float, offset: float = 0) -> float:
    if total_beats <= 0:
        return 0.0
    return (beat - offset) / total_beats


def calculate_beat_duration(total_duration_ms: float, bpm: float) -> int:
    """Total beats covered by a duration, rounded to a whole beat."""
    duration_seconds = total_duration_ms / 1000
    beats_per_second = bpm / 60
    return round(duration_seconds * beats_per_second)


__all__ = [
    "TIME_EPSILON",
    "times_are_equal",
    "time_is_less_than",
    "time_is_less_or_equal",
    "round_time",
    "beat_to_seconds",
    "seconds_to_beat",
    "normalized_to_beat",
    "beat_to_normalized",
    "calculate_beat_duration",
]
