"""Easing curve comparison node."""

import json

from .core import (
    EASE_TYPES,
    DriftParams,
    DEFAULT_REGISTRY,
    sample_curve,
    list_easings,
    format_command,
    format_short_command,
)


class KoshiEasingCompare:
    """Sample two easing curves side by side with their ScriptMapper tokens."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Koshi/Camera Path"
    FUNCTION = "compare"
    RETURN_TYPES = ("STRING", "STRING",)
    RETURN_NAMES = ("comparison_json", "scriptmapper_tokens",)

    @classmethod
    def INPUT_TYPES(cls):
        easings = list_easings()
        return {
            "required": {
                "curve_a": (easings, {"default": "quadratic"}),
                "curve_b": (easings, {"default": "drift"}),
                "direction": (list(EASE_TYPES), {"default": "easeboth"}),
                "samples": ("INT", {"default": 100, "min": 2, "max": 2000}),
            },
            "optional": {
                "drift_x": ("INT", {"default": 6, "min": 0, "max": 10}),
                "drift_y": ("INT", {"default": 6, "min": 0, "max": 10}),
            }
        }

    def compare(self, curve_a: str, curve_b: str, direction: str, samples: int,
                drift_x: int = 6, drift_y: int = 6):
        params = DriftParams(drift_x, drift_y)

        curves = {}
        tokens = []
        for slot, curve_id in (("a", curve_a), ("b", curve_b)):
            curve = DEFAULT_REGISTRY.get(curve_id)
            curve_params = params if curve is not None and curve.is_parametric else None
            values = sample_curve(curve_id, direction, samples, curve_params)
            curves[slot] = {
                "id": curve_id,
                "name": curve.name if curve is not None else curve_id,
                "formula": curve.formula if curve is not None else "",
                "values": values.tolist(),
            }

            long_token = format_command(curve_id, direction, curve_params)
            short_token = format_short_command(curve_id, direction, curve_params)
            if long_token is None:
                tokens.append(f"{curve_id}: not available in ScriptMapper")
            elif long_token == short_token:
                tokens.append(f"{curve_id}: {long_token}")
            else:
                tokens.append(f"{curve_id}: {long_token} / {short_token}")

        comparison = {
            "direction": direction,
            "samples": samples,
            "curves": curves,
        }
        return (json.dumps(comparison), "\n".join(tokens))


NODE_CLASS_MAPPINGS = {
    "Koshi_EasingCompare": KoshiEasingCompare,
}

NODE_DISPLAY_NAME_MAPPINGS = {
    "Koshi_EasingCompare": "▀▄▀ KN Easing Compare",
}
