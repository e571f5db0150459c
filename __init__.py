"""
ComfyUI-Koshi-CameraPath
ScriptMapper camera path nodes: easing curves, bookmark commands, path sampling and bookmark JSON export/import.
"""

import importlib.util
import logging
import os
import sys

logger = logging.getLogger("Koshi")

NODE_CLASS_MAPPINGS = {}
NODE_DISPLAY_NAME_MAPPINGS = {}

NODE_CATEGORIES = [
    "koshi_camera.script_mapper",
]


def load_nodes():
    """Load node categories from their file paths so they never clash with ComfyUI's own modules."""
    base_path = os.path.dirname(__file__)

    for category in NODE_CATEGORIES:
        module_rel_path = category.replace(".", os.sep)
        module_path = os.path.join(base_path, module_rel_path, "__init__.py")

        if not os.path.exists(module_path):
            module_path = os.path.join(base_path, module_rel_path + ".py")
            if not os.path.exists(module_path):
                logger.debug("Node category %s not found", category)
                continue

        try:
            module_name = f"koshi_{category.replace('.', '_')}"
            spec = importlib.util.spec_from_file_location(module_name, module_path)
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            spec.loader.exec_module(module)

            if hasattr(module, "NODE_CLASS_MAPPINGS"):
                NODE_CLASS_MAPPINGS.update(module.NODE_CLASS_MAPPINGS)
            if hasattr(module, "NODE_DISPLAY_NAME_MAPPINGS"):
                NODE_DISPLAY_NAME_MAPPINGS.update(module.NODE_DISPLAY_NAME_MAPPINGS)

        except Exception as e:
            logger.warning("Error loading %s: %s", category, e)


load_nodes()

__all__ = ["NODE_CLASS_MAPPINGS", "NODE_DISPLAY_NAME_MAPPINGS"]
