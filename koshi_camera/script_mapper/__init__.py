"""Koshi Camera Path Nodes - ScriptMapper camera paths for Beat Saber."""

import logging

logger = logging.getLogger("koshi.camera")

NODE_CLASS_MAPPINGS = {}
NODE_DISPLAY_NAME_MAPPINGS = {}

try:
    from .path_nodes import NODE_CLASS_MAPPINGS as path_nodes
    from .path_nodes import NODE_DISPLAY_NAME_MAPPINGS as path_names
    NODE_CLASS_MAPPINGS.update(path_nodes)
    NODE_DISPLAY_NAME_MAPPINGS.update(path_names)
except ImportError as e:
    logger.debug(f"Failed to load camera path nodes: {e}")

try:
    from .bookmark_nodes import NODE_CLASS_MAPPINGS as bookmark_nodes
    from .bookmark_nodes import NODE_DISPLAY_NAME_MAPPINGS as bookmark_names
    NODE_CLASS_MAPPINGS.update(bookmark_nodes)
    NODE_DISPLAY_NAME_MAPPINGS.update(bookmark_names)
except ImportError as e:
    logger.debug(f"Failed to load bookmark nodes: {e}")

try:
    from .easing_nodes import NODE_CLASS_MAPPINGS as easing_nodes
    from .easing_nodes import NODE_DISPLAY_NAME_MAPPINGS as easing_names
    NODE_CLASS_MAPPINGS.update(easing_nodes)
    NODE_DISPLAY_NAME_MAPPINGS.update(easing_names)
except ImportError as e:
    logger.debug(f"Failed to load easing nodes: {e}")

__all__ = ["NODE_CLASS_MAPPINGS", "NODE_DISPLAY_NAME_MAPPINGS"]
