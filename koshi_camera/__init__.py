"""Koshi Camera Path - ScriptMapper camera path scripting for ComfyUI."""

__version__ = "0.1.0"
