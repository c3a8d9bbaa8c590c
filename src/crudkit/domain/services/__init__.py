"""Domain services."""

from .overlay import Overlay, overlay_name, overlay_person

__all__ = ["Overlay", "overlay_name", "overlay_person"]
