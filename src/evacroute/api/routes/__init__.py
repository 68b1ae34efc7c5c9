"""Route group exports."""

from . import evacuation, health, routes

__all__ = ["evacuation", "routes", "health"]
