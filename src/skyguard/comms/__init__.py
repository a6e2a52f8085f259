"""Internal event passing between the engine and its consumers."""
from .event_bus import EventBus, drain

__all__ = ["EventBus", "drain"]
