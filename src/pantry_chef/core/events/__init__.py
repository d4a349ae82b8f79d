"""Application lifecycle events."""

from pantry_chef.core.events.lifespan import lifespan


__all__ = ["lifespan"]
