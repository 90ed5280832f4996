"""A small 2D platformer engine: swept AABB physics, sprite animation, key-binding config and a pygame renderer."""

__version__ = "0.1.0"