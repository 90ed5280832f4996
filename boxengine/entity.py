"""Game entities: a physics body with an optional animation."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from .physics import OnHit, OnHitStatic, PhysicsWorld


@dataclass
class Entity:
    """Links a physics body to an animation."""

    body_id: int
    animation_id: Optional[int] = None
    is_active: bool = True


class EntityStore:
    """Creates entities whose bodies live in a physics world."""

    def __init__(self, physics: PhysicsWorld) -> None:
        self.physics = physics
        self._entities: List[Entity] = []

    def create(
        self,
        position: Sequence[float],
        size: Sequence[float],
        velocity: Sequence[float] = (0.0, 0.0),
        collision_layer: int = 0,
        collision_mask: int = 0,
        on_hit: Optional[OnHit] = None,
        on_hit_static: Optional[OnHitStatic] = None,
    ) -> int:
        """Create an entity with a new body and return its id."""
        body_id = self.physics.create_body(
            position, size, velocity, collision_layer, collision_mask,
            on_hit, on_hit_static,
        )
        self._entities.append(Entity(body_id=body_id))
        return len(self._entities) - 1

    def get(self, entity_id: int) -> Entity:
        """Return the entity with ``entity_id``."""
        entity_id = operator.index(entity_id)
        if not 0 <= entity_id < len(self._entities):
            raise IndexError(f"entity {entity_id} out of bounds")
        return self._entities[entity_id]

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)