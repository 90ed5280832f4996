"""Axis-aligned box collision and a simple swept-box physics world."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

Vec2 = Tuple[float, float]

GRAVITY = -100.0
TERMINAL_VELOCITY = -7000.0
ITERATIONS = 4

_NO_HIT_TIME = float(0xBEEF)

_T = TypeVar("_T")


def _vec(values: Sequence[float]) -> List[float]:
    return [float(values[0]), float(values[1])]


def _sign(value: float) -> float:
    return float((value > 0) - (value < 0))


@dataclass
class AABB:
    """Axis-aligned box given by its centre and half extents."""

    position: List[float]
    half_size: List[float]

    def __post_init__(self) -> None:
        self.position = _vec(self.position)
        self.half_size = _vec(self.half_size)


@dataclass
class Hit:
    """Result of a ray or sweep test."""

    other_id: int = 0
    time: float = 0.0
    position: Vec2 = (0.0, 0.0)
    normal: Vec2 = (0.0, 0.0)
    is_hit: bool = False


OnHit = Callable[["Body", "Body", Hit], None]
OnHitStatic = Callable[["Body", "StaticBody", Hit], None]


@dataclass(eq=False)
class Body:
    """A moving box affected by gravity and collisions."""

    aabb: AABB
    velocity: List[float] = field(default_factory=lambda: [0.0, 0.0])
    acceleration: List[float] = field(default_factory=lambda: [0.0, 0.0])
    on_hit: Optional[OnHit] = None
    on_hit_static: Optional[OnHitStatic] = None
    collision_layer: int = 0
    collision_mask: int = 0

    def __post_init__(self) -> None:
        self.velocity = _vec(self.velocity)
        self.acceleration = _vec(self.acceleration)


@dataclass(eq=False)
class StaticBody:
    """A box that never moves."""

    aabb: AABB
    collision_layer: int = 0


def aabb_min_max(aabb: AABB) -> Tuple[Vec2, Vec2]:
    """Return the minimum and maximum corners of ``aabb``."""
    (px, py), (hx, hy) = aabb.position, aabb.half_size
    return (px - hx, py - hy), (px + hx, py + hy)


def point_intersects_aabb(point: Sequence[float], aabb: AABB) -> bool:
    """Return whether ``point`` lies inside or on the edge of ``aabb``."""
    lo, hi = aabb_min_max(aabb)
    return lo[0] <= point[0] <= hi[0] and lo[1] <= point[1] <= hi[1]


def aabb_minkowski_difference(a: AABB, b: AABB) -> AABB:
    """Return the Minkowski difference of ``a`` and ``b``."""
    return AABB(
        (a.position[0] - b.position[0], a.position[1] - b.position[1]),
        (a.half_size[0] + b.half_size[0], a.half_size[1] + b.half_size[1]),
    )


def aabb_intersect_aabb(a: AABB, b: AABB) -> bool:
    """Return whether ``a`` and ``b`` overlap or touch."""
    lo, hi = aabb_min_max(aabb_minkowski_difference(a, b))
    return lo[0] <= 0 and hi[0] >= 0 and lo[1] <= 0 and hi[1] >= 0


def aabb_penetration_vector(aabb: AABB) -> Vec2:
    """Return the shortest vector moving the origin onto an edge of ``aabb``."""
    lo, hi = aabb_min_max(aabb)

    result: Vec2 = (lo[0], 0.0)
    min_dist = abs(lo[0])

    if abs(hi[0]) < min_dist:
        result = (hi[0], 0.0)
        min_dist = abs(hi[0])

    if abs(lo[1]) < min_dist:
        result = (0.0, lo[1])
        min_dist = abs(lo[1])

    if abs(hi[1]) < min_dist:
        result = (0.0, hi[1])

    return result


def ray_intersect_aabb(
    position: Sequence[float], magnitude: Sequence[float], aabb: AABB
) -> Hit:
    """Cast a ray from ``position`` along ``magnitude`` against ``aabb``."""
    lo, hi = aabb_min_max(aabb)

    last_entry = -math.inf
    first_exit = math.inf

    for start, step, edge_lo, edge_hi in zip(position, magnitude, lo, hi):
        if step != 0:
            t1 = (edge_lo - start) / step
            t2 = (edge_hi - start) / step
            last_entry = max(last_entry, min(t1, t2))
            first_exit = min(first_exit, max(t1, t2))
        elif start <= edge_lo or start >= edge_hi:
            return Hit()

    if not (first_exit > last_entry and first_exit > 0 and last_entry < 1):
        return Hit()

    hit_x = position[0] + magnitude[0] * last_entry
    hit_y = position[1] + magnitude[1] * last_entry

    dx = hit_x - aabb.position[0]
    dy = hit_y - aabb.position[1]
    px = aabb.half_size[0] - abs(dx)
    py = aabb.half_size[1] - abs(dy)

    normal: Vec2 = (_sign(dx), 0.0) if px < py else (0.0, _sign(dy))

    return Hit(time=last_entry, position=(hit_x, hit_y), normal=normal, is_hit=True)


def _checked(items: List[_T], index: int) -> _T:
    index = operator.index(index)
    if not 0 <= index < len(items):
        raise IndexError(f"index {index} out of bounds")
    return items[index]


class PhysicsWorld:
    """Holds moving and static bodies and advances them in time."""

    def __init__(
        self,
        gravity: float = GRAVITY,
        terminal_velocity: float = TERMINAL_VELOCITY,
        iterations: int = ITERATIONS,
    ) -> None:
        if iterations <= 0:
            raise ValueError("iterations must be positive")
        self.gravity = gravity
        self.terminal_velocity = terminal_velocity
        self.iterations = iterations
        self.bodies: List[Body] = []
        self.static_bodies: List[StaticBody] = []

    def create_body(
        self,
        position: Sequence[float],
        size: Sequence[float],
        velocity: Sequence[float] = (0.0, 0.0),
        collision_layer: int = 0,
        collision_mask: int = 0,
        on_hit: Optional[OnHit] = None,
        on_hit_static: Optional[OnHitStatic] = None,
    ) -> int:
        """Add a moving body and return its index."""
        body = Body(
            aabb=AABB(position, (size[0] * 0.5, size[1] * 0.5)),
            velocity=_vec(velocity),
            on_hit=on_hit,
            on_hit_static=on_hit_static,
            collision_layer=collision_layer,
            collision_mask=collision_mask,
        )
        self.bodies.append(body)
        return len(self.bodies) - 1

    def body(self, index: int) -> Body:
        """Return the moving body at ``index``."""
        return _checked(self.bodies, index)

    def create_static_body(
        self, position: Sequence[float], size: Sequence[float], collision_layer: int = 0
    ) -> int:
        """Add a static body and return its index."""
        static_body = StaticBody(
            aabb=AABB(position, (size[0] * 0.5, size[1] * 0.5)),
            collision_layer=collision_layer,
        )
        self.static_bodies.append(static_body)
        return len(self.static_bodies) - 1

    def static_body(self, index: int) -> StaticBody:
        """Return the static body at ``index``."""
        return _checked(self.static_bodies, index)

    def update(self, dt: float) -> None:
        """Advance every moving body by ``dt`` seconds."""
        tick_rate = 1.0 / self.iterations
        for body in self.bodies:
            body.velocity[1] += self.gravity
            if self.terminal_velocity > body.velocity[1]:
                body.velocity[1] = self.terminal_velocity

            body.velocity[0] += body.acceleration[0]
            body.velocity[1] += body.acceleration[1]

            scale = dt * tick_rate
            scaled: Vec2 = (body.velocity[0] * scale, body.velocity[1] * scale)

            for _ in range(self.iterations):
                self._sweep_response(body, scaled)
                self._stationary_response(body)

    @staticmethod
    def _update_sweep_result(
        result: Hit,
        other_id: int,
        a: AABB,
        b: AABB,
        velocity: Vec2,
        mask: int,
        layer: int,
    ) -> Hit:
        if mask & layer == 0:
            return result

        sum_aabb = AABB(
            b.position,
            (b.half_size[0] + a.half_size[0], b.half_size[1] + a.half_size[1]),
        )
        hit = ray_intersect_aabb(a.position, velocity, sum_aabb)
        if not hit.is_hit:
            return result

        if hit.time < result.time:
            result = hit
        elif hit.time == result.time:
            vx, vy = abs(velocity[0]), abs(velocity[1])
            if (vx > vy and hit.normal[0] != 0) or (vy > vx and hit.normal[1] != 0):
                result = hit
        result.other_id = other_id
        return result

    def _sweep_static_bodies(self, body: Body, velocity: Vec2) -> Hit:
        result = Hit(time=_NO_HIT_TIME)
        for index, static_body in enumerate(self.static_bodies):
            result = self._update_sweep_result(
                result, index, body.aabb, static_body.aabb, velocity,
                body.collision_mask, static_body.collision_layer,
            )
        return result

    def _sweep_bodies(self, body: Body, velocity: Vec2) -> Hit:
        result = Hit(time=_NO_HIT_TIME)
        for index, other in enumerate(self.bodies):
            if other is body:
                continue
            result = self._update_sweep_result(
                result, index, body.aabb, other.aabb, velocity,
                body.collision_mask, other.collision_layer,
            )
        return result

    def _sweep_response(self, body: Body, velocity: Vec2) -> None:
        hit = self._sweep_static_bodies(body, velocity)
        hit_moving = self._sweep_bodies(body, velocity)

        if hit_moving.is_hit and body.on_hit is not None:
            body.on_hit(body, self.body(hit_moving.other_id), hit_moving)

        position = body.aabb.position
        if hit.is_hit:
            position[0], position[1] = hit.position
            if hit.normal[0] != 0:
                position[1] += velocity[1]
                body.velocity[0] = 0.0
            elif hit.normal[1] != 0:
                position[0] += velocity[0]
                body.velocity[1] = 0.0

            if body.on_hit_static is not None:
                body.on_hit_static(body, self.static_body(hit.other_id), hit)
        else:
            position[0] += velocity[0]
            position[1] += velocity[1]

    def _stationary_response(self, body: Body) -> None:
        for static_body in self.static_bodies:
            difference = aabb_minkowski_difference(static_body.aabb, body.aabb)
            if aabb_intersect_aabb(static_body.aabb, body.aabb):
                dx, dy = aabb_penetration_vector(difference)
                body.aabb.position[0] += dx
                body.aabb.position[1] += dy