"""The demo game: a player, two bouncing enemies and a walled arena."""

from __future__ import annotations

import argparse
from enum import IntFlag
from typing import Callable, List, Optional, Sequence

import pygame

from .animation import AnimationStore
from .config import Config, init_config
from .entity import EntityStore
from .input import InputState
from .physics import Body, Hit, PhysicsWorld, StaticBody
from .render import CYAN, WHITE, WINDOW_TITLE, Renderer, SpriteSheet
from .timing import SECOND, FrameClock

FRAME_RATE = 60
PLAYER_SPRITE_PATH = "assets/sprites/player.png"
PLAYER_SPEED = 200.0
JUMP_VELOCITY = 1300.0
ENEMY_SPEED = 400.0


class CollisionLayer(IntFlag):
    """Collision layers used by the game's bodies."""

    PLAYER = 1
    ENEMY = 1 << 1
    TERRAIN = 1 << 2


PLAYER_MASK = CollisionLayer.ENEMY | CollisionLayer.TERRAIN
ENEMY_MASK = CollisionLayer.PLAYER | CollisionLayer.TERRAIN


def _keyboard_is_pressed(code: int) -> bool:
    return bool(pygame.key.get_pressed()[code])


class Game:
    """Owns the engine subsystems and runs one frame per ``iterate`` call."""

    def __init__(
        self,
        window: Optional[pygame.Surface] = None,
        renderer: Optional[Renderer] = None,
        clock: Optional[FrameClock] = None,
        config: Optional[Config] = None,
        sprite_sheet: Optional[SpriteSheet] = None,
        is_pressed: Optional[Callable[[int], bool]] = None,
    ) -> None:
        self.window = window
        self.clock = clock if clock is not None else FrameClock(FRAME_RATE)
        self.config = config if config is not None else init_config()
        self.physics = PhysicsWorld()
        self.renderer = renderer if renderer is not None else Renderer(window)
        self.entities = EntityStore(self.physics)
        self.animations = AnimationStore()
        self.input = InputState()
        self.is_pressed = is_pressed if is_pressed is not None else _keyboard_is_pressed

        self.player_color: List[float] = list(CYAN)
        self.player_is_grounded = False
        self.title = WINDOW_TITLE

        self.player_id = self.entities.create(
            (100, 200), (24, 24), (0, 0),
            CollisionLayer.PLAYER, PLAYER_MASK,
            self._player_on_hit, self._player_on_hit_static,
        )

        width = float(self.renderer.render_width)
        height = float(self.renderer.render_height)
        terrain = CollisionLayer.TERRAIN
        self.static_body_ids = [
            self.physics.create_static_body((width * 0.5 - 12.5, height - 12.5), (width - 25, 25), terrain),
            self.physics.create_static_body((width - 12.5, height * 0.5 + 12.5), (25, height - 25), terrain),
            self.physics.create_static_body((width * 0.5 + 12.5, 12.5), (width - 25, 25), terrain),
            self.physics.create_static_body((12.5, height * 0.5 - 12.5), (25, height - 25), terrain),
            self.physics.create_static_body((width * 0.5, height * 0.5), (62.5, 62.5), terrain),
        ]

        self.enemy_ids = [
            self.entities.create(
                (200, 200), size, (ENEMY_SPEED, 0),
                CollisionLayer.ENEMY, ENEMY_MASK,
                None, self._enemy_on_hit_static,
            )
            for size in ((25, 25), (90, 90))
        ]

        self.sprite_sheet = (
            sprite_sheet
            if sprite_sheet is not None
            else SpriteSheet.load(PLAYER_SPRITE_PATH, 24, 24)
        )

        walk_definition = self.animations.create_definition(
            self.sprite_sheet, [0.1] * 7, [0] * 7, [1, 2, 3, 4, 5, 6, 7]
        )
        idle_definition = self.animations.create_definition(
            self.sprite_sheet, [0.0], [0], [0]
        )
        self.walk_animation_id = self.animations.create(walk_definition, True)
        self.idle_animation_id = self.animations.create(idle_definition, False)

        self.entities.get(self.player_id).animation_id = self.idle_animation_id

    @property
    def player_body(self) -> Body:
        return self.physics.body(self.entities.get(self.player_id).body_id)

    def _player_on_hit(self, body: Body, other: Body, hit: Hit) -> None:
        if other.collision_layer == CollisionLayer.ENEMY:
            self.player_color[0] = 1.0
            self.player_color[2] = 0.0

    def _player_on_hit_static(self, body: Body, other: StaticBody, hit: Hit) -> None:
        if hit.normal[1] > 0:
            self.player_is_grounded = True

    @staticmethod
    def _enemy_on_hit_static(body: Body, other: StaticBody, hit: Hit) -> None:
        if hit.normal[0] > 0:
            body.velocity[0] = ENEMY_SPEED
        if hit.normal[0] < 0:
            body.velocity[0] = -ENEMY_SPEED

    def handle_input(self) -> None:
        """Turn the current input state into the player's velocity."""
        body = self.player_body
        vel_x = 0.0
        vel_y = body.velocity[1]

        if self.input.right > 0:
            vel_x += PLAYER_SPEED
        if self.input.left > 0:
            vel_x -= PLAYER_SPEED
        if self.input.up > 0 and self.player_is_grounded:
            self.player_is_grounded = False
            vel_y = JUMP_VELOCITY

        body.velocity[0] = vel_x
        body.acceleration[0] = 0.0
        body.velocity[1] = vel_y

    def _set_title(self, title: str) -> None:
        self.title = title
        if (
            self.window is not None
            and pygame.display.get_init()
            and self.window is pygame.display.get_surface()
        ):
            pygame.display.set_caption(title)

    def iterate(self) -> bool:
        """Run one frame; returns ``True`` while the game should continue."""
        if float(self.clock.ticks()) - self.clock.frame_last >= SECOND:
            self._set_title(f"Current FPS - {self.clock.frame_rate} fps")

        self.clock.update()

        player = self.entities.get(self.player_id)
        player_body = self.physics.body(player.body_id)
        player.animation_id = (
            self.walk_animation_id if player_body.velocity[0] != 0 else self.idle_animation_id
        )

        self.input.update(self.config.key_binds, self.is_pressed)
        self.handle_input()
        self.physics.update(self.clock.delta)
        self.animations.update(self.clock.delta)

        renderer = self.renderer
        renderer.begin()

        for static_id in self.static_body_ids:
            renderer.aabb(self.physics.static_body(static_id).aabb, WHITE)
        renderer.aabb(player_body.aabb, self.player_color)
        for enemy_id in self.enemy_ids:
            renderer.aabb(self.physics.body(self.entities.get(enemy_id).body_id).aabb, WHITE)

        for entity in self.entities:
            if entity.animation_id is None:
                continue
            body = self.physics.body(entity.body_id)
            animation = self.animations.get(entity.animation_id)
            frame = animation.current_frame

            if body.velocity[0] < 0:
                animation.is_flipped = True
            elif body.velocity[0] > 0:
                animation.is_flipped = False

            renderer.sprite_sheet_frame(
                animation.definition.sprite_sheet,
                frame.row, frame.column,
                body.aabb.position, animation.is_flipped,
            )

        renderer.sprite_sheet_frame(self.sprite_sheet, 1, 2, (100, 100), False)
        renderer.sprite_sheet_frame(self.sprite_sheet, 0, 4, (200, 200), False)

        renderer.end()

        self.player_color[0] = 0.0
        self.player_color[2] = 1.0
        self.clock.update_late()
        return True

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Return ``False`` when ``event`` asks the game to stop."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and getattr(event, "key", None) == pygame.K_ESCAPE:
            return False
        return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open a window and run the game until it is closed."""
    parser = argparse.ArgumentParser(description="Run the box engine demo game.")
    parser.parse_args(argv)

    pygame.init()
    try:
        renderer_size = Renderer(None)
        window = pygame.display.set_mode(
            (renderer_size.window_width, renderer_size.window_height)
        )
        pygame.display.set_caption(WINDOW_TITLE)
        game = Game(window=window)

        running = True
        while running:
            for event in pygame.event.get():
                if not game.handle_event(event):
                    running = False
                    break
            if running:
                running = game.iterate()
    finally:
        pygame.quit()
    return 0