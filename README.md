# boxengine

A small 2D platformer engine drawn with pygame. It provides:

- Swept axis-aligned bounding-box physics with gravity and collision layers.
- Sprite-sheet animations.
- A frame clock that measures delta time and FPS and caps the frame rate.
- An INI-style key-binding config.
- A renderer that draws into a 640×360 canvas and scales it onto the window.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the demo

```
boxengine
```

This opens a 1920×1080 window titled "2D Game Engine". The room has walls, a
block in the middle, two enemies that bounce between the walls, and a player.
Once a second the title changes to show the measured frame rate.

Controls:

- Left and right walk.
- Up jumps, but only while the player stands on something.
- Escape, or closing the window, quits.

While the player touches an enemy, its outline turns from cyan to yellow.

The demo reads files relative to the current working directory:

- `assets/sprites/player.png` is the player's sprite sheet, made of 24×24
  cells. The package does not ship this image. Without it the demo stops with
  `OSError`.
- `assets/config/config.ini` holds the key bindings. If it cannot be read, the
  demo uses the defaults below and tries to write them to that path. When the
  directory does not exist, it logs a warning and goes on.

```
[controls]
left = A
right = D
up = W
down = S
escape = Escape
```

Key names are resolved with `pygame.key.key_code`. If any name is unknown, the
valid bindings are still applied, and then a `ConfigError` is raised that
lists every unknown name.

## Using the pieces

### `boxengine.physics`

- Types: `AABB` (centre and half size), `Body`, `StaticBody` and `Hit`.
- `PhysicsWorld` has these methods:
  - `create_body`, which returns an index.
  - `create_static_body`, which returns an index.
  - `body(index)` and `static_body(index)`, which raise `IndexError` when the index is out of range.
  - `update(dt)`, which applies gravity (−100 per update, down to −7000) and then sweeps each body in 4 sub-steps.
- Each body moves only against bodies whose layer is in its collision mask.
- The optional `on_hit(body, other, hit)` and `on_hit_static(body, static_body, hit)` callbacks report contacts.
- Geometry helpers:
  - `aabb_min_max`
  - `point_intersects_aabb`
  - `aabb_intersect_aabb`
  - `aabb_minkowski_difference`
  - `aabb_penetration_vector`
  - `ray_intersect_aabb`

### `boxengine.animation`

- `AnimationStore` has these methods:
  - `create_definition(sprite_sheet, durations, rows, columns)` takes 1 to 16 frames.
  - `create(definition_id, does_loop)` reuses the slot of a destroyed animation when one is free.
  - `destroy`, `get` and `update(dt)`.
- A non-looping animation stays on its last frame.

### `boxengine.entity`

- `EntityStore` pairs a body in a `PhysicsWorld` with an optional animation id.
- It supports `create`, `get`, `len()` and iteration.

### `boxengine.input`

- `InputKey` and `KeyState` (unpressed, pressed, held).
- `next_key_state` gives the state that follows a key's current one.
- `InputState.update(key_binds, is_pressed)` advances every key.
- `InputState.get(key)` returns one key's state.

### `boxengine.config`

- `get_value`, `Config` (with `bind` and `load_controls`), `init_config(path, resolve)` and `ConfigError`.

### `boxengine.timing`

- `FrameClock(frame_rate, ticks=None, sleep=None)` has `update()` and `update_late()`.
- `update_late()` sleeps out whatever is left of the frame budget.

### `boxengine.render`

- `Renderer` has these methods:
  - `begin`, `quad`, `line_segment`, `quad_line`, `aabb`, `append_quad`, `sprite_sheet_frame` and `end`.
  - `end` draws the queued sprite quads, scales the canvas onto the window and flips the display.
- `SpriteSheet.load(path, cell_width, cell_height)`.
- Helpers: `sprite_texture_coordinates`, `batch_indices` and `quad_line_points`.
- Colour constants such as `WHITE` and `CYAN`.

### `boxengine.game`

- `CollisionLayer` and the demo `Game`, which has `iterate`, `handle_input` and `handle_event`.
- `main()`, the entry point of the `boxengine` command.

## Example

```python
from boxengine.physics import PhysicsWorld

world = PhysicsWorld()
floor = world.create_static_body((320, 12.5), (640, 25), 0b100)
box = world.create_body((100, 200), (24, 24), (0, 0), 0b001, 0b100, None, None)
for _ in range(60):
    world.update(1 / 60)
print(world.body(box).aabb.position)
```

## What it does not do

- There is no level format and no editor. The demo room is built in code in `Game`.
- No assets are bundled. You must provide the sprite image yourself.
- There is no sound.