import pygame
import pytest

from boxengine.physics import AABB
from boxengine.render import (
    BLUE,
    GREEN,
    MAX_BATCH_QUADS,
    RED,
    WHITE,
    BatchVertex,
    Renderer,
    SpriteSheet,
    batch_indices,
    quad_line_points,
    sprite_texture_coordinates,
)


def _sheet_surface():
    surface = pygame.Surface((20, 10))
    surface.fill((0, 0, 255))
    surface.fill((0, 255, 0), pygame.Rect(0, 0, 5, 10))
    surface.fill((255, 0, 0), pygame.Rect(5, 0, 5, 10))
    return surface


def _sheet():
    return SpriteSheet(20.0, 10.0, 10.0, 10.0, _sheet_surface())


def test_batch_indices_single_quad():
    assert batch_indices(1) == [0, 1, 2, 2, 3, 0]


def test_batch_indices_offsets_per_quad():
    indices = batch_indices(3)
    assert len(indices) == 18
    assert indices[6:12] == [4, 5, 6, 6, 7, 4]
    assert max(indices) == 11


def test_batch_indices_empty():
    assert batch_indices(0) == []


def test_sprite_texture_coordinates_cell_extent():
    u0, v0, u1, v1 = sprite_texture_coordinates(1, 2, 192, 48, 24, 24)
    assert u1 - u0 == pytest.approx(24 / 192)
    assert v1 - v0 == pytest.approx(24 / 48)
    assert u0 == pytest.approx(2 * 24 / 192)
    assert v0 == pytest.approx(24 / 48)


def test_sprite_texture_coordinates_origin_cell():
    assert sprite_texture_coordinates(0, 0, 24, 24, 24, 24) == pytest.approx((0, 0, 1, 1))


def test_quad_line_points_centred_on_position():
    points = quad_line_points((10, 20), (4, 6))
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    assert sum(xs) / 4 == pytest.approx(10)
    assert sum(ys) / 4 == pytest.approx(20)
    assert max(xs) - min(xs) == pytest.approx(4)
    assert max(ys) - min(ys) == pytest.approx(6)
    assert points[0] == (min(xs), min(ys))
    assert points[2] == (max(xs), max(ys))


def test_append_quad_adds_four_vertices_with_uvs():
    renderer = Renderer()
    renderer.append_quad((1, 2), (3, 4), (0.1, 0.2, 0.3, 0.4), RED)
    assert len(renderer.batch) == 4
    assert renderer.batch[0] == BatchVertex((1.0, 2.0), (0.1, 0.2), RED)
    assert renderer.batch[1].uvs == (0.3, 0.2)
    assert renderer.batch[2].position == (4.0, 6.0)
    assert renderer.batch[2].uvs == (0.3, 0.4)
    assert renderer.batch[3].uvs == (0.1, 0.4)


def test_append_quad_defaults_to_full_texture():
    renderer = Renderer()
    renderer.append_quad((0, 0), (1, 1), None, WHITE)
    assert renderer.batch[0].uvs == (0.0, 0.0)
    assert renderer.batch[2].uvs == (1.0, 1.0)


def test_begin_clears_batch():
    renderer = Renderer()
    renderer.append_quad((0, 0), (1, 1), None, WHITE)
    renderer.begin()
    assert renderer.batch == []


def test_batch_overflow_raises():
    renderer = Renderer()
    for _ in range(MAX_BATCH_QUADS):
        renderer.append_quad((0, 0), (1, 1), None, WHITE)
    with pytest.raises(OverflowError):
        renderer.append_quad((0, 0), (1, 1), None, WHITE)


def test_quad_draws_with_bottom_left_origin():
    renderer = Renderer()
    renderer.begin()
    renderer.quad((10, 10), (4, 4), RED)
    assert renderer.canvas.get_at((10, 350)) == pygame.Color(255, 0, 0, 255)
    assert renderer.canvas.get_at((10, 10)) != pygame.Color(255, 0, 0, 255)


def test_line_segment_draws_pixels():
    renderer = Renderer()
    renderer.begin()
    renderer.line_segment((0, 100), (50, 100), GREEN)
    assert renderer.canvas.get_at((25, 260)) == pygame.Color(0, 255, 0, 255)


def test_aabb_outline_drawn_on_edges_only():
    renderer = Renderer()
    renderer.begin()
    renderer.aabb(AABB((50, 50), (10, 10)), WHITE)
    white = pygame.Color(255, 255, 255, 255)
    assert renderer.canvas.get_at((50, 320)) == white
    assert renderer.canvas.get_at((40, 310)) == white
    assert renderer.canvas.get_at((50, 310)) != white


def test_sprite_sheet_frame_positions_and_flip():
    renderer = Renderer()
    sheet = _sheet()
    renderer.sprite_sheet_frame(sheet, 0, 1, (100, 100), False)
    renderer.sprite_sheet_frame(sheet, 0, 1, (100, 100), True)
    plain, flipped = renderer.batch[0:4], renderer.batch[4:8]
    assert plain[0].position == (95.0, 95.0)
    assert plain[2].position == (105.0, 105.0)
    assert flipped[0].uvs[0] == plain[1].uvs[0]
    assert flipped[1].uvs[0] == plain[0].uvs[0]


def test_end_draws_textured_cells():
    renderer = Renderer()
    renderer.begin()
    sheet = _sheet()
    renderer.sprite_sheet_frame(sheet, 0, 0, (100, 100), False)
    renderer.sprite_sheet_frame(sheet, 0, 1, (200, 100), False)
    renderer.end()
    assert renderer.canvas.get_at((96, 260)) == pygame.Color(0, 255, 0, 255)
    assert renderer.canvas.get_at((103, 260)) == pygame.Color(255, 0, 0, 255)
    assert renderer.canvas.get_at((200, 260)) == pygame.Color(0, 0, 255, 255)


def test_end_draws_flipped_cell_mirrored():
    renderer = Renderer()
    renderer.begin()
    renderer.sprite_sheet_frame(_sheet(), 0, 0, (100, 100), True)
    renderer.end()
    assert renderer.canvas.get_at((96, 260)) == pygame.Color(255, 0, 0, 255)
    assert renderer.canvas.get_at((103, 260)) == pygame.Color(0, 255, 0, 255)


def test_end_untextured_batch_uses_color():
    renderer = Renderer()
    renderer.begin()
    renderer.append_quad((10, 10), (5, 5), None, BLUE)
    renderer.end()
    assert renderer.canvas.get_at((12, 347)) == pygame.Color(0, 0, 255, 255)


def test_end_scales_canvas_onto_window():
    window = pygame.Surface((1920, 1080))
    renderer = Renderer(window=window)
    assert (renderer.window_width, renderer.window_height) == (1920, 1080)
    renderer.begin()
    renderer.quad((10, 10), (4, 4), RED)
    renderer.end()
    assert window.get_at((10 * 3 + 1, 350 * 3 + 1)) == pygame.Color(255, 0, 0, 255)


def test_sprite_sheet_load_round_trip(tmp_path):
    path = tmp_path / "sheet.png"
    pygame.image.save(_sheet_surface(), str(path))
    sheet = SpriteSheet.load(str(path), 10, 10)
    assert (sheet.width, sheet.height) == (20.0, 10.0)
    assert (sheet.cell_width, sheet.cell_height) == (10.0, 10.0)
    assert sheet.image.get_at((0, 0))[:3] == (0, 255, 0)


def test_sprite_sheet_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        SpriteSheet.load(str(tmp_path / "missing.png"), 24, 24)