import math
import unittest

import numpy as np
import pygame

from gravel_core.render import Layout, Renderer, stone_polygons
from gravel_core.settings import DEFAULT_CONFIG
from gravel_core.stones import StoneField

LAYOUT = Layout(rows=22, cols=12, cell=30, margin=35)


class TestLayout(unittest.TestCase):
    def test_window_size_from_defaults(self):
        layout = Layout.from_config(DEFAULT_CONFIG)
        self.assertEqual(layout, LAYOUT)
        self.assertEqual(layout.size, (12 * 30 + 70, 22 * 30 + 70))


class TestStonePolygons(unittest.TestCase):
    def test_resting_stone_fills_its_cell(self):
        field = StoneField.build(22, 12)
        corners = stone_polygons(field, LAYOUT)
        self.assertEqual(corners.shape, (22 * 12, 4, 2))
        np.testing.assert_allclose(corners[0], [[35, 35], [65, 35], [65, 65], [35, 65]])
        # last stone sits in the bottom-right cell
        np.testing.assert_allclose(corners[-1][0], [35 + 11 * 30, 35 + 21 * 30])

    def test_offset_and_rotation(self):
        field = StoneField.build(1, 1)
        stone = field.stones[0]
        stone.offset_x = 0.5
        stone.offset_y = -0.5
        stone.rotation = math.pi / 4
        corners = stone_polygons(field, LAYOUT)[0]
        center = corners.mean(axis=0)
        np.testing.assert_allclose(center, [35 + 30.0, 35 + 0.0])
        distances = np.linalg.norm(corners - center, axis=1)
        np.testing.assert_allclose(distances, [15 * math.sqrt(2)] * 4)
        # a square turned by 45 degrees has a corner straight above its centre
        self.assertTrue(np.any(np.isclose(corners[:, 0], center[0])))


class TestRenderer(unittest.TestCase):
    def setUp(self):
        self.surface = pygame.Surface(LAYOUT.size)
        self.renderer = Renderer(self.surface, LAYOUT, line_width=0.06, background=(0, 0, 0))

    def _near(self, x, y, radius=2):
        return {
            tuple(self.surface.get_at((x + dx, y + dy)))[:3]
            for dx in range(-radius, radius + 1)
            for dy in range(-radius, radius + 1)
        }

    def test_stroke_width_in_pixels(self):
        self.assertEqual(self.renderer.stroke, 2)
        self.assertEqual(Renderer(self.surface, Layout(2, 2, 5, 0), line_width=0.01).stroke, 1)

    def test_render_returns_surface_with_background(self):
        field = StoneField.build(22, 12)
        self.surface.fill((200, 200, 200))
        frame = self.renderer.render(field)
        self.assertIs(frame, self.surface)
        self.assertEqual(tuple(frame.get_at((2, 2)))[:3], (0, 0, 0))

    def test_outlines_are_unfilled_and_coloured_by_hue(self):
        field = StoneField.build(22, 12)
        self.renderer.render(field)
        # left edge of the top-left stone (hue 0, red)
        self.assertIn((255, 0, 0), self._near(35, 50))
        # middle of the cell stays background
        self.assertEqual(tuple(self.surface.get_at((50, 50)))[:3], (0, 0, 0))

    def test_render_is_repeatable(self):
        field = StoneField.build(22, 12)
        first = pygame.image.tostring(self.renderer.render(field), "RGB")
        second = pygame.image.tostring(self.renderer.render(field), "RGB")
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
