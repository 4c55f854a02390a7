from __future__ import annotations

import unittest
import xml.etree.ElementTree as ET

import numpy as np

from dualplot.errors import FigureConfigError
from dualplot.raster import PixelCanvas, line_points
from dualplot.styles import LineType
from dualplot.vector import SvgCanvas, SvgLine, SvgRect

RED = (255, 0, 0)
BLACK = (0, 0, 0)


def _strip(tag: str) -> str:
    return tag.split("}", 1)[1] if "}" in tag else tag


class PixelCanvasTests(unittest.TestCase):
    def test_new_canvas_is_filled_with_initial_background(self) -> None:
        canvas = PixelCanvas(30, 20, 5, background=(1, 2, 3))
        self.assertEqual(canvas.pixels.shape, (20, 30, 3))
        self.assertEqual(canvas.get_pixel(29, 19), (1, 2, 3))

    def test_margin_must_be_less_than_half_of_each_side(self) -> None:
        with self.assertRaises(FigureConfigError):
            PixelCanvas(40, 100, 20)

    def test_draw_pixel_clips_out_of_bounds(self) -> None:
        canvas = PixelCanvas(10, 10, 1, background=BLACK)
        before = canvas.pixels.copy()
        for x, y in ((-1, 5), (5, -1), (10, 5), (5, 10)):
            canvas.draw_pixel(x, y, RED)
        np.testing.assert_array_equal(canvas.pixels, before)
        canvas.draw_pixel(9, 9, RED)
        self.assertEqual(canvas.get_pixel(9, 9), RED)

    def test_get_pixel_rejects_out_of_bounds(self) -> None:
        canvas = PixelCanvas(10, 10, 1, background=BLACK)
        canvas.draw_pixel(9, 9, RED)
        for x, y in ((-1, -1), (-1, 0), (0, -1), (10, 0), (0, 10)):
            with self.subTest(x=x, y=y):
                with self.assertRaises(IndexError):
                    canvas.get_pixel(x, y)
        self.assertEqual(canvas.get_pixel(9, 9), RED)

    def test_line_points_include_both_endpoints(self) -> None:
        points = list(line_points(0, 0, 5, 5))
        self.assertEqual(points, [(i, i) for i in range(6)])
        self.assertEqual(list(line_points(3, 3, 3, 3)), [(3, 3)])

    def test_line_points_are_continuous(self) -> None:
        points = list(line_points(2, 9, 17, 1))
        self.assertEqual(points[0], (2, 9))
        self.assertEqual(points[-1], (17, 1))
        for (ax, ay), (bx, by) in zip(points, points[1:]):
            self.assertLessEqual(max(abs(ax - bx), abs(ay - by)), 1)

    def test_solid_line_sets_every_pixel(self) -> None:
        canvas = PixelCanvas(20, 5, 1, background=BLACK)
        canvas.draw_line(0, 2, 9, 2, RED, LineType.SOLID)
        self.assertTrue(np.all(canvas.pixels[2, 0:10] == RED))
        self.assertEqual(canvas.get_pixel(10, 2), BLACK)

    def test_dashed_line_leaves_gaps(self) -> None:
        canvas = PixelCanvas(30, 5, 1, background=BLACK)
        canvas.draw_line(0, 2, 19, 2, RED, LineType.DASHED)
        row = [canvas.get_pixel(x, 2) == RED for x in range(20)]
        self.assertEqual(row, [True] * 6 + [False] * 4 + [True] * 6 + [False] * 4)

    def test_line_partially_outside_canvas_is_clipped(self) -> None:
        canvas = PixelCanvas(10, 10, 1, background=BLACK)
        canvas.draw_line(-5, -5, 5, 5, RED)
        self.assertEqual(canvas.get_pixel(0, 0), RED)
        self.assertEqual(canvas.get_pixel(5, 5), RED)

    def test_draw_grid_places_exact_line_counts_inside_plot_area(self) -> None:
        canvas = PixelCanvas(100, 100, 10, background=BLACK)
        canvas.draw_grid((3, 4), RED)
        red = np.all(canvas.pixels == RED, axis=2)
        full_rows = [y for y in range(100) if red[y, 10:90].all()]
        full_cols = [x for x in range(100) if red[10:90, x].all()]
        self.assertEqual(full_rows, [30, 50, 70])
        self.assertEqual(full_cols, [26, 42, 58, 74])
        self.assertFalse(red[:10, :].any())
        self.assertFalse(red[90:, :].any())
        self.assertFalse(red[:, :10].any())
        self.assertFalse(red[:, 90:].any())

    def test_draw_grid_with_zero_counts_draws_nothing(self) -> None:
        canvas = PixelCanvas(50, 50, 5, background=BLACK)
        canvas.draw_grid((0, 0), RED)
        self.assertFalse(np.any(canvas.pixels))

    def test_draw_rect_and_circle_clip(self) -> None:
        canvas = PixelCanvas(10, 10, 1, background=BLACK)
        canvas.draw_rect(-2, -2, 4, 4, RED)
        self.assertEqual(canvas.get_pixel(1, 1), RED)
        self.assertEqual(canvas.get_pixel(2, 2), BLACK)
        canvas.draw_circle(9, 9, 2, (0, 255, 0))
        self.assertEqual(canvas.get_pixel(9, 9), (0, 255, 0))
        self.assertEqual(canvas.get_pixel(9, 7), (0, 255, 0))
        self.assertEqual(canvas.get_pixel(7, 7), BLACK)

    def test_to_image_exports_rgb(self) -> None:
        canvas = PixelCanvas(8, 6, 1, background=(10, 20, 30))
        image = canvas.to_image()
        self.assertEqual(image.mode, "RGB")
        self.assertEqual(image.size, (8, 6))
        self.assertEqual(image.getpixel((3, 3)), (10, 20, 30))
        self.assertEqual(len(canvas.to_bytes()), 8 * 6 * 3)


class SvgCanvasTests(unittest.TestCase):
    def test_shapes_serialize_in_draw_order(self) -> None:
        canvas = SvgCanvas(200, 100, 10)
        canvas.draw_text(5, 20, "first", "rgb(0,0,0)", "Sans", 12)
        canvas.draw_rect(0, 0, 10, 10, "rgb(1,2,3)", "none", 0.0, 1.0)
        canvas.draw_line(0, 0, 5, 5, "rgb(4,5,6)", 1.0)
        root = ET.fromstring(canvas.serialize())
        self.assertEqual([_strip(child.tag) for child in root], ["text", "rect", "line"])
        self.assertEqual(root[0].text, "first")

    def test_document_root_carries_size_and_viewbox(self) -> None:
        root = ET.fromstring(SvgCanvas(320, 240, 20).serialize())
        self.assertEqual(_strip(root.tag), "svg")
        self.assertEqual(root.attrib["width"], "320")
        self.assertEqual(root.attrib["height"], "240")
        self.assertEqual(root.attrib["viewBox"], "0 0 320 240")
        self.assertEqual(len(root), 0)

    def test_rect_record_keeps_values_as_given(self) -> None:
        canvas = SvgCanvas(100, 100, 10)
        canvas.draw_rect(-5.5, 120, 30, 40, "rgb(9,9,9)", "rgb(1,1,1)", 2.0, 0.25)
        self.assertEqual(canvas.shapes, [SvgRect(-5.5, 120, 30, 40, "rgb(9,9,9)", "rgb(1,1,1)", 2.0, 0.25)])
        elem = ET.fromstring(canvas.serialize())[0]
        self.assertEqual(elem.attrib["x"], "-5.5")
        self.assertEqual(elem.attrib["y"], "120")
        self.assertEqual(elem.attrib["stroke-width"], "2")
        self.assertEqual(elem.attrib["opacity"], "0.25")

    def test_dashed_line_has_dasharray(self) -> None:
        canvas = SvgCanvas(100, 100, 10)
        canvas.draw_line(0, 0, 10, 0, "rgb(0,0,0)", 1.0, LineType.DASHED.dasharray)
        canvas.draw_line(0, 0, 10, 0, "rgb(0,0,0)")
        self.assertEqual(canvas.shapes[0], SvgLine(0, 0, 10, 0, "rgb(0,0,0)", 1.0, "6,4"))
        root = ET.fromstring(canvas.serialize())
        self.assertEqual(root[0].attrib["stroke-dasharray"], "6,4")
        self.assertNotIn("stroke-dasharray", root[1].attrib)

    def test_line_cap_is_emitted_only_when_set(self) -> None:
        canvas = SvgCanvas(100, 100, 10)
        canvas.draw_line(0.5, 0.5, 10.5, 0.5, "rgb(0,0,0)", 1.0, None, "square")
        canvas.draw_line(0, 0, 10, 0, "rgb(0,0,0)")
        self.assertEqual(canvas.shapes[0].linecap, "square")
        root = ET.fromstring(canvas.serialize())
        self.assertEqual(root[0].attrib["stroke-linecap"], "square")
        self.assertNotIn("stroke-linecap", root[1].attrib)

    def test_polyline_needs_two_points(self) -> None:
        canvas = SvgCanvas(100, 100, 10)
        canvas.draw_polyline([(1, 1)], "rgb(0,0,0)")
        self.assertEqual(canvas.shapes, [])
        canvas.draw_polyline([(1, 1), (2.5, 3)], "rgb(0,0,0)")
        elem = ET.fromstring(canvas.serialize())[0]
        self.assertEqual(elem.attrib["points"], "1,1 2.5,3")
        self.assertEqual(elem.attrib["fill"], "none")


if __name__ == "__main__":
    unittest.main()
