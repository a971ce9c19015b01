"""Unit tests for the clock face geometry and layout engine."""

import math
import unittest

from dial_layout import (
    DegenerateGeometryError,
    DialGeometry,
    DialLayoutEngine,
    DialStyle,
    TimeSample,
    compute_hands,
    major_ticks,
    minor_ticks,
    numeral_positions,
    to_hour12,
)
from draw_commands import CircleCommand, LineCommand, PointCommand, TextCommand


def fixed_measure(text):
    """Every digit is 10 wide and 20 high."""
    return 10 * len(text), 20


def normalized(angle):
    return angle % (2 * math.pi)


class GeometryTests(unittest.TestCase):

    def test_500_square_matches_reference_measurements(self) -> None:
        geometry = DialGeometry.from_area(500, 500, padding=50, outer_margin=32)
        self.assertEqual((geometry.center_x, geometry.center_y), (250, 250))
        self.assertEqual(geometry.min_dimension, 500)
        self.assertEqual(geometry.face_radius, 218)
        self.assertEqual(geometry.dial_radius, 136)
        self.assertEqual(geometry.hour_hand_length, 68)
        self.assertEqual(geometry.minute_hand_length, 102)
        self.assertEqual(geometry.tick_radius, 186)

    def test_non_square_area_uses_smaller_side(self) -> None:
        geometry = DialGeometry.from_area(800, 400)
        self.assertEqual((geometry.center_x, geometry.center_y), (400, 200))
        self.assertEqual(geometry.min_dimension, 400)
        self.assertEqual(geometry.face_radius, 168)
        self.assertEqual(geometry.dial_radius, 86)

    def test_radii_never_negative_and_hour_hand_shorter(self) -> None:
        for size in (1, 10, 100, 229, 230, 231, 301, 500, 1024):
            geometry = DialGeometry.from_area(size, size)
            self.assertGreaterEqual(geometry.face_radius, 0)
            self.assertGreaterEqual(geometry.dial_radius, 0)
            if geometry.dial_radius > 0:
                self.assertLess(geometry.hour_hand_length, geometry.minute_hand_length)
            else:
                self.assertEqual(geometry.hour_hand_length, geometry.minute_hand_length)

    def test_zero_size_is_degenerate_with_clamped_radii(self) -> None:
        for width, height in ((0, 500), (500, 0), (0, 0), (-10, 300)):
            geometry = DialGeometry.from_area(width, height)
            self.assertTrue(geometry.is_degenerate)
            self.assertEqual(geometry.face_radius, 0)
            self.assertEqual(geometry.dial_radius, 0)

    def test_positive_size_is_not_degenerate(self) -> None:
        self.assertFalse(DialGeometry.from_area(1, 1).is_degenerate)


class GeometryCacheTests(unittest.TestCase):

    def test_same_size_returns_cached_geometry(self) -> None:
        engine = DialLayoutEngine()
        first = engine.compute_geometry(500, 500)
        second = engine.compute_geometry(500, 500)
        self.assertIs(first, second)

    def test_resize_recomputes_without_stale_radii(self) -> None:
        engine = DialLayoutEngine()
        large = engine.compute_geometry(500, 500)
        small = engine.compute_geometry(300, 300)
        self.assertIsNot(large, small)
        self.assertEqual(small, DialGeometry.from_area(300, 300))
        self.assertEqual(small.face_radius, 118)
        self.assertEqual(small.dial_radius, 36)
        self.assertEqual((small.center_x, small.center_y), (150, 150))

    def test_resize_back_recomputes(self) -> None:
        engine = DialLayoutEngine()
        engine.compute_geometry(500, 500)
        engine.compute_geometry(300, 300)
        again = engine.compute_geometry(500, 500)
        self.assertEqual(again.dial_radius, 136)

    def test_engine_style_sets_padding_and_margin(self) -> None:
        engine = DialLayoutEngine(DialStyle(padding=10, outer_margin=5))
        geometry = engine.compute_geometry(200, 200)
        self.assertEqual(geometry.face_radius, 95)
        self.assertEqual(geometry.dial_radius, 80)


class HourConversionTests(unittest.TestCase):

    def test_midnight_and_noon_both_map_to_twelve(self) -> None:
        self.assertEqual(to_hour12(0), 12)
        self.assertEqual(to_hour12(12), 12)

    def test_afternoon_hours_subtract_twelve(self) -> None:
        self.assertEqual(to_hour12(13), 1)
        self.assertEqual(to_hour12(23), 11)

    def test_morning_hours_unchanged(self) -> None:
        for hour in range(1, 12):
            self.assertEqual(to_hour12(hour), hour)


class HandTests(unittest.TestCase):

    def setUp(self) -> None:
        self.geometry = DialGeometry.from_area(500, 500)

    def test_three_oclock_hour_hand_points_right(self) -> None:
        hands = compute_hands(self.geometry, TimeSample(3, 0, 0))
        self.assertAlmostEqual(hands.hour.angle_radians, 0.0)
        self.assertEqual(hands.hour.length, 68)
        x, y = hands.hour.endpoint(self.geometry.center_x, self.geometry.center_y)
        self.assertAlmostEqual(x, 318.0)
        self.assertAlmostEqual(y, 250.0)

    def test_minute_and_second_angles(self) -> None:
        hands = compute_hands(self.geometry, TimeSample(10, 15, 45))
        self.assertAlmostEqual(hands.minute.angle_radians, 0.0)
        self.assertAlmostEqual(hands.second.angle_radians, math.pi)
        self.assertEqual(hands.minute.length, 102)

    def test_second_hand_shares_minute_hand_length(self) -> None:
        hands = compute_hands(self.geometry, TimeSample(1, 2, 3))
        self.assertEqual(hands.second.length, hands.minute.length)

    def test_top_of_hour_points_up(self) -> None:
        hands = compute_hands(self.geometry, TimeSample(9, 0, 0))
        self.assertAlmostEqual(hands.minute.angle_radians, -math.pi / 2)
        self.assertAlmostEqual(hands.second.angle_radians, -math.pi / 2)

    def test_hour_hand_moves_with_minutes(self) -> None:
        hands = compute_hands(self.geometry, TimeSample(3, 30, 0))
        self.assertAlmostEqual(hands.hour.angle_radians, math.pi / 12)

    def test_midnight_and_noon_render_identically(self) -> None:
        midnight = compute_hands(self.geometry, TimeSample(0, 20, 5))
        noon = compute_hands(self.geometry, TimeSample(12, 20, 5))
        self.assertEqual(midnight, noon)
        self.assertAlmostEqual(midnight.hour.angle_radians, math.pi * 61.666666666666664 / 30 - math.pi / 2)

    def test_hour_hand_angle_steps_evenly_over_twelve_hours(self) -> None:
        step = 2 * math.pi / (12 * 60)
        previous = compute_hands(self.geometry, TimeSample(1, 0, 0)).hour.angle_radians
        for total_minutes in range(61, 13 * 60 + 1):
            hour24, minute = divmod(total_minutes, 60)
            angle = compute_hands(self.geometry, TimeSample(hour24, minute, 0)).hour.angle_radians
            delta = normalized(angle - previous)
            self.assertAlmostEqual(delta, step, places=9)
            previous = angle

    def test_hour_hand_repeats_every_twelve_hours(self) -> None:
        for hour24 in range(12):
            morning = compute_hands(self.geometry, TimeSample(hour24, 40, 0)).hour.angle_radians
            evening = compute_hands(self.geometry, TimeSample(hour24 + 12, 40, 0)).hour.angle_radians
            self.assertAlmostEqual(normalized(morning), normalized(evening), places=9)


class TickTests(unittest.TestCase):

    def setUp(self) -> None:
        self.geometry = DialGeometry.from_area(500, 500)

    def test_minor_ticks(self) -> None:
        ticks = minor_ticks(self.geometry)
        self.assertEqual(len(ticks), 61)
        for index, tick in enumerate(ticks):
            self.assertFalse(tick.is_major)
            self.assertAlmostEqual(tick.angle_radians, index * math.pi / 30)
            self.assertAlmostEqual(math.hypot(tick.x - 250, tick.y - 250), 186)
        self.assertAlmostEqual(ticks[0].x, ticks[60].x)
        self.assertAlmostEqual(ticks[0].y, ticks[60].y)

    def test_major_ticks(self) -> None:
        ticks = major_ticks(self.geometry)
        self.assertEqual(len(ticks), 31)
        for index, tick in enumerate(ticks):
            self.assertTrue(tick.is_major)
            self.assertAlmostEqual(tick.angle_radians, index * math.pi / 6)
        self.assertAlmostEqual(ticks[0].x, 436.0)
        self.assertAlmostEqual(ticks[0].y, 250.0)
        self.assertAlmostEqual(ticks[3].x, 250.0)
        self.assertAlmostEqual(ticks[3].y, 436.0)


class NumeralTests(unittest.TestCase):

    def setUp(self) -> None:
        self.geometry = DialGeometry.from_area(500, 500)
        self.glyphs = numeral_positions(self.geometry, fixed_measure)

    def test_twelve_numerals_in_order(self) -> None:
        self.assertEqual([g.text for g in self.glyphs], [str(n) for n in range(1, 13)])

    def test_three_is_due_right(self) -> None:
        three = self.glyphs[2]
        self.assertAlmostEqual(three.angle_radians, 0.0)
        self.assertAlmostEqual(three.x, 250 + 136 - 5)
        self.assertAlmostEqual(three.y, 250 + 10)

    def test_twelve_is_due_up(self) -> None:
        twelve = self.glyphs[11]
        self.assertAlmostEqual(twelve.angle_radians, 3 * math.pi / 2)
        self.assertAlmostEqual(normalized(twelve.angle_radians), normalized(-math.pi / 2))
        self.assertEqual((twelve.width, twelve.height), (20, 20))
        self.assertAlmostEqual(twelve.x, 250 - 10)
        self.assertAlmostEqual(twelve.y, 250 - 136 + 10)

    def test_measurer_called_for_each_numeral(self) -> None:
        seen = []

        def measure(text):
            seen.append(text)
            return 0, 0

        numeral_positions(self.geometry, measure)
        self.assertEqual(seen, [str(n) for n in range(1, 13)])


class RenderTests(unittest.TestCase):

    def setUp(self) -> None:
        self.engine = DialLayoutEngine()
        self.geometry = self.engine.compute_geometry(500, 500)

    def test_render_paint_order_and_counts(self) -> None:
        commands = self.engine.render(self.geometry, TimeSample(3, 0, 0), fixed_measure)
        self.assertEqual(len(commands), 1 + 3 + 12 + 31 + 61)
        self.assertIsInstance(commands[0], CircleCommand)
        self.assertTrue(all(isinstance(c, LineCommand) for c in commands[1:4]))
        self.assertTrue(all(isinstance(c, TextCommand) for c in commands[4:16]))
        self.assertTrue(all(isinstance(c, PointCommand) for c in commands[16:]))

    def test_render_uses_style_measurements(self) -> None:
        commands = self.engine.render(self.geometry, TimeSample(3, 0, 0), fixed_measure)
        outline, hour, minute, second = commands[:4]
        self.assertEqual(outline, CircleCommand(250, 250, 218, 32.0))
        self.assertEqual((hour.x1, hour.y1), (250, 250))
        self.assertAlmostEqual(hour.x2, 318.0)
        self.assertAlmostEqual(hour.y2, 250.0)
        self.assertEqual(hour.stroke_width, 16.0)
        self.assertEqual(minute.stroke_width, 8.0)
        self.assertEqual(second.stroke_width, 4.0)
        self.assertEqual(commands[4].font_size, 64.0)
        self.assertEqual(commands[16].stroke_width, 10.0)
        self.assertEqual(commands[-1].stroke_width, 4.0)

    def test_minute_hand_endpoint_is_symmetric_by_default(self) -> None:
        commands = self.engine.render(self.geometry, TimeSample(3, 30, 0), fixed_measure)
        minute = commands[2]
        self.assertAlmostEqual(minute.x2, 250.0)
        self.assertAlmostEqual(minute.y2, 250 + 102)

    def test_mirrored_y_scale_uses_hour_hand_length(self) -> None:
        engine = DialLayoutEngine(DialStyle(mirror_hour_hand_y_scale=True))
        geometry = engine.compute_geometry(500, 500)
        commands = engine.render(geometry, TimeSample(3, 30, 45), fixed_measure)
        hour, minute, second = commands[1:4]
        self.assertAlmostEqual(minute.y2, 250 + 68)
        self.assertAlmostEqual(second.x2, 250 - 102)
        self.assertAlmostEqual(hour.x2, 250 + 68 * math.cos(math.pi / 12))

    def test_degenerate_geometry_raises(self) -> None:
        geometry = self.engine.compute_geometry(0, 300)
        with self.assertRaises(DegenerateGeometryError):
            self.engine.render(geometry, TimeSample(3, 0, 0), fixed_measure)


class RecordingRasterizer:
    def __init__(self):
        self.frames = []

    def draw(self, context, commands):
        self.frames.append((context, commands))


class PaintFrameTests(unittest.TestCase):

    def setUp(self) -> None:
        self.engine = DialLayoutEngine()
        self.rasterizer = RecordingRasterizer()
        self.context = object()

    def test_frame_drawn_for_valid_area_and_time(self) -> None:
        painted = self.engine.paint_frame(self.context, 500, 500, TimeSample(3, 0, 0),
                                          fixed_measure, self.rasterizer)
        self.assertTrue(painted)
        self.assertEqual(len(self.rasterizer.frames), 1)
        context, commands = self.rasterizer.frames[0]
        self.assertIs(context, self.context)
        self.assertEqual(len(commands), 108)

    def test_degenerate_area_draws_nothing(self) -> None:
        for width, height in ((0, 500), (500, 0), (-10, -10)):
            painted = self.engine.paint_frame(self.context, width, height, TimeSample(3, 0, 0),
                                              fixed_measure, self.rasterizer)
            self.assertFalse(painted)
        self.assertEqual(self.rasterizer.frames, [])

    def test_missing_time_draws_nothing(self) -> None:
        def measure(text):
            self.fail("text measured without a time sample")

        painted = self.engine.paint_frame(self.context, 500, 500, None, measure, self.rasterizer)
        self.assertFalse(painted)
        self.assertEqual(self.rasterizer.frames, [])
