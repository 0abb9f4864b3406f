#!/usr/bin/env python3
"""
Unit Tests for ArchimedeanSpiral
=================================

Tests the candidate point generator:
- Starts at the origin
- Deterministic for identical parameters
- Radius never shrinks, all directions are visited
- next() and coordinates() continue the same walk
"""

import sys
import os
import math
import unittest
from itertools import islice

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tags_cloud.common_types import Point
from tags_cloud.spiral import ArchimedeanSpiral


class TestSpiralStart(unittest.TestCase):
    """Test the first points of the walk."""

    def test_first_point_is_origin(self):
        """Test the walk starts exactly on the origin."""
        for origin in [Point(0, 0), Point(3, 4), Point(-100, 250)]:
            with self.subTest(origin=origin):
                self.assertEqual(next(ArchimedeanSpiral(origin)), origin)

    def test_accepts_tuple_origin(self):
        """Test loose origin formats."""
        self.assertEqual(next(ArchimedeanSpiral((7, -7))), Point(7, -7))

    def test_invalid_parameters(self):
        """Test non-positive parameters are rejected."""
        for kwargs in [{'angle_step': 0}, {'radius_step': -1}, {'chunk_size': 0}]:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    ArchimedeanSpiral(Point(0, 0), **kwargs)


class TestSpiralSequence(unittest.TestCase):
    """Test properties of the sequence."""

    def setUp(self):
        self.origin = Point(10, -20)
        self.points = list(islice(ArchimedeanSpiral(self.origin), 3000))

    def test_deterministic(self):
        """Test two fresh spirals produce identical sequences."""
        again = list(islice(ArchimedeanSpiral(self.origin), 3000))
        self.assertEqual(self.points, again)

    def test_no_consecutive_duplicates(self):
        """Test repeated grid points are collapsed."""
        for a, b in zip(self.points, self.points[1:]):
            self.assertNotEqual(a, b)

    def test_distance_non_decreasing(self):
        """Test distance grows monotonically up to grid rounding."""
        farthest = 0.0
        for p in self.points:
            d = p.distance_to(self.origin)
            # Each point is within sqrt(0.5) of the exact spiral
            self.assertGreaterEqual(d, farthest - 2 * math.sqrt(0.5) - 1e-9)
            farthest = max(farthest, d)

    def test_all_quadrants_visited_early(self):
        """Test the angle sweeps all directions before the radius grows far."""
        quadrants = set()
        for p in self.points:
            dx, dy = p.x - self.origin.x, p.y - self.origin.y
            if dx and dy:
                quadrants.add((dx > 0, dy > 0))
            if p.distance_to(self.origin) > 20:
                break
        self.assertEqual(len(quadrants), 4)

    def test_points_cross_chunk_boundaries(self):
        """Test small chunks give the same walk as large ones."""
        small = list(islice(ArchimedeanSpiral(self.origin, chunk_size=7), 3000))
        self.assertEqual(small, self.points)


class TestSpiralState(unittest.TestCase):
    """Test internal state exposure and shared iteration."""

    def test_next_and_coordinates_share_state(self):
        """Test coordinates() continues where next() stopped."""
        reference = list(islice(ArchimedeanSpiral(Point(0, 0)), 5))
        spiral = ArchimedeanSpiral(Point(0, 0))
        first = next(spiral)
        rest = list(islice(spiral.coordinates(), 4))
        self.assertEqual([first] + [Point(x, y) for x, y in rest], reference)

    def test_coordinates_are_plain_ints(self):
        """Test raw coordinates are Python ints."""
        x, y = next(ArchimedeanSpiral(Point(1, 2)).coordinates())
        self.assertIs(type(x), int)
        self.assertIs(type(y), int)

    def test_radius_and_angle_of_first_point(self):
        """Test the origin is reported at step 0."""
        spiral = ArchimedeanSpiral(Point(0, 0))
        self.assertEqual(next(spiral), Point(0, 0))
        self.assertEqual(spiral.step, 0)
        self.assertEqual(spiral.radius, 0.0)
        self.assertEqual(spiral.angle, 0.0)

    def test_radius_and_angle_follow_drawn_point(self):
        """Test state describes the point just handed out, not the chunk end."""
        spiral = ArchimedeanSpiral(Point(0, 0), angle_step=1.0, radius_step=10.0)
        for _ in range(3):
            next(spiral)
        self.assertEqual(spiral.step, 2)
        self.assertEqual(spiral.radius, 20.0)
        self.assertEqual(spiral.angle, 2.0)

    def test_duplicate_steps_are_skipped_in_state(self):
        """Test the second point is the first step that leaves the origin."""
        spiral = ArchimedeanSpiral(Point(0, 0))
        next(spiral)
        self.assertEqual(next(spiral), Point(1, 0))
        self.assertEqual(spiral.step, 7)
        self.assertAlmostEqual(spiral.radius, 0.7)
        self.assertAlmostEqual(spiral.angle, 0.7)

    def test_radius_matches_point_distance(self):
        """Test the reported radius is the distance of the drawn point."""
        spiral = ArchimedeanSpiral(Point(5, 5), chunk_size=16)
        for _ in range(300):
            p = next(spiral)
            self.assertLessEqual(abs(p.distance_to(Point(5, 5)) - spiral.radius),
                                 math.sqrt(0.5) + 1e-9)

    def test_radius_per_turn(self):
        """Test distance gained per revolution."""
        spiral = ArchimedeanSpiral(Point(0, 0), angle_step=0.1, radius_step=0.1)
        self.assertAlmostEqual(spiral.radius_per_turn, 2 * math.pi)


class TestSpiralStartAndChunks(unittest.TestCase):
    """Test walks that skip steps and hand out whole chunks."""

    def collect(self, spiral, until_step):
        pairs = []
        for steps, xs, ys in spiral.chunks():
            pairs.extend(zip(steps.tolist(), xs.tolist(), ys.tolist()))
            if steps[-1] >= until_step:
                return pairs

    def test_start_continues_the_full_walk(self):
        """Test a walk started at step k matches the full walk from there on."""
        origin = Point(-4, 9)
        full = self.collect(ArchimedeanSpiral(origin, chunk_size=64), 600)
        started = self.collect(ArchimedeanSpiral(origin, chunk_size=64, start=100), 600)

        self.assertEqual(started[0][0], 100)
        # Step 100 sits at radius 10 and angle 10 rad
        self.assertEqual(started[0][1:], (origin.x - 8, origin.y - 5))
        self.assertEqual([p for p in started if 100 < p[0] <= 600],
                         [p for p in full if 100 < p[0] <= 600])

    def test_start_reports_state(self):
        """Test the first point of a started walk reports its own step."""
        spiral = ArchimedeanSpiral(Point(0, 0), start=100)
        next(spiral)
        self.assertEqual(spiral.step, 100)
        self.assertAlmostEqual(spiral.radius, 10.0)

    def test_invalid_start(self):
        """Test negative or fractional starts are rejected."""
        for start in [-1, 2.5, True]:
            with self.subTest(start=start):
                with self.assertRaises(ValueError):
                    ArchimedeanSpiral(Point(0, 0), start=start)

    def test_chunks_match_single_points(self):
        """Test chunked and one-by-one walks give the same points."""
        points = list(islice(ArchimedeanSpiral(Point(2, 3), chunk_size=32), 500))
        walked = []
        for _, xs, ys in ArchimedeanSpiral(Point(2, 3), chunk_size=32).chunks():
            walked.extend(Point(x, y) for x, y in zip(xs.tolist(), ys.tolist()))
            if len(walked) >= 500:
                break
        self.assertEqual(walked[:500], points)

    def test_chunks_continue_after_next(self):
        """Test chunks() picks up the rest of a partly drawn chunk."""
        reference = list(islice(ArchimedeanSpiral(Point(0, 0), chunk_size=50), 60))
        spiral = ArchimedeanSpiral(Point(0, 0), chunk_size=50)
        head = [next(spiral) for _ in range(5)]
        tail = []
        for steps, xs, ys in spiral.chunks():
            tail.extend(Point(x, y) for x, y in zip(xs.tolist(), ys.tolist()))
            self.assertEqual(spiral.step, int(steps[-1]))
            if len(head) + len(tail) >= 60:
                break
        self.assertEqual((head + tail)[:60], reference)


if __name__ == '__main__':
    unittest.main()
