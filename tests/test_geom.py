"""Тести для Pt та утиліт geom."""

import dataclasses
import math

import pytest

from cg2d.errors import DimensionMismatch
from cg2d.geom import Pt, centroid, unique_points


class TestPt:
    """Векторна алгебра та рівність точок."""

    def test_structural_equality(self):
        assert Pt(1, 2) == Pt(1.0, 2.0)
        assert hash(Pt(1, 2)) == hash(Pt(1.0, 2.0))
        assert Pt(1, 2) != Pt(2, 1)

    def test_accessors(self):
        p = Pt(3, 4)
        assert p.dimension == 2
        assert len(p) == 2
        assert (p.x, p.y) == (3.0, 4.0)
        assert p.coord(1) == 4.0
        assert list(p) == [3.0, 4.0]
        assert repr(p) == "Pt(3.0, 4.0)"

    def test_immutable(self):
        p = Pt(1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.coords = (0.0, 0.0)

    def test_algebra(self):
        a, b = Pt(1, 2), Pt(3, 5)
        assert a.add(b) == Pt(4, 7)
        assert b.subtract(a) == Pt(2, 3)
        assert a.dot(b) == 13.0
        assert Pt(3, 4).magnitude() == 5.0
        assert Pt(1, 0).angle(Pt(0, 1)) == pytest.approx(math.pi / 2)

    def test_angle_parallel_and_antiparallel(self):
        p = Pt(3, 3)
        assert p.angle(p) == pytest.approx(0.0, abs=1e-6)
        assert Pt(0.1, 0.7).angle(Pt(0.2, 1.4)) == pytest.approx(0.0, abs=1e-6)
        assert Pt(1, 2).angle(Pt(-2, -4)) == pytest.approx(math.pi, abs=1e-6)

    def test_extend(self):
        assert Pt(1, 2).extend(3) == Pt(1, 2, 3)
        assert Pt(1, 2).extend(1, 5) == Pt(1, 2, 1, 5)

    def test_bisector(self):
        # -2x + 0y + 2 = 0  =>  x = 1
        assert Pt(0, 0).bisector(Pt(2, 0)) == Pt(-2, 0, 2)

    @pytest.mark.parametrize("op", ["add", "subtract", "dot", "bisector", "angle"])
    def test_dimension_mismatch(self, op):
        with pytest.raises(DimensionMismatch):
            getattr(Pt(1, 2), op)(Pt(1, 2, 3))


class TestUtilities:

    def test_centroid(self):
        c = centroid([Pt(0, 0), Pt(2, 0), Pt(1, 3)])
        assert c.x == pytest.approx(1.0)
        assert c.y == pytest.approx(1.0)

    def test_centroid_empty(self):
        with pytest.raises(ValueError):
            centroid([])

    def test_unique_points_keeps_first_order(self):
        pts = unique_points([(0, 0), (1, 1), (0, 0), (1, 1 + 1e-12), (2, 2)])
        assert pts == [Pt(0, 0), Pt(1, 1), Pt(2, 2)]
