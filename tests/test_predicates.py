"""Тести детермінантів і геометричних предикатів."""

import numpy as np
import pytest

from cg2d.errors import DegenerateSimplexError, DimensionMismatch
from cg2d.geom import Pt
from cg2d.predicates import (
    circumcenter, content, cross, determinant,
    is_inside, is_on, is_outside, relation, vs_circumcircle,
)

A, B, C = Pt(0, 0), Pt(1, 0), Pt(0, 1)
CCW = [A, B, C]
CW = [A, C, B]


class TestDeterminant:

    def test_closed_forms(self):
        assert determinant([[5]]) == 5.0
        assert determinant([[1, 2], [3, 4]]) == -2.0
        assert determinant([[1, 0, 0], [0, 1, 0], [0, 0, 1]]) == 1.0

    def test_cofactor_matches_numpy(self):
        rng = np.random.default_rng(7)
        m = rng.uniform(-5, 5, size=(4, 4))
        assert determinant(m.tolist()) == pytest.approx(np.linalg.det(m))
        assert determinant(np.diag([1.0, 2.0, 3.0, 4.0]).tolist()) == pytest.approx(24.0)

    def test_not_square(self):
        with pytest.raises(DegenerateSimplexError):
            determinant([[1, 2, 3], [4, 5, 6]])
        with pytest.raises(DegenerateSimplexError):
            determinant([])

    def test_cross(self):
        assert cross([[1, 0, 0], [0, 1, 0]]) == Pt(0, 0, 1)
        v = cross([[1, 2, 3], [4, 5, 6]])
        assert v.dot(Pt(1, 2, 3)) == pytest.approx(0.0)
        assert v.dot(Pt(4, 5, 6)) == pytest.approx(0.0)

    def test_cross_wrong_shape(self):
        with pytest.raises(DegenerateSimplexError):
            cross([[1, 0], [0, 1]])


class TestRelation:

    def test_content_sign(self):
        assert content(CCW) == pytest.approx(0.5)
        assert content(CW) == pytest.approx(-0.5)

    def test_inside(self):
        p = Pt(0.25, 0.25)
        assert relation(p, CCW) == [-1, -1, -1]
        assert relation(p, CW) == [-1, -1, -1]
        assert is_inside(p, CCW)
        assert is_outside(p, CCW) is None
        assert is_on(p, CCW) is None

    def test_outside_witness(self):
        p = Pt(1, 1)
        assert relation(p, CCW) == [1, -1, -1]
        assert is_outside(p, CCW) == A
        assert is_outside(p, CW) == A
        assert not is_inside(p, CCW)
        assert is_on(p, CCW) is None

    def test_on_edge(self):
        p = Pt(0.5, 0)
        assert relation(p, CCW) == [-1, -1, 0]
        assert is_on(p, CCW) == C
        assert is_outside(p, CCW) is None

    def test_on_vertex(self):
        assert relation(A, CCW) == [-1, 0, 0]
        assert is_on(A, CCW) == B

    def test_degenerate_simplex_signs_are_non_negative(self):
        flat = [Pt(0, 0), Pt(1, 0), Pt(2, 0)]
        assert all(r >= 0 for r in relation(Pt(0, 1), flat))

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            relation(Pt(0, 0, 0), CCW)


class TestCircumcircle:

    @pytest.mark.parametrize("simplex", [CCW, CW])
    def test_orientation_independent(self, simplex):
        assert vs_circumcircle(Pt(0.25, 0.25), simplex) == -1
        assert vs_circumcircle(Pt(1, 1), simplex) == 0
        assert vs_circumcircle(Pt(2, 2), simplex) == 1

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            vs_circumcircle(Pt(0, 0, 0), CCW)

    def test_circumcenter(self):
        assert circumcenter([Pt(0, 0), Pt(2, 0), Pt(0, 2)]) == Pt(1, 1)
        c = circumcenter([Pt(3, 1), Pt(-1, 4), Pt(2, -2)])
        r = [c.subtract(v).magnitude() for v in (Pt(3, 1), Pt(-1, 4), Pt(2, -2))]
        assert r[0] == pytest.approx(r[1])
        assert r[1] == pytest.approx(r[2])

    def test_circumcenter_collinear(self):
        with pytest.raises(DegenerateSimplexError):
            circumcenter([Pt(0, 0), Pt(1, 0), Pt(2, 0)])

    def test_circumcenter_wrong_vertex_count(self):
        with pytest.raises(DimensionMismatch):
            circumcenter([Pt(0, 0), Pt(1, 0)])
