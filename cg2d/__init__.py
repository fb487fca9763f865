"""
cg2d - мінімальна бібліотека для 2D комп'ютерної геометрії.
Зараз: інкрементальна Делоне-тріангуляція (Bowyer–Watson) + діаграма Вороного.
"""

__version__ = "0.1.0"

from cg2d.errors import DegenerateSimplexError, DimensionMismatch, OutOfBoundsError
from cg2d.geom import Pt, EPS, centroid, unique_points
from cg2d.predicates import (
    circumcenter, content, cross, determinant,
    is_inside, is_on, is_outside, relation, vs_circumcircle,
)
from cg2d.graph import AdjacencyGraph
from cg2d.mesh import Triangle, TriMesh, DelaunayTriangulation
from cg2d.voronoi import Voronoi, DEFAULT_SIZE
from cg2d.pipeline import triangulate

__all__ = [
    "Pt", "EPS", "centroid", "unique_points",
    "determinant", "cross", "content", "relation",
    "is_inside", "is_on", "is_outside", "vs_circumcircle", "circumcenter",
    "AdjacencyGraph", "Triangle", "TriMesh", "DelaunayTriangulation",
    "Voronoi", "DEFAULT_SIZE", "triangulate",
    "DimensionMismatch", "DegenerateSimplexError", "OutOfBoundsError",
    "__version__",
]
