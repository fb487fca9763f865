# cg2d/voronoi.py
from __future__ import annotations
from typing import Iterable, List, Sequence, Set, Tuple

import numpy as np
import structlog

from .errors import DimensionMismatch
from .geom import Pt
from .mesh import DelaunayTriangulation, Triangle

logger = structlog.get_logger()

DEFAULT_SIZE = 10000

# прості значення для малювання (без жодної логіки)
Vec2 = Tuple[float, float]
Triangle2D = Tuple[Vec2, Vec2, Vec2]
Polygon2D = List[Vec2]


def _vec2(p: Pt) -> Vec2:
    return (p.x, p.y)


class Voronoi:
    """
    Діаграма Вороного поверх інкрементальної Делоне-тріангуляції.
    Комірка сайту - многокутник з центрів описаних кіл трикутників навколо нього.
    Сайти мають лежати всередині трикутника (-size,-size), (size,-size), (0,size).
    """
    def __init__(self, size: float = DEFAULT_SIZE):
        self.size = size
        self.delaunay = DelaunayTriangulation(
            (Pt(-size, -size), Pt(size, -size), Pt(0, size))
        )
        self._sites: List[Vec2] = []

    def add_point(self, p: Sequence[float]) -> None:
        coords = [float(c) for c in p]
        if len(coords) != 2:
            raise DimensionMismatch(f"expected a 2D point, got {coords}")
        x, y = coords
        self.delaunay.insert(Pt(x, y))
        self._sites.append((x, y))

    def add_points(self, points: Iterable[Sequence[float]]) -> None:
        for p in points:
            self.add_point(p)

    def sites(self) -> List[Vec2]:
        return list(self._sites)

    def sites_array(self) -> np.ndarray:
        return np.array(self._sites, dtype=float).reshape(-1, 2)

    def _cell(self, site: Pt, tri: Triangle) -> Polygon2D:
        return [_vec2(t.circumcenter) for t in self.delaunay.surrounding_triangles(site, tri)]

    def regions(self) -> List[Polygon2D]:
        """По одному многокутнику на кожен різний сайт (кути обмежувального трикутника пропускаємо)."""
        out: List[Polygon2D] = []
        done: Set[Pt] = set(self.delaunay.corners)
        for tri in self.delaunay:
            for site in tri:
                if site in done:
                    continue
                done.add(site)
                out.append(self._cell(site, tri))
        logger.info("voronoi regions built", regions=len(out), triangles=len(self.delaunay))
        return out

    def region_for(self, p: Sequence[float]) -> Polygon2D:
        site = Pt(*(float(c) for c in p))
        if site not in self.delaunay.corners:
            for tri in self.delaunay:
                if site in tri:
                    return self._cell(site, tri)
        raise KeyError(f"{site} is not a site of this diagram")

    def triangles(self) -> List[Triangle2D]:
        return [(_vec2(t[0]), _vec2(t[1]), _vec2(t[2])) for t in self.delaunay]

    def triangles_array(self) -> np.ndarray:
        """Масив (n, 3, 2) - зручно для matplotlib PolyCollection."""
        return np.array(self.triangles(), dtype=float).reshape(-1, 3, 2)
