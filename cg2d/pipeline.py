from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple

import structlog

from .geom import Pt, centroid, unique_points
from .mesh import DelaunayTriangulation

logger = structlog.get_logger()


def _bounding_triangle(pts: List[Pt], scale: float) -> Tuple[Pt, Pt, Pt]:
    """Великий трикутник навколо всіх точок (аналог супер-тетра)."""
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    cx, cy = centroid(pts)
    dx = (max(xs) - min(xs)) or 1.0
    dy = (max(ys) - min(ys)) or 1.0
    R = scale * max(dx, dy)
    return Pt(cx - R, cy - R), Pt(cx + R, cy - R), Pt(cx, cy + R)


def triangulate(
    points: Iterable[Sequence[float]],
    backend: str = "internal",
    scale: float = 1000.0,
    randomize: bool = False,
) -> Tuple[List[Pt], List[Tuple[int, int, int]]]:
    """
    Повний пайплайн:
      - прибирає дублікати точок;
      - будує 2D Делоне-тріангуляцію нашим DelaunayTriangulation (backend="internal")
        або через SciPy Delaunay (backend="scipy").

    Повертає:
      pts   - список Pt у фінальному порядку;
      tris  - список трикутників (індекси у pts), без кутів обмежувального трикутника.
    """
    pts: List[Pt] = unique_points(points)
    if len(pts) < 3:
        raise ValueError("Need at least 3 points")

    if backend.lower() == "internal":
        dt = DelaunayTriangulation(_bounding_triangle(pts, scale))
        dt.insert_all(pts, randomize=randomize)
        index = {p: i for i, p in enumerate(pts)}
        tris = [
            tuple(index[v] for v in t)
            for t in dt
            if all(v in index for v in t)
        ]
        logger.info("triangulated", backend="internal", points=len(pts), triangles=len(tris),
                    fallback_scans=dt.stats["fallback_scans"])
        return pts, tris

    elif backend.lower() == "scipy":
        try:
            import numpy as np
            from scipy.spatial import Delaunay
        except ImportError as e:
            raise RuntimeError(
                "backend='scipy', але SciPy не встановлено. "
                "Встанови scipy або використай backend='internal'."
            ) from e

        arr = np.array([(p.x, p.y) for p in pts], dtype=float)
        dela = Delaunay(arr)
        tris = [tuple(int(i) for i in simplex) for simplex in dela.simplices]
        logger.info("triangulated", backend="scipy", points=len(pts), triangles=len(tris))
        return pts, tris

    else:
        raise ValueError(f"Unknown backend: {backend}")
