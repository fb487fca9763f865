# examples/demo_delaunay.py
from cg2d.geom import Pt, unique_points
from cg2d.mesh import DelaunayTriangulation

if __name__ == "__main__":
    # квадрат + внутрішні точки
    raw = [
        (0, 0), (1, 0), (1, 1), (0, 1),
        (0.5, 0.5), (0.2, 0.8), (0.8, 0.3), (0.5, 0.5),
    ]
    pts = unique_points(raw)

    dt = DelaunayTriangulation((Pt(-100, -100), Pt(100, -100), Pt(0, 100)))
    dt.insert_all(pts, randomize=True)

    print(dt)
    print("stats:", dt.stats)
    print("VALIDATION:", dt.validate())
