# examples/demo_voronoi.py
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection

from cg2d.voronoi import Voronoi

if __name__ == "__main__":
    rng = np.random.default_rng(0)
    vor = Voronoi()
    vor.add_points(rng.uniform(0, 100, size=(80, 2)))

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.add_collection(PolyCollection(vor.regions(), facecolors="none", edgecolors="tab:blue", linewidths=0.8))
    ax.add_collection(PolyCollection(vor.triangles_array(), facecolors="none", edgecolors="lightgray", linewidths=0.4))
    sites = vor.sites_array()
    ax.plot(sites[:, 0], sites[:, 1], "k.", markersize=3)
    ax.set_xlim(0, 100)
    ax.set_ylim(0, 100)
    ax.set_aspect("equal")
    ax.set_title("Voronoi / Delaunay")
    plt.show()
