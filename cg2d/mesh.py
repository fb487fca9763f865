# cg2d/mesh.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from functools import cached_property
from random import shuffle
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

import structlog

from .errors import DegenerateSimplexError, DimensionMismatch, OutOfBoundsError
from .geom import Pt
from .graph import AdjacencyGraph
from .predicates import circumcenter as _circumcenter, content, is_outside, vs_circumcircle

logger = structlog.get_logger()

Facet = FrozenSet[Pt]  # ребро трикутника як множина двох вершин


def as_pt(p) -> Pt:
    return p if isinstance(p, Pt) else Pt(*p)


@dataclass(frozen=True, eq=False)
class Triangle:
    """
    Трикутник (2D симплекс): рівно три різні вершини + ідентифікатор tid.
    tid видає арена TriMesh; -1 означає «ще не зареєстрований».
    Рівність і хеш - за ідентичністю об'єкта, НЕ за вершинами:
    два трикутники з однаковими вершинами - різні вузли графа.
    Для геометричного порівняння є vertex_set.
    """
    vertices: Tuple[Pt, Pt, Pt]
    tid: int = -1

    def __post_init__(self):
        verts = tuple(as_pt(v) for v in self.vertices)
        if len(verts) != 3 or len(set(verts)) != 3:
            raise ValueError("Triangle must have 3 distinct vertices")
        object.__setattr__(self, "vertices", verts)

    def __iter__(self) -> Iterator[Pt]:
        return iter(self.vertices)

    def __len__(self) -> int:
        return 3

    def __getitem__(self, i: int) -> Pt:
        return self.vertices[i]

    def __contains__(self, p: object) -> bool:
        return p in self.vertices

    def __repr__(self) -> str:
        return f"Triangle#{self.tid}"

    @property
    def simplex(self) -> List[Pt]:
        return list(self.vertices)

    @property
    def vertex_set(self) -> FrozenSet[Pt]:
        return frozenset(self.vertices)

    @cached_property
    def circumcenter(self) -> Pt:
        return _circumcenter(self.vertices)

    def facet_opposite(self, vertex: Pt) -> Facet:
        if vertex not in self.vertices:
            raise ValueError(f"vertex {vertex} not in {self!r}")
        return frozenset(v for v in self.vertices if v != vertex)

    def vertex_but_not(self, *bad: Pt) -> Pt:
        """Будь-яка вершина, що не входить у bad."""
        for v in self.vertices:
            if v not in bad:
                return v
        raise ValueError(f"no vertex of {self!r} outside {bad}")

    def is_neighbor(self, other: Triangle) -> bool:
        """Сусіди <=> рівно одна наша вершина відсутня в other (спільне ребро)."""
        return sum(1 for v in self.vertices if v not in other) == 1


class TriMesh:
    """
    Арена трикутників:
      - tris: усі колись створені трикутники, tris[tid].tid == tid;
      - graph: граф сусідства над tid живих трикутників.
    Мертві трикутники лишаються в tris (індекси не зсуваються), але не в graph.
    """
    def __init__(self) -> None:
        self.tris: List[Triangle] = []
        self.graph = AdjacencyGraph()

    def __len__(self) -> int:
        return len(self.graph)

    def __iter__(self) -> Iterator[Triangle]:
        return (self.tris[tid] for tid in self.graph)

    def alive(self, tri: Triangle) -> bool:
        return 0 <= tri.tid < len(self.tris) and self.tris[tri.tid] is tri and tri.tid in self.graph

    def add_triangle(self, a: Pt, b: Pt, c: Pt) -> Triangle:
        # тримаємо орієнтацію проти годинникової (content > 0)
        if content((a, b, c)) < 0:
            b, c = c, b
        tri = Triangle((a, b, c), tid=len(self.tris))
        self.tris.append(tri)
        self.graph.add(tri.tid)
        return tri

    def remove_triangle(self, tri: Triangle) -> None:
        self.graph.remove(tri.tid)

    def link(self, a: Triangle, b: Triangle) -> None:
        self.graph.connect(a.tid, b.tid)

    def neighbors(self, tri: Triangle) -> List[Triangle]:
        return [self.tris[n] for n in self.graph.neighbors(tri.tid)]


class DelaunayTriangulation:
    """
    Інкрементальна 2D Делоне-тріангуляція (Bowyer–Watson через «порожнину»).
    Усі точки мають лежати строго всередині початкового трикутника;
    його три кути лишаються вершинами сітки назавжди.
    Змінюється тільки через insert(); потокобезпеки немає.
    """
    def __init__(self, bounding: Iterable, max_walk_steps: Optional[int] = None):
        a, b, c = (as_pt(v) for v in bounding)
        if a.dimension != 2 or b.dimension != 2 or c.dimension != 2:
            raise DimensionMismatch("bounding triangle must be 2D")
        if content((a, b, c)) == 0.0:
            raise DegenerateSimplexError("bounding triangle has zero area")
        self.mesh = TriMesh()
        self.initial_triangle = self.mesh.add_triangle(a, b, c)
        self.max_walk_steps = max_walk_steps
        self._seed_tid: int = self.initial_triangle.tid  # останній створений, для locate-walk
        self.stats: Dict[str, int] = {"inserted": 0, "duplicates": 0, "walk_steps": 0, "fallback_scans": 0}

    # ---- Set-подібний інтерфейс ----
    def __len__(self) -> int:
        return len(self.mesh)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.mesh)

    def __contains__(self, tri: object) -> bool:
        return isinstance(tri, Triangle) and self.mesh.alive(tri)

    def __repr__(self) -> str:
        return f"DelaunayTriangulation with {len(self)} triangles"

    @property
    def corners(self) -> Tuple[Pt, Pt, Pt]:
        return self.initial_triangle.vertices

    def vertices(self) -> Set[Pt]:
        """Усі вершини живих трикутників (разом із кутами)."""
        return {v for t in self for v in t}

    def neighbors(self, tri: Triangle) -> List[Triangle]:
        return self.mesh.neighbors(tri)

    # ---- вставка ----
    def insert(self, site) -> None:
        """
        Вставити нову вершину. Якщо вона вже є в тріангуляції, нічого не відбувається.
        OutOfBoundsError - точка поза початковим трикутником (сітку не змінено).
        """
        site = as_pt(site)
        if site.dimension != 2:
            raise DimensionMismatch(f"expected a 2D site, got {site}")

        # 1) locate
        tri = self.locate(site)
        if tri is None:
            raise OutOfBoundsError(f"no containing triangle for {site}")
        if site in tri:
            self.stats["duplicates"] += 1
            logger.debug("site already present", site=site.coords)
            return

        # 2) порожнина (граф ще не змінено)
        cavity = self.get_cavity(site, tri)
        if any(site in t for t in cavity):
            # locate повернув сусіда вершини через допуск у relation()
            self.stats["duplicates"] += 1
            logger.debug("site already present", site=site.coords)
            return
        if not cavity:
            raise DegenerateSimplexError(f"site {site} lies outside every circumcircle around {tri!r}")

        # 3) перебудова
        new_tri = self._update(site, cavity)

        # 4) оновити seed для локалізації наступної точки
        self._seed_tid = new_tri.tid
        self.stats["inserted"] += 1
        logger.debug("site inserted", site=site.coords, cavity=len(cavity), triangles=len(self))

    def insert_all(self, points: Iterable, randomize: bool = False) -> None:
        pts = [as_pt(p) for p in points]
        if randomize:
            shuffle(pts)
        for p in pts:
            self.insert(p)

    def get_cavity(self, site: Pt, tri: Triangle) -> List[Triangle]:
        """
        Усі трикутники, в описаному колі яких (або на ньому) лежить site.
        Обхід від tri; далі поширюємось лише з тих, що потрапили в порожнину.
        Якщо site поза описаним колом самого tri (locate з допуском), стартуємо
        з найближчого по графу трикутника, чиє коло містить site.
        """
        seed = self._conflict_seed(site, tri)
        if seed is None:
            return []
        cavity: List[Triangle] = []
        stack = [seed]
        marked = {seed.tid}
        while stack:
            cur = stack.pop()
            if vs_circumcircle(site, cur.simplex) == 1:
                continue  # site зовні - не в порожнині
            cavity.append(cur)
            for nb in self.mesh.neighbors(cur):
                if nb.tid not in marked:
                    marked.add(nb.tid)
                    stack.append(nb)
        return cavity

    def _conflict_seed(self, site: Pt, tri: Triangle) -> Optional[Triangle]:
        """BFS по графу від tri до першого трикутника, в описаному колі якого лежить site."""
        queue = deque([tri])
        seen = {tri.tid}
        while queue:
            cur = queue.popleft()
            if vs_circumcircle(site, cur.simplex) != 1:
                if cur is not tri:
                    logger.debug("cavity seed moved", site=site.coords, located=tri.tid, seed=cur.tid)
                return cur
            for nb in self.mesh.neighbors(cur):
                if nb.tid not in seen:
                    seen.add(nb.tid)
                    queue.append(nb)
        return None

    def _update(self, site: Pt, cavity: List[Triangle]) -> Triangle:
        """Видалити порожнину й заповнити її віялом нових трикутників навколо site."""
        # межові ребра: спільне ребро двох трикутників порожнини скасовується
        boundary: Dict[Facet, Tuple[Pt, Pt]] = {}
        around: Dict[int, Triangle] = {}
        for t in cavity:
            for nb in self.mesh.neighbors(t):
                around[nb.tid] = nb
            for v in t:
                facet = t.facet_opposite(v)
                if facet in boundary:
                    del boundary[facet]
                else:
                    boundary[facet] = tuple(u for u in t if u != v)
        for t in cavity:
            around.pop(t.tid, None)  # лишаються тільки зовнішні сусіди

        # перевірка до будь-яких змін графа
        for a, b in boundary.values():
            if content((a, b, site)) == 0.0:
                raise DegenerateSimplexError(f"site {site} is collinear with facet {a}-{b}")

        for t in cavity:
            self.mesh.remove_triangle(t)

        new_tris = [self.mesh.add_triangle(a, b, site) for a, b in boundary.values()]

        # зшити нові трикутники з сусідами та між собою
        candidates = list(around.values()) + new_tris
        for t in new_tris:
            for other in candidates:
                if other is not t and t.is_neighbor(other):
                    self.mesh.link(t, other)
        return new_tris[0]

    # ---- locate ----
    def locate(self, point) -> Optional[Triangle]:
        """
        Трикутник, що містить point (всередині або на межі); None, якщо такого немає.
        Спершу «walking» від останнього трикутника; при зациклюванні чи
        вичерпанні кроків - повний перебір.
        """
        point = as_pt(point)
        tri: Optional[Triangle] = None
        if self._seed_tid < len(self.mesh.tris):
            tri = self.mesh.tris[self._seed_tid]
            if not self.mesh.alive(tri):
                tri = None
        if tri is None:
            tri = next(iter(self.mesh), None)

        limit = self.max_walk_steps if self.max_walk_steps is not None else len(self.mesh)
        visited: Set[int] = set()
        steps = 0
        while tri is not None and tri.tid not in visited and steps <= limit:
            visited.add(tri.tid)
            steps += 1
            corner = is_outside(point, tri.simplex)
            if corner is None:
                self.stats["walk_steps"] += steps
                return tri
            tri = self.neighbor_opposite(corner, tri)
        self.stats["walk_steps"] += steps

        self.stats["fallback_scans"] += 1
        logger.warning("locate walk failed, checking all triangles", point=point.coords, steps=steps)
        for t in self:
            if is_outside(point, t.simplex) is None:
                return t
        logger.warning("no triangle holds point", point=point.coords)
        return None

    # ---- обхід ----
    def neighbor_opposite(self, vertex: Pt, tri: Triangle) -> Optional[Triangle]:
        """Сусід tri через ребро, протилежне vertex (None, якщо це межа)."""
        if vertex not in tri:
            raise ValueError(f"bad vertex {vertex}: not in {tri!r}")
        for nb in self.mesh.neighbors(tri):
            if vertex not in nb:
                return nb
        return None

    def surrounding_triangles(self, site: Pt, tri: Triangle) -> List[Triangle]:
        """
        Трикутники навколо site у циклічному порядку (cw чи ccw - не визначено).
        tri - стартовий трикутник, що містить site.
        """
        if site not in tri:
            raise ValueError(f"site {site} not in {tri!r}")
        out: List[Triangle] = []
        start = tri
        guide = tri.vertex_but_not(site)  # визначає напрям обходу
        while True:
            out.append(tri)
            if len(out) > len(self):
                raise DegenerateSimplexError(f"fan around {site} does not close")
            previous = tri
            nxt = self.neighbor_opposite(guide, tri)
            if nxt is None:
                raise DegenerateSimplexError(f"fan around {site} is open")
            tri = nxt
            guide = previous.vertex_but_not(site, guide)
            if tri is start:
                break
        return out

    # ---------- валідація сітки ----------
    def validate(self) -> dict:
        """
        Перевірка коректності сітки:
          - жоден живий трикутник не вироджений;
          - кожне ребро належить 1 (межа) або 2 живим трикутникам,
            а внутрішні ребра зшиті в графі;
          - сусідства в графі симетричні й відповідають спільним ребрам;
          - властивість порожнього описаного кола для всіх вершин.
        """
        alive = list(self)
        bad_orientation: list[int] = []
        bad_facet_multiplicity: list[tuple[FrozenSet[Pt], int]] = []
        bad_neighbors: list[tuple[int, int, str]] = []
        bad_neighbor_count: list[int] = []
        non_delaunay: list[tuple[int, Pt]] = []

        for t in alive:
            if content(t.simplex) == 0.0:
                bad_orientation.append(t.tid)

        facets: Dict[FrozenSet[Pt], List[Triangle]] = {}
        for t in alive:
            for v in t:
                facets.setdefault(t.facet_opposite(v), []).append(t)
        for key, inc in facets.items():
            if len(inc) not in (1, 2):
                bad_facet_multiplicity.append((key, len(inc)))
            elif len(inc) == 2:
                t1, t2 = inc
                if t2.tid not in self.mesh.graph.neighbors(t1.tid):
                    bad_neighbors.append((t1.tid, t2.tid, "missing_link"))

        for t in alive:
            nbs = self.mesh.graph.neighbors(t.tid)
            if len(nbs) > 3:
                bad_neighbor_count.append(t.tid)
            for n in nbs:
                other = self.mesh.tris[n]
                if t.tid not in self.mesh.graph.neighbors(n):
                    bad_neighbors.append((t.tid, n, "no_backlink"))
                if not t.is_neighbor(other):
                    bad_neighbors.append((t.tid, n, "not_adjacent"))

        sites = self.vertices()
        for t in alive:
            for s in sites:
                if s not in t and vs_circumcircle(s, t.simplex) < 0:
                    non_delaunay.append((t.tid, s))

        return {
            "tris_alive": len(alive),
            "bad_orientation": bad_orientation,                # вироджені трикутники
            "bad_facet_multiplicity": bad_facet_multiplicity,  # [(facet, count), ...]
            "bad_neighbors": bad_neighbors,                    # [(tid, nb, reason), ...]
            "bad_neighbor_count": bad_neighbor_count,          # tid з > 3 сусідами
            "non_delaunay": non_delaunay,                      # [(tid, site), ...]
        }
