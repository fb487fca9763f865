from __future__ import annotations
from dataclasses import dataclass
from math import acos, sqrt
from typing import Iterable, Iterator, Sequence, Tuple

from .errors import DimensionMismatch

EPS = 1e-6  # відносний допуск для relation(): |value| <= EPS * |content|

@dataclass(frozen=True, init=False)
class Pt:
    """
    Незмінна n-вимірна точка (вектор).
    Рівність і хеш - покоординатні; усі операції повертають нові Pt.
    """
    coords: Tuple[float, ...]

    def __init__(self, *coords: float):
        object.__setattr__(self, "coords", tuple(float(c) for c in coords))

    def __iter__(self) -> Iterator[float]:
        return iter(self.coords)

    def __len__(self) -> int:
        return len(self.coords)

    def __getitem__(self, i: int) -> float:
        return self.coords[i]

    def __repr__(self) -> str:
        return "Pt(" + ", ".join(repr(c) for c in self.coords) + ")"

    @property
    def x(self) -> float:
        return self.coords[0]

    @property
    def y(self) -> float:
        return self.coords[1]

    @property
    def dimension(self) -> int:
        return len(self.coords)

    def coord(self, i: int) -> float:
        return self.coords[i]

    def dim_check(self, other: Pt) -> int:
        n = len(self.coords)
        if n != len(other.coords):
            raise DimensionMismatch(f"dimension mismatch: {n} vs {len(other.coords)}")
        return n

    # ---------- векторна алгебра ----------
    def add(self, other: Pt) -> Pt:
        self.dim_check(other)
        return Pt(*(a + b for a, b in zip(self.coords, other.coords)))

    def subtract(self, other: Pt) -> Pt:
        self.dim_check(other)
        return Pt(*(a - b for a, b in zip(self.coords, other.coords)))

    def dot(self, other: Pt) -> float:
        self.dim_check(other)
        return sum(a * b for a, b in zip(self.coords, other.coords))

    def magnitude(self) -> float:
        return sqrt(self.dot(self))

    def angle(self, other: Pt) -> float:
        """Кут (рад) між двома векторами."""
        cos = self.dot(other) / (self.magnitude() * other.magnitude())
        return acos(max(-1.0, min(1.0, cos)))  # округлення може вивести за [-1, 1]

    def extend(self, *coords: float) -> Pt:
        """Нова точка з дописаними праворуч координатами."""
        return Pt(*self.coords, *coords)

    def bisector(self, other: Pt) -> Pt:
        """
        Серединний перпендикуляр (гіперплощина) між self та other.
        Коефіцієнти (A, B, ..., D) рівняння Ax + By + ... + D = 0,
        тому результат має розмірність на 1 більшу.
        """
        self.dim_check(other)
        diff = self.subtract(other)
        total = self.add(other)
        return diff.extend(-diff.dot(total) / 2)

def centroid(points: Iterable[Pt]) -> Pt:
    acc: list[float] = []
    n = 0
    for p in points:
        if not acc:
            acc = [0.0] * p.dimension
        elif len(acc) != p.dimension:
            raise DimensionMismatch("centroid of points with different dimensions")
        for i, c in enumerate(p):
            acc[i] += c
        n += 1
    if n == 0:
        raise ValueError("empty set")
    inv = 1.0 / n
    return Pt(*(c * inv for c in acc))

def unique_points(points: Iterable[Sequence[float]], scale: float = 1e9) -> list[Pt]:
    """
    Груба дедуплікація з квантуванням (стабільніше для float).
    `scale=1e9` ≈ 1e-9 на координату. Порядок першої появи зберігається.
    """
    seen: dict[Tuple[int, ...], Pt] = {}
    for p in points:
        coords = tuple(float(c) for c in p)
        key = tuple(int(round(c * scale)) for c in coords)
        if key not in seen:
            seen[key] = Pt(*coords)
    return list(seen.values())
