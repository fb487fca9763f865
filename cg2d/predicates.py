# cg2d/predicates.py
from __future__ import annotations
from math import factorial
from typing import List, Optional, Sequence

from .errors import DegenerateSimplexError, DimensionMismatch
from .geom import Pt, EPS

Matrix = Sequence[Sequence[float]]

# ---------- інструменти для детермінанта ----------
def _det2(m: Matrix) -> float:
    return m[0][0] * m[1][1] - m[0][1] * m[1][0]

def _det3(m: Matrix) -> float:
    return (m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
            - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
            + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0]))

def _cofactor(m: Matrix, row: int, columns: List[bool]) -> float:
    """
    Детермінант підматриці, що починається з рядка `row`,
    по «активних» стовпцях (columns[c] == True). Розклад за рядком.
    Неефективно, але для розмірності 2–3 цього досить.
    """
    if row == len(m):
        return 1.0
    total = 0.0
    sign = 1.0
    for col, active in enumerate(columns):
        if not active:
            continue
        columns[col] = False
        total += sign * m[row][col] * _cofactor(m, row + 1, columns)
        columns[col] = True
        sign = -sign
    return total

def determinant(m: Matrix) -> float:
    n = len(m)
    if n == 0 or any(len(row) != n for row in m):
        raise DegenerateSimplexError("matrix is not square")
    if n == 1:
        return float(m[0][0])
    if n == 2:
        return _det2(m)
    if n == 3:
        return _det3(m)
    return _cofactor(m, 0, [True] * n)

def cross(m: Matrix) -> Pt:
    """
    Узагальнений векторний добуток рядків матриці (k рядків по k+1 елементів).
    Результат перпендикулярний до кожного рядка; компонента i:
    (-1)^i * det(матриця без стовпця i).
    """
    width = len(m) + 1
    if not m or any(len(row) != width for row in m):
        raise DegenerateSimplexError("matrix is wrong shape")
    out = []
    for i in range(width):
        minor = [[row[c] for c in range(width) if c != i] for row in m]
        d = determinant(minor)
        out.append(d if i % 2 == 0 else -d)
    return Pt(*out)

def _check_simplex(p: Pt, simplex: Sequence[Pt]) -> int:
    dim = len(simplex) - 1
    if p.dimension != dim:
        raise DimensionMismatch(f"point of dimension {p.dimension} vs simplex of {len(simplex)} vertices")
    for v in simplex:
        p.dim_check(v)
    return dim

# ---------- предикати ----------
def content(simplex: Sequence[Pt]) -> float:
    """Знаковий об'єм симплекса (у 2D - знакова площа трикутника)."""
    if not simplex:
        raise DegenerateSimplexError("empty simplex")
    dim = len(simplex) - 1
    for v in simplex:
        if v.dimension != dim:
            raise DimensionMismatch("simplex needs dimension + 1 vertices")
    return determinant([v.extend(1.0).coords for v in simplex]) / factorial(dim)

def relation(p: Pt, simplex: Sequence[Pt]) -> List[int]:
    """
    Відношення точки p до кожної грані симплекса; по одному знаку на вершину:
      -1  p по той самий бік грані, що й вершина;
       0  p на грані;
      +1  p по протилежний бік грані.

    У 2D рахуємо cross матриці
        1   1   1   1
        p0  a0  b0  c0
        p1  a1  b1  c1
    Перша компонента - знакова площа (a, b, c), решта - *мінус* знакові площі
    симплексів, де p підставлено замість кожної вершини.
    """
    dim = _check_simplex(p, simplex)
    rows = [[1.0] * (dim + 2)]
    for i in range(dim):
        rows.append([p.coords[i]] + [v.coords[i] for v in simplex])
    vector = cross(rows).coords
    vol = vector[0]
    tol = EPS * abs(vol)
    result = []
    for value in vector[1:]:
        if abs(value) <= tol:
            result.append(0)
        elif value < 0:
            result.append(-1)
        else:
            result.append(1)
    if vol < 0:
        result = [-r for r in result]
    elif vol == 0:
        result = [abs(r) for r in result]
    return result

def is_inside(p: Pt, simplex: Sequence[Pt]) -> bool:
    return all(r < 0 for r in relation(p, simplex))

def is_on(p: Pt, simplex: Sequence[Pt]) -> Optional[Pt]:
    """Вершина-«свідок» того, що p лежить на грані (None, якщо ні)."""
    witness = None
    for v, r in zip(simplex, relation(p, simplex)):
        if r > 0:
            return None
        if r == 0 and witness is None:
            witness = v
    return witness

def is_outside(p: Pt, simplex: Sequence[Pt]) -> Optional[Pt]:
    """Вершина, протилежна грані, через яку p «назовні» (None, якщо не назовні)."""
    for v, r in zip(simplex, relation(p, simplex)):
        if r > 0:
            return v
    return None

def vs_circumcircle(p: Pt, simplex: Sequence[Pt]) -> int:
    """
    Положення p відносно описаного кола симплекса:
    -1 всередині, 0 на колі, +1 зовні. Не залежить від орієнтації симплекса.
    """
    _check_simplex(p, simplex)
    rows = [v.extend(1.0, v.dot(v)).coords for v in simplex]
    rows.append(p.extend(1.0, p.dot(p)).coords)
    d = determinant(rows)
    result = -1 if d < 0 else (1 if d > 0 else 0)
    if content(simplex) < 0:
        result = -result
    return result

def circumcenter(simplex: Sequence[Pt]) -> Pt:
    dim = simplex[0].dimension if simplex else 0
    if len(simplex) - 1 != dim:
        raise DimensionMismatch("simplex needs dimension + 1 vertices")
    rows = [simplex[i].bisector(simplex[i + 1]).coords for i in range(dim)]
    h = cross(rows).coords  # центр в однорідних координатах
    last = h[dim]
    if last == 0.0:
        raise DegenerateSimplexError(f"no circumcenter for degenerate simplex {list(simplex)}")
    return Pt(*(h[i] / last for i in range(dim)))
