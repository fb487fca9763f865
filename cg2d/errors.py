# cg2d/errors.py
from __future__ import annotations


class DimensionMismatch(ValueError):
    """Операнди різної розмірності (помилка виклику)."""


class DegenerateSimplexError(ValueError):
    """Вироджена матриця/симплекс: неправильна форма, колінеарні вершини тощо."""


class OutOfBoundsError(ValueError):
    """Точка не лежить у жодному трикутнику (обмежувальний трикутник замалий)."""
