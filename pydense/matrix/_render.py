"""
Text rendering for matrices.

Cells are tab-separated, one line per row, each line newline-terminated.
A single row is wrapped in parentheses; taller matrices get bracket
glyphs for the top, middle and bottom rows:

    ⎛   1.0   2.0   ⎞
    ⎜   3.0   4.0   ⎥
    ⎝   5.0   6.0   ⎠
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydense.matrix.matrix import Matrix


SINGLE_ROW = ('(', ')')
TOP_ROW = ('⎛', '⎞')
MIDDLE_ROW = ('⎜', '⎥')
BOTTOM_ROW = ('⎝', '⎠')


def _brackets(index: int, rows: int) -> tuple[str, str]:
    if rows == 1:
        return SINGLE_ROW
    if index == 0:
        return TOP_ROW
    if index == rows - 1:
        return BOTTOM_ROW
    return MIDDLE_ROW


def render(matrix: 'Matrix') -> str:
    """Multi-line bracketed representation; empty string for a matrix without rows."""
    lines = []
    for i, row in enumerate(matrix):
        left, right = _brackets(i, matrix.rows)
        contents = "\t".join(str(value) for value in row)
        lines.append(f"{left}\t{contents}\t{right}\n")
    return "".join(lines)
