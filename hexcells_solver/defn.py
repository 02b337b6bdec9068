"""Parsing of the 38-line textual puzzle definition into a map of cells."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from hexcells_solver.coords import Coords

_GRID_SIZE = 33
_LINE_COUNT = 38
_HEADER_LINES = 5
_LINE_WIDTH = 2 * _GRID_SIZE


class DefinitionError(ValueError):
    """Raised when a puzzle definition cannot be parsed."""


class Modifier(Enum):
    ANYWHERE = "anywhere"
    TOGETHER = "together"
    SEPARATED = "separated"


class Orientation(Enum):
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM = "bottom"
    BOTTOM_LEFT = "bottom-left"


class Color(Enum):
    BLACK = "black"
    BLUE = "blue"


@dataclass(frozen=True)
class Zone0:
    """A cell without a number: plain black or blue."""

    revealed: bool
    color: Color


@dataclass(frozen=True)
class Zone6:
    """A black cell counting blues among its 6 neighbours."""

    revealed: bool
    modifier: Modifier


@dataclass(frozen=True)
class Zone18:
    """A blue cell counting blues among its 18 closest neighbours."""

    revealed: bool


@dataclass(frozen=True)
class Line:
    """A column hint counting blues along one direction."""

    orientation: Orientation
    modifier: Modifier


Cell = Union[Zone0, Zone6, Zone18, Line]
Defn = dict[Coords, Cell]

_LEFT_TOKENS = frozenset(".oOxX/\\|")
_MODIFIERS = {"+": Modifier.ANYWHERE, "c": Modifier.TOGETHER, "n": Modifier.SEPARATED}
_RIGHT_TOKENS = frozenset(_MODIFIERS) | {"."}
_ORIENTATIONS = {
    "/": Orientation.BOTTOM_LEFT,
    "\\": Orientation.BOTTOM_RIGHT,
    "|": Orientation.BOTTOM,
}


def _char_grid(text: str) -> list[list[tuple[str, str]]]:
    lines = text.strip().split("\n")
    if len(lines) != _LINE_COUNT:
        raise DefinitionError(
            f"Wrong number of line in strdefn. Got {len(lines)}, expected {_LINE_COUNT}"
        )
    grid = []
    for line in lines[_HEADER_LINES:]:
        line = line.strip()
        if len(line) != _LINE_WIDTH:
            raise DefinitionError(
                f"All lines should have len {_LINE_WIDTH}, found one with len {len(line)}"
            )
        grid.append([(line[j], line[j + 1]) for j in range(0, _LINE_WIDTH, 2)])
    return grid


def _parse_cell(left: str, right: str) -> Optional[Cell]:
    if left not in _LEFT_TOKENS:
        raise DefinitionError(f"Unknown left token:'{left}'")
    if right not in _RIGHT_TOKENS:
        raise DefinitionError(f"Unknown right token:'{right}'")
    match left:
        case ".":
            if right != ".":
                raise DefinitionError("Invalid pair A")
            return None
        case "o" | "O":
            revealed = left == "O"
            if right == ".":
                return Zone0(revealed, Color.BLACK)
            return Zone6(revealed, _MODIFIERS[right])
        case "x" | "X":
            revealed = left == "X"
            if right == ".":
                return Zone0(revealed, Color.BLUE)
            if right == "+":
                return Zone18(revealed)
            raise DefinitionError("Invalid pair C" if revealed else "Invalid pair B")
        case _:
            if right == ".":
                raise DefinitionError("Invalid pair D")
            return Line(_ORIENTATIONS[left], _MODIFIERS[right])


def _place(cells: list[tuple[int, int, Cell]], row_offset: int) -> Optional[Defn]:
    placed: Defn = {}
    for row, col, cell in cells:
        i = row + row_offset
        j = col
        if (i + j) % 2:
            return None
        coords = Coords.of_cube(j, (i - j) // 2, -(i + j) // 2)
        placed[coords] = cell
    return dict(sorted(placed.items(), key=lambda item: item[0]))


def parse_definition(text: str) -> Defn:
    """Parse a textual level into cells keyed by cube coordinates, in coordinate order."""
    cells = []
    for row, chunks in enumerate(_char_grid(text)):
        for col, (left, right) in enumerate(chunks):
            cell = _parse_cell(left, right)
            if cell is not None:
                cells.append((row, col, cell))
    for row_offset in (1, 0):
        defn = _place(cells, row_offset)
        if defn is not None:
            return defn
    raise DefinitionError(
        "Input grid is incompatible with cube coordinates. This happens because the level "
        "is made of at least 2 zones that are completely disjoint and that don't lie on "
        "the same hexagon tiling"
    )


def color_of_cell(cell: Optional[Cell]) -> Optional[Color]:
    """The colour a cell has once uncovered, or ``None`` for hints and missing cells."""
    if isinstance(cell, Zone0):
        return cell.color
    if isinstance(cell, Zone6):
        return Color.BLACK
    if isinstance(cell, Zone18):
        return Color.BLUE
    return None