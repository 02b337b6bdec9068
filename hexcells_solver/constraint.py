"""Game hints turned into multiverses ready for solving: lines, 6-zones and 18-zones."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from itertools import combinations

from hexcells_solver.coords import Coords
from hexcells_solver.defn import Cell, Color, Modifier, Orientation, color_of_cell
from hexcells_solver.multiverse import Layout, Multiverse

_RING_SIZE = 6
# Longer than the longest diagonal of a 33x33 grid.
_LINE_REACH = 33

_LINE_STEPS = {
    Orientation.BOTTOM: (0, 1, -1),
    Orientation.BOTTOM_RIGHT: (1, 0, -1),
    Orientation.BOTTOM_LEFT: (-1, 1, 0),
}


def distribute_anywhere(scope: Iterable[Coords], blue_count: int) -> Multiverse:
    """A single layout: ``blue_count`` blues anywhere among ``scope``."""
    scope = list(scope)
    if not scope:
        if blue_count != 0:
            raise ValueError("blues cannot be placed in an empty scope")
        return Multiverse.empty()
    if blue_count > len(scope):
        raise ValueError("more blues than cells in scope")
    scope_set = frozenset(scope)
    return Multiverse(scope_set, [Layout({scope_set: blue_count})])


def distribute_together(scope: Sequence[Coords], blue_count: int) -> Multiverse:
    """One layout per placement of ``blue_count`` consecutive blues along ``scope``."""
    scope = list(scope)
    if not scope:
        raise ValueError("scope cannot be empty")
    if blue_count > len(scope):
        raise ValueError("more blues than cells in scope")
    if blue_count in (0, len(scope)):
        # Every start position would give the same layout.
        starts = 1
    else:
        starts = len(scope) - blue_count + 1
    layouts = []
    for start in range(starts):
        blues = frozenset(scope[start : start + blue_count])
        blacks = frozenset(scope) - blues
        coefs = {}
        if blues:
            coefs[blues] = blue_count
        if blacks:
            coefs[blacks] = 0
        layouts.append(Layout(coefs))
    return Multiverse(frozenset(scope), layouts)


def distribute_separated(scope: Sequence[Coords], blue_count: int) -> Multiverse:
    """Layouts for blues that are not all consecutive along ``scope``.

    Each layout pins one black pivot with blues on both sides, so layouts may
    describe overlapping solutions.
    """
    scope = list(scope)
    if blue_count < 2:
        raise ValueError("separated blues need at least 2 blues")
    if len(scope) < 3:
        raise ValueError("separated blues need at least 3 cells")
    if len(scope) <= blue_count:
        raise ValueError("separated blues need at least one black cell")
    layouts = []
    for pivot in range(1, len(scope) - 1):
        before = frozenset(scope[:pivot])
        after = frozenset(scope[pivot + 1 :])
        pivot_key = frozenset((scope[pivot],))
        for i in range(1, blue_count):
            j = blue_count - i
            if i > len(before) or j > len(after):
                continue
            layouts.append(Layout({before: i, pivot_key: 0, after: j}))
    return Multiverse(frozenset(scope), layouts)


def _is_contiguous(indices: Sequence[int]) -> bool:
    if not indices:
        raise ValueError("contiguity of an empty group is undefined")
    return max(indices) - min(indices) == len(indices) - 1


def _has_compatible_contiguity(
    blues: Sequence[int], blacks: Sequence[int], together: bool
) -> bool:
    grouped = _is_contiguous(blues) or _is_contiguous(blacks)
    return grouped if together else not grouped


def distribute_in_ring(
    ring: Sequence[tuple[Coords, bool]], blue_count: int, together: bool
) -> Multiverse:
    """One layout per placement of blues around a ring of 6 ``(coords, is_gap)`` slots.

    With ``together`` the blues form one run around the ring, otherwise they do not.
    Gaps are missing cells: they are never blue but still break a run.
    """
    ring = list(ring)
    if len(ring) != _RING_SIZE:
        raise ValueError(f"a ring has {_RING_SIZE} slots, got {len(ring)}")
    present = [coords for coords, is_gap in ring if not is_gap]
    if together:
        if blue_count <= 1 or blue_count == len(present):
            return distribute_anywhere(present, blue_count)
    elif blue_count < 2:
        raise ValueError("separated blues need at least 2 blues")
    layouts = []
    for blue_idxs in combinations(range(_RING_SIZE), blue_count):
        if any(ring[i][1] for i in blue_idxs):
            continue
        black_idxs = [i for i in range(_RING_SIZE) if i not in blue_idxs]
        if not _has_compatible_contiguity(blue_idxs, black_idxs, together):
            continue
        blues = frozenset(ring[i][0] for i in blue_idxs)
        blacks = frozenset(ring[i][0] for i in black_idxs if not ring[i][1])
        coefs = {blues: blue_count}
        if blacks:
            coefs[blacks] = 0
        layouts.append(Layout(coefs))
    if not layouts:
        raise ValueError("no arrangement of blues fits the ring")
    return Multiverse(frozenset(present), layouts)


def _colored_cells(
    defn: Mapping[Coords, Cell], cells: Iterable[Coords]
) -> tuple[list[Coords], int]:
    scope = []
    blue_count = 0
    for coords in cells:
        color = color_of_cell(defn.get(coords))
        if color is None:
            continue
        scope.append(coords)
        if color is Color.BLUE:
            blue_count += 1
    return scope, blue_count


def zone6(defn: Mapping[Coords, Cell], coords: Coords, modifier: Modifier) -> Multiverse:
    """The hint of a black cell counting blues among its 6 neighbours."""
    ring = []
    blue_count = 0
    for neighbor in coords.neighbors6():
        color = color_of_cell(defn.get(neighbor))
        ring.append((neighbor, color is None))
        if color is Color.BLUE:
            blue_count += 1
    if modifier is Modifier.ANYWHERE:
        return distribute_anywhere(
            [c for c, is_gap in ring if not is_gap], blue_count
        )
    return distribute_in_ring(ring, blue_count, modifier is Modifier.TOGETHER)


def zone18(defn: Mapping[Coords, Cell], coords: Coords) -> Multiverse:
    """The hint of a blue cell counting blues among its 18 closest neighbours."""
    scope, blue_count = _colored_cells(defn, coords.neighbors18())
    return distribute_anywhere(scope, blue_count)


def line(
    defn: Mapping[Coords, Cell],
    coords: Coords,
    orientation: Orientation,
    modifier: Modifier,
) -> Multiverse:
    """The hint of a column counting blues from ``coords`` towards ``orientation``."""
    dq, dr, ds = _LINE_STEPS[orientation]
    q, r, s = coords.q, coords.r, coords.s
    cells = (
        Coords.of_cube(q + dq * i, r + dr * i, s + ds * i) for i in range(_LINE_REACH)
    )
    scope, blue_count = _colored_cells(defn, cells)
    if modifier is Modifier.ANYWHERE:
        return distribute_anywhere(scope, blue_count)
    if modifier is Modifier.TOGETHER:
        return distribute_together(scope, blue_count)
    return distribute_separated(scope, blue_count)


def global_blue_count(defn: Mapping[Coords, Cell]) -> Multiverse:
    """The total number of blues over the whole level."""
    scope, blue_count = _colored_cells(defn, defn)
    return distribute_anywhere(scope, blue_count)