"""Sets of candidate colourings over a scope of cells, and their combination."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum

from hexcells_solver.coords import Coords, n_choose_k
from hexcells_solver.defn import Color

_U64_MAX = 2**64 - 1

CoordsSet = frozenset[Coords]


def _set_order(coords_set: Iterable[Coords]) -> tuple[Coords, ...]:
    return tuple(sorted(coords_set))


class Layout:
    """A family of solutions: each key (a set of cells) holds a fixed number of blues.

    ``{a}: 0`` means ``a`` is black, ``{c, d}: 1`` means exactly one of ``c, d`` is
    blue; a key of ``n`` cells holding ``k`` blues stands for ``n choose k``
    combinations. Keys never share a cell.
    """

    __slots__ = ("binomial_coefs",)

    def __init__(self, binomial_coefs: Mapping[Iterable[Coords], int]) -> None:
        coefs = {frozenset(key): count for key, count in binomial_coefs.items()}
        seen: set[Coords] = set()
        for coords_set, blue_count in coefs.items():
            if not coords_set:
                raise ValueError("empty coords_set in input layout")
            if not 0 <= blue_count <= len(coords_set):
                raise ValueError("blue count out of range in input layout")
            if not seen.isdisjoint(coords_set):
                raise ValueError("duplicate coords in input layout")
            seen.update(coords_set)
        self.binomial_coefs: dict[CoordsSet, int] = dict(
            sorted(coefs.items(), key=lambda item: _set_order(item[0]))
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return self.binomial_coefs == other.binomial_coefs

    def __hash__(self) -> int:
        return hash(frozenset(self.binomial_coefs.items()))

    def __repr__(self) -> str:
        parts = ", ".join(
            f"{list(_set_order(key))}: {count}" for key, count in self.binomial_coefs.items()
        )
        return f"Layout({{{parts}}})"

    def keys(self) -> frozenset[CoordsSet]:
        return frozenset(self.binomial_coefs)

    def solution_count(self) -> int | None:
        """Number of colourings described, or ``None`` if it overflows 64 bits."""
        total = 1
        for coords_set, blue_count in self.binomial_coefs.items():
            factor = n_choose_k(len(coords_set), blue_count)
            if factor is None:
                return None
            total *= factor
            if total > _U64_MAX:
                return None
        return total

    def aligned_with(self, other: Layout) -> bool:
        """Whether both layouts use the same keys over the cells they share."""
        left_key_of = {
            coords: key for key in self.binomial_coefs for coords in key
        }
        return all(
            left_key_of.get(coords, right_key) == right_key
            for right_key in other.binomial_coefs
            for coords in right_key
        )

    def _align_with_keys(self, right_keys: Iterable[CoordsSet]) -> list[Layout]:
        right_keys = sorted(right_keys, key=_set_order)
        result = [self]
        for left_key in self.binomial_coefs:
            for right_key in right_keys:
                inter = left_key & right_key
                if not inter or inter == left_key:
                    continue
                result = split_layouts(result, inter)
        return result

    def align(self, other: Layout) -> tuple[list[Layout], list[Layout]]:
        """Fork both layouts so that they share the same keys over their intersection.

        Each returned list describes exactly the solutions of its original layout,
        and all layouts within a list have the same keys.
        """
        left = self._align_with_keys(other.binomial_coefs)
        right = other._align_with_keys(self.binomial_coefs)
        assert _are_aligned(left, right)
        return left, right

    def merge(self, other: Layout) -> list[Layout]:
        """Layouts describing the solutions compatible with both layouts."""
        left_layouts, right_layouts = self.align(other)
        shared_keys = left_layouts[0].keys() & right_layouts[0].keys()
        merged = []
        for left in left_layouts:
            for right in right_layouts:
                if all(
                    left.binomial_coefs[key] == right.binomial_coefs[key]
                    for key in shared_keys
                ):
                    merged.append(Layout({**left.binomial_coefs, **right.binomial_coefs}))
        return merged


def _same_keys(layouts: list[Layout]) -> bool:
    return all(layout.keys() == layouts[0].keys() for layout in layouts[1:])


def _are_aligned(left: list[Layout], right: list[Layout]) -> bool:
    if not _same_keys(left) or not _same_keys(right):
        return False
    if left and right:
        return left[0].aligned_with(right[0])
    return True


def split_layouts(layouts: Iterable[Layout], new_key: Iterable[Coords]) -> list[Layout]:
    """Fork each layout so that ``new_key`` becomes one of its keys.

    ``new_key`` must lie within a single key of every layout.
    """
    new_key = frozenset(new_key)
    result = []
    for layout in layouts:
        old_key = next((key for key in layout.binomial_coefs if key >= new_key), None)
        if old_key is None:
            raise ValueError("Unexpected parameters to split")
        if old_key == new_key:
            result.append(layout)
            continue
        rest = old_key - new_key
        coefs = dict(layout.binomial_coefs)
        blue_count = coefs.pop(old_key)
        forks = [
            Layout({**coefs, new_key: i, rest: blue_count - i})
            for i in range(blue_count + 1)
            if i <= len(new_key) and blue_count - i <= len(rest)
        ]
        assert forks
        result.extend(forks)
    return result


class State(Enum):
    RUNNING = "running"
    STUCK = "stuck"
    EMPTY = "empty"


class Multiverse:
    """All the colourings a scope of cells may take, as a list of layouts.

    Layouts may overlap, so :meth:`solution_count_upper_bound` is only a bound.
    A multiverse with a scope and no layout has no solution (it is stuck).
    """

    __slots__ = ("scope", "layouts")

    def __init__(self, scope: Iterable[Coords], layouts: Iterable[Layout]) -> None:
        self.scope: CoordsSet = frozenset(scope)
        self.layouts: list[Layout] = list(layouts)
        for layout in self.layouts:
            covered = frozenset().union(*layout.binomial_coefs)
            if covered != self.scope:
                raise ValueError("layout does not cover the multiverse scope")

    def __repr__(self) -> str:
        return f"Multiverse(scope={list(_set_order(self.scope))}, layouts={self.layouts})"

    @classmethod
    def empty(cls) -> Multiverse:
        return cls(frozenset(), [])

    def solution_count_upper_bound(self) -> int | None:
        """Sum of the layouts' solution counts, or ``None`` on 64-bit overflow."""
        total = 0
        for layout in self.layouts:
            count = layout.solution_count()
            if count is None:
                return None
            total += count
            if total > _U64_MAX:
                return None
        return total

    def state(self) -> State:
        if not self.scope:
            if self.layouts:
                raise ValueError("Corrupted multiverse")
            return State.EMPTY
        return State.RUNNING if self.layouts else State.STUCK

    def invariants(self) -> dict[Coords, Color]:
        """Cells with the same colour in every solution; undefined when stuck."""
        blue_for_sure = set(self.scope)
        black_for_sure = set(self.scope)
        for layout in self.layouts:
            for coords_set, blue_count in layout.binomial_coefs.items():
                if blue_count == 0:
                    blue_for_sure -= coords_set
                elif blue_count == len(coords_set):
                    black_for_sure -= coords_set
                else:
                    blue_for_sure -= coords_set
                    black_for_sure -= coords_set
            if not blue_for_sure and not black_for_sure:
                break
        result = {coords: Color.BLUE for coords in blue_for_sure}
        result.update((coords, Color.BLACK) for coords in black_for_sure)
        return dict(sorted(result.items()))

    def merge(self, other: Multiverse) -> Multiverse:
        """The multiverse of solutions compatible with both multiverses."""
        scope = self.scope | other.scope
        left_state, right_state = self.state(), other.state()
        if left_state is State.EMPTY:
            return other
        if right_state is State.EMPTY:
            return self
        if State.STUCK in (left_state, right_state):
            return Multiverse(scope, [])
        layouts = [
            merged
            for left in self.layouts
            for right in other.layouts
            for merged in left.merge(right)
        ]
        return Multiverse(scope, layouts)

    def learn(self, coords: Coords, color: Color) -> Multiverse:
        """Drop ``coords`` from the scope, keeping only solutions where it has ``color``."""
        key = frozenset((coords,))
        if self.scope == key:
            return Multiverse.empty()
        if coords not in self.scope:
            raise ValueError(f"{coords} is not in the multiverse scope")
        wanted = 1 if color is Color.BLUE else 0
        kept = []
        for layout in split_layouts(self.layouts, key):
            if layout.binomial_coefs[key] == wanted:
                coefs = dict(layout.binomial_coefs)
                del coefs[key]
                kept.append(Layout(coefs))
        return Multiverse(self.scope - key, kept)