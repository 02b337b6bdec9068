"""Cube coordinates on a flat-topped hexagon tiling, and a binomial helper."""

from __future__ import annotations

from dataclasses import dataclass

_I16_MIN = -(2**15)
_I16_MAX = 2**15 - 1
_U64_MAX = 2**64 - 1


@dataclass(frozen=True, order=True, slots=True)
class Coords:
    """A hexagon position: ``q`` grows to the right, ``r`` towards bottom-left.

    The third cube coordinate ``s`` is implied and equals ``-(q + r)``.
    """

    q: int
    r: int

    def __post_init__(self) -> None:
        for name, value in (("q", self.q), ("r", self.r)):
            if not _I16_MIN <= value <= _I16_MAX:
                raise ValueError(f"coordinate {name}={value} is out of range")

    @classmethod
    def of_cube(cls, q: int, r: int, s: int) -> Coords:
        """Build coordinates from all three cube components, which must sum to zero."""
        if q + r + s != 0:
            raise ValueError("Constructing an invalid Coords")
        return cls(q, r)

    @property
    def s(self) -> int:
        return -self.q - self.r

    def neighbors6(self) -> tuple[Coords, ...]:
        """The 6 direct neighbours, clockwise starting from the top."""
        q, r, s = self.q, self.r, self.s
        make = Coords.of_cube
        return (
            make(q, r - 1, s + 1),  # top
            make(q + 1, r - 1, s),  # top-right
            make(q + 1, r, s - 1),  # bottom-right
            make(q, r + 1, s - 1),  # bottom
            make(q - 1, r + 1, s),  # bottom-left
            make(q - 1, r, s + 1),  # top-left
        )

    def neighbors18(self) -> tuple[Coords, ...]:
        """The 18 closest neighbours (the two surrounding rings)."""
        q, r, s = self.q, self.r, self.s
        make = Coords.of_cube
        return self.neighbors6() + (
            make(q, r - 2, s + 2),
            make(q + 1, r - 2, s + 1),
            make(q + 2, r - 2, s),
            make(q + 2, r - 1, s - 1),
            make(q + 2, r, s - 2),
            make(q + 1, r + 1, s - 2),
            make(q, r + 2, s - 2),
            make(q - 1, r + 2, s - 1),
            make(q - 2, r + 2, s),
            make(q - 2, r + 1, s + 1),
            make(q - 2, r, s + 2),
            make(q - 1, r - 1, s + 2),
        )

    def __add__(self, other: Coords) -> Coords:
        if not isinstance(other, Coords):
            return NotImplemented
        return Coords.of_cube(self.q + other.q, self.r + other.r, self.s + other.s)

    def __sub__(self, other: Coords) -> Coords:
        if not isinstance(other, Coords):
            return NotImplemented
        return Coords.of_cube(self.q - other.q, self.r - other.r, self.s - other.s)


def n_choose_k(n: int, k: int) -> int | None:
    """Binomial coefficient, or ``None`` when it overflows an unsigned 64-bit integer."""
    if k > n:
        raise ValueError("Bad call to n_choose_k")
    k = min(k, n - k)
    result = 1
    for i in range(k):
        product = result * (n - i)
        if product > _U64_MAX:
            return None
        result = product // (i + 1)
    return result