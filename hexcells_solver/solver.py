"""The step-by-step solver: uncovers cells the way a player would, tracking difficulty."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations

from hexcells_solver import constraint
from hexcells_solver.coords import Coords
from hexcells_solver.defn import Cell, Color, Line, Zone0, Zone6, Zone18, color_of_cell
from hexcells_solver.env import Env, SolverTimeout
from hexcells_solver.multiverse import Multiverse, State

# Virtual position of the constraint on the total number of blues.
_GLOBAL_KEY = Coords(999, 0)


class DifficultyKind(Enum):
    LOCAL = "local"
    GLOBAL = "global"


@dataclass(frozen=True)
class Difficulty:
    """How hard a step is: the number of constraints a player must combine."""

    kind: DifficultyKind
    level: int


@dataclass(frozen=True)
class Findings:
    """Cells uncovered together in one solver step."""

    difficulty: Difficulty
    cells: tuple[Coords, ...]


class Status(Enum):
    TIMEOUT = "timeout"
    UNSOLVABLE = "unsolvable"
    SOLVED = "solved"


def _format_optional(value: int | None) -> str:
    return "None" if value is None else f"Some({value})"


def difficulty_of_findings(findings: Iterable[Findings]) -> tuple[int | None, int | None]:
    """The highest local and highest global difficulty among ``findings``."""
    local = [f.difficulty.level for f in findings if f.difficulty.kind is DifficultyKind.LOCAL]
    global_ = [
        f.difficulty.level for f in findings if f.difficulty.kind is DifficultyKind.GLOBAL
    ] if not isinstance(findings, Iterable) or True else []
    return (max(local, default=None), max(global_, default=None))


@dataclass(frozen=True)
class Outcome:
    """Result of a solver run; ``findings`` holds the steps when solved."""

    status: Status
    findings: tuple[Findings, ...] = field(default=())

    def __str__(self) -> str:
        if self.status is Status.UNSOLVABLE:
            return "Requires additional rules"
        if self.status is Status.TIMEOUT:
            return "Timeout"
        max_local, max_global = difficulty_of_findings(self.findings)
        return (
            f"Solved steps:{len(self.findings)} "
            f"max-local-difficulty:{_format_optional(max_local)} "
            f"max-global-difficulty:{_format_optional(max_global)}"
        )


class _Progress:
    """Known and unknown cells; finished when nothing is unknown."""

    def __init__(self, defn: Mapping[Coords, Cell]) -> None:
        self.blues: set[Coords] = set()
        self.blacks: set[Coords] = set()
        self.unknowns: set[Coords] = set()
        for coords, cell in defn.items():
            if isinstance(cell, Line):
                continue
            if isinstance(cell, Zone0):
                color = cell.color
            elif isinstance(cell, Zone6):
                color = Color.BLACK
            elif isinstance(cell, Zone18):
                color = Color.BLUE
            else:
                continue
            if not cell.revealed:
                self.unknowns.add(coords)
            elif color is Color.BLACK:
                self.blacks.add(coords)
            else:
                self.blues.add(coords)

    def is_solved(self) -> bool:
        return not self.unknowns

    def update(self, findings: Mapping[Coords, Color]) -> None:
        for coords, color in findings.items():
            self.unknowns.discard(coords)
            (self.blacks if color is Color.BLACK else self.blues).add(coords)


def _set_order(keys: Iterable[Coords]) -> tuple[Coords, ...]:
    return tuple(sorted(keys))


class _Constraints:
    """Hints split into hidden (not yet uncovered), visible and exhausted ones."""

    def __init__(self, defn: Mapping[Coords, Cell]) -> None:
        self.defn = defn
        self.hidden: dict[Coords, Multiverse] = {}
        self.visible: dict[Coords, Multiverse] = {}
        self.exhausted: set[Coords] = set()
        for coords, cell in sorted(defn.items(), key=lambda item: item[0]):
            if isinstance(cell, Line):
                self.visible[coords] = constraint.line(
                    defn, coords, cell.orientation, cell.modifier
                )
            elif isinstance(cell, Zone6):
                self.hidden[coords] = constraint.zone6(defn, coords, cell.modifier)
            elif isinstance(cell, Zone18):
                self.hidden[coords] = constraint.zone18(defn, coords)
        self.visible[_GLOBAL_KEY] = constraint.global_blue_count(defn)

    def reveal(self, visible_cells: set[Coords]) -> None:
        for key in sorted(self.hidden.keys() & visible_cells):
            self.visible[key] = self.hidden.pop(key)

    def narrow(self, visible_cells: set[Coords], progress: _Progress) -> None:
        for key, mv in list(self.visible.items()):
            inter = mv.scope & visible_cells
            if not inter:
                continue
            for coords in sorted(inter & progress.blues):
                mv = mv.learn(coords, Color.BLUE)
            for coords in sorted(inter & progress.blacks):
                mv = mv.learn(coords, Color.BLACK)
            self.visible[key] = mv

    def gc(self) -> None:
        for key in sorted(self.visible):
            state = self.visible[key].state()
            if state is State.STUCK:
                raise ValueError("The grid is bugged and has no solutions")
            if state is State.EMPTY:
                del self.visible[key]
                self.exhausted.add(key)

    def is_solved(self) -> bool:
        return not self.visible and not self.hidden

    def _collect(
        self, multiverses: Iterable[Multiverse], into: dict[Coords, Color]
    ) -> dict[Coords, Color]:
        for mv in multiverses:
            for coords, color in mv.invariants().items():
                assert into.get(coords, color) is color
                assert color_of_cell(self.defn[coords]) is color
                into[coords] = color
        return into

    def trivial_invariants(self) -> dict[Coords, Color]:
        return self._collect(self.visible.values(), {})

    def compound_invariants(self, env: Env) -> tuple[dict[Coords, Color], Difficulty]:
        keys = sorted(k for k in self.visible if k != _GLOBAL_KEY)
        connections: dict[Coords, set[Coords]] = {k: set() for k in keys}
        for k0, k1 in combinations(keys, 2):
            if not self.visible[k0].scope.isdisjoint(self.visible[k1].scope):
                connections[k0].add(k1)
                connections[k1].add(k0)

        groups: dict[frozenset[Coords], Multiverse] = {
            frozenset((k,)): self.visible[k] for k in keys
        }
        invariants: dict[Coords, Color] = {}
        level = 2
        if not groups:
            return invariants, Difficulty(DifficultyKind.LOCAL, level)

        while True:
            # Each round grows every group by one neighbouring constraint.
            for old_keys in sorted(groups, key=_set_order):
                env.check_timeout()
                old_mv = groups.pop(old_keys)
                neighbors = {
                    k for member in old_keys for k in connections[member] if k not in old_keys
                }
                for new_key in sorted(neighbors):
                    new_keys = old_keys | {new_key}
                    if new_keys in groups:
                        continue
                    groups[new_keys] = old_mv.merge(self.visible[new_key])

            self._collect(groups.values(), invariants)
            if invariants or not groups:
                break
            level += 1
        return invariants, Difficulty(DifficultyKind.LOCAL, level)

    def global_invariants(self, env: Env) -> dict[Coords, Color]:
        # The global constraint sorts last; folding it in first keeps merges small.
        mv = Multiverse.empty()
        for key in sorted(self.visible, reverse=True):
            env.check_timeout()
            mv = mv.merge(self.visible[key])
        return self._collect([mv], {})


def solve(env: Env, defn: Mapping[Coords, Cell], verbose: bool = False) -> Outcome:
    """Uncover the level step by step, recording what each step finds."""
    progress = _Progress(defn)
    constraints = _Constraints(defn)
    history: list[Findings] = []
    while True:
        visible_cells = progress.blacks | progress.blues
        if verbose:
            print(
                f"Solver loop with visibles:{len(visible_cells)}, "
                f"unknown:{len(progress.unknowns)}"
            )

        constraints.reveal(visible_cells)
        constraints.narrow(visible_cells, progress)
        constraints.gc()

        if progress.is_solved():
            assert constraints.is_solved()
            break
        assert not constraints.is_solved()

        invariants = constraints.trivial_invariants()
        difficulty = Difficulty(DifficultyKind.LOCAL, 1)

        if not invariants:
            env.reset_timer()
            try:
                invariants, difficulty = constraints.compound_invariants(env)
            except SolverTimeout:
                return Outcome(Status.TIMEOUT)

        if not invariants:
            difficulty = Difficulty(DifficultyKind.GLOBAL, len(constraints.visible))
            try:
                invariants = constraints.global_invariants(env)
            except SolverTimeout:
                return Outcome(Status.TIMEOUT)
            if not invariants:
                return Outcome(Status.UNSOLVABLE)

        history.append(Findings(difficulty, tuple(sorted(invariants))))
        progress.update(invariants)
    return Outcome(Status.SOLVED, tuple(history))