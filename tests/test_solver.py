import pytest

from hexcells_solver.coords import Coords
from hexcells_solver.defn import parse_definition
from hexcells_solver.env import Env
from hexcells_solver.solver import (
    Difficulty,
    DifficultyKind,
    Findings,
    Outcome,
    Status,
    difficulty_of_findings,
    solve,
)

HEADER = ["Hexcells level v1", "Test level", "Tester", "", ""]


def make_level(cells):
    rows = [
        "".join(cells.get((row, col), "..") for col in range(33)) for row in range(33)
    ]
    return "\n".join(HEADER + rows) + "\n"


def long_env():
    return Env(3600)


# Revealed black at Coords(1, 0), hidden blue at Coords(1, 1).
SIMPLE = make_level({(0, 1): "O.", (2, 1): "x."})
# Hidden blue and hidden black, no hints besides the global count.
AMBIGUOUS = make_level({(0, 1): "x.", (2, 1): "o."})
# Line at (1,0) over A=(1,1) blue and B=(1,2) black; hidden hint C=(2,0) next to A.
NEEDS_GLOBAL = make_level({(0, 1): "|+", (2, 1): "x.", (4, 1): "o.", (1, 2): "o+"})

A = Coords(1, 1)
B = Coords(1, 2)
C = Coords(2, 0)


def test_simple_level_is_solved_in_one_trivial_step():
    outcome = solve(long_env(), parse_definition(SIMPLE), False)
    assert outcome.status is Status.SOLVED
    assert outcome.findings == (
        Findings(Difficulty(DifficultyKind.LOCAL, 1), (Coords(1, 1),)),
    )
    assert str(outcome) == (
        "Solved steps:1 max-local-difficulty:Some(1) max-global-difficulty:None"
    )


def test_ambiguous_level_is_unsolvable():
    outcome = solve(long_env(), parse_definition(AMBIGUOUS), False)
    assert outcome.status is Status.UNSOLVABLE
    assert outcome.findings == ()
    assert str(outcome) == "Requires additional rules"


def test_global_constraint_step_then_local_steps():
    outcome = solve(long_env(), parse_definition(NEEDS_GLOBAL), False)
    assert outcome.status is Status.SOLVED
    cells = [f.cells for f in outcome.findings]
    assert cells == [(C,), (A,), (B,)]
    first = outcome.findings[0].difficulty
    assert first.kind is DifficultyKind.GLOBAL
    assert all(f.difficulty.kind is DifficultyKind.LOCAL for f in outcome.findings[1:])


def test_every_unknown_cell_is_found_exactly_once():
    defn = parse_definition(NEEDS_GLOBAL)
    outcome = solve(long_env(), defn, False)
    found = [c for f in outcome.findings for c in f.cells]
    hidden = [c for c, cell in defn.items() if getattr(cell, "revealed", True) is False]
    assert sorted(found) == sorted(hidden)


def test_zero_budget_times_out():
    outcome = solve(Env(0), parse_definition(NEEDS_GLOBAL), False)
    assert outcome == Outcome(Status.TIMEOUT)
    assert str(outcome) == "Timeout"


def test_verbose_prints_loop_progress(capsys):
    solve(long_env(), parse_definition(SIMPLE), True)
    out = capsys.readouterr().out
    assert out.startswith("Solver loop with visibles:1, unknown:1")


def test_quiet_prints_nothing(capsys):
    solve(long_env(), parse_definition(SIMPLE), False)
    assert capsys.readouterr().out == ""


def test_difficulty_of_no_findings():
    assert difficulty_of_findings([]) == (None, None)


def test_difficulty_of_mixed_findings():
    findings = [
        Findings(Difficulty(DifficultyKind.LOCAL, 1), (A,)),
        Findings(Difficulty(DifficultyKind.GLOBAL, 4), (B,)),
        Findings(Difficulty(DifficultyKind.LOCAL, 3), (C,)),
        Findings(Difficulty(DifficultyKind.GLOBAL, 2), (A,)),
    ]
    assert difficulty_of_findings(findings) == (3, 4)


@pytest.mark.parametrize(
    "kind, expected",
    [(DifficultyKind.LOCAL, (5, None)), (DifficultyKind.GLOBAL, (None, 5))],
)
def test_difficulty_of_single_kind(kind, expected):
    findings = [Findings(Difficulty(kind, 5), (A,))]
    assert difficulty_of_findings(findings) == expected


def test_outcome_string_uses_maxima():
    findings = (
        Findings(Difficulty(DifficultyKind.LOCAL, 2), (A,)),
        Findings(Difficulty(DifficultyKind.GLOBAL, 7), (B,)),
    )
    text = str(Outcome(Status.SOLVED, findings))
    assert text == "Solved steps:2 max-local-difficulty:Some(2) max-global-difficulty:Some(7)"