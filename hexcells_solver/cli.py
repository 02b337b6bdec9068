"""Command line entry point: reads a level from standard input and solves it."""

from __future__ import annotations

import sys
from itertools import islice
from time import perf_counter

from hexcells_solver.defn import DefinitionError, parse_definition
from hexcells_solver.env import Env
from hexcells_solver.solver import solve

_LEVEL_LINES = 38
_TIME_BUDGET = 3600 * 24 * 30


class _UsageError(Exception):
    pass


def _solve_stdin() -> None:
    text = "".join(islice(sys.stdin, _LEVEL_LINES))
    defn = parse_definition(text)
    env = Env(_TIME_BUDGET)
    start = perf_counter()
    outcome = solve(env, defn, True)
    elapsed = perf_counter() - start
    print(outcome)
    print(repr(outcome))
    print(f"Solver Laufzeit: {elapsed:.3f} Sekunden")


def _run(argv: list[str]) -> None:
    if len(argv) != 1:
        raise _UsageError("Wrong number of arguments to program")
    if argv[0] == "-":
        _solve_stdin()
    elif argv[0] == "tsp":
        raise _UsageError("There seems to be nothing here?!")
    else:
        raise _UsageError("Wrong argument to program")


def main(argv: list[str] | None = None) -> int:
    """Run the solver; the single argument must be ``-`` to read the level from stdin."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        _run(list(argv))
    except (_UsageError, DefinitionError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())