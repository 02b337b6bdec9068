# hexcells-solver

A solver for Hexcells puzzle levels. It reads a level in the plain-text
format that the level-sharing community uses: 38 lines, made of a 5-line
header and then a 33×33 grid of two-character cells. It solves the level
the way a player would. At each step it uncovers only the cells whose
colour follows for certain from the visible clues. It also reports how
hard the hardest steps were.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the tests, install the
`test` extra (`pip install .[test]`) and run `pytest`.

## Command line

Pipe a level definition into the solver and pass `-` as the only
argument:

```
hexcells-solver - < level.txt
```

The command reads the first 38 lines of standard input. For each solving
loop it prints one progress line, for example
`Solver loop with visibles:10, unknown:25`. At the end it prints three
lines:

1. A summary such as
   `Solved steps:12 max-local-difficulty:Some(3) max-global-difficulty:None`.
2. The full `Outcome` object, with every step's findings.
3. The running time: `Solver Laufzeit: <seconds> Sekunden`.

Instead of a `Solved ...` line, the summary can be one of these:

- `Requires additional rules`: deduction from the clues alone cannot
  finish the level.
- `Timeout`: a step took longer than the time allowed. The command allows
  30 days.

If no argument is given, if more than one is given, or if the argument is
anything other than `-`, the command prints an `Error: ...` message to
standard error and exits with status 1. It does the same when the level
text is invalid.

## Difficulty

Each step of the solution has a `Difficulty` with a `kind`
(`DifficultyKind.LOCAL` or `DifficultyKind.GLOBAL`) and a `level`:

- **Local n**: the step needed at most `n` clues taken together. Level 1
  means a single clue was enough.
- **Global n**: the step had to combine the total blue count with all the
  visible clues. `n` counts those clues, and the total counts as one of
  them.

## Library use

```python
from hexcells_solver.defn import parse_definition
from hexcells_solver.env import Env
from hexcells_solver.solver import solve, difficulty_of_findings

with open("level.txt") as f:
    defn = parse_definition(f.read())

outcome = solve(Env(60), defn, False)
print(outcome)
print(outcome.status)
print(difficulty_of_findings(outcome.findings))
```

- `parse_definition(text)` returns a dict that maps `Coords` to cells
  (`Zone0`, `Zone6`, `Zone18` or `Line`). It raises `DefinitionError`, a
  subclass of `ValueError`, when the text is not a valid level.
- `Env(max_duration)` is a time budget in seconds. The solver restarts the
  clock at each step that needs more than one clue. When the budget runs
  out, `check_timeout()` raises `SolverTimeout`.
- `solve(env, defn, verbose=False)` returns an `Outcome`. The outcome has
  a `status` (`Status.SOLVED`, `Status.UNSOLVABLE` or `Status.TIMEOUT`).
  It also has `findings`, a tuple of `Findings`, one for each step. Each
  `Findings` has a `difficulty` and the `cells` uncovered in that step.
  With `verbose=True`, `solve` prints the progress lines shown above. If
  the level has no solution at all, `solve` raises `ValueError`.
- `difficulty_of_findings(findings)` returns the highest local level and
  the highest global level. Each is `None` when there are no steps of
  that kind.

The lower-level modules can also be used on their own:

- `hexcells_solver.coords`: `Coords`, which gives hexagonal cube
  coordinates with `neighbors6()` and `neighbors18()`, and
  `n_choose_k(n, k)`.
- `hexcells_solver.multiverse`: `Layout` and `Multiverse`, the
  solution-set algebra (`merge`, `learn`, `invariants`,
  `solution_count_upper_bound`).
- `hexcells_solver.constraint`: turns clues into multiverses (`zone6`,
  `zone18`, `line`, `global_blue_count`, and the `distribute_*` builders).

## Limits

The command only reads a level from standard input. It takes no file
path and has no other modes. It reports the steps of one deduction
order. It does not search for a shorter or different order in which to
uncover the cells.