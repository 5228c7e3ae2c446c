"""Tableau Simplex: auditable primal simplex for <=-form maximization LPs."""

from .errors import InvalidDimensionsError
from .lp import parse_natural_language_spec, solve, solve_problem
from .schemas import IterationRecord, SolveOptions, TableauProblem, TableauSolution

__all__ = [
    "InvalidDimensionsError",
    "IterationRecord",
    "SolveOptions",
    "TableauProblem",
    "TableauSolution",
    "parse_natural_language_spec",
    "solve",
    "solve_problem",
]
