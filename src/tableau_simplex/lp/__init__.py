"""Tableau simplex core: builder, pivoting, trace and extraction."""

from .simplex import solve, solve_problem
from .parser import parse_natural_language_spec

__all__ = ["solve", "solve_problem", "parse_natural_language_spec"]
