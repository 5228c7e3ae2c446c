from typing import List, Optional

from mcp.server.fastmcp import FastMCP
from .schemas import SolveOptions, TableauProblem
from .lp.simplex import solve, solve_problem
from .lp.parser import parse_natural_language_spec
from .lp.render import format_iterations, format_solution

mcp = FastMCP("Tableau Simplex")


def _error(exc: ValueError) -> dict:
    return {"status": "error", "message": str(exc), "field": getattr(exc, "field", None)}


@mcp.tool()
def solve_tableau(
    n: int,
    m: int,
    objective: List[Optional[float]],
    constraints: List[List[Optional[float]]],
    rhs: List[Optional[float]],
    options: SolveOptions | None = None,
) -> dict:
    "Maximize c·x s.t. Ax <= b, x >= 0 and return every tableau plus the optimal values."
    try:
        return solve(n, m, objective, constraints, rhs, options).model_dump()
    except ValueError as exc:
        return _error(exc)


@mcp.tool()
def solve_tableau_problem(problem: TableauProblem, options: SolveOptions | None = None) -> dict:
    "Solve a structured TableauProblem and return the iteration trace and solution."
    try:
        return solve_problem(problem, options).model_dump()
    except ValueError as exc:
        return _error(exc)


@mcp.tool()
def parse_nl_to_tableau(spec: str) -> dict:
    "Parse 'maximize ... subject to ...' text into TableauProblem JSON."
    try:
        return parse_natural_language_spec(spec).model_dump()
    except ValueError as exc:
        return _error(exc)


@mcp.tool()
def render_iterations(problem: TableauProblem, options: SolveOptions | None = None) -> str:
    "Solve and return the tableau sequence as plain text."
    try:
        result = solve_problem(problem, options)
    except ValueError as exc:
        return f"Error: {exc}"
    return format_iterations(result.iterations) + "\n\n" + format_solution(result)


if __name__ == "__main__":
    # Allow: `uv run mcp dev src/tableau_simplex/server.py` or pack as stdio/http via CLI
    mcp.run()
