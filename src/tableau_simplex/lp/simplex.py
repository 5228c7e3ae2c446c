import logging
from typing import Dict, List, Optional, Sequence

from ..schemas import (
    INITIAL_MESSAGE,
    ITERATION_LIMIT_MESSAGE,
    OPTIMAL_MESSAGE,
    UNBOUNDED_MESSAGE,
    Column,
    IterationRecord,
    SolveOptions,
    TableauProblem,
    TableauSolution,
)
from .pivot import reduce_tableau, select_pivot
from .tableau import Tableau, build_initial_tableau

logger = logging.getLogger(__name__)


class TraceRecorder:
    """Append-only log of tableau snapshots, numbered from 1."""

    def __init__(self, keep_intermediate: bool = True) -> None:
        self.keep_intermediate = keep_intermediate
        self._records: List[IterationRecord] = []

    def record(
        self,
        tableau: Tableau,
        message: str,
        pivot_row: Optional[int] = None,
        pivot_column: Optional[Column] = None,
    ) -> IterationRecord:
        entry = IterationRecord(
            iteration=len(self._records) + 1,
            tableau=tableau.copy().to_rows(),
            pivot_row=pivot_row,
            pivot_column=pivot_column.label if pivot_column is not None else None,
            message=message,
        )
        self._records.append(entry)
        return entry

    def record_pivot(self, tableau: Tableau, message: str, pivot_row: int, pivot_column: Column) -> None:
        if self.keep_intermediate:
            self.record(tableau, message, pivot_row, pivot_column)

    @property
    def records(self) -> List[IterationRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)


def extract_solution(tableau: Tableau, tol: float = 1e-6) -> Dict[str, float]:
    """
    Read the basic feasible solution off a reduced tableau.

    A variable is basic when its column over the constraint rows is a unit
    vector (one entry ~1, the rest ~0); its value is then that row's RHS.
    Every other variable is 0. Z is the objective row's RHS.
    """

    values: Dict[str, float] = {}
    m = tableau.num_constraints
    for col in tableau.variable_columns:
        col_idx = tableau.column_index(col)
        one_row: Optional[int] = None
        is_unit = True
        for i in range(m):
            entry = tableau.data[i, col_idx]
            if abs(entry - 1.0) < tol:
                if one_row is not None:
                    is_unit = False
                    break
                one_row = i
            elif abs(entry) > tol:
                is_unit = False
                break
        if is_unit and one_row is not None:
            values[col.label] = tableau.rhs(one_row)
        else:
            values[col.label] = 0.0
    values["Z"] = tableau.rhs(tableau.objective_row)
    return values


def solve_problem(problem: TableauProblem, options: SolveOptions | None = None) -> TableauSolution:
    """
    Maximize c·x s.t. Ax <= b, x >= 0 with the primal tableau simplex method.
    The returned trace holds the initial tableau, one entry per pivot (shown
    before the reduction is applied) and exactly one terminal entry.
    """

    opts = options or SolveOptions()
    tableau = build_initial_tableau(problem, strict=opts.strict_dimensions)
    trace = TraceRecorder(keep_intermediate=opts.record_trace)
    trace.record(tableau, INITIAL_MESSAGE)

    pivots = 0
    while pivots < opts.max_iterations:
        decision = select_pivot(tableau)

        if decision.status == "optimal":
            trace.record(tableau, OPTIMAL_MESSAGE)
            solution = extract_solution(tableau, opts.tol)
            logger.info("Optimal after %d pivots, Z = %g", pivots, solution["Z"])
            return TableauSolution(
                status="optimal",
                iterations=trace.records,
                solution=solution,
                objective_value=solution["Z"],
                pivots=pivots,
                headers=tableau.labels,
                message=OPTIMAL_MESSAGE,
            )

        if decision.status == "unbounded":
            trace.record(tableau, UNBOUNDED_MESSAGE)
            logger.info(
                "Unbounded after %d pivots: no positive entry in column %s",
                pivots,
                decision.column.label if decision.column is not None else "?",
            )
            return TableauSolution(
                status="unbounded",
                iterations=trace.records,
                solution=None,
                objective_value=None,
                pivots=pivots,
                headers=tableau.labels,
                message=UNBOUNDED_MESSAGE,
            )

        if decision.row is None or decision.column is None:
            raise ValueError(f"Pivot decision is missing its row or column: {decision}.")
        trace.record_pivot(tableau, decision.message, decision.row, decision.column)
        logger.debug("Pivot %d: %s (ratio %g)", pivots + 1, decision.message, decision.ratio)
        tableau = reduce_tableau(tableau, decision.row, decision.column)
        pivots += 1

    trace.record(tableau, ITERATION_LIMIT_MESSAGE)
    logger.warning("Stopped after %d pivots without reaching optimality.", pivots)
    return TableauSolution(
        status="iteration_limit",
        iterations=trace.records,
        solution=None,
        objective_value=None,
        pivots=pivots,
        headers=tableau.labels,
        message=ITERATION_LIMIT_MESSAGE,
    )


def solve(
    n: int,
    m: int,
    objective: Sequence[Optional[float]],
    constraints: Sequence[Optional[Sequence[Optional[float]]]],
    rhs: Sequence[Optional[float]],
    options: SolveOptions | None = None,
) -> TableauSolution:
    problem = TableauProblem(
        num_variables=n,
        num_constraints=m,
        objective=list(objective),
        constraints=[list(row) if row is not None else None for row in constraints],
        rhs=list(rhs),
    )
    return solve_problem(problem, options)
