import logging
import numpy as np
from dataclasses import dataclass
from typing import Literal, Optional

from ..schemas import Column
from .tableau import Tableau

logger = logging.getLogger(__name__)

PivotStatus = Literal["pivot", "optimal", "unbounded"]


@dataclass(frozen=True)
class PivotDecision:
    status: PivotStatus
    row: Optional[int] = None
    column: Optional[Column] = None
    ratio: Optional[float] = None

    @property
    def message(self) -> str:
        if self.status != "pivot" or self.column is None or self.row is None:
            raise ValueError("Only a pivot decision carries a pivot message.")
        return f"Pivot Column: {self.column.label}, Pivot Row: {self.row + 1}"


def select_entering_column(tableau: Tableau) -> Optional[Column]:
    """Dantzig's rule: most negative objective coefficient, first one on ties."""

    objective = tableau.data[tableau.objective_row]
    entering: Optional[Column] = None
    most_negative = 0.0
    for idx, col in enumerate(tableau.columns):
        if not col.is_variable:
            continue
        if objective[idx] < most_negative:
            most_negative = float(objective[idx])
            entering = col
    return entering


def select_leaving_row(tableau: Tableau, column: Column) -> Optional[int]:
    """Minimum-ratio test over rows with a strictly positive entry; first row on ties."""

    col_idx = tableau.column_index(column)
    rhs_idx = tableau.column_index(Column.rhs())
    leaving: Optional[int] = None
    min_ratio = np.inf
    for i in range(tableau.num_constraints):
        coef = tableau.data[i, col_idx]
        if coef > 0:
            ratio = tableau.data[i, rhs_idx] / coef
            if ratio >= 0 and ratio < min_ratio:
                min_ratio = ratio
                leaving = i
    return leaving


def select_pivot(tableau: Tableau) -> PivotDecision:
    entering = select_entering_column(tableau)
    if entering is None:
        return PivotDecision(status="optimal")

    leaving = select_leaving_row(tableau, entering)
    if leaving is None:
        return PivotDecision(status="unbounded", column=entering)

    ratio = tableau.rhs(leaving) / tableau.value(leaving, entering)
    return PivotDecision(status="pivot", row=leaving, column=entering, ratio=ratio)


def reduce_tableau(tableau: Tableau, pivot_row: int, pivot_column: Column) -> Tableau:
    """
    Gauss-Jordan step around (pivot_row, pivot_column) on a fresh copy.
    Every non-pivot row i becomes row_i - row_i[pivot_column] * normalized_pivot_row,
    with the factor read from the tableau before any row was touched.
    """

    col_idx = tableau.column_index(pivot_column)
    source = tableau.data
    pivot_element = source[pivot_row, col_idx]
    if not pivot_element > 0:
        raise ValueError(
            f"Pivot element at row {pivot_row + 1}, column {pivot_column.label} "
            f"must be strictly positive (got {pivot_element})."
        )

    normalized = source[pivot_row] / pivot_element
    factors = source[:, col_idx].copy()
    factors[pivot_row] = 0.0

    data = source - np.outer(factors, normalized)
    data[pivot_row] = normalized

    logger.debug(
        "Reduced on %s row %d (pivot element %g)", pivot_column.label, pivot_row + 1, pivot_element
    )
    return Tableau(tableau.columns, data)
