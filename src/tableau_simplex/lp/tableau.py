import logging
import math
import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..errors import InvalidDimensionsError
from ..schemas import Column, TableauProblem

logger = logging.getLogger(__name__)

ColumnRef = Union[Column, str]


class Tableau:
    """
    Dense simplex tableau: a fixed, ordered column schema over a float matrix.
    Rows 0..m-1 are constraints, the last row is the objective row.
    """

    def __init__(self, columns: Sequence[Column], data: np.ndarray) -> None:
        if data.ndim != 2 or data.shape[1] != len(columns):
            raise ValueError(
                f"Tableau data shape {data.shape} does not match {len(columns)} columns."
            )
        self.columns: Tuple[Column, ...] = tuple(columns)
        self.data = data
        self._positions: Dict[Column, int] = {col: idx for idx, col in enumerate(self.columns)}

    @property
    def num_rows(self) -> int:
        return self.data.shape[0]

    @property
    def num_constraints(self) -> int:
        return self.data.shape[0] - 1

    @property
    def objective_row(self) -> int:
        return self.data.shape[0] - 1

    @property
    def labels(self) -> List[str]:
        return [col.label for col in self.columns]

    @property
    def variable_columns(self) -> List[Column]:
        return [col for col in self.columns if col.is_variable]

    def column_index(self, column: ColumnRef) -> int:
        key = Column.parse(column) if isinstance(column, str) else column
        try:
            return self._positions[key]
        except KeyError:
            raise ValueError(f"Column '{key.label}' is not part of this tableau.") from None

    def value(self, row: int, column: ColumnRef) -> float:
        return float(self.data[row, self.column_index(column)])

    def rhs(self, row: int) -> float:
        return self.value(row, Column.rhs())

    def row_dict(self, row: int) -> Dict[str, float]:
        return {col.label: float(self.data[row, idx]) for idx, col in enumerate(self.columns)}

    def to_rows(self) -> List[Dict[str, float]]:
        return [self.row_dict(i) for i in range(self.num_rows)]

    def copy(self) -> "Tableau":
        return Tableau(self.columns, self.data.copy())

    def __repr__(self) -> str:
        return f"Tableau(rows={self.num_rows}, columns={self.labels})"


def tableau_columns(num_variables: int, num_constraints: int) -> List[Column]:
    columns = [Column.decision(k) for k in range(1, num_variables + 1)]
    columns.extend(Column.slack(k) for k in range(1, num_constraints + 1))
    columns.append(Column.rhs())
    columns.append(Column.z())
    return columns


def build_initial_tableau(problem: TableauProblem, strict: bool = False) -> Tableau:
    """
    Build the starting tableau with the slack block as the initial basis.

    Constraint row i holds A[i], the i-th unit slack vector, b[i] and Z = 0.
    The objective row holds -c, zero slacks, RHS = 0 and Z = 1.
    """

    n = problem.num_variables
    m = problem.num_constraints
    _check_dimensions(problem, strict)

    columns = tableau_columns(n, m)
    rhs_idx = n + m
    z_idx = n + m + 1
    data = np.zeros((m + 1, len(columns)), dtype=float)

    for i in range(m):
        row = problem.constraints[i] if i < len(problem.constraints) else None
        for j in range(n):
            data[i, j] = _cell(row, j)
        data[i, n + i] = 1.0
        data[i, rhs_idx] = _cell(problem.rhs, i)

    for j in range(n):
        data[m, j] = -_cell(problem.objective, j)
    data[m, z_idx] = 1.0

    return Tableau(columns, data)


def _cell(values: Optional[Sequence[Optional[float]]], idx: int) -> float:
    if values is None or idx >= len(values):
        return 0.0
    value = values[idx]
    if value is None:
        return 0.0
    value = float(value)
    if math.isnan(value):
        return 0.0
    return value


def _check_dimensions(problem: TableauProblem, strict: bool) -> None:
    n = problem.num_variables
    m = problem.num_constraints
    if n < 1:
        raise InvalidDimensionsError(
            f"Problem needs at least one decision variable (got {n}).", field="num_variables"
        )
    if m < 1:
        raise InvalidDimensionsError(
            f"Problem needs at least one constraint (got {m}).", field="num_constraints"
        )

    mismatches: List[Tuple[str, str]] = []
    if len(problem.objective) != n:
        mismatches.append(("objective", f"objective has {len(problem.objective)} entries, expected {n}"))
    if len(problem.rhs) != m:
        mismatches.append(("rhs", f"rhs has {len(problem.rhs)} entries, expected {m}"))
    if len(problem.constraints) != m:
        mismatches.append(
            ("constraints", f"constraints has {len(problem.constraints)} rows, expected {m}")
        )
    for i, row in enumerate(problem.constraints[:m]):
        width = 0 if row is None else len(row)
        if width != n:
            mismatches.append((f"constraints[{i}]", f"constraint row {i + 1} has {width} entries, expected {n}"))

    if not mismatches:
        return
    if strict:
        field, message = mismatches[0]
        raise InvalidDimensionsError(message[:1].upper() + message[1:] + ".", field=field)
    for _, message in mismatches:
        logger.warning("Padding/truncating input: %s", message)
