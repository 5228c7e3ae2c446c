from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import Literal, List, Dict, Mapping, Optional, Tuple

ColumnKind = Literal["decision", "slack", "rhs", "z"]
SolveStatus = Literal["optimal", "unbounded", "iteration_limit"]

OPTIMAL_MESSAGE = "Optimal solution found."
UNBOUNDED_MESSAGE = "Unbounded solution."
ITERATION_LIMIT_MESSAGE = "Max iterations reached."
INITIAL_MESSAGE = "Initial Tableau"


class Column(BaseModel):
    """Tagged tableau column: decision x_k, slack s_k, RHS or Z."""

    model_config = ConfigDict(frozen=True)

    kind: ColumnKind
    index: Optional[int] = None

    @classmethod
    def decision(cls, k: int) -> "Column":
        return cls(kind="decision", index=k)

    @classmethod
    def slack(cls, k: int) -> "Column":
        return cls(kind="slack", index=k)

    @classmethod
    def rhs(cls) -> "Column":
        return cls(kind="rhs")

    @classmethod
    def z(cls) -> "Column":
        return cls(kind="z")

    @classmethod
    def parse(cls, label: str) -> "Column":
        if label == "RHS":
            return cls.rhs()
        if label == "Z":
            return cls.z()
        prefix, digits = label[:1], label[1:]
        if prefix in ("x", "s") and digits.isdigit() and int(digits) >= 1:
            return cls.decision(int(digits)) if prefix == "x" else cls.slack(int(digits))
        raise ValueError(f"Unknown column label '{label}'.")

    @property
    def label(self) -> str:
        if self.kind == "decision":
            return f"x{self.index}"
        if self.kind == "slack":
            return f"s{self.index}"
        return "RHS" if self.kind == "rhs" else "Z"

    @property
    def is_variable(self) -> bool:
        return self.kind in ("decision", "slack")


class TableauProblem(BaseModel):
    """Maximize c·x subject to Ax <= b, x >= 0. Missing cells read as zero."""

    num_variables: int
    num_constraints: int
    objective: List[Optional[float]] = Field(default_factory=list)
    constraints: List[Optional[List[Optional[float]]]] = Field(default_factory=list)
    rhs: List[Optional[float]] = Field(default_factory=list)
    variable_names: Optional[List[str]] = None

    @classmethod
    def default(cls) -> "TableauProblem":
        return cls(
            num_variables=2,
            num_constraints=1,
            objective=[0.0, 0.0],
            constraints=[[0.0, 0.0]],
            rhs=[0.0],
        )


class SolveOptions(BaseModel):
    max_iterations: int = 50
    tol: float = 1e-6
    strict_dimensions: bool = False
    record_trace: bool = True


class IterationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    iteration: int
    tableau: Tuple[Mapping[str, float], ...]
    pivot_row: Optional[int] = None
    pivot_column: Optional[str] = None
    message: str

    @field_validator("tableau", mode="after")
    @classmethod
    def _freeze_rows(cls, rows: Tuple[Mapping[str, float], ...]) -> Tuple[Mapping[str, float], ...]:
        return tuple(MappingProxyType(dict(row)) for row in rows)

    @field_serializer("tableau")
    def _dump_rows(self, rows: Tuple[Mapping[str, float], ...]) -> List[Dict[str, float]]:
        return [dict(row) for row in rows]


class TableauSolution(BaseModel):
    status: SolveStatus
    iterations: List[IterationRecord]
    solution: Optional[Dict[str, float]]
    objective_value: Optional[float]
    pivots: int
    headers: List[str]
    message: str = ""
