import re
from collections import OrderedDict
from typing import Dict, List, Tuple

from ..schemas import TableauProblem

_CLAUSE_SPLIT = re.compile(r";|\band\b", re.IGNORECASE)
_COMPARATOR = re.compile(r"(<=|>=|==|=|<|>)")
_NONNEG_BOUND = re.compile(
    r"^([A-Za-z_][\w]*(?:\s*,\s*[A-Za-z_][\w]*)*)\s*>=\s*0+(?:\.0+)?$"
)
_TERM_PATTERN = re.compile(
    r"([+-]?\s*(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)?)\s*\*?\s*([A-Za-z_][\w]*)"
)
_NUMBER_PATTERN = re.compile(r"[+-]?\s*\d+(?:\.\d+)?")


def parse_natural_language_spec(spec: str) -> TableauProblem:
    """
    Small rule-based parser for maximization specs like:
      "maximize 3x1 + 5x2 subject to x1 + 2x2 <= 10, x1, x2 >= 0"
    Only <= constraints with non-negative right-hand sides are accepted;
    non-negativity clauses are implied by the tableau and dropped.
    """

    if not spec or not spec.strip():
        raise ValueError("Specification is empty.")

    normalized = " ".join(spec.replace("\n", " ").split())
    pieces = re.split(r"subject to|such that|s\.t\.", normalized, flags=re.IGNORECASE)
    objective_part = pieces[0].strip()
    constraints_part = pieces[1].strip() if len(pieces) > 1 else ""

    match = re.match(r"(maximize|minimize|max|min)\s*(.*)", objective_part, flags=re.IGNORECASE)
    if not match:
        raise ValueError("Objective must start with 'maximize'.")
    if match.group(1).lower().startswith("min"):
        raise ValueError("Only maximization problems are supported.")
    objective_expr_str = match.group(2).strip()
    if objective_expr_str.lower().startswith("z") and "=" in objective_expr_str:
        objective_expr_str = objective_expr_str.split("=", 1)[1].strip()
    if not objective_expr_str:
        raise ValueError("Objective expression is missing.")

    objective_coeffs = _parse_linear_expr(objective_expr_str)
    variable_names: "OrderedDict[str, None]" = OrderedDict((name, None) for name in objective_coeffs)

    rows: List[Dict[str, float]] = []
    rhs_values: List[float] = []
    for token in _split_clauses(constraints_part):
        if _NONNEG_BOUND.match(token):
            for var_name in [v.strip() for v in token.split(">=")[0].split(",") if v.strip()]:
                variable_names.setdefault(var_name, None)
            continue

        comp_match = _COMPARATOR.search(token)
        if not comp_match:
            raise ValueError(f"Could not parse constraint segment '{token}'.")
        cmp = comp_match.group(1)
        if cmp not in ("<=", "<"):
            raise ValueError(f"Only '<=' constraints are supported (got '{cmp}' in '{token}').")
        lhs_str = token[: comp_match.start()].strip()
        rhs_str = token[comp_match.end() :].strip()
        if not lhs_str or not rhs_str:
            raise ValueError(f"Incomplete constraint expression '{token}'.")
        try:
            rhs_value = float(rhs_str)
        except ValueError as exc:
            raise ValueError(f"Right-hand side '{rhs_str}' is not numeric.") from exc
        if rhs_value < 0:
            raise ValueError(f"Right-hand side of '{token}' must be non-negative.")

        coeffs = _parse_linear_expr(lhs_str)
        rows.append(coeffs)
        rhs_values.append(rhs_value)
        for name in coeffs:
            variable_names.setdefault(name, None)

    if not rows:
        raise ValueError("At least one '<=' constraint is required.")

    names = list(variable_names.keys())
    return TableauProblem(
        num_variables=len(names),
        num_constraints=len(rows),
        objective=[objective_coeffs.get(name, 0.0) for name in names],
        constraints=[[row.get(name, 0.0) for name in names] for row in rows],
        rhs=rhs_values,
        variable_names=names,
    )


def _split_clauses(text: str) -> List[str]:
    # "x1, x2 >= 0" is one clause: comma pieces are joined until a comparator shows up
    clauses: List[str] = []
    for chunk in _CLAUSE_SPLIT.split(text):
        pending: List[str] = []
        for piece in chunk.split(","):
            piece = piece.strip()
            if not piece:
                continue
            pending.append(piece)
            if _COMPARATOR.search(piece):
                clauses.append(", ".join(pending))
                pending = []
        if pending:
            clauses.append(", ".join(pending))
    return clauses


def _parse_linear_expr(expr_str: str) -> "OrderedDict[str, float]":
    coeffs: "OrderedDict[str, float]" = OrderedDict()
    spans: List[Tuple[int, int]] = []

    for match in _TERM_PATTERN.finditer(expr_str):
        coef_text = match.group(1).replace(" ", "")
        var_name = match.group(2)
        if coef_text in ("", "+"):
            coef = 1.0
        elif coef_text == "-":
            coef = -1.0
        else:
            coef = float(coef_text)
        coeffs[var_name] = coeffs.get(var_name, 0.0) + coef
        spans.append(match.span())

    remaining = list(expr_str)
    for start, end in spans:
        for idx in range(start, end):
            remaining[idx] = " "
    leftover = "".join(remaining)
    if _NUMBER_PATTERN.search(leftover):
        raise ValueError(f"Constant terms are not supported in '{expr_str}'.")

    return coeffs
