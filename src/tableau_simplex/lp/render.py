from typing import Iterable, Mapping, Optional, Sequence

from ..schemas import IterationRecord, TableauSolution


def _fmt(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_tableau(
    rows: Sequence[Mapping[str, float]],
    pivot_row: Optional[int] = None,
    pivot_column: Optional[str] = None,
    precision: int = 4,
) -> str:
    """Render rows as a fixed-width table; headers come from the first row's key order."""

    if not rows:
        return ""
    headers = list(rows[0].keys())
    last = len(rows) - 1
    labels = [f"R{i + 1}" if i < last else "Obj" for i in range(len(rows))]

    cells = [[_fmt(row[h], precision) for h in headers] for row in rows]
    header_cells = [f"[{h}]" if h == pivot_column else h for h in headers]
    widths = [
        max(len(header_cells[j]), *(len(r[j]) for r in cells)) for j in range(len(headers))
    ]
    label_width = max(len(label) for label in labels) + 2

    lines = [" " * label_width + "  ".join(h.rjust(w) for h, w in zip(header_cells, widths))]
    for i, row_cells in enumerate(cells):
        label = f"{labels[i]} *" if i == pivot_row else labels[i]
        lines.append(label.ljust(label_width) + "  ".join(c.rjust(w) for c, w in zip(row_cells, widths)))
    return "\n".join(lines)


def format_iteration(record: IterationRecord, precision: int = 4) -> str:
    title = f"Iteration {record.iteration}: {record.message}"
    table = format_tableau(record.tableau, record.pivot_row, record.pivot_column, precision)
    return f"{title}\n{table}"


def format_iterations(records: Iterable[IterationRecord], precision: int = 4) -> str:
    return "\n\n".join(format_iteration(record, precision) for record in records)


def format_solution(result: TableauSolution, precision: int = 4) -> str:
    if result.solution is None:
        return result.message
    parts = [f"{name} = {_fmt(value, precision)}" for name, value in result.solution.items()]
    return "Optimal values: " + ", ".join(parts)
