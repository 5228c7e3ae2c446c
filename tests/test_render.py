from tableau_simplex.lp.render import format_iteration, format_solution, format_tableau
from tableau_simplex.lp.simplex import solve


def test_format_tableau_lists_headers_once():
    rows = [
        {"x1": 1.0, "s1": 1.0, "RHS": 4.0, "Z": 0.0},
        {"x1": -3.0, "s1": 0.0, "RHS": 0.0, "Z": 1.0},
    ]
    text = format_tableau(rows)
    lines = text.splitlines()

    assert len(lines) == 3
    assert lines[0].split() == ["x1", "s1", "RHS", "Z"]
    assert lines[1].split() == ["R1", "1", "1", "4", "0"]
    assert lines[2].split() == ["Obj", "-3", "0", "0", "1"]


def test_format_marks_pivot():
    result = solve(2, 1, [3, 5], [[1, 2]], [10])
    text = format_iteration(result.iterations[1])

    assert text.startswith("Iteration 2: Pivot Column: x2, Pivot Row: 1")
    assert "[x2]" in text
    assert "R1 *" in text


def test_format_solution():
    optimal = solve(1, 1, [2], [[2]], [6])
    unbounded = solve(1, 1, [1], [[0]], [5])

    assert format_solution(optimal) == "Optimal values: x1 = 3, s1 = 0, Z = 6"
    assert format_solution(unbounded) == "Unbounded solution."


def test_format_empty_tableau():
    assert format_tableau([]) == ""
