import pytest

from tableau_simplex.lp.parser import parse_natural_language_spec
from tableau_simplex.lp.simplex import solve_problem


def test_parser_outputs_expected_variables():
    spec = "maximize 3x + 2y subject to x + 2y <= 14, 3x - y <= 0, x <= 5, x,y >= 0"
    problem = parse_natural_language_spec(spec)

    assert problem.variable_names == ["x", "y"]
    assert problem.num_variables == 2
    assert problem.num_constraints == 3
    assert problem.objective == [3.0, 2.0]
    assert problem.constraints == [[1.0, 2.0], [3.0, -1.0], [1.0, 0.0]]
    assert problem.rhs == [14.0, 0.0, 5.0]


def test_parser_orders_variables_by_first_appearance():
    problem = parse_natural_language_spec("max Z = 5b + a s.t. a + b + c <= 4")

    assert problem.variable_names == ["b", "a", "c"]
    assert problem.objective == [5.0, 1.0, 0.0]
    assert problem.constraints == [[1.0, 1.0, 1.0]]


def test_parsed_problem_solves():
    problem = parse_natural_language_spec("maximize 3x1 + 5x2 subject to x1 + 2x2 <= 10 and x1 <= 4")
    result = solve_problem(problem)

    assert result.status == "optimal"
    assert result.solution is not None
    assert result.solution["x1"] == pytest.approx(4.0)
    assert result.solution["x2"] == pytest.approx(3.0)
    assert result.objective_value == pytest.approx(27.0)


@pytest.mark.parametrize(
    "spec, fragment",
    [
        ("", "empty"),
        ("minimize x subject to x <= 1", "maximization"),
        ("maximize x subject to x >= 1", "'<='"),
        ("maximize x subject to x == 1", "'<='"),
        ("maximize x subject to x <= -1", "non-negative"),
        ("maximize x", "At least one"),
        ("optimize x subject to x <= 1", "maximize"),
        ("maximize x subject to x + 2 <= 3", "Constant"),
    ],
)
def test_parser_rejects_unsupported_specs(spec, fragment):
    with pytest.raises(ValueError, match=fragment):
        parse_natural_language_spec(spec)


def test_parser_reads_exponent_coefficients():
    problem = parse_natural_language_spec("maximize 1e3x + 2.5E-1 y subject to x + 2e1y <= 1, e1 <= 4")

    assert problem.variable_names == ["x", "y", "e1"]
    assert problem.objective == [1000.0, 0.25, 0.0]
    assert problem.constraints == [[1.0, 20.0, 0.0], [0.0, 0.0, 1.0]]
