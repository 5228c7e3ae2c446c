import numpy as np
import pytest

from tableau_simplex.schemas import Column, TableauProblem
from tableau_simplex.lp.pivot import reduce_tableau, select_pivot
from tableau_simplex.lp.tableau import build_initial_tableau


def tableau_for(objective, constraints, rhs):
    return build_initial_tableau(
        TableauProblem(
            num_variables=len(objective),
            num_constraints=len(rhs),
            objective=objective,
            constraints=constraints,
            rhs=rhs,
        )
    )


def test_entering_column_is_most_negative():
    decision = select_pivot(tableau_for([1.0, 4.0, 2.0], [[1.0, 1.0, 1.0]], [6.0]))

    assert decision.status == "pivot"
    assert decision.column == Column.decision(2)
    assert decision.row == 0
    assert decision.ratio == pytest.approx(6.0)


def test_entering_ties_keep_first_column():
    decision = select_pivot(tableau_for([5.0, 5.0], [[1.0, 1.0]], [3.0]))

    assert decision.column == Column.decision(1)


def test_leaving_ties_keep_first_row():
    decision = select_pivot(tableau_for([1.0], [[1.0], [2.0], [0.5]], [2.0, 4.0, 1.0]))

    assert decision.row == 0
    assert decision.message == "Pivot Column: x1, Pivot Row: 1"


def test_leaving_row_skips_non_positive_entries():
    decision = select_pivot(tableau_for([1.0], [[-1.0], [0.0], [3.0]], [1.0, 1.0, 9.0]))

    assert decision.row == 2


def test_optimal_and_unbounded_decisions():
    assert select_pivot(tableau_for([-1.0, 0.0], [[1.0, 1.0]], [1.0])).status == "optimal"

    unbounded = select_pivot(tableau_for([1.0], [[-2.0]], [1.0]))
    assert unbounded.status == "unbounded"
    assert unbounded.row is None
    with pytest.raises(ValueError):
        unbounded.message


def test_reduce_makes_pivot_column_a_unit_vector():
    tableau = tableau_for([3.0, 5.0, 4.0], [[2.0, 3.0, 0.0], [0.0, 2.0, 5.0], [3.0, 2.0, 4.0]], [8.0, 10.0, 15.0])
    decision = select_pivot(tableau)
    reduced = reduce_tableau(tableau, decision.row, decision.column)

    col = reduced.column_index(decision.column)
    expected = np.zeros(reduced.num_rows)
    expected[decision.row] = 1.0
    np.testing.assert_allclose(reduced.data[:, col], expected, atol=1e-9)
    assert reduced.data.shape == tableau.data.shape


def test_reduce_uses_pre_pivot_factors():
    tableau = tableau_for([3.0, 5.0], [[1.0, 2.0]], [10.0])
    reduced = reduce_tableau(tableau, 0, Column.decision(2))

    assert reduced.row_dict(0) == {"x1": 0.5, "x2": 1.0, "s1": 0.5, "RHS": 5.0, "Z": 0.0}
    assert reduced.row_dict(1) == {"x1": -0.5, "x2": 0.0, "s1": 2.5, "RHS": 25.0, "Z": 1.0}


def test_reduce_leaves_source_untouched():
    tableau = tableau_for([3.0, 5.0], [[1.0, 2.0]], [10.0])
    before = tableau.data.copy()
    reduce_tableau(tableau, 0, Column.decision(1))

    np.testing.assert_array_equal(tableau.data, before)


def test_reduce_rejects_non_positive_pivot():
    tableau = tableau_for([1.0], [[0.0]], [1.0])

    with pytest.raises(ValueError, match="strictly positive"):
        reduce_tableau(tableau, 0, Column.decision(1))
