"""Tests for rreftools.elimination module."""
import importlib
import math
from fractions import Fraction

import pytest

import rreftools.elimination.gauss_jordan as gauss_jordan

from rreftools.errors import DegenerateReciprocalError
from rreftools.elimination.gauss_jordan import (
    EPSILON,
    Eliminator,
    epsilon_from_env,
    find_pivot_row,
    pivot_reciprocal,
    rref,
)
from rreftools.elimination.steps import StepKind, StepRecorder, TeeSink
from rreftools.matrix.dense import Matrix
from rreftools.utils.linalg import is_rref, row_reduce_fraction


CLASSIC = [
    [2, -5, -3, 16],
    [5, -6, 6, -13],
    [-2, -3, 6, 10],
    [23, -19, -33, 27],
]


def reduce_rows(rows, **kw):
    M = Matrix.from_rows(rows)
    rec = StepRecorder()
    result = rref(M, rec, **kw)
    return M, rec, result


def expected_step_count(result, m):
    rank = result.rank
    return 1 + result.swaps + rank + rank * (m - 1) + len(result.skipped_columns) + 1


# --- helpers ---

def test_epsilon_default():
    assert EPSILON == pytest.approx(1e-6)


def test_find_pivot_row_first_nonzero():
    M = Matrix.from_rows([[0.0], [1e-9], [-3.0], [5.0]])
    # first above tolerance, not the largest
    assert find_pivot_row(M, 0, 0) == 2
    assert find_pivot_row(M, 0, 3) == 3


def test_find_pivot_row_none():
    M = Matrix.from_rows([[0.0], [1e-7]])
    assert find_pivot_row(M, 0, 0) is None


def test_pivot_reciprocal():
    assert pivot_reciprocal(4.0) == 0.25
    assert pivot_reciprocal(-0.5) == -2.0


@pytest.mark.parametrize("value", [0.0, 1e-6, -1e-7])
def test_pivot_reciprocal_degenerate(value):
    with pytest.raises(DegenerateReciprocalError):
        pivot_reciprocal(value)


def test_degenerate_reciprocal_is_arithmetic_error():
    with pytest.raises(ArithmeticError):
        pivot_reciprocal(0.0)


def test_negative_epsilon_rejected():
    with pytest.raises(ValueError):
        Eliminator(epsilon=-1.0)


@pytest.mark.parametrize("eps", [math.nan, math.inf])
def test_non_finite_epsilon_rejected(eps):
    with pytest.raises(ValueError):
        Eliminator(epsilon=eps)


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_pivot_reciprocal_non_finite(value):
    with pytest.raises(DegenerateReciprocalError):
        pivot_reciprocal(value)


# --- configuration ---

def test_epsilon_from_env_default(monkeypatch):
    monkeypatch.delenv("RREFTOOLS_EPSILON", raising=False)
    assert epsilon_from_env() == 1e-6


def test_epsilon_from_env_value(monkeypatch):
    monkeypatch.setenv("RREFTOOLS_EPSILON", "1e-9")
    assert epsilon_from_env() == 1e-9


@pytest.mark.parametrize("raw", ["abc", "nan", "-1e-6", "inf"])
def test_epsilon_from_env_invalid(monkeypatch, raw):
    monkeypatch.setenv("RREFTOOLS_EPSILON", raw)
    with pytest.raises(ValueError, match="RREFTOOLS_EPSILON"):
        epsilon_from_env()


def test_bad_epsilon_env_fails_on_import(monkeypatch):
    monkeypatch.setenv("RREFTOOLS_EPSILON", "abc")
    try:
        with pytest.raises(ValueError, match="RREFTOOLS_EPSILON"):
            importlib.reload(gauss_jordan)
    finally:
        monkeypatch.delenv("RREFTOOLS_EPSILON")
        importlib.reload(gauss_jordan)
    assert gauss_jordan.EPSILON == 1e-6


# --- classic 4x4 example ---

def test_classic_reduces_to_solution():
    M, rec, result = reduce_rows(CLASSIC)
    # rank 3: the last equation is a combination of the others
    assert result.pivots == [(0, 0), (1, 1), (2, 2)]
    assert result.skipped_columns == [3]
    assert result.swaps == 0

    x = [M[i, 3] for i in range(3)]
    assert x == pytest.approx([-5.0, -4.0, -2.0], abs=1e-6)
    assert M.row(3) == pytest.approx((0.0, 0.0, 0.0, 0.0), abs=1e-6)

    # x solves A x = b for every original equation
    for row in CLASSIC:
        lhs = sum(a * xi for a, xi in zip(row[:3], x))
        assert lhs == pytest.approx(row[3], abs=1e-6)


def test_classic_matches_exact_reduction():
    M, _, _ = reduce_rows(CLASSIC)
    exact, pivots, rank = row_reduce_fraction(CLASSIC)
    assert pivots == [0, 1, 2]
    assert rank == 3
    assert exact[2][3] == Fraction(-2)
    for i in range(4):
        for j in range(4):
            assert M[i, j] == pytest.approx(float(exact[i][j]), abs=1e-6)


def test_classic_step_sequence():
    _, rec, result = reduce_rows(CLASSIC)
    E = StepKind.ELIMINATE
    assert rec.kinds() == (
        [StepKind.INITIAL]
        + [StepKind.NORMALIZE, E, E, E] * 3
        + [StepKind.SKIP, StepKind.FINAL]
    )
    assert len(rec) == 15
    assert result.step_count == 15


def test_classic_snapshots():
    _, rec, _ = reduce_rows(CLASSIC)
    assert rec[0].snapshot == tuple(tuple(float(x) for x in row) for row in CLASSIC)

    first_normalize = rec[1]
    assert first_normalize.row == 0
    assert first_normalize.column == 0
    assert first_normalize.factor == 0.5
    assert first_normalize.snapshot[0] == (1.0, -2.5, -1.5, 8.0)

    first_elim = rec[2]
    assert (first_elim.row, first_elim.source, first_elim.column) == (1, 0, 0)
    assert first_elim.factor == -5.0
    assert first_elim.snapshot[1] == (0.0, 6.5, 13.5, -53.0)

    assert rec[-1].snapshot == rec[-2].snapshot


# --- swaps ---

def test_swap_emitted_only_when_rows_move():
    M, rec, result = reduce_rows([[0, 1], [1, 0]])
    assert rec.kinds() == [
        StepKind.INITIAL,
        StepKind.SWAP,
        StepKind.NORMALIZE,
        StepKind.ELIMINATE,
        StepKind.NORMALIZE,
        StepKind.ELIMINATE,
        StepKind.FINAL,
    ]
    swap = rec[1]
    assert (swap.row, swap.source, swap.column) == (1, 0, 0)
    assert swap.snapshot == ((1.0, 0.0), (0.0, 1.0))
    assert result.swaps == 1
    assert M.to_lists() == [[1.0, 0.0], [0.0, 1.0]]


def test_epsilon_controls_pivot_choice():
    _, rec, _ = reduce_rows([[1e-3, 1.0], [1.0, 1.0]], epsilon=1e-2)
    assert rec[1].kind is StepKind.SWAP

    _, rec, _ = reduce_rows([[1e-3, 1.0], [1.0, 1.0]])
    assert rec[1].kind is StepKind.NORMALIZE


# --- skip and boundaries ---

def test_skip_zero_column():
    M, rec, result = reduce_rows([[1, 0, 2], [3, 0, 4], [5, 0, 6]])
    skips = [s for s in rec if s.kind is StepKind.SKIP]
    assert len(skips) == 1
    assert skips[0].column == 1
    assert result.skipped_columns == [1]

    # anchor row unchanged across the skip: the next pivot lands in row 1
    k = rec.steps.index(skips[0])
    assert rec[k + 1].kind is StepKind.NORMALIZE
    assert rec[k + 1].row == 1
    assert rec[k + 1].column == 2
    assert result.pivots == [(0, 0), (1, 2)]
    assert len(rec) == 9
    assert is_rref(M.to_lists())


def test_rows_exhausted_before_columns():
    M, rec, result = reduce_rows([[1, 2, 3], [4, 5, 6]])
    assert result.pivots == [(0, 0), (1, 1)]
    assert result.skipped_columns == []
    assert len(rec) == 6
    assert rec[-1].kind is StepKind.FINAL
    assert M.row(0) == pytest.approx((1.0, 0.0, -1.0))
    assert M.row(1) == pytest.approx((0.0, 1.0, 2.0))


def test_zero_matrix_only_skips():
    M, rec, result = reduce_rows([[0, 0], [0, 0]])
    assert rec.kinds() == [StepKind.INITIAL, StepKind.SKIP, StepKind.SKIP, StepKind.FINAL]
    assert result.rank == 0
    assert M.to_lists() == [[0.0, 0.0], [0.0, 0.0]]


def test_single_entry():
    M, rec, _ = reduce_rows([[-4.0]])
    assert M[0, 0] == 1.0
    assert rec.kinds() == [StepKind.INITIAL, StepKind.NORMALIZE, StepKind.FINAL]


def test_tall_matrix():
    M, _, result = reduce_rows([[1, 2], [2, 4], [0, 1]])
    assert result.pivots == [(0, 0), (1, 1)]
    assert result.swaps == 1
    flat = [x for row in M.to_lists() for x in row]
    assert flat == pytest.approx([1.0, 0.0, 0.0, 1.0, 0.0, 0.0])


# --- properties ---

SAMPLES = [
    CLASSIC,
    [[0, 1], [1, 0]],
    [[1, 0, 2], [3, 0, 4], [5, 0, 6]],
    [[1, 2, 3], [4, 5, 6]],
    [[0, 0, 3, 1], [0, 2, 1, 1], [0, 4, 2, 2]],
    [[1, 2], [2, 4], [0, 1]],
    [[0.5, -1.25, 3.0], [2.0, 0.0, -1.0], [1.5, 2.5, 0.25]],
]


@pytest.mark.parametrize("rows", SAMPLES)
def test_step_count_law(rows):
    _, rec, result = reduce_rows(rows)
    assert len(rec) == result.step_count
    assert result.step_count == expected_step_count(result, len(rows))
    assert result.swaps == sum(1 for s in rec if s.kind is StepKind.SWAP)
    assert rec[0].kind is StepKind.INITIAL
    assert rec[-1].kind is StepKind.FINAL


@pytest.mark.parametrize("rows", SAMPLES)
def test_pivot_property(rows):
    M, _, result = reduce_rows(rows)
    for i, j in result.pivots:
        assert M[i, j] == pytest.approx(1.0, abs=1e-9)
        for r in range(M.n_rows):
            if r != i:
                assert M[r, j] == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("rows", SAMPLES)
def test_pivot_columns_increase(rows):
    M, _, result = reduce_rows(rows)
    assert [i for i, _ in result.pivots] == list(range(result.rank))
    cols = result.pivot_columns
    assert all(a < b for a, b in zip(cols, cols[1:]))
    assert is_rref(M.to_lists(), tol=1e-9)


@pytest.mark.parametrize("rows", SAMPLES)
def test_dimensions_preserved(rows):
    M, rec, _ = reduce_rows(rows)
    assert M.shape == (len(rows), len(rows[0]))
    assert all(s.shape == M.shape for s in rec)


@pytest.mark.parametrize("rows", SAMPLES)
def test_rank_matches_exact(rows):
    _, _, result = reduce_rows(rows)
    _, pivots, rank = row_reduce_fraction(rows)
    assert result.rank == rank
    assert result.pivot_columns == pivots


def test_idempotent_on_rref_input():
    rows = [[1, 0, 2], [0, 1, 3]]
    M, rec, result = reduce_rows(rows)
    assert M.to_lists() == [[1.0, 0.0, 2.0], [0.0, 1.0, 3.0]]
    assert StepKind.SWAP not in rec.kinds()
    # every snapshot equals the input
    assert all(s.snapshot == rec[0].snapshot for s in rec)


def test_idempotent_second_pass():
    M, _, _ = reduce_rows(CLASSIC)
    once = M.to_lists()
    rec = StepRecorder()
    result = Eliminator().reduce(M, rec)
    assert StepKind.SWAP not in rec.kinds()
    assert result.skipped_columns == [3]
    for a, b in zip(once, M.to_lists()):
        assert a == pytest.approx(b, abs=1e-9)


def test_no_sink_still_reduces():
    M = Matrix.from_rows([[2, 4], [1, 3]])
    result = Eliminator().reduce(M)
    assert result.step_count == 6
    assert M.to_lists() == [[1.0, 0.0], [0.0, 1.0]]


def test_tee_sink_preserves_order():
    a, b = StepRecorder(), StepRecorder()
    rref(Matrix.from_rows([[0, 1], [1, 0]]), TeeSink(a, b))
    assert a.steps == b.steps
    assert len(a) == 7


def test_steps_are_immutable():
    _, rec, _ = reduce_rows([[1, 2], [3, 4]])
    with pytest.raises(AttributeError):
        rec[0].row = 3
