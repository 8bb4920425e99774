"""Tests for the single-root iterative search."""

import cmath
import math

import pytest

from polyroots import ConvergenceError, RootOptions, derivative, find_one_root
from polyroots.finder import SearchState, _creep, _neighbors, _snap


# ── find_one_root ────────────────────────────────────────────────────────

class TestFindOneRoot:
    def test_positive_root_from_positive_guess(self):
        assert find_one_root(2, lambda x: x ** 2 - 1) == pytest.approx(1, abs=1e-12)

    def test_negative_root_from_negative_guess(self):
        assert find_one_root(-2, lambda x: x ** 2 - 1) == pytest.approx(-1, abs=1e-12)

    def test_exact_root_at_guess(self):
        assert find_one_root(0, lambda x: x ** 5) == 0

    def test_repeated_root(self):
        root = find_one_root(1, lambda x: x ** 5)
        assert abs(root) <= 1e-12

    def test_complex_root(self):
        root = find_one_root(0.5 + 0.5j, lambda x: x * x + 1)
        assert abs(root * root + 1) < 1e-12

    def test_transcendental_complex(self):
        root = find_one_root(1 + 1j, cmath.sin)
        assert abs(root) < 1e-9

    def test_transcendental_real(self):
        # The flat start sends the search to some multiple of pi
        root = find_one_root(math.pi / 2, math.sin)
        assert abs(math.sin(root)) < 1e-9

    def test_result_is_normalized(self):
        root = find_one_root(3.5, lambda x: x - 3)
        assert root == 3
        assert type(root) is int

    def test_deterministic(self):
        f = lambda x: x ** 3 - 2 * x + 2
        first = find_one_root(0.6 + 0.8j, f)
        second = find_one_root(0.6 + 0.8j, f)
        assert first == second

    def test_options_and_overrides(self):
        options = RootOptions(iterations=300, loops=5)
        assert find_one_root(2, lambda x: x ** 2 - 4, options) == pytest.approx(2)
        assert find_one_root(2, lambda x: x ** 2 - 4, iterations=10) == pytest.approx(2)


# ── Failure reporting ────────────────────────────────────────────────────

def test_constant_function_raises_convergence_error() -> None:
    with pytest.raises(ConvergenceError) as excinfo:
        find_one_root(1, lambda x: 1.0, iterations=20, loops=1)
    assert excinfo.value.y == 1.0
    assert excinfo.value.x is not None


def test_real_guess_cannot_reach_complex_root() -> None:
    with pytest.raises(ConvergenceError, match="Failed to converge"):
        find_one_root(2, lambda x: x * x + 1, iterations=30, loops=2)


def test_invalid_override_rejected() -> None:
    with pytest.raises(ValueError):
        find_one_root(2, lambda x: x - 1, iterations=0)


# ── derivative ───────────────────────────────────────────────────────────

def test_first_derivative() -> None:
    f_prime = derivative(lambda x: x ** 3)
    assert f_prime(2.0) == pytest.approx(12.0, rel=1e-6)


def test_second_derivative() -> None:
    f_second = derivative(lambda x: x ** 3, 2)
    assert f_second(2.0) == pytest.approx(12.0, rel=1e-3)


def test_derivative_at_zero_uses_epsilon_step() -> None:
    f_prime = derivative(lambda x: 3 * x + 1)
    assert f_prime(0) == pytest.approx(3.0)


def test_derivative_rejects_bad_order() -> None:
    with pytest.raises(ValueError, match="positive integer"):
        derivative(math.sin, 0)


# ── Helpers ──────────────────────────────────────────────────────────────

def test_neighbors_are_adjacent_floats() -> None:
    values = _neighbors(1.0, 2)
    assert values[0] == 1.0
    assert len(values) == 5
    assert sorted(values) == sorted(set(values))
    assert max(values) - min(values) < 1e-15


def test_creep_keeps_best_point() -> None:
    x, y = _creep(lambda v: v - 1.0, 1.0, 0.0)
    assert (x, y) == (1.0, 0.0)


def test_snap_recovers_short_decimal() -> None:
    f = lambda v: v - 2.5
    state = SearchState(x=2.5000000000000004, y=f(2.5000000000000004), step=1e-16, guess=2.0)
    snapped = _snap(state, f, RootOptions())
    assert snapped.x == 2.5
    assert snapped.y == 0
