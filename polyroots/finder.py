"""Iterative search for one root of a scalar function.

:func:`find_one_root` runs an ensemble of strategies in a fixed order, each
one taking the current :class:`SearchState` and returning a new one:

1. Newton's method with a central finite-difference derivative
2. a random search seeded from the current estimate
3. multiplicity correction (search ``f/f'`` instead of ``f``)
4. the secant method
5. a creep across the nearest representable floats
6. a rounding snap to coarser decimal precisions

A strategy only moves the estimate when ``|f(x)|`` strictly improves (the
rounding snap also accepts ties), and the whole search stops as soon as
``f(x)`` is exactly zero.  The random search is seeded from the estimate
itself, so identical calls give identical results.

See https://en.wikipedia.org/wiki/Newton%27s_method
See https://en.wikipedia.org/wiki/Finite_difference
See https://en.wikipedia.org/wiki/Secant_method
"""

import logging
import math
import sys
import zlib
from dataclasses import dataclass, replace
from typing import Callable, Optional

import numpy as np

from polyroots.exceptions import ConvergenceError
from polyroots.numeric import convert_down, to_inexact
from polyroots.options import RootOptions
from polyroots.precision import round_value

logger = logging.getLogger(__name__)

# Relative finite-difference step; 1e-5 gives close to the lowest error for
# smooth functions.  Newton shrinks it tenfold down to the minimum whenever a
# step fails to improve.
DIFFERENCE_SCALE = 1e-5
MIN_DIFFERENCE_SCALE = 1e-11

RANDOM_RATIO = 0.1
RANDOM_WINDOW = (-1.0, 1.0)
RANDOM_BURST = 10

CREEP_ULPS = 2
SNAP_DIGITS = range(15, -1, -1)

MAX_DEPTH = 2


@dataclass(frozen=True)
class SearchState:
    """One point in the search: estimate, function value, and last move."""

    x: complex
    y: complex
    step: complex
    guess: complex
    depth: int = 0


# ── Helpers ─────────────────────────────────────────────────────────────

def _size(value) -> float:
    """Magnitude of *value*, with NaN and overflow treated as infinite."""
    try:
        magnitude = abs(value)
    except OverflowError:
        return math.inf
    return magnitude if math.isfinite(magnitude) else math.inf


def _finite(value) -> bool:
    return _size(value) < math.inf


def _evaluate(f: Callable, x):
    """Call *f*, turning overflow and division by zero into NaN."""
    try:
        return to_inexact(f(x))
    except (OverflowError, ZeroDivisionError):
        return math.nan


def _difference(f: Callable, x, h: float):
    delta = x * h
    if delta == 0:
        delta = sys.float_info.epsilon
    return (f(x + delta) - f(x - delta)) / (delta * 2)


def derivative(f: Callable, n: int = 1, h: float = DIFFERENCE_SCALE) -> Callable:
    """Return a function approximating the *n*th derivative of *f*.

    Uses a central difference with a step of ``x * h`` (machine epsilon when
    ``x`` is zero).  Higher orders nest first-order differences, so their
    error grows quickly.
    """
    if not isinstance(n, int) or n < 1:
        raise ValueError(f"Derivative order must be a positive integer, got {n!r}")

    base = f if n == 1 else derivative(f, n - 1, h)

    def f_prime(x):
        return _difference(base, x, h)

    return f_prime


def _seed(x) -> int:
    return zlib.crc32(repr(x).encode())


def _neighbors(value: float, ulps: int) -> list:
    """*value* followed by the *ulps* nearest floats on either side."""
    result = [value]
    up = down = np.float64(value)
    for _ in range(ulps):
        up = np.nextafter(up, np.inf)
        down = np.nextafter(down, -np.inf)
        result += [float(down), float(up)]
    return result


def _window_sample(rng, options: RootOptions, complex_plane: bool):
    low, high = options.real_range or RANDOM_WINDOW
    sample = float(rng.uniform(low, high))
    if complex_plane or options.imag_range is not None:
        low, high = options.imag_range or RANDOM_WINDOW
        sample = complex(sample, float(rng.uniform(low, high)))
    return sample


def _creep(f: Callable, x, y, ulps: int = CREEP_ULPS):
    """Best ``(x, f(x))`` on the lattice of floats within *ulps* of *x*."""
    if not _finite(x):
        return x, y

    if isinstance(x, complex):
        candidates = [
            complex(re, im)
            for re in _neighbors(x.real, ulps)
            for im in _neighbors(x.imag, ulps)
        ][1:]
    else:
        candidates = _neighbors(x, ulps)[1:]

    for candidate in candidates:
        if y == 0:
            break
        candidate_y = _evaluate(f, candidate)
        if _size(candidate_y) < _size(y):
            x, y = candidate, candidate_y
    return x, y


def _moved(state: SearchState, x, y) -> SearchState:
    if x is state.x:
        return state
    return replace(state, x=x, y=y, step=x - state.x)


# ── Strategies ──────────────────────────────────────────────────────────

def _newton(state: SearchState, f: Callable, options: RootOptions) -> SearchState:
    tolerance = options.tolerance
    x, y, step = state.x, state.y, state.step
    h = DIFFERENCE_SCALE

    for _ in range(options.iterations):
        if y == 0:
            break

        slope = _difference(lambda v: _evaluate(f, v), x, h)

        if slope == 0 or not _finite(slope):
            # Flat or broken derivative; jump somewhere else and carry on
            burst = _random_search(replace(state, x=x, y=y, step=step), f, options, RANDOM_BURST)
            if _size(burst.y) < _size(y):
                x, y, step = burst.x, burst.y, burst.step
                continue
            break

        delta = y / slope
        candidate = x - delta
        candidate_y = _evaluate(f, candidate)

        if _size(delta) <= tolerance:
            candidate, candidate_y = _creep(f, candidate, candidate_y)

        if _size(candidate_y) < _size(y):
            step = candidate - x
            x, y = candidate, candidate_y
        elif h > MIN_DIFFERENCE_SCALE:
            h /= 10
        else:
            break

    logger.debug("depth=%d newton: x=%s y=%s step=%s", state.depth, x, y, step)
    return replace(state, x=x, y=y, step=step)


def _random_search(state: SearchState, f: Callable, options: RootOptions,
                   attempts: Optional[int] = None) -> SearchState:
    """Hill-climb through random perturbations of the estimate.

    Perturbations are a fixed ratio of the current estimate; an estimate of
    zero (or a non-finite one) is replaced by samples from an absolute
    window given by ``real_range``/``imag_range`` or [-1, 1].
    """
    rng = np.random.default_rng(_seed(state.x))
    x, y = state.x, state.y
    complex_plane = isinstance(x, complex)

    for _ in range(options.iterations if attempts is None else attempts):
        if y == 0:
            break

        if x != 0 and _finite(x):
            scale = float(rng.uniform(-1.0, 1.0))
            if complex_plane:
                scale = complex(scale, float(rng.uniform(-1.0, 1.0)))
            candidate = x + x * RANDOM_RATIO * scale
        else:
            candidate = _window_sample(rng, options, complex_plane)

        candidate_y = _evaluate(f, candidate)
        if _size(candidate_y) < _size(y):
            x, y = candidate, candidate_y

    logger.debug("depth=%d random: x=%s y=%s", state.depth, x, y)
    return _moved(state, x, y)


def _multiplicity(state: SearchState, f: Callable, options: RootOptions) -> SearchState:
    """Search ``f/f'`` (or ``f'/f''``) near a suspected repeated root.

    A repeated root of ``f`` is a simple root of ``f/f'``, where Newton's
    method converges quickly again.  Only tried when the slope has vanished
    but ``f`` has not, and never nested more than MAX_DEPTH deep.
    """
    tolerance = options.tolerance
    if state.y == 0 or state.depth >= MAX_DEPTH or _size(state.step) <= tolerance ** 2:
        return state

    slope = _difference(lambda v: _evaluate(f, v), state.x, DIFFERENCE_SCALE)
    if not _size(slope) < tolerance ** 2:
        return state

    if slope == 0:
        numerator, denominator = derivative(f), derivative(f, 2)
    else:
        numerator, denominator = f, derivative(f)

    def reduced(v):
        top = numerator(v)
        if top == 0:
            return top
        return top / denominator(v)

    logger.debug("depth=%d trying multiple root method at x=%s", state.depth, state.x)
    try:
        x = to_inexact(find_one_root(state.x, reduced, options, depth=state.depth + 1))
    except ConvergenceError as e:
        logger.debug("depth=%d multiple root method failed: %s", state.depth, e)
        return state

    y = _evaluate(f, x)
    if _size(y) <= _size(state.y):
        return _moved(state, x, y)
    return state


def _secant(state: SearchState, f: Callable, options: RootOptions) -> SearchState:
    tolerance = options.tolerance
    if _size(state.y) <= tolerance and _size(state.step) <= tolerance:
        return state
    if state.guess == state.x:
        return state

    x0, y0 = state.guess, _evaluate(f, state.guess)
    x1, y1 = state.x, state.y
    best_x, best_y = state.x, state.y

    for _ in range(options.iterations):
        if y1 == 0:
            break

        dy = y1 - y0
        if dy == 0 or not _finite(dy):
            break

        x2 = x1 - y1 * (x1 - x0) / dy
        if not _finite(x2):
            break

        x0, y0 = x1, y1
        x1, y1 = x2, _evaluate(f, x2)

        if _size(y1) < _size(best_y):
            best_x, best_y = x1, y1
        if _size(x1 - x0) <= tolerance ** 2:
            break

    logger.debug("depth=%d secant: x=%s y=%s", state.depth, best_x, best_y)
    return _moved(state, best_x, best_y)


def _creep_search(state: SearchState, f: Callable, options: RootOptions) -> SearchState:
    x, y = _creep(f, state.x, state.y)
    return _moved(state, x, y)


def _snap(state: SearchState, f: Callable, options: RootOptions) -> SearchState:
    """Round the estimate to ever fewer decimals while ``|f|`` does not grow.

    Recovers exact integer and short decimal roots that floating-point
    drift has pushed slightly off.
    """
    if not _finite(state.x):
        return state

    x, y = state.x, state.y
    for digits in SNAP_DIGITS:
        if y == 0:
            break
        candidate = to_inexact(round_value(x, digits))
        candidate_y = _evaluate(f, candidate)
        if _size(candidate_y) <= _size(y):
            x, y = candidate, candidate_y

    return _moved(state, x, y)


_STRATEGIES = (_newton, _random_search, _multiplicity, _secant, _creep_search, _snap)


# ── Main public entry point ─────────────────────────────────────────────

def find_one_root(guess, f: Callable, options: Optional[RootOptions] = None, *,
                  depth: int = 0, **overrides):
    """Find one approximate root of *f*, starting from *guess*.

    *guess* may be real or complex; a real guess keeps the search on the real
    line.  *options* (or keyword overrides such as ``iterations=600``) set
    the tolerance budget: each strategy gets ``iterations`` attempts and the
    whole ensemble is repeated up to ``loops`` times.  Success means
    ``|f(x)| <= tolerance`` and the estimate moved by no more than
    ``tolerance`` during the last loop.

    Example::

        find_one_root(2, lambda x: x ** 2 - 1)   # => 1
        find_one_root(-2, lambda x: x ** 2 - 1)  # => -1

    Raises ConvergenceError (carrying the final ``x``, ``y`` and
    displacement) when the budget runs out.
    """
    options = RootOptions.build(options, **overrides)
    tolerance = options.tolerance

    x = to_inexact(guess)
    state = SearchState(x=x, y=_evaluate(f, x), step=tolerance * 100, guess=x, depth=depth)
    displacement = 0.0

    for loop in range(options.loops):
        if state.y == 0:
            break

        start = state.x
        for strategy in _STRATEGIES:
            state = strategy(state, f, options)
            if state.y == 0:
                break
        if state.y == 0:
            break

        displacement = _size(state.x - start)
        logger.debug(
            "depth=%d loop %d: x=%s y=%s step=%s displacement=%s",
            depth, loop, state.x, state.y, state.step, displacement,
        )

        if displacement == 0:
            break
        if (_size(state.y) < tolerance ** 2 and _size(state.step) < tolerance
                and displacement < tolerance):
            break

    if state.y != 0 and (_size(state.y) > tolerance or displacement > tolerance):
        raise ConvergenceError(
            f"Failed to converge within {tolerance} after {options.loops} loops of "
            f"{options.iterations} iterations with x={state.x} y={state.y} "
            f"displacement={displacement}",
            x=state.x, y=state.y, displacement=displacement,
        )

    return convert_down(state.x)
