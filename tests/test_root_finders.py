"""
Tests for bisection, Newton-Raphson and fixed-point iteration.
"""

import math

import pytest

from numlab.core.bisection import BisectionMethod, BisectionParams
from numlab.core.errors import (
    DivergenceError,
    EvaluationError,
    NonConvergenceWarning,
    ValidationError,
)
from numlab.core.fixed_point import FixedPointMethod
from numlab.core.iteration_result import STOPPED_BY_MAX_ITER, STOPPED_BY_TOLERANCE
from numlab.core.logger import LEVEL_ERROR, LEVEL_SUCCESS, LEVEL_WARNING
from numlab.core.newton import NewtonMethod

SQRT2 = math.sqrt(2.0)


def bisection_params(**overrides):
    params = {"function": "x^2-2", "a": 1, "b": 2, "tolerance": 1e-6, "maxIterations": 50}
    params.update(overrides)
    return params


class TestBisection:
    """Bisection on x^2 - 2."""

    def test_finds_sqrt2(self, log):
        """Converges to sqrt(2) within tolerance."""
        result = BisectionMethod().run(bisection_params(), log=log)
        assert result.converged
        assert result.stopped_by == STOPPED_BY_TOLERANCE
        assert result.value == pytest.approx(SQRT2, abs=1e-6)
        assert log.messages(LEVEL_SUCCESS)

    def test_bracket_keeps_sign_change(self):
        """f(a)*f(b) <= 0 at every recorded step."""
        result = BisectionMethod().run(bisection_params())
        for rec in result.iterations:
            assert rec["fa"] * rec["fb"] <= 0
            assert rec["a"] < rec["b"]
            assert rec["error"] == pytest.approx((rec["b"] - rec["a"]) / 2)

    def test_iteration_indices_are_sequential(self):
        """Records are numbered 1..n."""
        result = BisectionMethod().run(bisection_params())
        assert [rec.index for rec in result.iterations] == list(range(1, result.n_iter + 1))

    def test_accepts_dataclass_params(self):
        """A BisectionParams instance works as well as a mapping."""
        params = BisectionParams("x^2-2", 1.0, 2.0, 1e-6, 50)
        assert BisectionMethod().run(params).value == pytest.approx(SQRT2, abs=1e-6)

    def test_same_sign_rejected(self, log):
        """No sign change on [a, b] is a validation error."""
        with pytest.raises(ValidationError, match="signs must differ"):
            BisectionMethod().run(bisection_params(function="x^2+1", a=-1, b=1), log=log)
        assert log.messages(LEVEL_ERROR)

    def test_root_at_endpoint_passes_validation(self):
        """f(a) = 0 satisfies f(a)*f(b) <= 0."""
        BisectionMethod().validate(bisection_params(function="x", a=0, b=1))

    def test_a_must_be_less_than_b(self):
        """Reversed interval is rejected."""
        with pytest.raises(ValidationError):
            BisectionMethod().run(bisection_params(a=2, b=1))

    def test_budget_exhaustion(self, log):
        """Running out of iterations returns the final bracket midpoint."""
        result = BisectionMethod().run(bisection_params(maxIterations=3), log=log)
        assert not result.converged
        assert result.stopped_by == STOPPED_BY_MAX_ITER
        assert result.value == pytest.approx(1.4375)
        assert [w.category for w in result.warnings] == [NonConvergenceWarning]
        assert log.messages(LEVEL_WARNING)

    def test_callback_receives_every_record(self):
        """The per-iteration callback sees each record once, in order."""
        seen = []
        result = BisectionMethod().run(bisection_params(), callback=seen.append)
        assert tuple(seen) == result.iterations

    def test_counts_function_evaluations(self):
        """func_evals counts the two endpoints plus one per step."""
        result = BisectionMethod().run(bisection_params())
        assert result.details["func_evals"] == result.n_iter + 2


class TestNewton:
    """Newton-Raphson with a central-difference derivative."""

    def test_finds_sqrt2_quickly(self):
        """x0=1 converges to sqrt(2) in at most 6 iterations."""
        result = NewtonMethod().run(
            {"function": "x^2-2", "x0": 1, "tolerance": 1e-8, "maxIterations": 50}
        )
        assert result.converged
        assert result.value == pytest.approx(SQRT2, abs=1e-8)
        assert result.n_iter <= 6

    def test_record_fields(self):
        """Each record has x, f(x), f'(x), x_next and error."""
        result = NewtonMethod().run(
            {"function": "x^2-2", "x0": 1, "tolerance": 1e-8, "maxIterations": 50}
        )
        first = result.iterations[0]
        assert first["x"] == 1
        assert first["fx"] == pytest.approx(-1.0)
        assert first["dfx"] == pytest.approx(2.0)
        assert first["x_next"] == pytest.approx(1.5)
        assert first["error"] == pytest.approx(0.5)

    def test_stationary_start_is_fatal(self, log):
        """x0=0 has a zero derivative."""
        with pytest.raises(EvaluationError):
            NewtonMethod().run(
                {"function": "x^2-2", "x0": 0, "tolerance": 1e-8, "maxIterations": 50},
                log=log,
            )
        assert log.messages(LEVEL_ERROR)

    def test_divergence_detected(self):
        """A runaway iterate raises DivergenceError."""
        # for large x the Newton step roughly doubles x
        method = NewtonMethod(options={"divergence_threshold": 1e3})
        with pytest.raises(DivergenceError) as info:
            method.run(
                {"function": "x/(1+x^2)", "x0": 2, "tolerance": 1e-12, "maxIterations": 100}
            )
        assert info.value.iteration is not None

    def test_budget_exhaustion_returns_last_x(self):
        """No convergence within budget returns the last x with a warning."""
        result = NewtonMethod().run(
            {"function": "x^2-2", "x0": 1, "tolerance": 1e-15, "maxIterations": 2}
        )
        assert not result.converged
        assert result.value == pytest.approx(17 / 12)
        assert result.warnings[0].category is NonConvergenceWarning


class TestFixedPoint:
    """Fixed-point iteration x = g(x)."""

    def test_cosine_fixed_point(self):
        """x = cos(x) converges to the Dottie number."""
        result = FixedPointMethod().run(
            {"function": "cos(x)", "x0": 0.5, "tolerance": 1e-10, "maxIterations": 500}
        )
        assert result.converged
        assert result.value == pytest.approx(0.7390851332, abs=1e-8)

    def test_records(self):
        """Each record stores x, g(x) and the step size."""
        result = FixedPointMethod().run(
            {"function": "cos(x)", "x0": 0.5, "tolerance": 1e-10, "maxIterations": 500}
        )
        for rec in result.iterations:
            assert rec["error"] == pytest.approx(abs(rec["gx"] - rec["x"]))

    def test_divergence(self):
        """Squaring from 2 exceeds 1e10 at iteration 6."""
        with pytest.raises(DivergenceError) as info:
            FixedPointMethod().run(
                {"function": "x^2", "x0": 2, "tolerance": 1e-8, "maxIterations": 100}
            )
        assert info.value.iteration == 6
        assert info.value.value > 1e10

    def test_non_finite_is_divergence(self):
        """An infinite iterate is divergence, not an evaluation error."""
        with pytest.raises(DivergenceError):
            FixedPointMethod().run(
                {"function": "x*x*x*x", "x0": 1e100, "tolerance": 1e-8, "maxIterations": 10}
            )

    def test_overflowing_iterate_is_divergence(self):
        """exp(x) from 1 overflows at iteration 4 and is reported as divergence."""
        with pytest.raises(DivergenceError) as info:
            FixedPointMethod().run(
                {"function": "exp(x)", "x0": 1, "tolerance": 1e-8, "maxIterations": 50}
            )
        assert info.value.iteration == 4
        assert info.value.value == math.inf


class TestSharedValidation:
    """Checks common to every iterative method."""

    @pytest.mark.parametrize("tolerance", [0, -1e-6, float("nan"), "1e-6", True])
    def test_bad_tolerance(self, tolerance):
        """Tolerance must be a positive finite number."""
        with pytest.raises(ValidationError):
            BisectionMethod().validate(bisection_params(tolerance=tolerance))

    @pytest.mark.parametrize("max_iter", [0, -5, 2.5, True, "10"])
    def test_bad_max_iterations(self, max_iter):
        """maxIterations must be a positive integer."""
        with pytest.raises(ValidationError):
            BisectionMethod().validate(bisection_params(maxIterations=max_iter))

    def test_empty_function(self):
        """Blank function text is rejected."""
        with pytest.raises(ValidationError):
            NewtonMethod().validate(
                {"function": "  ", "x0": 1, "tolerance": 1e-6, "max_iterations": 10}
            )

    def test_unknown_parameter(self):
        """Unexpected keys are rejected."""
        with pytest.raises(ValidationError, match="speed"):
            BisectionMethod().validate(bisection_params(speed=3))

    def test_missing_parameter(self):
        """Missing keys are rejected."""
        params = bisection_params()
        del params["b"]
        with pytest.raises(ValidationError, match="b"):
            BisectionMethod().validate(params)

    def test_non_mapping_params(self):
        """Parameters must be a dataclass or a mapping."""
        with pytest.raises(ValidationError):
            BisectionMethod().run([1, 2, 3])


class TestIdempotence:
    """Identical inputs give identical results."""

    def test_bisection_twice(self):
        """Two bisection runs are equal."""
        method = BisectionMethod()
        assert method.run(bisection_params()) == method.run(bisection_params())

    def test_newton_twice(self):
        """Two Newton runs are equal."""
        params = {"function": "x^3 - x - 2", "x0": 1.5, "tolerance": 1e-10, "maxIterations": 50}
        assert NewtonMethod().run(params) == NewtonMethod().run(params)
