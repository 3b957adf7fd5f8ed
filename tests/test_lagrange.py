"""
Tests for Lagrange interpolation.
"""

import pytest

from numlab.core.errors import StabilityWarning, ValidationError
from numlab.core.lagrange import (
    LagrangeInterpolation,
    interpolate,
    polynomial_expression,
)

# three samples of x^2 + 1
POINTS = {"xPoints": [0.0, 1.0, 2.0], "yPoints": [1.0, 2.0, 5.0]}


def params(x_eval, **overrides):
    p = dict(POINTS, xEval=x_eval)
    p.update(overrides)
    return p


class TestInterpolation:
    """Values of the interpolating polynomial."""

    def test_inside_interval(self):
        """P(1.5) of x^2 + 1 is 3.25."""
        result = LagrangeInterpolation().run(params(1.5))
        assert result.value == pytest.approx(3.25)
        assert result.converged
        assert result.stopped_by == "completed"
        assert result.warnings == ()

    def test_nodes_are_reproduced(self):
        """P(x_i) = y_i within the verification tolerance."""
        result = LagrangeInterpolation().run(params(0.5))
        assert result.details["max_verification_error"] < 1e-10

    def test_verification_warning(self):
        """A node error above verify_tolerance warns but keeps the value."""
        result = LagrangeInterpolation(options={"verify_tolerance": -1.0}).run(params(1.5))
        assert result.value == pytest.approx(3.25)
        assert [w.category for w in result.warnings] == [StabilityWarning]
        assert "похибка інтерполяції" in result.warnings[0].message

    def test_extrapolation_warns(self):
        """x outside [min, max] still evaluates but warns."""
        result = LagrangeInterpolation().run(params(3.0))
        assert result.value == pytest.approx(10.0)
        assert [w.category for w in result.warnings] == [StabilityWarning]

    def test_two_points_is_a_line(self):
        """Two nodes give linear interpolation."""
        result = LagrangeInterpolation().run(
            {"xPoints": [0.0, 2.0], "yPoints": [0.0, 4.0], "xEval": 0.5}
        )
        assert result.value == pytest.approx(1.0)

    def test_helper_matches_method(self):
        """interpolate() gives the same value without a trace."""
        value = interpolate(POINTS["xPoints"], POINTS["yPoints"], 1.5)
        assert value == pytest.approx(3.25)


class TestTrace:
    """One record per node."""

    def test_record_per_node(self):
        """n nodes give n records."""
        result = LagrangeInterpolation().run(params(1.5))
        assert result.n_iter == 3
        assert [rec["i"] for rec in result.iterations] == [0, 1, 2]

    def test_partial_sums_accumulate(self):
        """partial_sum is the running total of terms."""
        result = LagrangeInterpolation().run(params(1.5))
        running = 0.0
        for rec in result.iterations:
            running += rec["term"]
            assert rec["partial_sum"] == pytest.approx(running)
            assert rec["numerator"] / rec["denominator"] == pytest.approx(rec["L_i"])
        assert result.iterations[-1]["partial_sum"] == pytest.approx(result.value)

    def test_polynomial_text(self):
        """The Lagrange form is reported in details."""
        result = LagrangeInterpolation().run(params(1.5))
        assert isinstance(result.details["polynomial"], str)
        assert "(x - 1)" in result.details["polynomial"]


class TestPolynomialExpression:
    """Text form of the polynomial."""

    def test_zero_terms_skipped(self):
        """Terms with y_i = 0 are omitted."""
        text = polynomial_expression([0.0, 1.0], [0.0, 3.0])
        assert text.count("*") == 1
        assert text.startswith("3.0000")

    def test_all_zero(self):
        """All-zero data gives "0"."""
        assert polynomial_expression([0.0, 1.0], [0.0, 0.0]) == "0"


class TestLagrangeValidation:
    """Rejected inputs."""

    def test_duplicate_x(self):
        """Repeated x values make the basis undefined."""
        with pytest.raises(ValidationError):
            LagrangeInterpolation().validate(
                {"xPoints": [0.0, 1.0, 1.0], "yPoints": [1.0, 2.0, 3.0], "xEval": 0.5}
            )

    def test_single_point(self):
        """At least two nodes are required."""
        with pytest.raises(ValidationError):
            LagrangeInterpolation().validate({"xPoints": [0.0], "yPoints": [1.0], "xEval": 0.0})

    def test_length_mismatch(self):
        """x and y lists must have equal length."""
        with pytest.raises(ValidationError):
            LagrangeInterpolation().validate(params(0.5, yPoints=[1.0, 2.0]))

    def test_non_finite_eval_point(self):
        """xEval must be finite."""
        with pytest.raises(ValidationError):
            LagrangeInterpolation().validate(params(float("nan")))
