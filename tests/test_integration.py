"""
Tests for the composite trapezoid and Simpson rules.
"""

import numpy as np
import pytest

from numlab.core.errors import EvaluationError, ValidationError
from numlab.core.integration import NumericalIntegration, simpson_from_values


def params(n=1000, function="x^2", a=0.0, b=1.0):
    return {"function": function, "a": a, "b": b, "n": n}


class TestTrapezoid:
    """The returned value is the trapezoid estimate."""

    def test_parabola(self):
        """x^2 on [0, 1]."""
        result = NumericalIntegration().run(params())
        assert result.value == pytest.approx(1 / 3, abs=1e-4)
        assert result.converged
        assert result.stopped_by == "completed"

    def test_linear_exact(self):
        """The trapezoid rule is exact for a line."""
        result = NumericalIntegration().run(params(n=3, function="2*x + 1"))
        assert result.value == pytest.approx(2.0)

    def test_details_step(self):
        """h = (b - a) / n."""
        result = NumericalIntegration().run(params(n=4))
        assert result.details["h"] == pytest.approx(0.25)

    def test_one_record_per_node(self):
        """n + 1 nodes give n + 1 records."""
        result = NumericalIntegration().run(params())
        assert result.n_iter == 1001
        assert result.details["func_evals"] == 1001

    def test_trace_weights(self):
        """End weights are 1/2 and the last partial sum is the value."""
        result = NumericalIntegration().run(params(n=4))
        weights = [rec["weight"] for rec in result.iterations]
        assert weights == [0.5, 1.0, 1.0, 1.0, 0.5]
        assert result.iterations[-1]["partial_sum"] == pytest.approx(result.value)


class TestSimpson:
    """Simpson comparison for even n."""

    def test_even_n(self):
        """Simpson is exact for x^2."""
        result = NumericalIntegration().run(params())
        assert result.details["simpson"] == pytest.approx(1 / 3, abs=1e-10)
        assert result.details["difference"] == pytest.approx(
            abs(result.value - result.details["simpson"])
        )

    def test_odd_n(self):
        """Odd n skips Simpson."""
        result = NumericalIntegration().run(params(n=3))
        assert "simpson" not in result.details
        assert "difference" not in result.details

    def test_helper(self):
        """simpson_from_values returns None for odd n."""
        assert simpson_from_values(np.array([0.0, 1.0]), 1.0) is None
        assert simpson_from_values(np.array([0.0, 1.0, 4.0]), 1.0) == pytest.approx(8 / 3)


class TestIntegrationValidation:
    """Rejected inputs."""

    @pytest.mark.parametrize("n", [0, -5, 2.5, True])
    def test_bad_n(self, n):
        """n must be a positive integer (bool excluded)."""
        with pytest.raises(ValidationError):
            NumericalIntegration().validate(params(n=n))

    @pytest.mark.parametrize("a, b", [(1.0, 1.0), (2.0, 1.0)])
    def test_bad_interval(self, a, b):
        """a must be strictly less than b."""
        with pytest.raises(ValidationError):
            NumericalIntegration().validate(params(a=a, b=b))

    def test_singular_integrand(self):
        """A node hitting a pole raises EvaluationError."""
        with pytest.raises(EvaluationError):
            NumericalIntegration().run(params(n=2, function="1/x"))
