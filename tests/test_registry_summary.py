"""
Tests for the method registry and the results summary.
"""

import dataclasses

import pytest

from numlab.core.bisection import BisectionMethod
from numlab.core.differentiation import NumericalDifferentiation
from numlab.core.fixed_point import FixedPointMethod
from numlab.core.gauss_seidel import GaussSeidelMethod
from numlab.core.integration import NumericalIntegration
from numlab.core.jacobi import JacobiMethod
from numlab.core.lagrange import LagrangeInterpolation
from numlab.core.newton import NewtonMethod
from numlab.core.errors import DivergenceError, ValidationError
from numlab.core.registry import METHODS, create_method, get_method_info, run_method
from numlab.core.results_summary import ResultsSummary

EXPECTED_CLASSES = {
    "bisection": BisectionMethod,
    "newton": NewtonMethod,
    "fixed_point": FixedPointMethod,
    "jacobi": JacobiMethod,
    "gauss_seidel": GaussSeidelMethod,
    "lagrange": LagrangeInterpolation,
    "differentiation": NumericalDifferentiation,
    "integration": NumericalIntegration,
}


class TestRegistry:
    """Lookup and construction by key."""

    def test_all_keys_registered(self):
        """Every method is reachable by its key."""
        assert set(METHODS) == set(EXPECTED_CLASSES)

    @pytest.mark.parametrize("key", sorted(EXPECTED_CLASSES))
    def test_create_method(self, key):
        """create_method returns a fresh instance of the right class."""
        method = create_method(key)
        assert type(method) is EXPECTED_CLASSES[key]
        assert create_method(key) is not method

    def test_unknown_key(self):
        """Unknown keys are a validation problem."""
        with pytest.raises(ValidationError, match="simplex"):
            get_method_info("simplex")
        with pytest.raises(ValidationError):
            create_method("simplex")

    def test_field_names_match_params(self):
        """Form fields map one-to-one onto the parameter dataclass."""
        for method_info in METHODS.values():
            names = {f.name for f in dataclasses.fields(method_info.method_class.params_type)}
            assert {f.name for f in method_info.fields} == names

    def test_run_method_passes_options(self, dominant_system):
        """Options reach the method instance."""
        params = dict(dominant_system, matrix=[[1.0, 5.0], [5.0, 1.0]],
                      vector=[1.0, 1.0], initialGuess=[0.0, 0.0])
        with pytest.raises(DivergenceError) as info:
            run_method("jacobi", params, options={"divergence_threshold": 100.0})
        assert info.value.iteration < 10

    def test_run_method_callback(self, log, dominant_system):
        """The callback sees each record as it is produced."""
        seen = []
        result = run_method("gauss_seidel", dominant_system, log=log, callback=seen.append)
        assert tuple(seen) == result.iterations
        assert log.messages("success")


class TestResultsSummary:
    """Comparison table over several runs."""

    def runs(self, dominant_system):
        jacobi = JacobiMethod().run(dominant_system)
        seidel = GaussSeidelMethod().run(dominant_system)
        return jacobi, seidel

    def test_rows(self, dominant_system):
        """One row per run, vectors as lists."""
        jacobi, seidel = self.runs(dominant_system)
        summary = ResultsSummary()
        summary.add_run(jacobi)
        summary.add_run(seidel)

        rows = summary.as_rows()
        assert [r["method"] for r in rows] == ["Jacobi", "Gauss-Seidel"]
        assert rows[0]["n_iter"] == jacobi.n_iter
        assert isinstance(rows[1]["value"], list)
        assert rows[1]["residual"] == seidel.details["residual"]
        assert rows[0]["warnings"] == 0

    def test_best_by_iterations(self, dominant_system):
        """Gauss-Seidel wins on a dominant system."""
        jacobi, seidel = self.runs(dominant_system)
        summary = ResultsSummary([jacobi, seidel])
        assert summary.best_by_iterations() is seidel

    def test_best_ignores_non_converged(self, dominant_system):
        """Runs that hit the budget are not candidates."""
        stalled = JacobiMethod().run(dict(dominant_system, maxIterations=1))
        assert ResultsSummary([stalled]).best_by_iterations() is None
        assert ResultsSummary().best_by_iterations() is None

    def test_to_dataframe(self, dominant_system):
        """pandas export mirrors as_rows."""
        pd = pytest.importorskip("pandas")
        summary = ResultsSummary(list(self.runs(dominant_system)))
        df = summary.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df["method"]) == ["Jacobi", "Gauss-Seidel"]
        assert len(df) == 2


class TestMethodResult:
    """Presenter view of a result."""

    def test_as_dict(self, dominant_system):
        """{result, iterations} with plain lists and k-indexed rows."""
        result = run_method("jacobi", dominant_system)
        data = result.as_dict()
        assert set(data) == {"result", "iterations"}
        assert isinstance(data["result"], list)
        assert len(data["iterations"]) == result.n_iter
        assert data["iterations"][0]["k"] == 1
        assert data["iterations"][-1]["x_new"] == result.value

    def test_details_read_only(self, dominant_system):
        """details cannot be modified after the run."""
        result = run_method("gauss_seidel", dominant_system)
        with pytest.raises(TypeError):
            result.details["residual"] = 0.0
