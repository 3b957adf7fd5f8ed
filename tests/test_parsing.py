"""
Tests for turning form text into method parameters.
"""

import pytest

from numlab.core.errors import ValidationError
from numlab.core.registry import METHODS, get_method_info, run_method
from numlab.ui.parsing import (
    build_params,
    parse_int,
    parse_matrix,
    parse_number,
    parse_vector,
)


def default_texts(method_info):
    return {f.name: f.default for f in method_info.fields}


class TestScalars:
    """Numbers and integers."""

    def test_number(self):
        """Scientific notation and surrounding spaces."""
        assert parse_number(" 1e-6 ") == 1e-6
        assert parse_number("-2.5") == -2.5

    def test_number_rejected(self):
        """Non-numeric text."""
        with pytest.raises(ValidationError, match="tol"):
            parse_number("abc", "tol")

    def test_int(self):
        """Integers only."""
        assert parse_int("100") == 100
        with pytest.raises(ValidationError):
            parse_int("1.5")


class TestVectorsAndMatrices:
    """Whitespace and comma separated lists."""

    @pytest.mark.parametrize("text", ["1 2 3", "1, 2, 3", "1,2,3", "  1\t2 ,3 "])
    def test_vector(self, text):
        """Any mix of spaces and commas."""
        assert parse_vector(text) == [1.0, 2.0, 3.0]

    def test_empty_vector(self):
        """Blank input is rejected."""
        with pytest.raises(ValidationError):
            parse_vector("  ")

    def test_vector_bad_entry(self):
        """One bad entry fails the whole vector."""
        with pytest.raises(ValidationError):
            parse_vector("1 two 3")

    def test_matrix(self):
        """Rows are separated by semicolons."""
        assert parse_matrix("4 -1; -1, 4;") == [[4.0, -1.0], [-1.0, 4.0]]

    def test_empty_matrix(self):
        """Blank input is rejected."""
        with pytest.raises(ValidationError):
            parse_matrix(" ; ")


class TestBuildParams:
    """Form text to parameter dictionaries."""

    def test_linear_defaults(self):
        """The default linear system is parsed as nested lists."""
        params = build_params(get_method_info("jacobi"), default_texts(get_method_info("jacobi")))
        assert params["matrix"][0] == [10.0, -1.0, 2.0]
        assert params["initial_guess"] == [0.0, 0.0, 0.0]
        assert params["max_iterations"] == 100

    @pytest.mark.parametrize("key", sorted(METHODS))
    def test_defaults_run(self, key):
        """Every method runs to completion on its form defaults."""
        method_info = get_method_info(key)
        result = run_method(key, build_params(method_info, default_texts(method_info)))
        assert result.converged

    def test_missing_field(self):
        """An empty number field is a validation error."""
        method_info = get_method_info("bisection")
        texts = dict(default_texts(method_info), a="")
        with pytest.raises(ValidationError):
            build_params(method_info, texts)

    def test_function_text_passed_through(self):
        """Function text is kept as typed, minus outer spaces."""
        method_info = get_method_info("newton")
        params = build_params(method_info, dict(default_texts(method_info), function="  x^3 - 2 "))
        assert params["function"] == "x^3 - 2"
