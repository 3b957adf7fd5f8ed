"""
Tests for the expression tokenizer, parser and evaluator.
"""

import math

import pytest

from numlab.core.errors import EvaluationError
from numlab.core.expression import compile_expression, evaluate, tokenize


class TestEvaluate:
    """Numeric results of well-formed expressions."""

    def test_polynomial(self):
        """x^2+3*x-2 at x=2 is 8."""
        assert evaluate("x^2+3*x-2", 2) == 8

    def test_sin_at_zero(self):
        """sin(0) is zero."""
        assert evaluate("sin(x)", 0) == pytest.approx(0.0)

    def test_all_whitelisted_functions(self):
        """Every named function is available."""
        assert evaluate("cos(x)", 0) == pytest.approx(1.0)
        assert evaluate("tan(x)", 0) == pytest.approx(0.0)
        assert evaluate("log(x)", math.e) == pytest.approx(1.0)
        assert evaluate("sqrt(x)", 16) == pytest.approx(4.0)
        assert evaluate("exp(x)", 1) == pytest.approx(math.e)

    def test_scientific_notation(self):
        """Numbers with exponents are parsed."""
        assert evaluate("1e-3 * x", 2) == pytest.approx(2e-3)
        assert evaluate("2.5E+2", 0) == pytest.approx(250.0)
        assert evaluate(".5 + x", 1) == pytest.approx(1.5)

    def test_power_binds_tighter_than_unary_minus(self):
        """-x^2 is -(x^2)."""
        assert evaluate("-x^2", 3) == -9

    def test_power_is_right_associative(self):
        """2^3^2 is 2^9."""
        assert evaluate("2^3^2", 0) == 512

    def test_negative_exponent(self):
        """Unary minus is allowed in an exponent."""
        assert evaluate("2^-1", 0) == pytest.approx(0.5)

    def test_left_associative_division(self):
        """8/4/2 is (8/4)/2."""
        assert evaluate("8/4/2", 0) == 1

    def test_parentheses(self):
        """Parentheses override precedence."""
        assert evaluate("(x+1)*(x-1)", 3) == 8

    def test_compiled_expression_is_reusable(self):
        """A compiled expression can be called many times."""
        f = compile_expression("x^2 - 2")
        assert f(1.5) == pytest.approx(0.25)
        assert f(2) == pytest.approx(2.0)
        assert evaluate(f, 0) == pytest.approx(-2.0)


class TestMalformed:
    """Malformed expressions raise EvaluationError."""

    @pytest.mark.parametrize("text", ["", "   ", "x +", "(x", "x)", "2 3", "*x", "sin x", "sin()"])
    def test_syntax_errors(self, text):
        """Broken syntax is rejected."""
        with pytest.raises(EvaluationError):
            compile_expression(text)

    def test_error_carries_position(self):
        """Parse errors report the offending position."""
        with pytest.raises(EvaluationError) as info:
            compile_expression("x + y")
        assert info.value.position == 4

    def test_non_string_rejected(self):
        """Only text can be compiled."""
        with pytest.raises(EvaluationError):
            compile_expression(42)

    @pytest.mark.parametrize(
        "text",
        ["(" * 5000 + "x" + ")" * 5000, "-" * 5000 + "x", "x" + "^x" * 5000],
        ids=["parentheses", "unary-minus", "power-chain"],
    )
    def test_too_deep_nesting(self, text):
        """Excessive nesting is an EvaluationError, not a RecursionError."""
        with pytest.raises(EvaluationError, match="глибоко"):
            evaluate(text, 1.0)

    def test_long_flat_chain(self):
        """A long left-associative chain too deep to evaluate is reported as such."""
        f = compile_expression("x" + " + x" * 5000)
        with pytest.raises(EvaluationError, match="глибоко"):
            f(1.0)

    def test_unknown_name_lists_allowed(self):
        """The message for an unknown name lists what is allowed."""
        with pytest.raises(EvaluationError, match="дозволено: x, sin"):
            compile_expression("__import__")


class TestInjection:
    """Anything outside the grammar is rejected before evaluation."""

    @pytest.mark.parametrize(
        "text",
        [
            "__import__('os').system('ls')",
            "x.__class__",
            "os",
            "abs(x)",
            "pow(x, 2)",
            "x; 1",
            "lambda: 1",
            "[x]",
        ],
    )
    def test_rejected(self, text):
        """Unknown names, attribute access and foreign syntax fail."""
        with pytest.raises(EvaluationError):
            compile_expression(text)


class TestRuntimeErrors:
    """Errors during evaluation."""

    def test_division_by_zero(self):
        """1/x at zero fails."""
        with pytest.raises(EvaluationError):
            evaluate("1/x", 0)

    def test_domain_error(self):
        """sqrt of a negative number fails."""
        with pytest.raises(EvaluationError):
            evaluate("sqrt(x)", -1)
        with pytest.raises(EvaluationError):
            evaluate("log(x)", 0)

    def test_overflow(self):
        """exp overflow fails."""
        with pytest.raises(EvaluationError):
            evaluate("exp(x)", 1000)

    def test_infinite_result_rejected_by_default(self):
        """A non-finite value is an error unless allowed."""
        with pytest.raises(EvaluationError):
            evaluate("x*x", 1e200)

    def test_allow_non_finite(self):
        """allow_non_finite passes infinity through."""
        f = compile_expression("x*x", allow_non_finite=True)
        assert math.isinf(f(1e200))

    def test_allow_non_finite_overflow(self):
        """With allow_non_finite an overflow becomes infinity."""
        f = compile_expression("exp(x)", allow_non_finite=True)
        assert f(1000) == math.inf

    def test_allow_non_finite_division_by_zero(self):
        """With allow_non_finite a division by zero becomes NaN."""
        f = compile_expression("1/x", allow_non_finite=True)
        assert math.isnan(f(0))


class TestIntrospection:
    """Expression metadata."""

    def test_source_kept(self):
        """The source text is kept."""
        assert compile_expression("x + 1").source == "x + 1"

    def test_variables_used(self):
        """variables_used reports whether x occurs."""
        assert compile_expression("sin(x) + 1").variables_used == ("x",)
        assert compile_expression("2 + 3").variables_used == ()

    def test_tokenize(self):
        """Tokens carry kind and position."""
        tokens = tokenize("sin(x)")
        assert [t.kind for t in tokens] == ["id", "op", "id", "op"]
        assert tokens[2].position == 4
