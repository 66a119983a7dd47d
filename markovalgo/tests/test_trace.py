"""Tests for rewrite traces."""

import pytest
from markovalgo import Alphabet, Scheme, Outcome, RewriteTrace, RewriteStep


class TestTraceFormatting:
    """Tests for trace format() method."""

    def setup_method(self):
        """Set up test scheme."""
        self.scheme = Scheme.from_definitions(["a→b", "b→c", "c→⋅4"])

    def test_apply_with_trace_returns_tuple(self):
        result, trace = self.scheme.apply("abc", 10, trace=True)
        assert result.word == "4cc"
        assert trace.final == result.word
        assert trace.outcome is Outcome.TERMINATED
        assert len(trace) == result.steps == 4

    def test_format_verbose(self):
        result, trace = self.scheme.apply("abc", 10, trace=True)

        verbose = trace.format("verbose")
        assert "Initial: \"abc\"" in verbose
        assert "Final: \"4cc\" (terminated)" in verbose
        assert "1. a→b: \"abc\" → \"bbc\"" in verbose

    def test_format_compact(self):
        result, trace = self.scheme.apply("abc", 10, trace=True)

        compact = trace.format("compact")
        assert compact == "\"abc\" --[a→b, b→c, b→c, c→⋅4]--> \"4cc\""
        assert compact.count("\n") == 0

    def test_format_rules(self):
        result, trace = self.scheme.apply("ab", 10, trace=True)
        assert trace.format("rules") == "a→b ; b→c ; b→c ; c→⋅4"

    def test_format_chain(self):
        result, trace = self.scheme.apply("c", 10, trace=True)
        assert trace.format("chain") == "\"c\"\n  --(c→⋅4)-->\n\"4\""

    def test_format_empty_trace(self):
        """A word no formula applies to has an empty trace."""
        scheme = Scheme.from_definitions("x→y")
        result, trace = scheme.apply("abc", 10, trace=True)

        assert trace.format("rules") == "(no formulas applied)"
        assert trace.format("chain") == "\"abc\""
        assert trace.outcome is Outcome.HALTED
        assert trace.final == "abc"

    def test_unknown_style(self):
        result, trace = self.scheme.apply("abc", 10, trace=True)
        with pytest.raises(ValueError):
            trace.format("fancy")

    def test_labels_use_scheme_reserved_characters(self):
        alphabet = Alphabet.parse("ab", delimiter="=", final_marker="!")
        scheme = Scheme.from_definitions(["a=!b"], alphabet)
        result, trace = scheme.apply("a", 1, trace=True)
        assert trace.format("rules") == "a=!b"

    def test_step_limit_outcome(self):
        scheme = Scheme.from_definitions("a→aa")
        result, trace = scheme.apply("a", 2, trace=True)
        assert trace.outcome is Outcome.STEP_LIMIT_REACHED
        assert trace.final == "aaa"


class TestTraceContainer:
    """Tests for iterating and summarizing traces."""

    def test_iter_trace(self):
        scheme = Scheme.from_definitions("a→b")
        result, trace = scheme.apply("aaa", 10, trace=True)

        steps = list(trace)
        assert all(isinstance(step, RewriteStep) for step in steps)
        assert [step.number for step in steps] == [1, 2, 3]

    def test_bool(self):
        scheme = Scheme.from_definitions("a→b")
        assert scheme.apply("a", 10, trace=True)[1]
        assert not scheme.apply("b", 10, trace=True)[1]

    def test_rule_counts(self):
        scheme = Scheme.from_definitions(["a→b", "b→c"])
        result, trace = scheme.apply("aab", 10, trace=True)
        assert trace.rule_counts() == {"a→b": 2, "b→c": 3}

    def test_summary(self):
        scheme = Scheme.from_definitions(["a→b", "b→c"])
        result, trace = scheme.apply("aab", 10, trace=True)
        assert trace.summary() == "5 steps using 2 unique formulas. Most used: b→c (3x)"

    def test_summary_empty(self):
        assert RewriteTrace("abc").summary() == "No rewriting performed"

    def test_to_dict(self):
        scheme = Scheme.from_definitions("a→⋅b")
        result, trace = scheme.apply("a", 1, trace=True)
        data = trace.to_dict()
        assert data["initial"] == "a"
        assert data["final"] == "b"
        assert data["outcome"] == "terminated"
        assert data["step_count"] == 1
        assert data["steps"][0] == {
            "number": 1,
            "formula_index": 0,
            "formula": {"pattern": "a", "replacement": "b", "final": True},
            "before": "a",
            "after": "b",
            "outcome": "terminated",
        }
