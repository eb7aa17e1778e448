"""
Tests for turning model replies into complexity results.
"""

from bigolens.core.models import FALLBACK_COMPLEXITY, FALLBACK_EXPLANATION
from bigolens.core.normalizer import normalize_response, strip_code_fences


class TestJsonReplies:
    def test_fenced_json(self):
        raw = '```json\n{"timeComplexity":"O(n)","spaceComplexity":"O(1)","explanation":"linear scan"}\n```'
        result = normalize_response(raw)
        assert result.timeComplexity == "O(n)"
        assert result.spaceComplexity == "O(1)"
        assert result.explanation == "linear scan"

    def test_plain_json(self):
        raw = '{"timeComplexity": "O(log n)", "spaceComplexity": "O(1)", "explanation": "halves the range"}'
        result = normalize_response(raw)
        assert (result.timeComplexity, result.spaceComplexity) == ("O(log n)", "O(1)")

    def test_json_surrounded_by_prose(self):
        raw = 'Here you go:\n{"timeComplexity": "O(n^2)", "spaceComplexity": "O(1)", "explanation": "nested loops"}\nHope it helps.'
        result = normalize_response(raw)
        assert result.timeComplexity == "O(n^2)"
        assert result.explanation == "nested loops"

    def test_missing_json_key_gets_fallback(self):
        raw = '{"timeComplexity": "O(n)", "spaceComplexity": "O(n)"}'
        result = normalize_response(raw)
        assert result.timeComplexity == "O(n)"
        assert result.explanation == FALLBACK_EXPLANATION

    def test_non_string_values_are_ignored(self):
        raw = '{"timeComplexity": null, "spaceComplexity": 1, "explanation": ""}'
        result = normalize_response(raw)
        assert result.timeComplexity == FALLBACK_COMPLEXITY
        assert result.spaceComplexity == FALLBACK_COMPLEXITY
        assert result.explanation == FALLBACK_EXPLANATION


class TestLabelledReplies:
    def test_labelled_lines(self):
        raw = "Time Complexity: O(n log n)\nSpace Complexity: O(n)\nExplanation: merge sort"
        result = normalize_response(raw)
        assert result.timeComplexity == "O(n log n)"
        assert result.spaceComplexity == "O(n)"
        assert result.explanation == "merge sort"

    def test_case_insensitive_and_fenced(self):
        raw = "```\ntime complexity: O(1)\nSPACE COMPLEXITY: O(1)\nexplanation: constant work\n```"
        result = normalize_response(raw)
        assert result.timeComplexity == "O(1)"
        assert result.spaceComplexity == "O(1)"
        assert result.explanation == "constant work"

    def test_multiline_explanation_is_joined(self):
        raw = "Time Complexity: O(n)\nSpace Complexity: O(1)\nExplanation: one loop\nover the array."
        assert normalize_response(raw).explanation == "one loop over the array."

    def test_explanation_stops_at_blank_line(self):
        raw = (
            "Time Complexity: O(n)\nSpace Complexity: O(1)\nExplanation: one loop.\n\n"
            "Let me know if you need more help!"
        )
        assert normalize_response(raw).explanation == "one loop."

    def test_explanation_stops_at_blank_line_with_crlf(self):
        raw = "Time Complexity: O(n)\r\nExplanation: one loop\r\nover the array.\r\n\r\nCheers!"
        assert normalize_response(raw).explanation == "one loop over the array."

    def test_partial_labels(self):
        raw = "Time Complexity: O(2^n)"
        result = normalize_response(raw)
        assert result.timeComplexity == "O(2^n)"
        assert result.spaceComplexity == FALLBACK_COMPLEXITY


class TestFallbacks:
    def test_gibberish(self):
        result = normalize_response("the quick brown fox }{ ]] not json")
        assert (result.timeComplexity, result.spaceComplexity, result.explanation) == (
            "O(?)",
            "O(?)",
            FALLBACK_EXPLANATION,
        )

    def test_empty_and_none(self):
        for raw in ("", None):
            result = normalize_response(raw)
            assert result.timeComplexity == FALLBACK_COMPLEXITY
            assert result.explanation == FALLBACK_EXPLANATION

    def test_json_array_is_not_an_object(self):
        result = normalize_response('["O(n)", "O(1)"]')
        assert result.timeComplexity == FALLBACK_COMPLEXITY


def test_strip_code_fences():
    assert strip_code_fences("```python\nx = 1\n```") == "x = 1"
