"""Unit tests for operator_eval_comp.

Coercion failures and unsupported operators are silent non-matches.
"""

import pytest

from reelrules.components.rules.field_registry_comp import make_field
from reelrules.components.rules.operator_eval_comp import (
    canonical_operator,
    compile_operator,
    evaluate_operator,
    is_operator_allowed,
    is_operator_supported,
    like_pattern,
    never_matches,
)

GENRE = make_field("genre", "string", ("eq", "neq", "contains", "not_contains"), multi_valued=True)


class TestStringOperators:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("operator", "candidate", "value", "expected"),
        [
            ("eq", "Sports", "sports", True),
            ("is", "Sports", "SPORTS", True),
            ("eq", "Sports HD", "sports", False),
            ("neq", "News", "sports", True),
            ("is_not", "Sports", "sports", False),
            ("contains", "ESPN HD", "espn", True),
            ("not_contains", "CNN", "espn", True),
            ("not_contains", "ESPN 2", "espn", False),
            ("starts_with", "Sky Sports 1", "SKY", True),
            ("ends_with", "ESPN HD", " hd", True),
            ("ends_with", "ESPN HD", "espn", False),
            ("in", "News", "sports, news", True),
            ("in", "Movies", "sports, news", False),
        ],
    )
    def test_case_insensitive(self, operator: str, candidate: str, value: str, expected: bool) -> None:
        assert evaluate_operator(operator, "string", candidate, value) is expected

    @pytest.mark.unit
    def test_numeric_operator_on_string_never_matches(self) -> None:
        assert evaluate_operator("gt", "string", "b", "a") is False


class TestNumericOperators:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("operator", "candidate", "value", "expected"),
        [
            ("gt", 2015, "2010", True),
            ("gt", 2010, "2010", False),
            ("gte", 2010, "2010", True),
            ("lt", "7.5", "8", True),
            ("lte", 8, "8.0", True),
            ("eq", 5, "5", True),
            ("is_not", 5, "6", True),
        ],
    )
    def test_comparisons(self, operator: str, candidate, value: str, expected: bool) -> None:
        assert evaluate_operator(operator, "numeric", candidate, value) is expected

    @pytest.mark.unit
    def test_uncoercible_condition_value_is_false(self) -> None:
        assert evaluate_operator("gt", "numeric", 2015, "abc") is False

    @pytest.mark.unit
    def test_missing_candidate_is_false(self) -> None:
        assert evaluate_operator("neq", "numeric", None, "5") is False
        assert evaluate_operator("lt", "numeric", None, "5") is False


class TestBooleanOperators:
    @pytest.mark.unit
    def test_eq(self) -> None:
        assert evaluate_operator("eq", "boolean", True, "true") is True
        assert evaluate_operator("eq", "boolean", False, "true") is False
        assert evaluate_operator("is", "boolean", False, "false") is True

    @pytest.mark.unit
    def test_only_eq_is_defined(self) -> None:
        assert is_operator_supported("neq", "boolean") is False
        assert evaluate_operator("neq", "boolean", False, "true") is False

    @pytest.mark.unit
    def test_bad_boolean_value(self) -> None:
        assert evaluate_operator("eq", "boolean", True, "yes please") is False


class TestMultiValued:
    @pytest.mark.unit
    def test_positive_matches_any_element(self) -> None:
        assert evaluate_operator("eq", GENRE, ["Crime", "Drama"], "drama") is True

    @pytest.mark.unit
    def test_negated_requires_no_element(self) -> None:
        assert evaluate_operator("neq", GENRE, "Action, Thriller", "action") is False
        assert evaluate_operator("neq", GENRE, "Crime,Drama", "action") is True
        assert evaluate_operator("not_contains", GENRE, ["Sci-Fi", "Drama"], "sci") is False


class TestCompile:
    @pytest.mark.unit
    def test_canonical_operator(self) -> None:
        assert canonical_operator(" IS ") == "eq"
        assert canonical_operator("is_not") == "neq"
        assert canonical_operator("contains") == "contains"

    @pytest.mark.unit
    def test_unusable_conditions_compile_to_never_matches(self) -> None:
        year = make_field("year", "numeric", ("gt",))
        assert compile_operator("gt", year, "abc") is never_matches
        assert compile_operator("contains", year, "1") is never_matches

    @pytest.mark.unit
    def test_compiled_predicate_reusable(self) -> None:
        year = make_field("year", "numeric", ("gt",))
        predicate = compile_operator("gt", year, "2010")
        assert [predicate(v) for v in (2005, 2015, None, "2020")] == [False, True, False, True]


class TestServerStoredOperators:
    """Upper-case operators as the server persists them in bare-array rules."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("operator", "candidate", "value", "expected"),
        [
            ("EQ", "Evening News", "evening news", True),
            ("NE", "Movie", "movie", False),
            ("NE", "Evening News", "movie", True),
            ("LIKE", "Evening News", "%news%", True),
            ("LIKE", "Evening News", "news", True),
            ("LIKE", "Evening News", "%news", True),
            ("LIKE", "Evening News", "%evening", False),
            ("LIKE", "Evening News", "EVEN%", True),
            ("LIKE", "Evening News", "news%", False),
            ("IN", "Evening News", "evening news, foo", True),
            ("IN", "Movie", "evening news,foo", False),
            ("NI", "Movie", "evening news,foo", True),
            ("NI", "Evening News", "foo, EVENING NEWS", False),
        ],
    )
    def test_string_comparisons(self, operator: str, candidate: str, value: str, expected: bool) -> None:
        assert evaluate_operator(operator, "string", candidate, value) is expected

    @pytest.mark.unit
    def test_numeric_ne_gt_lt(self) -> None:
        assert evaluate_operator("NE", "numeric", 2001, "2000") is True
        assert evaluate_operator("GT", "numeric", 2001, "2000") is True
        assert evaluate_operator("LT", "numeric", 2001, "2000") is False

    @pytest.mark.unit
    def test_ni_on_multi_valued_needs_no_element(self) -> None:
        assert evaluate_operator("NI", GENRE, "Crime, Drama", "comedy,horror") is True
        assert evaluate_operator("NI", GENRE, "Crime, Horror", "comedy,horror") is False

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("%news%", ("contains", "news")),
            ("news", ("contains", "news")),
            ("%news", ("ends_with", "news")),
            ("news%", ("starts_with", "news")),
            ("%", ("ends_with", "")),
        ],
    )
    def test_like_pattern(self, pattern: str, expected: tuple[str, str]) -> None:
        assert like_pattern(pattern) == expected

    @pytest.mark.unit
    def test_canonical_spellings(self) -> None:
        assert canonical_operator("NE") == "neq"
        assert canonical_operator("LIKE") == "like"
        assert canonical_operator("NI") == "ni"


class TestOperatorAllowed:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("operator", "legal", "expected"),
        [
            ("eq", ("is", "is_not"), True),
            ("NE", ("is", "is_not"), True),
            ("LIKE", ("is", "contains"), True),
            ("LIKE", ("is", "starts_with"), False),
            ("IN", ("is",), True),
            ("IN", ("contains",), False),
            ("NI", ("is", "is_not"), True),
            ("NI", ("is", "in"), True),
            ("NI", ("is",), False),
            ("ends_with", ("eq", "contains"), False),
        ],
    )
    def test_permission_follows_listed_operators(self, operator: str, legal: tuple[str, ...], expected: bool) -> None:
        assert is_operator_allowed(operator, legal) is expected
