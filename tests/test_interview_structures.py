"""
Unit tests for round structure resolution.
"""
import pytest

from app.core.interview_structures import (
    DEFAULT_DIFFICULTY,
    DIFFICULTY_LEVELS,
    FALLBACK_QUESTION_COUNT,
    get_default_structure,
    normalize_difficulty_value,
    resolve_question_count,
    resolve_round_difficulty,
)


@pytest.mark.parametrize("raw,expected", [
    ("experience-2-years", "experience-2-years"),
    ("Experience 2 Years", "experience-2-years"),
    ("6_month_intern", "6-month-intern"),
    ("fresher", "full-time-fresher"),
    ("senior", "experience-5-plus-years"),
    ("", DEFAULT_DIFFICULTY),
    (None, DEFAULT_DIFFICULTY),
    ("wizard", DEFAULT_DIFFICULTY),
])
def test_normalize_difficulty_value(raw, expected):
    assert normalize_difficulty_value(raw) == expected


def test_normalize_uses_fallback_for_unknown():
    assert normalize_difficulty_value("wizard", "experience-1-year") == "experience-1-year"


def test_default_structure_for_every_level():
    for level in DIFFICULTY_LEVELS:
        structure = get_default_structure(level)
        assert structure["technical"] > 0
    assert get_default_structure("unknown") == get_default_structure(DEFAULT_DIFFICULTY)


def test_question_count_priority():
    role_structure = {"technical": {"question_count": 6}}
    defaults = get_default_structure(DEFAULT_DIFFICULTY)

    assert resolve_question_count("technical", 3, role_structure, defaults) == 3
    assert resolve_question_count("technical", None, role_structure, defaults) == 6
    assert resolve_question_count("hr", None, role_structure, defaults) == defaults["hr"]
    assert resolve_question_count("cto", None, {}, defaults) == FALLBACK_QUESTION_COUNT


def test_question_count_override_bounds():
    defaults = get_default_structure(DEFAULT_DIFFICULTY)
    assert resolve_question_count("technical", 99, {}, defaults) == 20
    # Non-positive overrides are ignored
    assert resolve_question_count("technical", 0, {}, defaults) == defaults["technical"]
    assert resolve_question_count("technical", -4, {}, defaults) == defaults["technical"]


def test_role_count_capped_per_round_type():
    defaults = get_default_structure(DEFAULT_DIFFICULTY)
    assert resolve_question_count("cto", None, {"cto": {"question_count": 40}}, defaults) == 10


def test_round_difficulty():
    role_structure = {
        "technical": {"question_count": 5, "difficulty": "experience-1-year"},
        "case": {"question_count": 2, "difficulty": "experience-3-years"},
    }
    assert resolve_round_difficulty("technical", "mid", role_structure, DEFAULT_DIFFICULTY) == "experience-2-years"
    assert resolve_round_difficulty("technical", None, role_structure, DEFAULT_DIFFICULTY) == "experience-1-year"
    assert resolve_round_difficulty("case", "mid", role_structure, DEFAULT_DIFFICULTY) == "experience-3-years"
    assert resolve_round_difficulty("hr", None, role_structure, "6-month-intern") == "6-month-intern"
