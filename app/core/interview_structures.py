"""
Interview structure configuration.

Single source of truth for round types, experience-level difficulty tags
and the default question counts used when a role profile or request does
not specify them.
"""
from typing import Dict, List, Optional

# Closed set of round types, in default session order
ROUND_TYPES: List[str] = ["technical", "hr", "manager", "cto", "case"]

# Closed, ordered set of experience-level difficulty tags
DIFFICULTY_LEVELS: List[str] = [
    "2-month-summer-intern",
    "6-month-intern",
    "full-time-fresher",
    "experience-1-year",
    "experience-2-years",
    "experience-3-years",
    "experience-4-years",
    "experience-5-plus-years",
]

DEFAULT_DIFFICULTY = "full-time-fresher"

# Loose labels accepted from older clients and role profiles
DIFFICULTY_ALIASES: Dict[str, str] = {
    "intern": "6-month-intern",
    "summer-intern": "2-month-summer-intern",
    "fresher": "full-time-fresher",
    "entry": "full-time-fresher",
    "junior": "full-time-fresher",
    "easy": "full-time-fresher",
    "mid": "experience-2-years",
    "medium": "experience-2-years",
    "intermediate": "experience-2-years",
    "senior": "experience-5-plus-years",
    "hard": "experience-5-plus-years",
    "experienced": "experience-3-years",
}

# Upper bound of questions per round type
MAX_QUESTIONS_PER_ROUND: Dict[str, int] = {
    "technical": 20,
    "hr": 15,
    "manager": 15,
    "cto": 10,
    "case": 10,
}

# Hard cap applied to per-request overrides
MAX_QUESTION_OVERRIDE = 20

# Used when neither the request, the role profile nor the level defaults give a count
FALLBACK_QUESTION_COUNT = 3

# Default question counts per difficulty level (0 disables the round)
DEFAULT_INTERVIEW_STRUCTURES: Dict[str, Dict[str, int]] = {
    "2-month-summer-intern": {"technical": 3, "hr": 2, "manager": 0, "cto": 0, "case": 1},
    "6-month-intern": {"technical": 4, "hr": 3, "manager": 1, "cto": 0, "case": 2},
    "full-time-fresher": {"technical": 5, "hr": 4, "manager": 2, "cto": 0, "case": 2},
    "experience-1-year": {"technical": 6, "hr": 4, "manager": 3, "cto": 1, "case": 3},
    "experience-2-years": {"technical": 7, "hr": 4, "manager": 3, "cto": 2, "case": 3},
    "experience-3-years": {"technical": 8, "hr": 4, "manager": 4, "cto": 2, "case": 4},
    "experience-4-years": {"technical": 8, "hr": 4, "manager": 4, "cto": 3, "case": 4},
    "experience-5-plus-years": {"technical": 8, "hr": 4, "manager": 4, "cto": 4, "case": 5},
}

# Structure stored on a new role profile when none is supplied
DEFAULT_ROLE_STRUCTURE: Dict[str, Dict[str, object]] = {
    "technical": {"question_count": 5, "difficulty": DEFAULT_DIFFICULTY},
    "hr": {"question_count": 5},
    "manager": {"question_count": 4},
    "cto": {"question_count": 3},
    "case": {"question_count": 3},
}


def normalize_difficulty_value(value: Optional[str], fallback: str = DEFAULT_DIFFICULTY) -> str:
    """
    Map a free-form difficulty label onto one of DIFFICULTY_LEVELS.
    
    Args:
        value: Raw label ("Experience 2 Years", "mid", "6_month_intern", ...)
        fallback: Level returned when the label is empty or unknown
        
    Returns:
        A member of DIFFICULTY_LEVELS
    """
    if fallback not in DIFFICULTY_LEVELS:
        fallback = DEFAULT_DIFFICULTY
    if not value or not isinstance(value, str):
        return fallback

    key = value.strip().lower().replace("_", "-").replace(" ", "-")
    while "--" in key:
        key = key.replace("--", "-")

    if key in DIFFICULTY_LEVELS:
        return key
    return DIFFICULTY_ALIASES.get(key, fallback)


def get_default_structure(difficulty: str) -> Dict[str, int]:
    """Default per-round question counts for a difficulty level."""
    return DEFAULT_INTERVIEW_STRUCTURES.get(
        difficulty, DEFAULT_INTERVIEW_STRUCTURES[DEFAULT_DIFFICULTY]
    )


def resolve_question_count(
    round_type: str,
    override: Optional[int],
    role_structure: Optional[Dict[str, Dict[str, object]]],
    default_structure: Dict[str, int],
) -> int:
    """
    Resolve how many questions a round gets.
    
    Priority: positive per-request override (clamped to 1..20) -> role profile
    structure -> difficulty-level default -> FALLBACK_QUESTION_COUNT.
    """
    try:
        override_value = int(override) if override is not None else 0
    except (TypeError, ValueError):
        override_value = 0
    if override_value > 0:
        return max(1, min(MAX_QUESTION_OVERRIDE, override_value))

    role_round = (role_structure or {}).get(round_type) or {}
    role_count = role_round.get("question_count")
    if isinstance(role_count, int) and role_count > 0:
        return min(role_count, MAX_QUESTIONS_PER_ROUND.get(round_type, MAX_QUESTION_OVERRIDE))

    default_count = default_structure.get(round_type)
    if default_count:
        return default_count

    return FALLBACK_QUESTION_COUNT


def resolve_round_difficulty(
    round_type: str,
    requested: Optional[str],
    role_structure: Optional[Dict[str, Dict[str, object]]],
    session_difficulty: str,
) -> str:
    """
    Resolve the difficulty tag of one round.
    
    The technical round follows the requested difficulty first, then the role
    profile's technical difficulty. Other rounds use their own role profile
    difficulty when present. Everything is normalized against the
    session-wide difficulty.
    """
    role_round = (role_structure or {}).get(round_type) or {}
    if round_type == "technical":
        raw = requested or role_round.get("difficulty") or session_difficulty
    else:
        raw = role_round.get("difficulty") or session_difficulty
    return normalize_difficulty_value(raw, session_difficulty)
