"""
Unit tests for session summary aggregation.

Sessions are built in memory; aggregation never touches the database.
"""
from datetime import datetime, timedelta

from app.db.models import InterviewAnswer, InterviewQuestion, InterviewRound, InterviewSession, RoleProfile
from app.services.summary_service import (
    build_session_snapshot,
    build_session_summary,
    dedupe_preserving_order,
    percentage,
    round_half_up,
)

STARTED = datetime(2026, 1, 1, 9, 0, 0)


def make_round(round_type, question_count, answers=(), position=0):
    """answers: iterable of (question number, score, time_spent, strengths, weaknesses, tips)."""
    round_ = InterviewRound(
        position=position,
        round_type=round_type,
        difficulty="full-time-fresher",
        questions=[
            InterviewQuestion(
                position=n - 1,
                question_id=f"{round_type}-q{n}",
                text=f"{round_type} question {n}",
                time_minutes=5,
                expected_keywords=[],
            )
            for n in range(1, question_count + 1)
        ],
    )
    for number, score, spent, strengths, weaknesses, tips in answers:
        round_.answers.append(InterviewAnswer(
            round_type=round_type,
            question_id=f"{round_type}-q{number}",
            answer_text="A reasonably detailed answer.",
            submitted_at=STARTED + timedelta(minutes=number),
            time_spent_seconds=spent,
            score=score,
            feedback_text=f"{round_type} feedback {number}",
            strengths=list(strengths),
            weaknesses=list(weaknesses),
            improvement_tips=list(tips),
        ))
    return round_


def make_session(rounds, status="active", duration_seconds=1800):
    return InterviewSession(
        id=42,
        user_id=1,
        role_profile_id=1,
        mode="role",
        status=status,
        proctored=False,
        created_at=STARTED,
        updated_at=STARTED + timedelta(seconds=duration_seconds),
        role_profile=RoleProfile(id=1, role_name="Backend Developer", company_name="Acme"),
        rounds=rounds,
    )


def answer(number, score, spent=120, strengths=(), weaknesses=(), tips=()):
    return (number, score, spent, strengths, weaknesses, tips)


# ============================================
# Helpers
# ============================================

def test_round_half_up():
    assert round_half_up(7.666666, 1) == 7.7
    assert round_half_up(2.5) == 3.0
    assert round_half_up(7.25, 1) == 7.3


def test_percentage_rounds_half_up():
    assert percentage(1, 8) == 13
    assert percentage(1, 3) == 33
    assert percentage(0, 0) == 0


def test_dedupe_preserving_order_caps_at_ten():
    items = ["b", "a", "b", "c"] + [f"item {n}" for n in range(20)]
    result = dedupe_preserving_order(items)
    assert result[:3] == ["b", "a", "c"]
    assert len(result) == 10


# ============================================
# Summary
# ============================================

def test_full_session_summary():
    session = make_session([
        make_round("technical", 2, [answer(1, 6, strengths=["Clear communication"]), answer(2, 8, strengths=["Clear communication", "Concise"])]),
        make_round("hr", 1, [answer(1, 9, weaknesses=["Few examples"])], position=1),
    ])

    summary = build_session_summary(session, hiring_threshold=7.0)

    assert summary.overall_score == 7.7
    assert summary.total_questions == 3
    assert summary.questions_answered == 3
    assert summary.unanswered_questions == 0
    assert summary.completion_percentage == 100
    assert summary.is_complete is True
    assert summary.is_hireable is True
    assert summary.score_gap == 0.0
    assert summary.hiring_recommendation.startswith("You meet the hiring threshold")
    assert summary.overall_strengths == ["Clear communication", "Concise"]
    assert summary.overall_weaknesses == ["Few examples"]
    assert summary.role_profile.name == "Backend Developer"


def test_partial_session_scores_answered_questions_only():
    session = make_session([make_round("technical", 3, [answer(1, 8)])])

    summary = build_session_summary(session, hiring_threshold=7.0)

    # 8 over one answered question, not 8 / 3
    assert summary.overall_score == 8.0
    assert summary.completion_percentage == 33
    assert summary.unanswered_questions == 2
    assert summary.is_complete is False


def test_score_gap_when_below_threshold():
    session = make_session([make_round("technical", 3, [answer(1, 4)])])

    summary = build_session_summary(session, hiring_threshold=7.0)

    assert summary.is_hireable is False
    assert summary.score_gap == 3.0
    assert "improve your score by 3.0 points" in summary.hiring_recommendation


def test_no_answers():
    session = make_session([make_round("technical", 2)])

    summary = build_session_summary(session)

    assert summary.overall_score == 0.0
    assert summary.questions_answered == 0
    assert summary.average_time_per_question_seconds == 0
    assert summary.detailed_feedback == []
    assert summary.round_wise_performance[0].average_score == 0.0


def test_detailed_feedback_follows_question_order():
    round_ = make_round("technical", 2, [answer(2, 6), answer(1, 9)])
    session = make_session([round_, make_round("hr", 1, [answer(1, 5)], position=1)])

    summary = build_session_summary(session)

    assert [(f.round_type, f.score) for f in summary.detailed_feedback] == [
        ("technical", 9),
        ("technical", 6),
        ("hr", 5),
    ]


def test_time_statistics():
    session = make_session(
        [make_round("technical", 3, [answer(1, 8, spent=300), answer(2, 6, spent=300)])],
        duration_seconds=2400,
    )

    summary = build_session_summary(session)

    assert summary.total_time_spent_seconds == 600
    assert summary.average_time_per_question_seconds == 300
    assert summary.estimated_time_seconds == 900
    assert summary.time_efficiency == 67
    assert summary.total_interview_time_seconds == 2400


def test_time_efficiency_without_questions():
    session = make_session([])
    summary = build_session_summary(session)
    assert summary.estimated_time_seconds == 0
    assert summary.time_efficiency == 100


def test_round_wise_performance():
    session = make_session([
        make_round("technical", 2, [answer(1, 8, spent=100), answer(2, 5, spent=200)]),
        make_round("hr", 2, [], position=1),
    ])

    technical, hr = build_session_summary(session).round_wise_performance

    assert technical.average_score == 6.5
    assert technical.completion_percentage == 100
    assert technical.total_time_spent_seconds == 300
    assert technical.average_time_per_question_seconds == 150
    assert hr.questions_answered == 0
    assert hr.completion_percentage == 0


def test_summary_is_deterministic():
    session = make_session([make_round("technical", 2, [answer(1, 8, tips=["Use examples"])])])
    assert build_session_summary(session) == build_session_summary(session)


def test_improvement_tips_deduplicated():
    session = make_session([
        make_round("technical", 2, [answer(1, 6, tips=["Use examples", "Be concise"]), answer(2, 6, tips=["Use examples"])]),
    ])
    assert build_session_summary(session).overall_improvement_tips == ["Use examples", "Be concise"]


# ============================================
# Snapshot
# ============================================

def test_snapshot():
    session = make_session([
        make_round("technical", 2, [answer(1, 8), answer(2, 7)]),
        make_round("hr", 2, [], position=1),
    ])

    snapshot = build_session_snapshot(session)

    assert snapshot.session_id == 42
    assert snapshot.role_name == "Backend Developer"
    assert snapshot.company == "Acme"
    assert snapshot.total_questions == 4
    assert snapshot.answered_questions == 2
    assert snapshot.completion_percentage == 50
    assert snapshot.average_score == 7.5
    assert snapshot.latest_feedback == "technical feedback 2"
