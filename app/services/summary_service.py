"""
Session summary aggregation.

Pure functions over an InterviewSession and its rounds, questions and answers.
Nothing here touches the database or the clock, so calling them twice on
unchanged data gives identical output.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from app.core.config import DEFAULT_QUESTION_TIME_MINUTES, HIRING_THRESHOLD
from app.db.models import InterviewAnswer, InterviewRound, InterviewSession
from app.schemas.interview import (
    FeedbackEntry,
    RoleProfileRef,
    RoundPerformance,
    RoundSnapshot,
    SessionSnapshot,
    SessionSummary,
)

MAX_SUMMARY_LIST_ITEMS = 10


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator (2.5 -> 3), not like round() (2.5 -> 2)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100))


def dedupe_preserving_order(items: Iterable[str], limit: int = MAX_SUMMARY_LIST_ITEMS) -> List[str]:
    """Drop exact duplicates keeping first-seen order, then cap the list."""
    seen = set()
    unique = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)
    return unique[:limit]


def ordered_answers(round_: InterviewRound) -> List[InterviewAnswer]:
    """Answers of a round in question order (submission order for unknown ids)."""
    position = {q.question_id: index for index, q in enumerate(round_.questions)}
    fallback = len(position)
    indexed = list(enumerate(round_.answers))
    indexed.sort(key=lambda pair: (position.get(pair[1].question_id, fallback), pair[0]))
    return [answer for _, answer in indexed]


def _evaluated(answers: Iterable[InterviewAnswer]) -> List[InterviewAnswer]:
    return [answer for answer in answers if answer.is_evaluated]


def build_round_performance(round_: InterviewRound) -> RoundPerformance:
    evaluated = _evaluated(round_.answers)
    answered = len(evaluated)
    total = len(round_.questions)
    score_sum = sum(answer.score for answer in evaluated)
    time_spent = sum(answer.time_spent_seconds or 0 for answer in round_.answers)

    return RoundPerformance(
        round_type=round_.round_type,
        questions_answered=answered,
        total_questions=total,
        average_score=round_half_up(score_sum / answered, 1) if answered else 0.0,
        completion_percentage=percentage(answered, total),
        total_time_spent_seconds=time_spent,
        average_time_per_question_seconds=int(round_half_up(time_spent / answered)) if answered else 0,
    )


def estimated_time_seconds(session: InterviewSession) -> int:
    return sum(
        (question.time_minutes or DEFAULT_QUESTION_TIME_MINUTES) * 60
        for round_ in session.rounds
        for question in round_.questions
    )


def hiring_recommendation(is_hireable: bool, score_gap: float) -> str:
    if is_hireable:
        return "You meet the hiring threshold! Continue improving to strengthen your profile."
    return f"You need to improve your score by {score_gap:.1f} points to meet the hiring threshold."


def _role_profile_ref(session: InterviewSession) -> Optional[RoleProfileRef]:
    role = session.role_profile
    if role is None:
        return None
    return RoleProfileRef(id=role.id, name=role.role_name, company=role.company_name or "")


def _interview_duration_seconds(session: InterviewSession) -> int:
    if not session.created_at or not session.updated_at:
        return 0
    return max(0, int((session.updated_at - session.created_at).total_seconds()))


def build_session_summary(
    session: InterviewSession,
    hiring_threshold: float = HIRING_THRESHOLD,
) -> SessionSummary:
    """
    Aggregate per-question evaluations into the session report.
    
    Scores are averaged over evaluated answers only, never over the question
    count, so a partially answered session is judged on what was answered.
    """
    round_performance: List[RoundPerformance] = []
    strengths: List[str] = []
    weaknesses: List[str] = []
    tips: List[str] = []
    feedback: List[FeedbackEntry] = []

    total_questions = 0
    answered = 0
    score_sum = 0
    time_spent = 0

    for round_ in session.rounds:
        total_questions += len(round_.questions)
        round_performance.append(build_round_performance(round_))

        for answer in ordered_answers(round_):
            time_spent += answer.time_spent_seconds or 0
            if not answer.is_evaluated:
                continue
            answered += 1
            score_sum += answer.score
            strengths.extend(answer.strengths or [])
            weaknesses.extend(answer.weaknesses or [])
            tips.extend(answer.improvement_tips or [])
            feedback.append(FeedbackEntry(
                round_type=round_.round_type,
                feedback=answer.feedback_text or "",
                score=answer.score,
            ))

    overall_score = round_half_up(score_sum / answered, 1) if answered else 0.0
    estimated = estimated_time_seconds(session)
    time_efficiency = int(round_half_up(time_spent / estimated * 100)) if estimated > 0 else 100
    is_hireable = overall_score >= hiring_threshold
    score_gap = round_half_up(max(0.0, hiring_threshold - overall_score), 1)

    return SessionSummary(
        session_id=session.id,
        mode=session.mode,
        status=session.status,
        role_profile=_role_profile_ref(session),
        overall_score=overall_score,
        total_questions=total_questions,
        questions_answered=answered,
        unanswered_questions=max(0, total_questions - answered),
        completion_percentage=percentage(answered, total_questions),
        is_complete=total_questions > 0 and answered == total_questions,
        total_time_spent_seconds=time_spent,
        average_time_per_question_seconds=int(round_half_up(time_spent / answered)) if answered else 0,
        total_interview_time_seconds=_interview_duration_seconds(session),
        estimated_time_seconds=estimated,
        time_efficiency=time_efficiency,
        hiring_threshold=hiring_threshold,
        is_hireable=is_hireable,
        score_gap=score_gap,
        hiring_recommendation=hiring_recommendation(is_hireable, score_gap),
        overall_strengths=dedupe_preserving_order(strengths),
        overall_weaknesses=dedupe_preserving_order(weaknesses),
        overall_improvement_tips=dedupe_preserving_order(tips),
        detailed_feedback=feedback,
        round_wise_performance=round_performance,
        started_at=session.created_at,
        completed_at=session.updated_at or session.created_at,
    )


def _latest_feedback(session: InterviewSession) -> Optional[str]:
    latest: Tuple[Optional[object], Optional[str]] = (None, None)
    for round_ in session.rounds:
        for answer in round_.answers:
            if not answer.feedback_text:
                continue
            if latest[0] is None or (answer.submitted_at and answer.submitted_at > latest[0]):
                latest = (answer.submitted_at, answer.feedback_text)
    return latest[1]


def build_session_snapshot(session: InterviewSession) -> SessionSnapshot:
    """Reduced-precision summary used by the session list view."""
    rounds = [build_round_performance(round_) for round_ in session.rounds]
    total = sum(r.total_questions for r in rounds)
    answered = sum(r.questions_answered for r in rounds)
    scores = [a.score for round_ in session.rounds for a in _evaluated(round_.answers)]
    role = session.role_profile

    return SessionSnapshot(
        session_id=session.id,
        role_name=role.role_name if role else "Custom Interview",
        company=(role.company_name or "") if role else "",
        mode=session.mode,
        status=session.status,
        proctored=bool(session.proctored),
        started_at=session.created_at,
        updated_at=session.updated_at,
        total_questions=total,
        answered_questions=answered,
        completion_percentage=percentage(answered, total),
        average_score=round_half_up(sum(scores) / len(scores), 1) if scores else None,
        latest_feedback=_latest_feedback(session),
        rounds=[
            RoundSnapshot(
                round_type=r.round_type,
                total_questions=r.total_questions,
                answered_questions=r.questions_answered,
                completion_percentage=r.completion_percentage,
            )
            for r in rounds
        ],
    )
