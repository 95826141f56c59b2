"""
Interview session lifecycle.

InterviewSessionService owns round/question sequencing, exactly-once answer
submission, ownership checks, completion and summary retrieval. It is built
once at process start with an InterviewContentProvider and shared by every
request; it keeps no session state between calls.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import HIRING_THRESHOLD, MAX_SESSIONS_LIST_LIMIT, DEFAULT_QUESTION_TIME_MINUTES
from app.core.errors import (
    DuplicateAnswerError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ProviderError,
    ValidationError,
)
from app.core.interview_structures import (
    DEFAULT_DIFFICULTY,
    ROUND_TYPES,
    get_default_structure,
    normalize_difficulty_value,
    resolve_question_count,
    resolve_round_difficulty,
)
from app.db.models import (
    InterviewAnswer,
    InterviewQuestion,
    InterviewRound,
    InterviewSession,
    Resume,
    RoleProfile,
    User,
)
from app.db.models.interview_session import SESSION_MODES
from app.llm.interview_provider import (
    Evaluation,
    GeneratedQuestion,
    InterviewContentProvider,
    QuestionContext,
)
from app.schemas.interview import (
    CompleteInterviewResponse,
    EvaluationResponse,
    NextQuestionResponse,
    RoleProfileRef,
    RoundMetadata,
    SessionListResponse,
    SessionSummary,
    StartInterviewRequest,
    StartInterviewResponse,
    SubmitAnswerResponse,
)
from app.services.report_service import render_report_pdf, report_filename
from app.services.summary_service import build_session_snapshot, build_session_summary

logger = logging.getLogger(__name__)

EVALUATION_UNAVAILABLE_FEEDBACK = "Evaluation temporarily unavailable. Your answer has been saved."


@dataclass
class RoundPlan:
    round_type: str
    question_count: int
    difficulty: str


def describe_provider_failure(error: Exception) -> str:
    """Human-readable text for a placeholder question."""
    message = str(getattr(error, "message", None) or error)
    lowered = message.lower()
    text = "Error generating questions. "
    if "api_key" in lowered or "api key" in lowered:
        return text + "The AI provider API key is not configured. Please contact the administrator."
    if "timeout" in lowered or "timed out" in lowered:
        return text + "Request timed out. Please try again."
    if "quota" in lowered or "rate limit" in lowered:
        return text + "API quota exceeded. Please try again later."
    return text + f"Please try again later. ({message})"


def placeholder_question(round_type: str, difficulty: str, error: Exception) -> GeneratedQuestion:
    return GeneratedQuestion(
        question_id=f"{round_type}-q1",
        text=describe_provider_failure(error),
        difficulty=difficulty,
        expected_keywords=[],
        time_minutes=DEFAULT_QUESTION_TIME_MINUTES,
    )


def placeholder_evaluation() -> Evaluation:
    return Evaluation(
        score=0,
        feedback_text=EVALUATION_UNAVAILABLE_FEEDBACK,
        is_placeholder=True,
    )


def find_next_question(session: InterviewSession) -> Optional[Tuple[int, InterviewRound, InterviewQuestion]]:
    """
    First unanswered question scanning rounds, then questions, in stored order.
    
    Returns (1-based running question number, round, question) or None once
    every question has an answer.
    """
    number = 0
    for round_ in session.rounds:
        answered = round_.answers_by_question
        for question in round_.questions:
            number += 1
            if question.question_id not in answered:
                return number, round_, question
    return None


class InterviewSessionService:
    """Session lifecycle controller."""

    def __init__(
        self,
        provider: InterviewContentProvider,
        hiring_threshold: float = HIRING_THRESHOLD,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.provider = provider
        self.hiring_threshold = hiring_threshold
        self.clock = clock

    # ============================================
    # Loading / guards
    # ============================================

    def _get_session(self, db: Session, session_id: int) -> InterviewSession:
        session = db.query(InterviewSession).filter(InterviewSession.id == session_id).first()
        if not session:
            raise NotFoundError("Interview session not found", {"session_id": session_id})
        return session

    def _get_owned_session(self, db: Session, session_id: int, user_id: int) -> InterviewSession:
        session = self._get_session(db, session_id)
        if session.user_id != user_id:
            logger.warning(f"Session access denied: session_id={session_id}, user_id={user_id}")
            raise ForbiddenError("You do not have access to this session")
        return session

    @staticmethod
    def _require_active(session: InterviewSession) -> None:
        if session.is_completed:
            raise InvalidStateError(
                "Interview session is already completed",
                {"session_id": session.id, "status": session.status},
            )

    # ============================================
    # Session creation
    # ============================================

    def _resolve_resume(self, db: Session, user: User, mode: str, resume_id: Optional[int]) -> Optional[Resume]:
        if mode == "role":
            return None

        if resume_id is not None:
            resume = db.query(Resume).filter(Resume.id == resume_id).first()
            if resume and resume.user_id != user.id:
                raise ForbiddenError("You do not have access to this resume")
        else:
            resume = (
                db.query(Resume)
                .filter(Resume.user_id == user.id)
                .order_by(Resume.created_at.desc(), Resume.id.desc())
                .first()
            )

        if not resume:
            raise ValidationError("Resume is required for this interview mode", {"mode": mode})
        return resume

    def plan_rounds(self, request: StartInterviewRequest, role_profile: RoleProfile) -> List[RoundPlan]:
        """
        Decide which rounds the session gets, with question count and difficulty.
        
        Raises:
            ValidationError: if no round ends up enabled
        """
        role_structure = role_profile.interview_structures or {}
        technical = role_structure.get("technical") or {}
        session_difficulty = normalize_difficulty_value(
            request.difficulty or technical.get("difficulty") or DEFAULT_DIFFICULTY
        )
        default_structure = get_default_structure(session_difficulty)

        if request.enabled_rounds:
            round_types = []
            for raw in request.enabled_rounds:
                round_type = (raw or "").strip().lower()
                if round_type in ROUND_TYPES and round_type not in round_types:
                    round_types.append(round_type)
        else:
            round_types = [rt for rt in ROUND_TYPES if default_structure.get(rt, 0) > 0]

        plans = []
        for round_type in round_types:
            count = resolve_question_count(
                round_type,
                request.question_counts.get(round_type),
                role_structure,
                default_structure,
            )
            if count <= 0:
                continue
            plans.append(RoundPlan(
                round_type=round_type,
                question_count=count,
                difficulty=resolve_round_difficulty(round_type, request.difficulty, role_structure, session_difficulty),
            ))

        if not plans:
            raise ValidationError("At least one interview round must be enabled")
        return plans

    def _generate_round_questions(self, plan: RoundPlan, context: QuestionContext) -> List[GeneratedQuestion]:
        """Questions for one round; any provider failure becomes a single placeholder."""
        try:
            questions = self.provider.generate_questions(plan.round_type, context)
            if not questions:
                raise ProviderError(f"No questions returned for {plan.round_type} round")
            return questions[:plan.question_count]
        except ProviderError as e:
            logger.warning(f"Question generation failed for {plan.round_type} round: {e.message}")
            return [placeholder_question(plan.round_type, plan.difficulty, e)]
        except Exception as e:
            logger.error(f"Unexpected question provider error for {plan.round_type} round: {e}", exc_info=True)
            return [placeholder_question(plan.round_type, plan.difficulty, e)]

    def create_session(self, db: Session, user: User, request: StartInterviewRequest) -> StartInterviewResponse:
        """
        Create an active session with every round's questions populated.
        
        Raises:
            ValidationError: invalid mode, missing resume, no enabled round
            NotFoundError: unknown role profile
            ForbiddenError: resume owned by someone else
        """
        mode = (request.mode or "").strip().lower()
        if mode not in SESSION_MODES:
            raise ValidationError("Invalid mode. Must be: resume, role, or mixed", {"mode": request.mode})

        role_profile = db.query(RoleProfile).filter(RoleProfile.id == request.role_profile_id).first()
        if not role_profile:
            raise NotFoundError("Role profile not found", {"role_profile_id": request.role_profile_id})

        resume = self._resolve_resume(db, user, mode, request.resume_id)
        plans = self.plan_rounds(request, role_profile)

        role_context = role_profile.to_context()
        candidate_context = user.to_candidate_profile()
        resume_context = resume.to_context() if resume else None

        rounds = []
        for position, plan in enumerate(plans):
            context = QuestionContext(
                role_profile=role_context,
                question_count=plan.question_count,
                difficulty=plan.difficulty,
                candidate_profile=candidate_context,
                resume_profile=resume_context,
            )
            generated = self._generate_round_questions(plan, context)
            rounds.append(InterviewRound(
                position=position,
                round_type=plan.round_type,
                difficulty=plan.difficulty,
                questions=[
                    InterviewQuestion(
                        position=index,
                        question_id=f"{plan.round_type}-q{index + 1}",
                        text=question.text,
                        difficulty=question.difficulty or plan.difficulty,
                        expected_keywords=list(question.expected_keywords or []),
                        time_minutes=max(1, question.time_minutes or DEFAULT_QUESTION_TIME_MINUTES),
                    )
                    for index, question in enumerate(generated)
                ],
            ))

        if not any(round_.questions for round_ in rounds):
            raise ValidationError("No interview questions could be prepared")

        now = self.clock()
        session = InterviewSession(
            user_id=user.id,
            role_profile_id=role_profile.id,
            resume_id=resume.id if resume else None,
            mode=mode,
            status="active",
            proctored=bool(request.proctored),
            created_at=now,
            updated_at=now,
            rounds=rounds,
        )
        db.add(session)
        db.commit()
        db.refresh(session)

        logger.info(
            f"Interview session created: session_id={session.id}, user_id={user.id}, "
            f"rounds={[plan.round_type for plan in plans]}, questions={session.total_questions}"
        )

        return StartInterviewResponse(
            session_id=session.id,
            mode=session.mode,
            role_profile=RoleProfileRef(
                id=role_profile.id,
                name=role_profile.role_name,
                company=role_profile.company_name or "",
            ),
            rounds_metadata=[
                RoundMetadata(
                    round_index=index,
                    round_type=round_.round_type,
                    question_count=len(round_.questions),
                    completed=round_.completed,
                )
                for index, round_ in enumerate(session.rounds)
            ],
            status=session.status,
            proctored=session.proctored,
        )

    # ============================================
    # Question flow
    # ============================================

    def get_next_question(self, db: Session, session_id: int, user_id: int) -> NextQuestionResponse:
        """
        Return the first unanswered question, or the all-answered signal.
        
        Raises:
            NotFoundError, ForbiddenError, InvalidStateError
        """
        session = self._get_owned_session(db, session_id, user_id)
        self._require_active(session)

        total_questions = session.total_questions
        found = find_next_question(session)
        if found is None:
            return NextQuestionResponse(
                all_questions_answered=True,
                total_questions=total_questions,
                session_start_time=session.created_at,
                proctored=session.proctored,
            )

        number, round_, question = found
        return NextQuestionResponse(
            round_type=round_.round_type,
            question_id=question.question_id,
            question_text=question.text,
            question_number=number,
            total_questions=total_questions,
            difficulty=question.difficulty,
            time_minutes=question.time_minutes or DEFAULT_QUESTION_TIME_MINUTES,
            session_start_time=session.created_at,
            proctored=session.proctored,
        )

    def _evaluate(self, question: InterviewQuestion, answer_text: str) -> Evaluation:
        try:
            evaluation = self.provider.evaluate_answer(question, answer_text)
            score = evaluation.score
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                raise ProviderError(f"Evaluation score is not a number: {score!r}")
            clamped = max(0, min(10, int(round(score))))
            if clamped != score:
                logger.warning(f"Evaluation score {score!r} for {question.question_id} clamped to {clamped}")
            evaluation.score = clamped
            return evaluation
        except ProviderError as e:
            logger.warning(f"Answer evaluation failed for {question.question_id}: {e.message}")
        except Exception as e:
            logger.error(f"Unexpected evaluation provider error for {question.question_id}: {e}", exc_info=True)
        return placeholder_evaluation()

    @staticmethod
    def _duplicate_error(answer: InterviewAnswer) -> DuplicateAnswerError:
        return DuplicateAnswerError(
            "This question has already been answered",
            {
                "question_id": answer.question_id,
                "round_type": answer.round_type,
                "answered_at": answer.submitted_at.isoformat() if answer.submitted_at else None,
            },
        )

    def submit_answer(
        self,
        db: Session,
        session_id: int,
        user_id: int,
        question_id: str,
        answer_text: str,
        time_spent_seconds: Optional[int] = 0,
    ) -> SubmitAnswerResponse:
        """
        Record and evaluate exactly one answer for a question.
        
        Raises:
            NotFoundError: unknown session or question
            ForbiddenError: caller does not own the session
            InvalidStateError: session already completed
            DuplicateAnswerError: the question already has an answer
        """
        session = self._get_owned_session(db, session_id, user_id)
        self._require_active(session)

        located = session.question_index.get(question_id)
        if located is None:
            logger.info(f"Question not found: session_id={session_id}, question_id={question_id}")
            raise NotFoundError("Question not found in this session", {"question_id": question_id})
        round_, question = located

        existing = round_.answers_by_question.get(question_id)
        if existing is not None:
            logger.info(f"Duplicate answer rejected: session_id={session_id}, question_id={question_id}")
            raise self._duplicate_error(existing)

        evaluation = self._evaluate(question, answer_text)

        spent = max(0, int(time_spent_seconds or 0))
        now = self.clock()
        answer = InterviewAnswer(
            session_id=session.id,
            round_type=round_.round_type,
            question_id=question_id,
            answer_text=answer_text,
            started_at=now - timedelta(seconds=spent),
            submitted_at=now,
            time_spent_seconds=spent,
            score=evaluation.score,
            feedback_text=evaluation.feedback_text,
            strengths=list(evaluation.strengths),
            weaknesses=list(evaluation.weaknesses),
            improvement_tips=list(evaluation.improvement_tips),
            score_breakdown=evaluation.score_breakdown,
            is_placeholder=evaluation.is_placeholder,
        )
        round_.answers.append(answer)
        session.updated_at = now

        try:
            db.commit()
        except IntegrityError:
            # A concurrent submission for the same question won the insert
            db.rollback()
            winner = (
                db.query(InterviewAnswer)
                .filter(
                    InterviewAnswer.session_id == session_id,
                    InterviewAnswer.round_type == round_.round_type,
                    InterviewAnswer.question_id == question_id,
                )
                .first()
            )
            logger.info(f"Concurrent duplicate answer rejected: session_id={session_id}, question_id={question_id}")
            if winner is None:
                raise
            raise self._duplicate_error(winner)

        db.refresh(session)
        next_available = find_next_question(session) is not None
        logger.info(
            f"Answer recorded: session_id={session_id}, question_id={question_id}, "
            f"score={evaluation.score}, placeholder={evaluation.is_placeholder}"
        )

        return SubmitAnswerResponse(
            evaluation=EvaluationResponse(**evaluation.to_dict()),
            next_question_available=next_available,
        )

    # ============================================
    # Completion / summary
    # ============================================

    def _mark_completed(self, db: Session, session: InterviewSession) -> bool:
        """
        Atomically move an active session to completed, stamping updated_at once.
        
        Returns True only for the call that performed the transition.
        """
        updated = (
            db.query(InterviewSession)
            .filter(InterviewSession.id == session.id, InterviewSession.status != "completed")
            .update(
                {InterviewSession.status: "completed", InterviewSession.updated_at: self.clock()},
                synchronize_session=False,
            )
        )
        db.commit()
        db.refresh(session)
        if updated:
            logger.info(f"Interview session completed: session_id={session.id}")
        return bool(updated)

    def complete_session(self, db: Session, session_id: int, user_id: int) -> CompleteInterviewResponse:
        """
        Finalize a session (early or after the last answer) and return its summary.
        
        Idempotent: a completed session is not re-stamped, its summary is
        simply recomputed.
        """
        session = self._get_owned_session(db, session_id, user_id)

        transitioned = False
        if not session.is_completed:
            transitioned = self._mark_completed(db, session)

        summary = build_session_summary(session, self.hiring_threshold)
        if not transitioned:
            message = "Interview summary retrieved"
        elif summary.is_complete:
            message = "Interview completed successfully"
        else:
            message = "Interview completed with partial answers"

        return CompleteInterviewResponse(message=message, summary=summary)

    def get_summary(self, db: Session, session_id: int, user_id: int) -> SessionSummary:
        """
        Recompute the summary; viewing it finalizes an active session.
        """
        return self.complete_session(db, session_id, user_id).summary

    def list_sessions(self, db: Session, user_id: int, limit: Optional[int] = 20) -> SessionListResponse:
        """Newest sessions of a user with list-view snapshots."""
        try:
            limit = int(limit) if limit is not None else 20
        except (TypeError, ValueError):
            limit = 20
        limit = max(1, min(MAX_SESSIONS_LIST_LIMIT, limit))

        sessions = (
            db.query(InterviewSession)
            .filter(InterviewSession.user_id == user_id)
            .order_by(InterviewSession.created_at.desc(), InterviewSession.id.desc())
            .limit(limit)
            .all()
        )
        snapshots = [build_session_snapshot(session) for session in sessions]
        return SessionListResponse(sessions=snapshots, count=len(snapshots))

    def build_report(self, db: Session, session_id: int, user_id: int) -> Tuple[str, bytes]:
        """
        Render the downloadable report without changing session state.
        
        Returns:
            (filename, pdf bytes)
        """
        session = self._get_owned_session(db, session_id, user_id)
        summary = build_session_summary(session, self.hiring_threshold)
        return report_filename(session.id), render_report_pdf(summary)
