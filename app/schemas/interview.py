"""
Pydantic schemas for interview session endpoints.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator



# ============================================
# Requests
# ============================================

class StartInterviewRequest(BaseModel):
    """Request schema for starting an interview session."""
    mode: str = Field(..., description="Interview mode: resume, role or mixed")
    role_profile_id: int = Field(..., description="Role profile ID")
    resume_id: Optional[int] = Field(None, description="Resume ID (resume/mixed modes; defaults to latest resume)")
    enabled_rounds: Optional[List[str]] = Field(None, description="Round types to include, in order")
    question_counts: Dict[str, int] = Field(default_factory=dict, description="Per-round question count overrides")
    difficulty: Optional[str] = Field(None, description="Session difficulty (experience level)")
    proctored: bool = Field(False, description="Whether the client runs the session proctored")

    class Config:
        json_schema_extra = {
            "example": {
                "mode": "mixed",
                "role_profile_id": 1,
                "enabled_rounds": ["technical", "hr"],
                "question_counts": {"technical": 2, "hr": 1},
                "difficulty": "full-time-fresher",
                "proctored": False
            }
        }


class SubmitAnswerRequest(BaseModel):
    """Request schema for submitting an answer."""
    question_id: str = Field(..., min_length=1, description="Question ID, e.g. technical-q1")
    answer_text: str = Field(..., description="Answer text (at least 10 characters)")
    time_spent_seconds: int = Field(0, ge=0, description="Client-measured time spent on the question")

    @field_validator("answer_text")
    @classmethod
    def validate_answer_text(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 10:
            raise ValueError("Answer must be at least 10 characters")
        return v

    @field_validator("question_id")
    @classmethod
    def validate_question_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Question ID is required")
        return v


# ============================================
# Session creation / question flow
# ============================================

class RoleProfileRef(BaseModel):
    id: int
    name: str
    company: str = ""


class RoundMetadata(BaseModel):
    round_index: int
    round_type: str
    question_count: int
    completed: bool = False


class StartInterviewResponse(BaseModel):
    session_id: int
    mode: str
    role_profile: RoleProfileRef
    rounds_metadata: List[RoundMetadata]
    status: str
    proctored: bool


class NextQuestionResponse(BaseModel):
    """Either the next unanswered question or the all-answered signal."""
    all_questions_answered: bool = False
    round_type: Optional[str] = None
    question_id: Optional[str] = None
    question_text: Optional[str] = None
    question_number: Optional[int] = None
    total_questions: int = 0
    difficulty: Optional[str] = None
    time_minutes: Optional[int] = None
    session_start_time: Optional[datetime] = None
    proctored: bool = False


class EvaluationResponse(BaseModel):
    score: int = Field(..., ge=0, le=10)
    feedback_text: str = ""
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    improvement_tips: List[str] = Field(default_factory=list)
    score_breakdown: Optional[Dict[str, Any]] = None


class SubmitAnswerResponse(BaseModel):
    evaluation: EvaluationResponse
    next_question_available: bool


# ============================================
# Summary
# ============================================

class RoundPerformance(BaseModel):
    round_type: str
    questions_answered: int
    total_questions: int
    average_score: float
    completion_percentage: int = Field(..., ge=0, le=100)
    total_time_spent_seconds: int
    average_time_per_question_seconds: int


class FeedbackEntry(BaseModel):
    round_type: str
    feedback: str
    score: int


class SessionSummary(BaseModel):
    """Report content recomputed from stored session data on every request."""
    session_id: Optional[int] = None
    mode: str
    status: str
    role_profile: Optional[RoleProfileRef] = None

    overall_score: float
    total_questions: int
    questions_answered: int
    unanswered_questions: int
    completion_percentage: int = Field(..., ge=0, le=100)
    is_complete: bool

    # Time statistics
    total_time_spent_seconds: int
    average_time_per_question_seconds: int
    total_interview_time_seconds: int
    estimated_time_seconds: int
    time_efficiency: int

    # Hiring assessment
    hiring_threshold: float
    is_hireable: bool
    score_gap: float
    hiring_recommendation: str

    # Detailed report
    overall_strengths: List[str] = Field(default_factory=list)
    overall_weaknesses: List[str] = Field(default_factory=list)
    overall_improvement_tips: List[str] = Field(default_factory=list)
    detailed_feedback: List[FeedbackEntry] = Field(default_factory=list)
    round_wise_performance: List[RoundPerformance] = Field(default_factory=list)

    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class CompleteInterviewResponse(BaseModel):
    message: str
    summary: SessionSummary


# ============================================
# Session list
# ============================================

class RoundSnapshot(BaseModel):
    round_type: str
    total_questions: int
    answered_questions: int
    completion_percentage: int


class SessionSnapshot(BaseModel):
    session_id: int
    role_name: str
    company: str = ""
    mode: str
    status: str
    proctored: bool
    started_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    total_questions: int
    answered_questions: int
    completion_percentage: int
    average_score: Optional[float] = None
    latest_feedback: Optional[str] = None
    rounds: List[RoundSnapshot] = Field(default_factory=list)


class SessionListResponse(BaseModel):
    sessions: List[SessionSnapshot]
    count: int


