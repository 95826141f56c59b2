"""
Question generation and answer evaluation providers.

The session service depends only on InterviewContentProvider. Every failure
inside a provider is raised as ProviderError so the caller can substitute
placeholder content.
"""
import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.core.config import DEFAULT_QUESTION_TIME_MINUTES
from app.core.errors import ProviderError
from app.core.interview_structures import normalize_difficulty_value
from app.llm.provider import LLMProvider
from app.llm.prompts import (
    EVALUATION_SYSTEM_PROMPT,
    QUESTION_SYSTEM_PROMPT,
    build_context_block,
    build_evaluation_prompt,
    build_question_prompt,
)
from app.llm.router import get_model_for_feature, get_temperature_for_feature

logger = logging.getLogger(__name__)

PLACEHOLDER_ANSWER_PATTERN = re.compile(r"\b(test|testing|test answer|testing purpose|just testing)\b")
MIN_SUBSTANTIVE_ANSWER_CHARS = 20
PLACEHOLDER_ANSWER_MAX_SCORE = 2


@dataclass
class QuestionContext:
    """Context handed to the question provider for one round."""
    role_profile: Dict[str, Any]
    question_count: int
    difficulty: str
    candidate_profile: Dict[str, Any] = field(default_factory=dict)
    resume_profile: Optional[Dict[str, Any]] = None


@dataclass
class GeneratedQuestion:
    question_id: str
    text: str
    difficulty: str
    expected_keywords: List[str] = field(default_factory=list)
    time_minutes: int = DEFAULT_QUESTION_TIME_MINUTES


@dataclass
class Evaluation:
    score: int
    feedback_text: str = ""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    improvement_tips: List[str] = field(default_factory=list)
    score_breakdown: Optional[Dict[str, Any]] = None
    is_placeholder: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "feedback_text": self.feedback_text,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "improvement_tips": list(self.improvement_tips),
            "score_breakdown": self.score_breakdown,
        }


class InterviewContentProvider(ABC):
    """Source of interview questions and answer evaluations."""

    @abstractmethod
    def generate_questions(self, round_type: str, context: QuestionContext) -> List[GeneratedQuestion]:
        """
        Generate the questions of one round.
        
        Returned ids always follow "{round_type}-q{n}". The list may be shorter
        than context.question_count but never longer.
        
        Raises:
            ProviderError: on any upstream or parsing failure
        """

    @abstractmethod
    def evaluate_answer(self, question: Any, answer_text: str) -> Evaluation:
        """
        Score an answer on the 0-10 scale.
        
        `question` needs `text` and `expected_keywords` attributes.
        
        Raises:
            ProviderError: on any upstream or parsing failure
        """


def parse_json_payload(text: str) -> Dict[str, Any]:
    """Parse a JSON object from an LLM reply, tolerating markdown code fences."""
    if not text:
        raise ProviderError("Empty response from language model")

    fenced = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
    candidate = fenced.group(1) if fenced else text.strip()
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError:
        braces = re.search(r"\{.*\}", text, re.DOTALL)
        if not braces:
            raise ProviderError("Language model returned non-JSON content")
        try:
            payload = json.loads(braces.group())
        except json.JSONDecodeError as e:
            raise ProviderError("Language model returned malformed JSON", e)

    if not isinstance(payload, dict):
        raise ProviderError("Language model returned an unexpected JSON shape")
    return payload


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def normalize_questions(
    round_type: str,
    raw_questions: Any,
    question_count: int,
    difficulty: str,
) -> List[GeneratedQuestion]:
    """
    Turn raw provider output into GeneratedQuestion values.
    
    Ids returned by the model are ignored and replaced with "{round_type}-q{n}"
    so they stay unique across rounds.
    """
    if not isinstance(raw_questions, list):
        raise ProviderError("Invalid response format: missing questions array")

    questions: List[GeneratedQuestion] = []
    for raw in raw_questions:
        if isinstance(raw, str):
            raw = {"text": raw}
        if not isinstance(raw, dict):
            continue
        text = str(raw.get("text") or "").strip()
        if not text:
            continue
        questions.append(GeneratedQuestion(
            question_id=f"{round_type}-q{len(questions) + 1}",
            text=text,
            difficulty=normalize_difficulty_value(raw.get("difficulty"), difficulty),
            expected_keywords=_string_list(raw.get("expectedKeywords", raw.get("expected_keywords"))),
            time_minutes=_positive_int(
                raw.get("timeMinutes", raw.get("time_minutes")), DEFAULT_QUESTION_TIME_MINUTES
            ),
        ))
        if len(questions) >= question_count:
            break

    if not questions:
        raise ProviderError(f"No usable questions returned for {round_type} round")
    return questions


def normalize_evaluation(payload: Dict[str, Any], answer_text: str) -> Evaluation:
    """Clamp the score to 0-10 and cap obvious placeholder answers."""
    try:
        score = int(float(payload.get("score", 0)))
    except (TypeError, ValueError):
        score = 0
    score = max(0, min(10, score))

    answer_lower = answer_text.lower().strip()
    looks_like_placeholder = (
        bool(PLACEHOLDER_ANSWER_PATTERN.search(answer_lower))
        or len(answer_lower) < MIN_SUBSTANTIVE_ANSWER_CHARS
    )
    if looks_like_placeholder and score > PLACEHOLDER_ANSWER_MAX_SCORE:
        score = PLACEHOLDER_ANSWER_MAX_SCORE

    breakdown = payload.get("scoreBreakdown", payload.get("score_breakdown"))
    return Evaluation(
        score=score,
        feedback_text=str(payload.get("feedbackText") or payload.get("feedback_text") or "No feedback provided"),
        strengths=_string_list(payload.get("strengths")),
        weaknesses=_string_list(payload.get("weaknesses")),
        improvement_tips=_string_list(payload.get("improvementTips", payload.get("improvement_tips"))),
        score_breakdown=breakdown if isinstance(breakdown, dict) else None,
    )


class LLMInterviewProvider(InterviewContentProvider):
    """InterviewContentProvider backed by a chat-completion LLMProvider."""

    def __init__(self, llm: Optional[LLMProvider] = None):
        self.llm = llm

    def _complete(self, feature: str, system_prompt: str, prompt: str) -> Dict[str, Any]:
        if self.llm is None:
            raise ProviderError("OPENAI_API_KEY is not configured")
        try:
            response = self.llm.chat(
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                model=get_model_for_feature(feature),
                temperature=get_temperature_for_feature(feature),
            )
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"{type(e).__name__}: {e}", e) from e
        return parse_json_payload(response.content)

    def generate_questions(self, round_type: str, context: QuestionContext) -> List[GeneratedQuestion]:
        context_block = build_context_block(
            context.role_profile,
            candidate_profile=context.candidate_profile,
            resume_profile=context.resume_profile,
        )
        prompt = build_question_prompt(round_type, context_block, context.question_count, context.difficulty)
        payload = self._complete("question_generation", QUESTION_SYSTEM_PROMPT, prompt)
        questions = normalize_questions(
            round_type, payload.get("questions"), context.question_count, context.difficulty
        )
        logger.debug(f"Generated {len(questions)}/{context.question_count} questions for {round_type} round")
        return questions

    def evaluate_answer(self, question: Any, answer_text: str) -> Evaluation:
        prompt = build_evaluation_prompt(question.text, list(question.expected_keywords or []), answer_text)
        payload = self._complete("answer_evaluation", EVALUATION_SYSTEM_PROMPT, prompt)
        return normalize_evaluation(payload, answer_text)


def build_default_provider() -> InterviewContentProvider:
    """
    Construct the process-wide provider.
    
    Without an API key the provider still exists; every call raises
    ProviderError and the session service serves placeholder content.
    """
    from app.llm.openai_provider import OpenAIProvider

    try:
        llm = OpenAIProvider()
    except ValueError:
        logger.warning("OpenAI provider not available - interview content will use placeholders")
        llm = None
    return LLMInterviewProvider(llm)
