"""
Prompt templates for question generation and answer evaluation.
"""
from typing import Any, Dict, List

ROUND_FOCUS: Dict[str, str] = {
    "technical": """Generate {count} technical interview questions for a candidate at {level} level.
Focus on:
- Data structures and algorithms
- Coding problems
- Project deep-dive questions
- System design basics (for experienced candidates)
- Technology-specific questions based on the role

Each question should be practical and relevant to the candidate's background.""",

    "hr": """Generate {count} behavioral/HR interview questions.
Use the STAR (Situation, Task, Action, Result) format as a guide for what to evaluate.
Focus on:
- Teamwork and collaboration
- Problem-solving in challenging situations
- Leadership and initiative
- Handling conflicts
- Motivation and career goals
- Cultural fit""",

    "manager": """Generate {count} managerial interview questions.
Focus on:
- Leadership and team management
- Decision-making under pressure
- Handling difficult team situations
- Project ownership and accountability
- Mentoring and developing team members
- Balancing technical and management responsibilities""",

    "cto": """Generate {count} CTO/technical leadership interview questions.
Focus on:
- System architecture and scalability
- Technical decision-making
- Technology strategy
- Handling technical debt
- Building and leading technical teams
- Long-term technical vision""",

    "case": """Generate {count} case study/problem-solving interview questions.
Focus on:
- Analytical thinking
- Structured problem-solving approach
- Business logic and reasoning
- Data interpretation
- Scenario-based challenges
- Consulting-style case questions""",
}

QUESTION_SYSTEM_PROMPT = "You are an expert interview question generator for a mock interview platform."

EVALUATION_SYSTEM_PROMPT = "You are a strict and accurate interview evaluator."

QUESTION_OUTPUT_FORMAT = """Respond with ONLY valid JSON in this exact format (no markdown, no explanations):
{{
  "questions": [
    {{
      "text": "Question text here",
      "difficulty": "{difficulty}",
      "expectedKeywords": ["keyword1", "keyword2"],
      "timeMinutes": 5
    }}
  ]
}}

Generate exactly {count} questions. Make them diverse and relevant to the candidate's profile."""

EVALUATION_TEMPLATE = """Evaluate the following interview answer with precision.

Question: {question}

Expected Keywords/Topics: {keywords}

Candidate's Answer:
{answer}

Scoring criteria:
1. Relevance (0-2): does the answer address the question? Placeholder or irrelevant text scores 0.
2. Accuracy & Depth (0-4): substance and correctness of the content.
3. Clarity & Communication (0-2): structure and readability.
4. Completeness (0-2): whether every part of the question is covered.

Rules:
- Answers like "test", "testing" or similar placeholder text receive 0-2/10
- Very short answers (< 20 words) without substance receive 0-3/10
- Only well-thought-out, detailed and accurate answers score 8-10/10

Respond with ONLY valid JSON in this exact format (no markdown, no explanations):
{{
  "score": 7,
  "feedbackText": "Feedback explaining the score",
  "strengths": ["strength1"],
  "weaknesses": ["weakness1"],
  "improvementTips": ["tip1"],
  "scoreBreakdown": {{"relevance": 2, "accuracy": 3, "clarity": 2, "completeness": 2}}
}}"""


def _join(values: List[Any]) -> str:
    return ", ".join(str(v) for v in values if v)


def build_context_block(
    role_profile: Dict[str, Any],
    candidate_profile: Dict[str, Any] = None,
    resume_profile: Dict[str, Any] = None,
) -> str:
    """Render the role, candidate and resume context shared by every round prompt."""
    lines = [
        f"Role: {role_profile.get('role_name', '')}",
        f"Domain Tags: {_join(role_profile.get('domain_tags', []))}",
        f"Expected Skills: {_join(role_profile.get('skill_expectations', []))}",
    ]

    if candidate_profile:
        lines.append("")
        lines.append("Candidate Profile:")
        degree = candidate_profile.get("education_degree") or "N/A"
        college = candidate_profile.get("college") or "N/A"
        lines.append(f"- Education: {degree} from {college}")
        lines.append(f"- Experience Level: {candidate_profile.get('experience_level', '')}")
        lines.append(f"- Experience Years: {candidate_profile.get('experience_years', 0)}")
        lines.append(f"- Domains: {_join(candidate_profile.get('domains', []))}")

    if resume_profile:
        lines.append("")
        lines.append("Resume Information:")
        if resume_profile.get("skills"):
            lines.append(f"- Skills: {_join(resume_profile['skills'])}")
        if resume_profile.get("projects"):
            lines.append(f"- Projects: {'; '.join(resume_profile['projects'][:3])}")
        if resume_profile.get("experience_years"):
            lines.append(f"- Experience: {resume_profile['experience_years']} years")

    return "\n".join(lines)


def build_question_prompt(round_type: str, context_block: str, count: int, difficulty: str) -> str:
    focus = ROUND_FOCUS.get(round_type, ROUND_FOCUS["technical"])
    level = difficulty.replace("-", " ")
    return "\n\n".join([
        context_block,
        focus.format(count=count, level=level),
        QUESTION_OUTPUT_FORMAT.format(count=count, difficulty=difficulty),
    ])


def build_evaluation_prompt(question_text: str, expected_keywords: List[str], answer_text: str) -> str:
    return EVALUATION_TEMPLATE.format(
        question=question_text,
        keywords=_join(expected_keywords or []) or "N/A",
        answer=answer_text,
    )
