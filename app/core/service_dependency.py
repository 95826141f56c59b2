"""
Dependency providing the process-wide InterviewSessionService.

The service (and the provider client inside it) is built once in the app
lifespan and stored on app.state; tests swap it through dependency_overrides.
"""
import logging
from fastapi import Request

from app.llm.interview_provider import build_default_provider
from app.services.interview_service import InterviewSessionService

logger = logging.getLogger(__name__)


def create_interview_service() -> InterviewSessionService:
    return InterviewSessionService(provider=build_default_provider())


def get_interview_service(request: Request) -> InterviewSessionService:
    service = getattr(request.app.state, "interview_service", None)
    if service is None:
        logger.info("Interview service not initialized at startup, creating it now")
        service = create_interview_service()
        request.app.state.interview_service = service
    return service
