import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ✅ Import All API Routes
from app.api.routes import admin, auth, health, interview, resume, roles

from app.core.config import CORS_ORIGINS, DATABASE_URL, LOG_FILE, LOG_LEVEL, RUN_MIGRATIONS
from app.core.errors import InterviewError
from app.core.logging_config import setup_logging
from app.core.service_dependency import create_interview_service
from app.db.init_db import init_db
from app.db.migrate import run_migrations

logger = logging.getLogger(__name__)


# ============================================
# ✅ STARTUP / SHUTDOWN
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL, LOG_FILE)

    if RUN_MIGRATIONS:
        run_migrations(DATABASE_URL)
    elif DATABASE_URL.startswith("sqlite"):
        init_db()

    # One provider client for the whole process
    app.state.interview_service = create_interview_service()
    logger.info("Mock interview API started")
    yield
    logger.info("Mock interview API shutting down")


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Mock Interview API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ ERROR HANDLING
# ============================================

@app.exception_handler(InterviewError)
async def interview_error_handler(request: Request, exc: InterviewError):
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(roles.router)
app.include_router(resume.router)
app.include_router(interview.router)
app.include_router(admin.router)
app.include_router(health.router)


@app.get("/")
def root():
    return {"message": "Mock Interview API is running"}
