import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.errors import register_error_handlers
from app.core.logging_config import setup_logging
from app.db.base_class import utcnow
from app.db.session import AsyncSessionLocal, init_models
from app.routes import auth, content, dashboard, languages, questions, quiz_game, quizzes
from app.services.seed import seed_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    async with AsyncSessionLocal() as db:
        await seed_database(db, sample_data=settings.SEED_SAMPLE_DATA)
    logger.info("Database ready (%s)", settings.DB_ENGINE)
    yield


def create_app() -> FastAPI:
    setup_logging(settings.is_dev)

    app = FastAPI(title="Quiz Admin API", lifespan=lifespan)

    # CORS middleware configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(languages.router, prefix="/api/languages", tags=["languages"])
    app.include_router(content.router, prefix="/api/content", tags=["content"])
    app.include_router(quizzes.router, prefix="/api/quizzes", tags=["quizzes"])
    app.include_router(questions.router, prefix="/api/questions", tags=["questions"])
    app.include_router(quiz_game.router, prefix="/api/quiz-game", tags=["quiz-game"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])

    @app.get("/api/health", tags=["health"])
    async def health():
        return {"status": "OK", "timestamp": utcnow().isoformat()}

    return app


app = create_app()
