import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import (
    admin_router,
    leaderboard_router,
    problems_router,
    submissions_router,
    system_router,
    teams_router,
)
from domain.contest import ContestError, Evaluator, StorageFailure
from domain.contest.seed import seed_problems
from infra.services import get_runner
from .db import Database
from .settings import (
    APP_DESCRIPTION,
    APP_TITLE,
    APP_VERSION,
    CORS_ALLOW_ORIGINS,
    EXEC_BACKEND,
    SEED_PROBLEMS_ON_STARTUP,
)

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def create_app(
    database: Optional[Database] = None,
    evaluator: Optional[Evaluator] = None,
    seed: bool = SEED_PROBLEMS_ON_STARTUP,
) -> FastAPI:
    app = FastAPI(
        title=APP_TITLE,
        version=APP_VERSION,
        description=APP_DESCRIPTION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.database = database or Database()
    app.state.evaluator = evaluator or Evaluator(get_runner(EXEC_BACKEND))

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Starting {APP_TITLE} v{APP_VERSION}...")
        app.state.database.init()

        runner = app.state.evaluator.runner
        if hasattr(runner, "cleanup_stale_containers"):
            runner.cleanup_stale_containers()

        if seed:
            db = app.state.database.session()
            try:
                seed_problems(db)
            finally:
                db.close()

        logger.info("Startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        app.state.database.close()
        logger.info("Shutdown complete")

    @app.exception_handler(ContestError)
    async def contest_error_handler(request: Request, exc: ContestError):
        if isinstance(exc, StorageFailure):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message},
        )

    app.include_router(teams_router)
    app.include_router(problems_router)
    app.include_router(submissions_router)
    app.include_router(leaderboard_router)
    app.include_router(admin_router)
    app.include_router(system_router)

    return app


app = create_app()


__all__ = ["app", "create_app"]
