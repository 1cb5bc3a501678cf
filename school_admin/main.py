from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import close_db_connections, create_tables, wait_for_database
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging

from .routers import health, data_import, students, classes, reports

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Starting School Administration API")

    await wait_for_database(settings.db_connect_retries, settings.db_connect_retry_delay)
    await create_tables()

    yield

    logger.info("Shutting down School Administration API")
    await close_db_connections()
    logger.info("Shutdown complete")


def create_app(use_lifespan: bool = True) -> FastAPI:
    app = FastAPI(
        title="School Administration API",
        description="Teacher, student, class and subject roster with CSV import, merged student listings and workload reports",
        version=settings.app_version,
        lifespan=lifespan if use_lifespan else None
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(data_import.router)
    app.include_router(students.router)
    app.include_router(classes.router)
    app.include_router(reports.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("school_admin.main:app", host="0.0.0.0", port=3000, reload=True)
