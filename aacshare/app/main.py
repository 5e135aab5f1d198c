# aacshare/app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from aacshare.app.api.errors import register_error_handlers
from aacshare.app.api.middleware import BodySizeLimitMiddleware
from aacshare.app.api.router import api_router
from aacshare.app.core.config import settings
from aacshare.app.db import init_models

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("%s started", settings.PROJECT_NAME)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description="API Server to share aac files",
        docs_url="/swagger",
        lifespan=lifespan,
    )

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.MAX_UPLOAD_SIZE)

    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    def root():
        return {"message": "Welcome to AAC Share API"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
