import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware

from src.endpoints import list_of_routes
from src.utils.config import Settings
from src.utils.db import ConnectionBootstrap, RetryPolicy
from src.utils.exceptions import BootstrapExhaustedError, sqlalchemy_exception_handler

logger = logging.getLogger(__name__)


def bind_routes(application: FastAPI) -> None:
    for route in list_of_routes:
        application.include_router(route)


def build_bootstrap(settings: Settings) -> ConnectionBootstrap:
    return ConnectionBootstrap(
        settings.db_url,
        policy=RetryPolicy(max_attempts=settings.DB_CONNECT_RETRIES, delay=settings.DB_RETRY_DELAY),
        create_schema=settings.DB_CREATE_SCHEMA,
    )


def create_app(settings: Optional[Settings] = None, bootstrap: Optional[ConnectionBootstrap] = None) -> FastAPI:
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Requests are only served once the connection is up.
        db = bootstrap or build_bootstrap(settings)
        try:
            await db.initialize()
        except BootstrapExhaustedError as e:
            logger.critical(str(e))
            raise
        app.state.bootstrap = db
        yield
        await db.close()

    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)

    bind_routes(app)
    return app


settings = Settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT, workers=1)
