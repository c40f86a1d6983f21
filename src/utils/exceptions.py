import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class DatabaseBootstrapError(Exception):
    """Base class for errors raised while setting up the shared connection."""


class BootstrapExhaustedError(DatabaseBootstrapError):
    """Raised when every connection attempt has failed."""

    def __init__(self, attempts: int):
        super().__init__("Failed to establish DB connection after maximum retries.")
        self.attempts = attempts


class NotInitializedError(DatabaseBootstrapError):
    def __init__(self):
        super().__init__("DB not initialised.")


class BootstrapStateError(DatabaseBootstrapError):
    """Raised when initialize() is called more than once."""


def driver_message(exc: BaseException) -> str:
    # MySQL drivers carry (errno, message), sqlite3 carries (message,).
    orig = getattr(exc, "orig", None) or exc
    for arg in reversed(getattr(orig, "args", ())):
        if isinstance(arg, str):
            return arg
    return str(orig)


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    message = driver_message(exc)
    logger.error(f"{request.method} {request.url.path} failed: {message}")
    return JSONResponse(
        status_code=500,
        content={"error": message, "errorKind": type(exc).__name__},
    )
