import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional

from sqlalchemy import MetaData
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from src.utils.exceptions import (
    BootstrapExhaustedError,
    BootstrapStateError,
    NotInitializedError,
    driver_message,
)

logger = logging.getLogger(__name__)

metadata = MetaData()


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 5
    delay: float = 5.0

    def delays(self) -> Iterator[float]:
        """Delay awaited before each retry; there is none after the last attempt."""
        for _ in range(self.max_attempts - 1):
            yield self.delay


class BootstrapState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


@dataclass(frozen=True)
class StatementResult:
    affected_rows: int
    insert_id: Optional[int] = None


def create_engine_without_pool(url) -> AsyncEngine:
    return create_async_engine(url, poolclass=NullPool)


class SharedConnection:
    """
    The one connection every request handler uses.

    Each call runs a single statement and commits it. Calls are queued on a
    lock in arrival order, so concurrent requests wait for the statement ahead
    of them.
    """

    def __init__(self, connection: AsyncConnection):
        self._connection = connection
        self._lock = asyncio.Lock()

    async def fetch_all(self, query) -> List[Dict[str, Any]]:
        async def operation(conn):
            result = await conn.execute(query)
            return [dict(row) for row in result.mappings()]

        return await self._run(operation)

    async def execute(self, query) -> StatementResult:
        async def operation(conn):
            result = await conn.execute(query)
            insert_id = None
            if result.is_insert and result.inserted_primary_key:
                insert_id = result.inserted_primary_key[0]
            return StatementResult(affected_rows=result.rowcount, insert_id=insert_id)

        return await self._run(operation)

    async def close(self) -> None:
        await self._connection.close()

    async def _run(self, operation):
        async with self._lock:
            try:
                value = await operation(self._connection)
                await self._connection.commit()
            except SQLAlchemyError:
                await self._connection.rollback()
                raise
            return value


class ConnectionBootstrap:
    """
    Opens the process-wide database connection with bounded retry.

    Attempts run one after another; a failed attempt's engine is disposed
    before the next one starts. The bootstrap runs once: after it reaches
    CONNECTED or FAILED it cannot be initialized again.
    """

    def __init__(
        self,
        url,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        engine_factory: Callable[[Any], AsyncEngine] = create_engine_without_pool,
        create_schema: bool = False,
    ):
        self.url = url
        self.policy = policy or RetryPolicy()
        self.state = BootstrapState.UNINITIALIZED
        self._sleep = sleep
        self._engine_factory = engine_factory
        self._create_schema = create_schema
        self._engine: Optional[AsyncEngine] = None
        self._connection: Optional[SharedConnection] = None

    async def initialize(self) -> None:
        if self.state is not BootstrapState.UNINITIALIZED:
            raise BootstrapStateError(f"DB bootstrap already {self.state.value}.")

        self.state = BootstrapState.CONNECTING
        delays = self.policy.delays()
        last_error = None

        for attempt in range(1, self.policy.max_attempts + 1):
            logger.info(f"Attempting DB connection: {attempt} of {self.policy.max_attempts}")
            engine = None
            try:
                engine = self._engine_factory(self.url)
                connection = await engine.connect()
            except (SQLAlchemyError, OSError) as e:
                last_error = e
                logger.error(f"DB connection failed on attempt {attempt}: {driver_message(e)}")
                if engine is not None:
                    await engine.dispose()
                delay = next(delays, None)
                if delay is not None:
                    await self._sleep(delay)
                continue

            logger.info(f"DB connected on attempt {attempt}")
            if self._create_schema:
                await self._ensure_schema(connection)
            self._engine = engine
            self._connection = SharedConnection(connection)
            self.state = BootstrapState.CONNECTED
            return

        self.state = BootstrapState.FAILED
        raise BootstrapExhaustedError(self.policy.max_attempts) from last_error

    def get_connection(self) -> SharedConnection:
        if self.state is not BootstrapState.CONNECTED or self._connection is None:
            raise NotInitializedError()
        return self._connection

    async def close(self) -> None:
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None

    async def _ensure_schema(self, connection: AsyncConnection) -> None:
        from src.models.products import products_table

        await connection.run_sync(lambda conn: metadata.create_all(conn, tables=[products_table]))
        await connection.commit()
        logger.info("Ensured products table exists")
