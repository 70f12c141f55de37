import logging
import os
import signal
import ssl

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from treinos_api.config import Settings
from treinos_api.db.base import Base

logger = logging.getLogger(__name__)


def _ssl_context_no_verify() -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the process-wide pooled engine for the store."""
    connect_args: dict = {}
    if settings.db_ssl:
        connect_args["ssl"] = _ssl_context_no_verify()
    engine = create_async_engine(
        settings.async_database_url,
        echo=settings.debug,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    install_disconnect_policy(engine, settings.db_disconnect_policy)
    return engine


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)


def make_disconnect_handler(policy: str):
    """Return a handle_error listener applying the given disconnect policy."""

    def on_handle_error(context) -> None:
        if not context.is_disconnect:
            return
        if policy == "exit":
            logger.critical(
                "Store connection lost (%s); terminating process",
                context.original_exception,
            )
            os.kill(os.getpid(), signal.SIGTERM)
            return
        logger.warning(
            "Store connection lost (%s); connection will be replaced",
            context.original_exception,
        )

    return on_handle_error


def install_disconnect_policy(engine: AsyncEngine, policy: str) -> None:
    event.listen(engine.sync_engine, "handle_error", make_disconnect_handler(policy))


async def init_db(engine: AsyncEngine) -> None:
    import treinos_api.models  # noqa: F401  registers the tables on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
