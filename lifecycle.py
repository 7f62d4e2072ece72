"""
Startup and shutdown for the process hosting storefront sessions.

Usage:
    async with lifespan():
        session = await StorefrontSession.start()
        ...
"""

import logging
from contextlib import asynccontextmanager

import config
from bot_instance import close_bot
from db import create_db_and_tables
from services.order import OrderService
from utils.logging_config import setup_logging


async def startup() -> None:
    await create_db_and_tables()
    logging.info(
        f"[Startup] {config.STORE_NAME} storefront ready "
        f"({len(config.NOTIFICATION_RECIPIENTS)} notification recipients, env={config.RUNTIME_ENVIRONMENT})"
    )


async def shutdown() -> None:
    logging.warning('Shutting down..')

    # Orders already handed to persistence are stored before the process exits
    await OrderService.wait_for_background_tasks()
    await close_bot()
    logging.warning('Bye!')


@asynccontextmanager
async def lifespan(configure_logging: bool = True):
    if configure_logging:
        setup_logging()
    await startup()
    try:
        yield
    finally:
        await shutdown()
