from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import event, Engine, Result
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

import config
from models.base import Base

"""
Imports of these models are needed to correctly create tables in the database.
For more information see https://stackoverflow.com/questions/7478403/sqlalchemy-classes-across-files
"""
from models.promotion import Promotion, PromotionItem
from models.order import WebOrder, WebOrderItem

# SQL echo stays off; aiosqlite/sqlalchemy loggers are tuned in utils/logging_config.py
sql_echo = False

data_folder = Path("data")
url = f"sqlite+aiosqlite:///{data_folder / config.DB_NAME}"
engine = create_async_engine(url, echo=sql_echo)
session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def get_db_session() -> AsyncSession:
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def session_execute(stmt, session: AsyncSession) -> Result[Any]:
    return await session.execute(stmt)


async def session_commit(session: AsyncSession) -> None:
    await session.commit()


async def session_refresh(session: AsyncSession, instance) -> None:
    await session.refresh(instance)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def create_db_and_tables():
    if data_folder.exists() is False:
        data_folder.mkdir()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
