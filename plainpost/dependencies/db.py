# plainpost/dependencies/db.py
from typing import AsyncGenerator
from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession
from plainpost.infrastructure.database import get_session
from plainpost.services.post_service import PostService


async def get_session_dep() -> AsyncGenerator[AsyncSession, None]:
    async with get_session() as session:
        yield session


async def get_post_service(session: AsyncSession = Depends(get_session_dep)) -> PostService:
    return PostService(session)
