# plainpost/repositories/post_repository.py
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select
from plainpost.models.post import Post, PostStatus
from typing import List, Optional
import uuid


class PostRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, post_id: uuid.UUID) -> Optional[Post]:
        q = select(Post).where(Post.id == post_id)
        res = await self.session.exec(q)
        return res.one_or_none()

    async def list_by_status(self, status: PostStatus) -> List[Post]:
        q = select(Post).where(Post.status == status).order_by(Post.created_at.desc())
        res = await self.session.exec(q)
        return list(res.all())

    async def save(self, post: Post) -> Post:
        self.session.add(post)
        await self.session.commit()
        await self.session.refresh(post)
        return post
