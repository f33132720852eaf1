# plainpost/services/post_service.py
from typing import Dict, List, Optional, Union
import uuid

import structlog
from sqlmodel.ext.asyncio.session import AsyncSession

from plainpost.models.post import Post, PostStatus, utcnow
from plainpost.repositories.post_repository import PostRepository
from .errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

TITLE_MAX_LENGTH = 255


def clean_fields(title: Optional[str], content: Optional[str]) -> Dict[str, str]:
    """Strip title/content and raise ValidationError if either ends up empty."""
    title = (title or "").strip()
    content = (content or "").strip()
    errors = {}
    if not title:
        errors["title"] = "can't be blank"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"is too long (maximum is {TITLE_MAX_LENGTH} characters)"
    if not content:
        errors["content"] = "can't be blank"
    if errors:
        raise ValidationError(errors)
    return {"title": title, "content": content}


def parse_post_id(post_id: Union[str, uuid.UUID]) -> uuid.UUID:
    if isinstance(post_id, uuid.UUID):
        return post_id
    try:
        return uuid.UUID(str(post_id))
    except ValueError:
        raise NotFoundError(post_id) from None


class PostService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = PostRepository(session)

    async def create_post(self, title: Optional[str], content: Optional[str]) -> Post:
        try:
            fields = clean_fields(title, content)
        except ValidationError as exc:
            logger.info("post_validation_failed", action="create", errors=exc.errors)
            raise
        now = utcnow()
        post = await self.repo.save(Post(status=PostStatus.published, created_at=now, updated_at=now, **fields))
        logger.info("post_created", post_id=str(post.id))
        return post

    async def get_post(self, post_id: Union[str, uuid.UUID]) -> Post:
        post = await self.repo.get_by_id(parse_post_id(post_id))
        if post is None:
            logger.debug("post_not_found", post_id=str(post_id))
            raise NotFoundError(post_id)
        return post

    async def list_published(self) -> List[Post]:
        return await self.repo.list_by_status(PostStatus.published)

    async def update_post(self, post_id: Union[str, uuid.UUID], title: Optional[str], content: Optional[str]) -> Post:
        post = await self.get_post(post_id)
        try:
            fields = clean_fields(title, content)
        except ValidationError as exc:
            logger.info("post_validation_failed", action="update", post_id=str(post.id), errors=exc.errors)
            raise
        post.title = fields["title"]
        post.content = fields["content"]
        post.updated_at = utcnow()
        post = await self.repo.save(post)
        logger.info("post_updated", post_id=str(post.id))
        return post

    async def archive_post(self, post_id: Union[str, uuid.UUID]) -> Post:
        post = await self.get_post(post_id)
        if post.status == PostStatus.archived:
            logger.debug("post_already_archived", post_id=str(post.id))
            return post
        post.status = PostStatus.archived
        post.updated_at = utcnow()
        post = await self.repo.save(post)
        logger.info("post_archived", post_id=str(post.id))
        return post
