# plainpost/routers/post_router.py
from typing import List

from fastapi import APIRouter, Depends, Request, status

from plainpost.dependencies.auth import require_editor
from plainpost.dependencies.db import get_post_service
from plainpost.infrastructure.email import notify_post_published
from plainpost.schemas.post_schema import PostCreate, PostRead, PostUpdate, ValidationErrorRead
from plainpost.services.post_service import PostService

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=List[PostRead], name="api_list_posts")
async def list_posts(svc: PostService = Depends(get_post_service)):
    return await svc.list_published()


@router.get("/{post_id}", response_model=PostRead, name="api_get_post")
async def get_post(post_id: str, svc: PostService = Depends(get_post_service)):
    return await svc.get_post(post_id)


@router.post(
    "",
    response_model=PostRead,
    status_code=status.HTTP_201_CREATED,
    name="api_create_post",
    responses={422: {"model": ValidationErrorRead}},
)
async def create_post(
    payload: PostCreate,
    request: Request,
    svc: PostService = Depends(get_post_service),
    editor: str = Depends(require_editor),
):
    post = await svc.create_post(payload.title, payload.content)
    await notify_post_published(post, str(request.url_for("show_post", post_id=str(post.id))))
    return post


@router.patch(
    "/{post_id}",
    response_model=PostRead,
    responses={422: {"model": ValidationErrorRead}},
    name="api_update_post",
)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    svc: PostService = Depends(get_post_service),
    editor: str = Depends(require_editor),
):
    post = await svc.get_post(post_id)
    changes = payload.model_dump(exclude_unset=True)
    return await svc.update_post(post.id, changes.get("title", post.title), changes.get("content", post.content))


@router.patch("/{post_id}/archive", response_model=PostRead, name="api_archive_post")
async def archive_post(
    post_id: str,
    svc: PostService = Depends(get_post_service),
    editor: str = Depends(require_editor),
):
    return await svc.archive_post(post_id)
