# plainpost/routers/page_router.py
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from plainpost.dependencies.auth import require_editor
from plainpost.dependencies.db import get_post_service
from plainpost.infrastructure.email import notify_post_published
from plainpost.schemas.post_schema import PostRead
from plainpost.services.errors import ValidationError
from plainpost.services.post_service import PostService
from plainpost.templating import templates, wants_json

router = APIRouter(prefix="/posts", tags=["pages"], include_in_schema=False)


def post_json(post, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(jsonable_encoder(PostRead.model_validate(post)), status_code=status_code)


def render_form(request: Request, template: str, values: dict, errors: dict, post=None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        template,
        {"values": values, "errors": errors, "post": post},
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse)
async def index(request: Request, svc: PostService = Depends(get_post_service)):
    posts = await svc.list_published()
    return templates.TemplateResponse(request, "posts/index.html", {"posts": posts})


@router.get("/new", response_class=HTMLResponse)
async def new_post(request: Request, editor: str = Depends(require_editor)):
    return render_form(request, "posts/new.html", {"title": "", "content": ""}, {})


@router.post("")
async def create_post(
    request: Request,
    title: str = Form(""),
    content: str = Form(""),
    svc: PostService = Depends(get_post_service),
    editor: str = Depends(require_editor),
):
    try:
        post = await svc.create_post(title, content)
    except ValidationError as exc:
        if wants_json(request):
            return JSONResponse(
                {"detail": "validation failed", "errors": exc.errors},
                status_code=422,
            )
        values = {"title": title, "content": content}
        return render_form(request, "posts/new.html", values, exc.errors, status_code=422)

    post_url = request.url_for("show_post", post_id=str(post.id))
    await notify_post_published(post, str(post_url))
    if wants_json(request):
        return post_json(post, status.HTTP_201_CREATED)
    return RedirectResponse(post_url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{post_id}", response_class=HTMLResponse)
async def show_post(post_id: str, request: Request, svc: PostService = Depends(get_post_service)):
    post = await svc.get_post(post_id)
    return templates.TemplateResponse(request, "posts/show.html", {"post": post})


@router.get("/{post_id}/edit", response_class=HTMLResponse)
async def edit_post(
    post_id: str,
    request: Request,
    svc: PostService = Depends(get_post_service),
    editor: str = Depends(require_editor),
):
    post = await svc.get_post(post_id)
    return render_form(request, "posts/edit.html", {"title": post.title, "content": post.content}, {}, post=post)


@router.post("/{post_id}")
async def update_post(
    post_id: str,
    request: Request,
    title: str = Form(""),
    content: str = Form(""),
    svc: PostService = Depends(get_post_service),
    editor: str = Depends(require_editor),
):
    try:
        post = await svc.update_post(post_id, title, content)
    except ValidationError as exc:
        if wants_json(request):
            return JSONResponse(
                {"detail": "validation failed", "errors": exc.errors},
                status_code=422,
            )
        post = await svc.get_post(post_id)
        values = {"title": title, "content": content}
        return render_form(
            request, "posts/edit.html", values, exc.errors, post=post, status_code=422
        )

    if wants_json(request):
        return post_json(post)
    return RedirectResponse(request.url_for("show_post", post_id=str(post.id)), status_code=status.HTTP_303_SEE_OTHER)


@router.post("/{post_id}/archive")
async def archive_post(
    post_id: str,
    request: Request,
    svc: PostService = Depends(get_post_service),
    editor: str = Depends(require_editor),
):
    post = await svc.archive_post(post_id)
    if wants_json(request):
        return post_json(post)
    return RedirectResponse(request.url_for("show_post", post_id=str(post.id)), status_code=status.HTTP_303_SEE_OTHER)
