# plainpost/main.py
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from plainpost.routers.post_router import router as post_router
from plainpost.routers.page_router import router as page_router
from plainpost.infrastructure.database import init_db, dispose_db
from plainpost.middleware.logging import RequestIdMiddleware
from plainpost.dependencies.auth import AUTH_REALM
from plainpost.services.errors import AuthenticationError, NotFoundError, ValidationError
from plainpost.templating import STATIC_DIR, templates, wants_json

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_structlog():
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(LOG_LEVEL)),
        context_class=dict,
    )


configure_structlog()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("app_startup")
    yield
    await dispose_db()
    logger.info("app_shutdown")


app = FastAPI(title="plainpost", lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(post_router)
app.include_router(page_router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        {"detail": "validation failed", "errors": exc.errors},
        status_code=422,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "body"
        errors.setdefault(field, error["msg"])
    return JSONResponse({"detail": "validation failed", "errors": errors}, status_code=422)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    if wants_json(request):
        return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_404_NOT_FOUND)
    return templates.TemplateResponse(request, "errors/404.html", {}, status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    headers = {"WWW-Authenticate": f'Basic realm="{AUTH_REALM}"'}
    if wants_json(request):
        return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_401_UNAUTHORIZED, headers=headers)
    return templates.TemplateResponse(
        request, "errors/401.html", {}, status_code=status.HTTP_401_UNAUTHORIZED, headers=headers
    )


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse("/posts", status_code=status.HTTP_302_FOUND)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


def run():
    uvicorn.run("plainpost.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))


if __name__ == "__main__":
    run()
