# plainpost/dependencies/auth.py
import os
import secrets
from typing import Optional

import structlog
from dotenv import load_dotenv
from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from plainpost.services.errors import AuthenticationError

load_dotenv()
logger = structlog.get_logger(__name__)

# Config (env)
EDITOR_USERNAME = os.getenv("PLAINPOST_EDITOR_USERNAME", "editor")
EDITOR_PASSWORD = os.getenv("PLAINPOST_EDITOR_PASSWORD", "")
AUTH_REALM = "plainpost"

basic_scheme = HTTPBasic(realm=AUTH_REALM, auto_error=False)


def credentials_match(username: str, password: str) -> bool:
    # an unset password refuses every write
    if not EDITOR_PASSWORD:
        return False
    user_ok = secrets.compare_digest(username.encode("utf-8"), EDITOR_USERNAME.encode("utf-8"))
    pass_ok = secrets.compare_digest(password.encode("utf-8"), EDITOR_PASSWORD.encode("utf-8"))
    return user_ok and pass_ok


async def require_editor(request: Request, credentials: Optional[HTTPBasicCredentials] = Depends(basic_scheme)) -> str:
    if credentials is None:
        logger.info("auth_missing_credentials", path=request.url.path)
        raise AuthenticationError("authentication required")
    if not credentials_match(credentials.username, credentials.password):
        logger.warning("auth_failed", path=request.url.path, username=credentials.username)
        raise AuthenticationError("invalid credentials")
    return credentials.username
