# plainpost/templating.py
from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def wants_json(request: Request) -> bool:
    """True for API paths and for script-driven form submissions."""
    if request.url.path.startswith("/api/"):
        return True
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


def format_timestamp(value) -> str:
    return value.strftime("%B %d, %Y %H:%M") if value else ""


templates.env.filters["timestamp"] = format_timestamp
