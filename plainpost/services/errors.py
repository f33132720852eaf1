# plainpost/services/errors.py
from typing import Dict, Optional


class PostError(Exception):
    pass


class ValidationError(PostError):
    """Raised when a post would be persisted with an empty required field.

    ``errors`` maps each offending field name to a human-readable message.
    """

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message or "; ".join(f"{field} {msg}" for field, msg in errors.items()))


class NotFoundError(PostError):
    def __init__(self, post_id):
        self.post_id = post_id
        super().__init__("post not found")


class AuthenticationError(Exception):
    pass
