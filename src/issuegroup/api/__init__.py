"""REST API for issuegroup."""

from issuegroup.api.app import app, create_app, register_exception_handlers
from issuegroup.api.models import APIResponse, GroupResponse

__all__ = [
    "APIResponse",
    "GroupResponse",
    "app",
    "create_app",
    "register_exception_handlers",
]
