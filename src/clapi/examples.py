"""Built-in sample spec used by ``clapi --example`` and the usage banner."""

from __future__ import annotations

import json
from typing import Any

from clapi.models import APISpec

EXAMPLE_SPEC: dict[str, Any] = {
    "name": "BlogAPI",
    "baseUrl": "https://api.blog.com/v1",
    "routes": [
        {
            "path": "/users",
            "method": "GET",
            "parameters": [
                {"name": "limit", "type": "int", "required": False, "description": "Number of users to return"},
                {"name": "offset", "type": "int", "required": False, "description": "Pagination offset"},
            ],
            "description": "List all users",
            "auth": "bearer",
        },
        {
            "path": "/users",
            "method": "POST",
            "parameters": [
                {"name": "name", "type": "string", "required": True, "description": "User name"},
                {"name": "email", "type": "string", "required": True, "description": "User email"},
            ],
            "description": "Create new user",
            "auth": "bearer",
        },
        {
            "path": "/users/{id}",
            "method": "GET",
            "parameters": [
                {"name": "id", "type": "int", "required": True, "description": "User ID"},
            ],
            "description": "Get user by ID",
            "auth": "bearer",
        },
        {
            "path": "/posts",
            "method": "GET",
            "parameters": [
                {"name": "author", "type": "int", "required": False, "description": "Filter by author ID"},
                {"name": "limit", "type": "int", "required": False, "description": "Number of posts"},
            ],
            "description": "List posts",
        },
        {
            "path": "/posts",
            "method": "POST",
            "parameters": [
                {"name": "title", "type": "string", "required": True, "description": "Post title"},
                {"name": "body", "type": "string", "required": True, "description": "Post content"},
                {"name": "author_id", "type": "int", "required": True, "description": "Author ID"},
            ],
            "description": "Create new post",
            "auth": "bearer",
        },
    ],
    "auth": {"type": "bearer", "header": "Authorization"},
}


def example_spec() -> APISpec:
    """Return the BlogAPI sample as a parsed :class:`~clapi.models.APISpec`."""
    return APISpec.from_dict(EXAMPLE_SPEC)


def example_schema_preview(limit: int = 500) -> str:
    """Return the first *limit* characters of the sample spec as pretty JSON."""
    return json.dumps(EXAMPLE_SPEC, indent=2)[:limit] + "..."
