"""Response error extraction for load test observability.

Parses Marketplace API error responses into human-readable messages.
Handles two response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Domain errors (400/403/404/409/500): {"error": {"kind": "...", "messages": {"field": ["msg"]}}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response."""
    try:
        body = response.json()
    except ValueError:
        # Not JSON, return raw text truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    # Pydantic validation errors: {"detail": [{"loc": [...], "msg": "..."}]}
    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    # Domain errors: {"error": {"kind": ..., "messages": {field: [msg, ...]}}}
    error = body.get("error")
    if isinstance(error, dict):
        messages = error.get("messages") or {}
        detail = " | ".join(f"{field}: {'; '.join(map(str, msgs))}" for field, msgs in messages.items())
        return f"{error.get('kind', 'error')}: {detail}" if detail else str(error.get("kind", error))
    if error is not None:
        return str(error)

    # Unknown shape
    return str(body)[:300]
