"""Coding-agent hook forwarder.

Turns one hook document (as a coding agent writes it to a hook's stdin) into
a POST against the fan-out service. Only session starts and file tool uses
are forwarded; everything else is ignored. A hook must never break the agent
that runs it, so network failures are logged and swallowed.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://127.0.0.1:8080"
TOOL_ENDPOINTS = {
    "Read": "/read",
    "Write": "/write",
    "Edit": "/edit",
}


def build_hook_request(document: dict[str, Any]) -> tuple[str, dict[str, Any]] | None:
    """Map a hook document to an endpoint and JSON body.

    Args:
        document: Parsed hook input

    Returns:
        Tuple of (endpoint path, body), or None if the hook is not forwarded
    """
    event_name = document.get("hook_event_name")
    session_id = document.get("session_id")
    if not session_id:
        return None

    if event_name == "SessionStart":
        return "/session-start", {
            "session_id": session_id,
            "cwd": document.get("cwd", ""),
            "model": document.get("model", ""),
        }

    if event_name == "PreToolUse":
        tool_name = document.get("tool_name")
        endpoint = TOOL_ENDPOINTS.get(tool_name) if isinstance(tool_name, str) else None
        tool_input = document.get("tool_input") or {}
        file_path = tool_input.get("file_path") if isinstance(tool_input, dict) else None
        if endpoint is None or not file_path:
            return None
        return endpoint, {
            "session_id": session_id,
            "tool_name": tool_name,
            "tool_input": {"file_path": file_path},
        }

    return None


def forward_hook(
    document: dict[str, Any],
    server_url: str = DEFAULT_SERVER_URL,
    client: httpx.Client | None = None,
    timeout: float = 2.0,
) -> bool:
    """POST a hook document to the fan-out service.

    Args:
        document: Parsed hook input
        server_url: Base URL of the service
        client: Optional HTTP client (a short-lived one is created otherwise)
        timeout: Request timeout in seconds

    Returns:
        True if the service accepted the event
    """
    request = build_hook_request(document)
    if request is None:
        logger.debug(f"Hook not forwarded: {document.get('hook_event_name')}")
        return False

    endpoint, body = request
    url = server_url.rstrip("/") + endpoint
    try:
        if client is None:
            with httpx.Client(timeout=timeout) as owned:
                response = owned.post(url, json=body)
        else:
            response = client.post(url, json=body)
    except httpx.HTTPError as e:
        logger.warning(f"Failed to forward hook to {url}: {e}")
        return False

    if response.status_code != 200:
        logger.warning(f"Hook forward to {url} returned {response.status_code}")
        return False
    return True
