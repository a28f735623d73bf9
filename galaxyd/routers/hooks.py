"""Hook endpoints.

Coding-agent hooks POST here; each request becomes one broadcast event.
"""

import logging

from fastapi import APIRouter

from galaxy_library.models.events import SessionStart
from galaxy_library.models.events import ToolUse

from ..models import BroadcastResponse
from ..models import SessionStartPayload
from ..models import ToolUsePayload
from ..services.broadcast import BroadcastService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["hooks"])


async def _broadcast_tool_use(payload: ToolUsePayload, route: str) -> BroadcastResponse:
    event = ToolUse(
        session_id=payload.session_id,
        tool_name=payload.tool_name,
        file_path=payload.tool_input.file_path,
        reason=payload.reason,
    )
    await BroadcastService.publish(event)
    subscribers = BroadcastService.get_instance().subscriber_count
    logger.info(f"{route}: {payload.tool_name} {payload.tool_input.file_path} ({payload.session_id})")
    return BroadcastResponse(subscribers=subscribers)


@router.post("/session-start", response_model=BroadcastResponse)
async def session_start(payload: SessionStartPayload) -> BroadcastResponse:
    """Announce a new coding-agent session.

    Args:
        payload: Session id, working directory and model name

    Returns:
        Acknowledgement with the number of subscribers reached
    """
    event = SessionStart(session_id=payload.session_id, cwd=payload.cwd, model=payload.model)
    await BroadcastService.publish(event)
    logger.info(f"Session started: {payload.session_id} (cwd={payload.cwd}, model={payload.model})")
    return BroadcastResponse(subscribers=BroadcastService.get_instance().subscriber_count)


@router.post("/read", response_model=BroadcastResponse)
async def read(payload: ToolUsePayload) -> BroadcastResponse:
    return await _broadcast_tool_use(payload, "/read")


@router.post("/write", response_model=BroadcastResponse)
async def write(payload: ToolUsePayload) -> BroadcastResponse:
    return await _broadcast_tool_use(payload, "/write")


@router.post("/edit", response_model=BroadcastResponse)
async def edit(payload: ToolUsePayload) -> BroadcastResponse:
    return await _broadcast_tool_use(payload, "/edit")


@router.post("/tool-use", response_model=BroadcastResponse)
async def tool_use(payload: ToolUsePayload) -> BroadcastResponse:
    """Broadcast a tool use of any kind (Grep, Glob, ...)."""
    return await _broadcast_tool_use(payload, "/tool-use")
