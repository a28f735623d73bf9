"""Request and response models for galaxyd."""

from .requests import BroadcastResponse
from .requests import SessionStartPayload
from .requests import ToolInput
from .requests import ToolUsePayload

__all__ = [
    "BroadcastResponse",
    "SessionStartPayload",
    "ToolInput",
    "ToolUsePayload",
]
