"""Services for galaxyd."""

from .broadcast import BroadcastService
from .broadcast import get_broadcaster
from .mock_generator import MockWorkloadGenerator

__all__ = [
    "BroadcastService",
    "MockWorkloadGenerator",
    "get_broadcaster",
]
