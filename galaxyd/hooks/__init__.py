"""Coding-agent hook integration."""

from .forwarder import build_hook_request
from .forwarder import forward_hook

__all__ = ["build_hook_request", "forward_hook"]
