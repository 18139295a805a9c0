"""Caller-facing client, chat builder and multimodal message builder."""

from .chat_builder import ChatBuilder
from .client import Client, WarningHandler, new_client
from .message_builder import MessageBuilder

__all__ = ["ChatBuilder", "Client", "MessageBuilder", "WarningHandler", "new_client"]
