"""Data models for hookdl."""

from .payload import WebhookPayload, decode_payload

__all__ = [
    "WebhookPayload",
    "decode_payload",
]
