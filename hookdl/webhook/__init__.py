"""GitHub webhook receiver module.

This module handles:
- Receiving GitHub webhook notifications
- Decoding their JSON payloads
- Owning the listener lifecycle (plain HTTP or TLS)
"""

from .config import ServerOpts
from .handlers import WEBHOOK_PATH, build_router
from .server import ServerState, WebhookServer

__all__ = [
    "ServerOpts",
    "ServerState",
    "WebhookServer",
    "WEBHOOK_PATH",
    "build_router",
]
