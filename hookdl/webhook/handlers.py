"""HTTP routes for the webhook receiver."""

import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect

from .. import __version__
from ..errors import PayloadDecodeError
from ..models import decode_payload

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/github/webhook/payload"

# The method is not checked, any request on the path is handled
WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def build_router(log: Optional[logging.Logger] = None) -> FastAPI:
    """Build the FastAPI app with the webhook route registered.

    Decoded payloads are recorded on ``log``, the module logger by default.
    """
    log = log or logger
    app = FastAPI(title="Hookdl Webhook Receiver", version=__version__)

    @app.api_route(WEBHOOK_PATH, methods=WEBHOOK_METHODS)
    async def github_webhook(request: Request) -> Response:
        """Decode a webhook payload and record it."""
        try:
            payload = decode_payload(await request.body())
        except (PayloadDecodeError, ClientDisconnect) as e:
            return handle_error(e)

        # Downloader/uploader dispatch hooks in here once payloads are parsed
        log.info("new payload received: %s", payload)
        return Response(status_code=200)

    return app


def handle_error(err: Exception) -> Response:
    """Turn a request error into a plain-text 500 response."""
    return PlainTextResponse(str(err), status_code=500)
