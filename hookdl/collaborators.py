"""Collaborators held by the webhook server for the download/upload pipeline.

The server keeps references to these so the webhook handler can later hand
decoded payloads to them. Nothing in the server calls into them yet.
"""

from typing import Protocol


class Downloader(Protocol):
    """Fetches release artifacts referenced by a webhook."""


class Uploader(Protocol):
    """Publishes artifacts produced by the downloader."""
