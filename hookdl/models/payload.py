"""Opaque webhook payload model."""

from typing import Any, Dict

from pydantic import RootModel, ValidationError

from ..errors import PayloadDecodeError


class WebhookPayload(RootModel[Dict[str, Any]]):
    """Any JSON object, kept as a generic tree for downstream parsing."""

    def __getitem__(self, key: str) -> Any:
        return self.root[key]

    def __str__(self) -> str:
        return str(self.root)


def decode_payload(body: bytes) -> WebhookPayload:
    """Decode a request body into a WebhookPayload.

    Raises PayloadDecodeError carrying the decoder's message when the body
    is not valid JSON or is not a JSON object.
    """
    try:
        return WebhookPayload.model_validate_json(body)
    except ValidationError as e:
        raise PayloadDecodeError(str(e)) from e
