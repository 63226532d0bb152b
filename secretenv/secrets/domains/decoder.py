"""Decoding of raw secret payloads into JSON values."""
import json
import logging
from typing import Any, Optional

from .errors import InvalidJson, MissingPayload

logger = logging.getLogger(__name__)

_QUOTES = ('"', "'")


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


def unwrap_payload(payload: str) -> str:
    """
    Normalize a raw payload before parsing.

    Trims whitespace and a leading byte order mark, drops every backslash,
    then strips exactly one pair of matching surrounding quotes. Nested
    quoting is left alone.
    """
    text = payload.strip().lstrip("\ufeff").strip().replace("\\", "")
    for quote in _QUOTES:
        if text.startswith(quote) and text.endswith(quote):
            return text[1:-1]
    return text


def decode(name: str, payload: Optional[str]) -> Any:
    """
    Parse a raw secret payload.

    Args:
        name: Secret name, used only in error messages
        payload: Raw JSON text, optionally wrapped in one layer of quotes

    Returns:
        The decoded JSON value (not yet validated)

    Raises:
        MissingPayload: If payload is None or empty
        InvalidJson: If the unwrapped payload is not valid JSON
    """
    if not payload:
        raise MissingPayload(name)

    text = unwrap_payload(payload)
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidJson(name, str(e)) from e

    logger.debug(f"Decoded secret '{name}'")
    return value
