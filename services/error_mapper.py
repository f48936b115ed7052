# -*- coding: utf-8 -*-
"""Centralized error message extraction."""

import json
from typing import Any

from services.exceptions import ApiException, ValidationException, NetworkException
from services.translation_manager import tr
from utils.logger import get_logger

logger = get_logger(__name__)


def extract_error_message(error: Any) -> str:
    """Return the best available human-readable text for a failure.

    Order: the error itself when it is a string, a structured
    ``body.message``, validation details from an ``errors`` payload,
    the error's ``message`` attribute, then a raw fallback.
    """
    if isinstance(error, str):
        return error

    body = _error_body(error)
    if isinstance(body, dict):
        message = body.get("message")
        if message:
            return str(message)
        details = _extract_validation_details(body)
        if details:
            return details

    if isinstance(error, NetworkException):
        return map_network_error(error)

    message = getattr(error, "message", None)
    if message:
        return str(message)

    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])

    if isinstance(error, BaseException):
        text = str(error)
        return text or type(error).__name__

    try:
        return json.dumps(error, default=str)
    except (TypeError, ValueError):
        return str(error)


def map_network_error(error: NetworkException) -> str:
    """Map network exception to user-friendly translated message."""
    msg = str(error.original_error) if error.original_error else error.message or ""
    if "timeout" in msg.lower() or "timed out" in msg.lower():
        return tr("error.api.timeout")
    return tr("error.api.connection")


def log_exception(error: Exception, context: str = None):
    """Log technical details of a failure; never shown to the user as-is."""
    if isinstance(error, ApiException):
        if not error.context and context:
            error.context = context
        logger.warning(f"API error ({error.status_code}) in {error.context or 'unknown'}: {error}")
    elif isinstance(error, NetworkException):
        logger.warning(f"Network error in {context or error.context or 'unknown'}: {error.original_error or error}")
    elif isinstance(error, ValidationException):
        logger.warning(f"Validation error in {context or error.context or 'unknown'}: {error.message}")
    else:
        logger.error(f"Unexpected error in {context or 'unknown'}: {error}", exc_info=error)


def _error_body(error: Any):
    """Locate the structured payload carried by a failure, if any."""
    if isinstance(error, ApiException):
        body = error.response_data
        # Some gateways wrap the payload once more
        if isinstance(body, dict) and isinstance(body.get("body"), dict):
            return body["body"]
        return body
    if isinstance(error, dict):
        return error.get("body")
    return getattr(error, "body", None)


def _extract_validation_details(response_data: dict) -> str:
    """Extract validation error details from an API response."""
    if not response_data:
        return ""

    errors = response_data.get("errors", {})
    if isinstance(errors, dict):
        lines = []
        for field, messages in errors.items():
            if isinstance(messages, list):
                for msg in messages:
                    lines.append(f"• {field}: {msg}")
            else:
                lines.append(f"• {field}: {messages}")
        return "\n".join(lines)

    if isinstance(errors, list):
        return "\n".join(f"• {e}" for e in errors)

    title = response_data.get("title", "")
    if title:
        return title

    return ""
