"""
Logging Sanitizer Utility

Provides utilities to strip owner PII and credentials from asset payloads before logging.
Asset records carry the owner's UPN and display name; those must never reach the log files.
"""

from typing import Dict, Any
from werkzeug.datastructures import ImmutableMultiDict


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'upn',
    'email',
    'displayname',
    'display_name',
    'userid',
    'user_id',
    'password',
    'secret',
    'token',
    'api_key',
    'apikey',
    'auth_token',
    'access_token',
    'refresh_token',
    'session_id',
    'csrf_token',
}


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy with sensitive values replaced

    Example:
        >>> data = {'globalAssetId': 'AS-2024-000001', 'owner': {'upn': 'jo@example.com'}}
        >>> sanitize_dict(data)
        {'globalAssetId': 'AS-2024-000001', 'owner': {'upn': '[REDACTED]'}}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        elif isinstance(value, list):
            # Corpora and document lists arrive as lists of records
            sanitized[key] = [
                sanitize_dict(item, redact_text) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized


def sanitize_form_data(form_data: ImmutableMultiDict, redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize werkzeug request args/form data for safe logging.

    Args:
        form_data: Flask request.form or request.args (ImmutableMultiDict)
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized dictionary safe for logging
    """
    return sanitize_dict(dict(form_data), redact_text)


def sanitize_exception_message(exception: Exception) -> str:
    """
    Sanitize exception messages to ensure they don't contain sensitive data.

    Args:
        exception: Exception to sanitize

    Returns:
        Sanitized exception message
    """
    message = str(exception)

    if '@' in message or any(field in message.lower() for field in SENSITIVE_FIELDS):
        return f"{type(exception).__name__}: [Message contains sensitive data]"

    return message
