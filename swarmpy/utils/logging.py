"""
Logging helpers that keep secrets out of logs and trace previews.

Action arguments and return values pass through here before they are logged,
since tools frequently receive credentials or tokens from the model.
"""

import re
from typing import Any, Dict, Optional

REDACTED = "***REDACTED***"

_SECRET_KEYS = r"(?:password|passphrase|token|api_?key|apiKey|private_?key|secret)"

SECRET_PATTERNS = [
    # "key": "value" (JSON)
    (re.compile(r'("' + _SECRET_KEYS + r'"\s*:\s*")[^"]*(")', re.IGNORECASE), r"\1" + REDACTED + r"\2"),
    # 'key': 'value' (repr)
    (re.compile(r"('" + _SECRET_KEYS + r"'\s*:\s*')[^']*(')", re.IGNORECASE), r"\1" + REDACTED + r"\2"),
    # key=value (query string / kwargs)
    (re.compile(r"(\b" + _SECRET_KEYS + r"=)[^\s&,)]+", re.IGNORECASE), r"\1" + REDACTED),
    # OpenAI-style bearer keys
    (re.compile(r"\bsk-[A-Za-z0-9_\-]{16,}"), REDACTED),
]

SECRET_FIELDS = {
    "password", "passphrase", "token", "api_key", "apikey", "private_key", "privatekey",
    "secret", "auth_token", "access_token", "refresh_token",
}


def sanitize_string(text: str) -> str:
    """Replace potential secrets in ``text`` with placeholders."""
    if text:
        for pattern, replacement in SECRET_PATTERNS:
            text = pattern.sub(replacement, text)
    return text


def _is_secret_key(key: Any) -> bool:
    lowered = str(key).lower()
    return any(name in lowered for name in SECRET_FIELDS)


def _scrub(value: Any) -> Any:
    if isinstance(value, dict):
        return sanitize_dict(value)
    if isinstance(value, list):
        return [sanitize_dict(item) if isinstance(item, dict) else item for item in value]
    if isinstance(value, str):
        return sanitize_string(value)
    return value


def sanitize_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively copy ``data`` with secret-looking fields redacted."""
    if not isinstance(data, dict):
        return data
    return {key: REDACTED if _is_secret_key(key) else _scrub(value) for key, value in data.items()}


def truncate_text(text: Optional[str], limit: int) -> Optional[str]:
    """Cut ``text`` to ``limit`` characters, marking the cut with '...'."""
    if text is None:
        return None
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def safe_repr(obj: Any, max_length: int = 200) -> str:
    """Redacted, length-limited repr for log lines. Never raises."""
    try:
        text = repr(sanitize_dict(obj) if isinstance(obj, dict) else obj)
    except Exception:
        text = f"<unrepresentable {type(obj).__name__}>"
    text = sanitize_string(text)
    return text if len(text) <= max_length else text[:max_length] + "...(truncated)"
