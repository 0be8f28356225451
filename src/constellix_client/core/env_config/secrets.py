"""
Secret masking for config summaries.
"""

from typing import Any, Dict, Iterable, Optional

SECRET_WORDS = frozenset({'api_key', 'secret', 'password', 'token'})


def mask_secret(value: Optional[str], visible_chars: int = 4) -> str:
    """
    Mask secret value, keeping a few characters at both ends.

    Example:
        >>> mask_secret("my-secret-api-key-12345", visible_chars=4)
        'my-s***2345'
        >>> mask_secret("short", visible_chars=2)
        '***'
    """
    if not value:
        return ""

    if len(value) <= (visible_chars * 2):
        return "***"

    return f"{value[:visible_chars]}***{value[-visible_chars:]}"


def is_secret_key(key: str, secret_words: Iterable[str] = SECRET_WORDS) -> bool:
    """
    Example:
        >>> is_secret_key("CONSTELLIX_SECRET_KEY")
        True
        >>> is_secret_key("proxy_url")
        False
    """
    key_lower = key.lower()
    return any(word in key_lower for word in secret_words)


def mask_dict_secrets(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mask string values under secret-looking keys.

    Example:
        >>> mask_dict_secrets({"api_key": "0c4b1c2e-1111", "base_url": "https://x/"})
        {'api_key': '0c4b***1111', 'base_url': 'https://x/'}
    """
    return {
        key: mask_secret(value) if is_secret_key(key) and isinstance(value, str) else value
        for key, value in data.items()
    }
