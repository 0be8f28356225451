"""
Environment configuration for Constellix client.

Example:
    >>> from constellix_client.core.env_config import load_from_env
    >>>
    >>> # CONSTELLIX_API_KEY / CONSTELLIX_SECRET_KEY from the environment
    >>> config = load_from_env()
    >>>
    >>> # .env file plus overrides
    >>> config = load_from_env(env_file=".env", request_interval=0.5)
"""

from .loader import load_from_env, load_settings, print_config_summary
from .settings import ConstellixSettings
from .secrets import mask_secret, mask_dict_secrets, is_secret_key

__all__ = [
    "load_from_env",
    "load_settings",
    "print_config_summary",
    "ConstellixSettings",
    "mask_secret",
    "mask_dict_secrets",
    "is_secret_key",
]
