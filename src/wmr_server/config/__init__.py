"""Configuration helpers for the WMR server.

Exposes ``init_config`` / ``load_config_file`` which parse the JSON
document, merge the ``WMR_*`` environment fallbacks, commit the auth
token, and return a frozen ``Configuration`` instance.
"""

from .env import EnvSettings
from .loader import init_config, load_config_file
from .models import DEFAULT_PORT, Configuration, WebserverSettings
from .token import TOKEN_HASH_COST, commit_token, verify_token

__all__ = [
    "Configuration",
    "DEFAULT_PORT",
    "EnvSettings",
    "TOKEN_HASH_COST",
    "WebserverSettings",
    "commit_token",
    "init_config",
    "load_config_file",
    "verify_token",
]
