"""Load the startup configuration from a JSON document."""

from __future__ import annotations

import os
from typing import IO, Any, AnyStr, Optional, Union

from pydantic import ValidationError

from ..errors import ConfigParseError
from ..modules import ModuleRegistry, module_store
from .env import EnvSettings
from .models import Configuration
from .token import TOKEN_HASH_COST


def init_config(
    stream: IO[AnyStr],
    *,
    env: Optional[EnvSettings] = None,
    registry: Optional[ModuleRegistry] = None,
    token_cost: int = TOKEN_HASH_COST,
) -> Configuration:
    """Parse ``stream`` and return the validated configuration.

    The caller owns the returned value and hands it to whatever needs it;
    nothing is stored at module level.

    Args:
        stream: Text or binary stream holding one JSON object.
        env: Environment fallbacks; read from the process when omitted.
        registry: Modules available in this build; ``module_store`` when omitted.
        token_cost: bcrypt work factor used to commit the token.

    Raises:
        ConfigParseError: The document is not a valid configuration object.
        ConfigurationError: Any validation failure from ``Configuration.resolve``.
    """
    raw: Any = stream.read()
    try:
        parsed = Configuration.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigParseError(
            "unable to decode configuration document",
            {"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc

    return parsed.resolve(
        env if env is not None else EnvSettings(),
        registry if registry is not None else module_store,
        token_cost=token_cost,
    )


def load_config_file(
    path: Union[str, os.PathLike[str]], **kwargs: Any
) -> Configuration:
    """Open ``path`` and delegate to ``init_config``."""
    try:
        with open(path, "rb") as fh:
            return init_config(fh, **kwargs)
    except OSError as exc:
        raise ConfigParseError(
            "unable to read configuration file", {"path": str(path), "reason": str(exc)}
        ) from exc
