"""Pydantic models for the JSON configuration document.

The document shape is:

    {
      "webserver": {"debug": false, "port": "9898"},
      "auth_token": "...",
      "modules": ["process", "service"]
    }

Every field is optional. Parsed models are frozen; ``resolve()`` merges
the environment fallbacks, validates, and returns a new instance.
"""

from __future__ import annotations

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from ..errors import InvalidPortError, MissingModulesError, MissingTokenError
from ..logging import get_logger
from ..modules import ModuleRegistry, filter_modules
from .env import EnvSettings, parse_bool
from .token import TOKEN_HASH_COST, commit_token

logger = get_logger(__name__)

DEFAULT_PORT = "9898"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _is_integer(value: str) -> bool:
    """True for a base-10 integer that fits in 64 bits."""
    return bool(_INTEGER_RE.fullmatch(value)) and _INT64_MIN <= int(value) <= _INT64_MAX


class WebserverSettings(BaseModel):
    """Network-facing settings of the HTTP server.

    Attributes:
        debug: Enables debug mode; ``WMR_WEBSERVER_DEBUG`` always wins.
        port: TCP port as a string; must parse as a 64-bit integer once
            resolved. The TCP range is not checked.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    debug: StrictBool = False
    port: StrictStr = ""

    # ---- validators ----
    @field_validator("debug", mode="before")
    @classmethod
    def _null_debug(cls, v):
        return False if v is None else v

    @field_validator("port", mode="before")
    @classmethod
    def _null_port(cls, v):
        return "" if v is None else v

    def resolve(self, env: EnvSettings) -> WebserverSettings:
        """Apply defaults and environment fallbacks, then validate.

        Raises:
            InvalidPortError: If the resolved port is not an integer.
        """
        port = self.port or env.webserver_port or DEFAULT_PORT
        if not _is_integer(port):
            raise InvalidPortError(port)

        debug = self.debug
        raw = env.debug_override
        if raw is not None:
            try:
                debug = parse_bool(raw)
            except ValueError as exc:
                # Non-fatal: keep whatever the document said.
                logger.error(
                    "invalid_debug_flag",
                    configuration="webserver",
                    value=raw,
                    error=str(exc),
                )
        return self.model_copy(update={"port": port, "debug": debug})


class Configuration(BaseModel):
    """Startup configuration of the service.

    Attributes:
        webserver: Webserver settings; defaults apply when absent.
        token: Auth token (JSON key ``auth_token``); a bcrypt hash once
            resolved. Hidden from ``repr()``.
        modules: Requested module names; after resolution only the
            registered ones, in request order.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    webserver: WebserverSettings = Field(default_factory=WebserverSettings)
    token: StrictStr = Field(default="", alias="auth_token", repr=False)
    modules: Optional[List[StrictStr]] = None

    # ---- validators ----
    @field_validator("webserver", mode="before")
    @classmethod
    def _null_webserver(cls, v):
        return {} if v is None else v

    @field_validator("token", mode="before")
    @classmethod
    def _null_token(cls, v):
        return "" if v is None else v

    def resolve(
        self,
        env: EnvSettings,
        registry: ModuleRegistry,
        *,
        token_cost: int = TOKEN_HASH_COST,
    ) -> Configuration:
        """Validate the whole configuration and return the resolved copy.

        Steps run in order: webserver settings, token fallback, token
        commit, module fallback, module filtering. The first failure is
        raised and nothing is returned.

        Raises:
            InvalidPortError: Resolved port is not an integer.
            MissingTokenError: No token in the document nor ``WMR_TOKEN``.
            TokenCommitError: The token could not be hashed.
            MissingModulesError: No modules in the document nor ``WMR_MODULES``.
        """
        webserver = self.webserver.resolve(env)

        token = self.token or env.token
        if not token:
            raise MissingTokenError()
        committed = commit_token(token, cost=token_cost)

        requested = self.modules
        if not requested:
            if not env.modules:
                raise MissingModulesError()
            requested = env.module_list

        return self.model_copy(
            update={
                "webserver": webserver,
                "token": committed,
                "modules": filter_modules(requested, registry),
            }
        )
