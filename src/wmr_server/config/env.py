"""Environment configuration for the WMR server.

The environment is only a fallback source: values from the JSON
configuration document win, except for the webserver debug flag which
the environment always overrides when set.

```bash
export WMR_TOKEN="s3cret"
export WMR_MODULES="process,service,eventlog"
export WMR_WEBSERVER_PORT=9898
export WMR_WEBSERVER_DEBUG=false
```

These are rendered to the EnvSettings class:

```python
from wmr_server.config import EnvSettings
env = EnvSettings()
print(env.webserver_port)
```
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

WMR_MODULES = "WMR_MODULES"
WMR_TOKEN = "WMR_TOKEN"
WMR_WEBSERVER_PORT = "WMR_WEBSERVER_PORT"
WMR_WEBSERVER_DEBUG = "WMR_WEBSERVER_DEBUG"

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str) -> bool:
    """Parse a boolean flag using the accepted spellings.

    Raises:
        ValueError: If ``value`` is not one of the accepted spellings.
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean syntax: {value!r}")


class EnvSettings(BaseSettings):
    """Raw fallback values read from ``WMR_*`` environment variables.

    Every field is kept as the literal string so that validation of the
    merged configuration happens in one place. An unset variable and an
    empty one are equivalent.
    """

    modules: str = Field(
        default="",
        validation_alias=WMR_MODULES,
        description="Comma-separated module names",
    )
    token: str = Field(
        default="",
        validation_alias=WMR_TOKEN,
        repr=False,
        description="Plaintext auth token",
    )
    webserver_port: str = Field(
        default="",
        validation_alias=WMR_WEBSERVER_PORT,
        description="Webserver port fallback",
    )
    webserver_debug: str = Field(
        default="",
        validation_alias=WMR_WEBSERVER_DEBUG,
        description="Webserver debug override",
    )

    # Variable names are matched exactly, as spelled above.
    model_config = SettingsConfigDict(
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    # ---- derived conveniences (no mutation) ----
    @property
    def module_list(self) -> List[str]:
        """Module names split on commas, without trimming."""
        return self.modules.split(",")

    @property
    def debug_override(self) -> Optional[str]:
        """The raw debug override, or None when the variable is unset."""
        return self.webserver_debug or None
