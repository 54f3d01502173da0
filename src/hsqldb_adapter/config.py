"""
Adapter Configuration - Connection settings and feature flags.

Settings are resolved once when a dialect is constructed. They can be built
in code, from a plain dict, or from a YAML file:

    hsqldb:
      url: jdbc:hsqldb:file:/var/data/app
      jars: [/opt/hsqldb/hsqldb.jar]
      default_timezone: local
      legacy_limit_offset: false
"""
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .constants import (
    BACKEND_AUTO,
    BACKENDS,
    COLUMN_CACHE_TTL_S,
    DEFAULT_BINARY_ENCODING,
    DEFAULT_DRIVER_CLASS,
    DEFAULT_PASSWORD,
    DEFAULT_URL,
    DEFAULT_USER,
    TIMEZONE_UTC,
    TIMEZONES,
)

logger = logging.getLogger(__name__)

# Top-level YAML section holding the adapter settings
_YAML_SECTION = "hsqldb"


@dataclass
class AdapterConfig:
    """Connection settings and dialect feature flags."""
    url: str = DEFAULT_URL
    driver_class: str = DEFAULT_DRIVER_CLASS
    jars: List[str] = field(default_factory=list)
    user: str = DEFAULT_USER
    password: str = DEFAULT_PASSWORD
    backend: str = BACKEND_AUTO
    default_timezone: str = TIMEZONE_UTC
    legacy_limit_offset: bool = False
    alternate_engine: bool = False  # H2 adapter loaded alongside
    binary_encoding: str = DEFAULT_BINARY_ENCODING
    column_cache_ttl: int = COLUMN_CACHE_TTL_S

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ValueError on settings outside their allowed values."""
        if self.backend not in BACKENDS:
            raise ValueError(
                f"backend must be one of {', '.join(BACKENDS)} (got {self.backend!r})"
            )
        if self.default_timezone not in TIMEZONES:
            raise ValueError(
                f"default_timezone must be one of {', '.join(TIMEZONES)} "
                f"(got {self.default_timezone!r})"
            )
        if self.column_cache_ttl <= 0:
            raise ValueError(f"column_cache_ttl must be positive (got {self.column_cache_ttl})")
        try:
            "".encode(self.binary_encoding)
        except LookupError:
            raise ValueError(f"binary_encoding is not a known codec: {self.binary_encoding!r}") from None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdapterConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown adapter settings: {', '.join(unknown)}")

        values = {k: v for k, v in data.items() if k in known}
        if "jars" in values and isinstance(values["jars"], str):
            values["jars"] = [values["jars"]]
        if "default_timezone" in values:
            values["default_timezone"] = str(values["default_timezone"]).lower()
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "AdapterConfig":
        """
        Load a config from a YAML file.

        The settings may sit at the top level or under an ``hsqldb:`` section.
        An empty file yields the defaults.
        """
        yaml_path = Path(path)
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Adapter config must be a mapping: {yaml_path}")
        if isinstance(data.get(_YAML_SECTION), dict):
            data = data[_YAML_SECTION]

        config = cls.from_dict(data)
        logger.info(f"Loaded adapter config from {yaml_path}")
        return config
