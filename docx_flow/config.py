"""Conversion options."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError
from .utils.logger import VALID_LEVELS

logger = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass
class ConversionOptions:
    """Options controlling a single ``to_flow_blocks`` pass."""

    default_font: str = "Arial"
    default_size: float = 16
    block_id_prefix: str = ""
    emit_section_breaks: bool = False
    decimal_separator: Optional[str] = None
    default_tab_interval_twips: int = 720
    enable_comments: bool = True
    media_files: Dict[str, Any] = field(default_factory=dict)
    metadata_cache_size: int = 1024
    log_level: Optional[str] = None

    def validate(self) -> "ConversionOptions":
        if not isinstance(self.default_font, str) or not self.default_font.strip():
            raise ConfigurationError("default_font must be a non-empty string", {"default_font": self.default_font})
        if isinstance(self.default_size, bool) or not isinstance(self.default_size, (int, float)) or self.default_size <= 0:
            raise ConfigurationError("default_size must be a positive number", {"default_size": self.default_size})
        if not isinstance(self.block_id_prefix, str):
            raise ConfigurationError("block_id_prefix must be a string", {"block_id_prefix": self.block_id_prefix})
        if isinstance(self.default_tab_interval_twips, bool) or not isinstance(self.default_tab_interval_twips, int) \
                or self.default_tab_interval_twips <= 0:
            raise ConfigurationError(
                "default_tab_interval_twips must be a positive integer",
                {"default_tab_interval_twips": self.default_tab_interval_twips},
            )
        if self.decimal_separator is not None and (
            not isinstance(self.decimal_separator, str) or len(self.decimal_separator) != 1
        ):
            raise ConfigurationError(
                "decimal_separator must be a single character", {"decimal_separator": self.decimal_separator}
            )
        if not isinstance(self.media_files, dict):
            raise ConfigurationError("media_files must be a mapping", {"media_files": type(self.media_files).__name__})
        if self.log_level is not None and str(self.log_level).upper() not in VALID_LEVELS:
            raise ConfigurationError("Invalid log level", {"log_level": self.log_level})
        return self

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ConversionOptions":
        """Build options from a dict using snake_case or camelCase keys."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError("Options must be a mapping", {"type": type(data).__name__})
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_RE.sub("_", key).lower()
            if name in known:
                kwargs[name] = value
            else:
                logger.debug(f"Ignoring unknown conversion option: {key}")
        return cls(**kwargs).validate()
