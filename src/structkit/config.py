"""Process-wide configuration for structkit.

This module provides the configuration dataclass consulted when codecs are
defined (default text encoding) and when value paths are resolved (path
markers).
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, replace
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for codec definition and value-path resolution.

    Attributes:
        default_encoding: Text encoding used by string codecs that do not name
            one explicitly (default "utf-8"). Read when the codec is created.
        parent_marker: Path prefix that moves resolution to the enclosing
            record (default "../"). May be repeated.
        root_marker: Path prefix that moves resolution to the outermost record
            (default "/").
        path_separator: Separator for descending into nested values (default ".").

    Examples:
        ```python
        from structkit import configure, string

        configure(default_encoding="latin-1")
        name = string(8)  # decodes latin-1
        ```
    """

    default_encoding: str = "utf-8"
    parent_marker: str = "../"
    root_marker: str = "/"
    path_separator: str = "."

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        try:
            codecs.lookup(self.default_encoding)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {self.default_encoding}") from e

        if not self.parent_marker:
            raise ValueError("parent_marker must not be empty")

        if not self.root_marker:
            raise ValueError("root_marker must not be empty")

        if not self.path_separator:
            raise ValueError("path_separator must not be empty")

        if self.parent_marker.startswith(self.root_marker):
            raise ValueError(
                f"parent_marker {self.parent_marker!r} must not start with "
                f"root_marker {self.root_marker!r}"
            )


_config = CodecConfig()


def get_config() -> CodecConfig:
    """Return the active process-wide configuration."""
    return _config


def configure(**changes: Any) -> CodecConfig:
    """Replace the process-wide configuration.

    Call this during initialization, before codecs are defined; codecs that
    already captured a default encoding keep it.

    Args:
        **changes: CodecConfig fields to override

    Returns:
        The new active configuration

    Raises:
        ValueError: If a value is invalid
        TypeError: If an unknown option is given
    """
    global _config
    _config = replace(_config, **changes)
    logger.debug("structkit configuration updated: %s", _config)
    return _config


def reset_config() -> CodecConfig:
    """Restore the default configuration."""
    global _config
    _config = CodecConfig()
    return _config
