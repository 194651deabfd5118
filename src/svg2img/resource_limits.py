"""Resource limits for fetching and reading SVG sources.

This module provides configurable limits that keep a single conversion from
hanging on a slow server, reading an unbounded file, or recursing forever
through SVG images that reference each other.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_MAX_SIZE = 100 * 1024 * 1024  # 100MB
DEFAULT_MAX_RECURSION_DEPTH = 8


@dataclass
class ResourceLimits:
    """Resource limits for SVG conversion.

    These limits constrain:
    - HTTP request time (per request, for the source and every referenced image)
    - Local file size
    - HTTP response size
    - Nesting depth of SVG images rendered recursively

    Limits can be configured via environment variables or constructor parameters.
    Constructor parameters take precedence over environment variables.

    Environment variables:
        SVG2IMG_TIMEOUT: Request timeout in seconds (default: 30)
        SVG2IMG_MAX_FILE_SIZE: Maximum file size in bytes (default: 104857600 = 100MB)
        SVG2IMG_MAX_RESPONSE_SIZE: Maximum response size in bytes
            (default: 104857600 = 100MB)
        SVG2IMG_MAX_RECURSION_DEPTH: Maximum nesting of SVG images (default: 8)

    Example:
        >>> limits = ResourceLimits.default()
        >>> limits = ResourceLimits(timeout=5, max_recursion_depth=2)
        >>> limits = ResourceLimits(max_file_size=0)  # No file size limit
    """

    timeout: int = DEFAULT_TIMEOUT
    max_file_size: int = DEFAULT_MAX_SIZE
    max_response_size: int = DEFAULT_MAX_SIZE
    max_recursion_depth: int = DEFAULT_MAX_RECURSION_DEPTH

    @classmethod
    def default(cls) -> "ResourceLimits":
        """Create ResourceLimits with default values from environment variables.

        Returns:
            ResourceLimits instance with values from environment variables,
            falling back to hardcoded defaults if not set.

        Raises:
            ValueError: If environment variable contains invalid integer value.

        Note:
            Negative values are treated as 0 (disabled limit) with a warning logged.
        """

        def parse_env_int(key: str, default: int) -> int:
            value_str = os.environ.get(key)
            if value_str is None:
                return default

            try:
                value = int(value_str)
            except ValueError as e:
                raise ValueError(
                    f"Environment variable {key}={value_str!r} is not a valid integer"
                ) from e

            if value < 0:
                logger.warning(
                    f"Environment variable {key}={value} is negative, "
                    f"treating as 0 (disabled limit). "
                    f"Consider using ResourceLimits.unlimited() instead."
                )
                return 0

            return value

        return cls(
            timeout=parse_env_int("SVG2IMG_TIMEOUT", DEFAULT_TIMEOUT),
            max_file_size=parse_env_int("SVG2IMG_MAX_FILE_SIZE", DEFAULT_MAX_SIZE),
            max_response_size=parse_env_int(
                "SVG2IMG_MAX_RESPONSE_SIZE", DEFAULT_MAX_SIZE
            ),
            max_recursion_depth=parse_env_int(
                "SVG2IMG_MAX_RECURSION_DEPTH", DEFAULT_MAX_RECURSION_DEPTH
            ),
        )

    @classmethod
    def unlimited(cls) -> "ResourceLimits":
        """Create ResourceLimits with all limits disabled.

        Warning:
            Only use this for trusted input in controlled environments.
        """
        return cls(
            timeout=0,
            max_file_size=0,
            max_response_size=0,
            max_recursion_depth=0,
        )

    def is_timeout_enabled(self) -> bool:
        """Check if request timeout is enabled."""
        return self.timeout > 0

    def is_file_size_limited(self) -> bool:
        """Check if file size limit is enabled."""
        return self.max_file_size > 0

    def is_response_size_limited(self) -> bool:
        """Check if response size limit is enabled."""
        return self.max_response_size > 0

    def is_recursion_limited(self) -> bool:
        """Check if recursion depth limit is enabled."""
        return self.max_recursion_depth > 0

    def http_timeout(self) -> float | None:
        """Timeout value suitable for an httpx client, None when disabled."""
        return float(self.timeout) if self.is_timeout_enabled() else None
