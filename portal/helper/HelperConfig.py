"""Environment-backed settings for the portal tools."""

import logging
import os


class HelperConfig:
    """Reads process settings (log level, timezone, timeouts) from environment variables.

    Portal credentials are not read here; they come from the keyfile, see KeyfileHelper.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Read a string environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (str | None): Fallback value if the variable is not set.

        Returns:
            str: The resolved value.

        Raises:
            ValueError: If the variable is not set and no default is provided.
        """
        key = key.upper()
        val = os.getenv(key) or None  # empty string → None
        if val is None and default is None:
            raise ValueError(f"Environment variable '{key}' is not set.")
        return val.strip() if val is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Read a numeric environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (float | int | None): Fallback value if the variable is not set.

        Returns:
            float | int: The resolved numeric value.

        Raises:
            ValueError: If the variable is not set and no default is provided.
            ValueError: If the value cannot be parsed as a number.
        """
        key = key.upper()
        raw = os.getenv(key) or None
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key}' is not set.")
            return default
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key}' is not a valid number: '{raw}'.")

    def get_timeout_val(self, key: str) -> float | None:
        """Read a request timeout in seconds.

        A missing variable or a value of 0 means "no timeout", so a hung request waits forever.

        Returns:
            float | None: The timeout, or None when disabled.

        Raises:
            ValueError: If the value is not a number or is negative.
        """
        timeout = self.get_number_val(key, default=0)
        if timeout < 0:
            raise ValueError(f"Environment variable '{key.upper()}' must not be negative: '{timeout}'.")
        return float(timeout) if timeout else None

    def get_logger(self) -> logging.Logger:
        """Return the application logger."""
        return self._logger
