"""Client configuration for pyipsas."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyipsas.exceptions import IpsasConfigError

#: Auto-save every 30 seconds.
DEFAULT_AUTO_SAVE_INTERVAL_MS: int = 30_000


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class IpsasConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend base URL. Remote functions are reached at
        ``{base_url}/rpc/{function}``.
    auto_save_interval_ms : int
        Interval between auto-save ticks in milliseconds.
    request_timeout : float
        Total timeout in seconds for a single backend call.
    currency_code : str
        Currency prefix used by :func:`pyipsas.formatting.format_currency`.
    locale : str
        Display locale. Only ``en-KE`` conventions are implemented.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    base_url: str = "http://localhost:8080"
    auto_save_interval_ms: int = DEFAULT_AUTO_SAVE_INTERVAL_MS
    request_timeout: float = 30.0
    currency_code: str = "KES"
    locale: str = "en-KE"
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        interval = self.auto_save_interval_ms
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise IpsasConfigError(f"auto_save_interval_ms must be a positive integer, got {interval!r}")
        if self.request_timeout <= 0:
            raise IpsasConfigError(f"request_timeout must be positive, got {self.request_timeout!r}")
        if not self.base_url:
            raise IpsasConfigError("base_url must not be empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> IpsasConfig:
        """Create configuration from environment variables.

        Reads optional ``IPSAS_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        IpsasConfig
            Populated configuration.

        Raises
        ------
        IpsasConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "IPSAS_BASE_URL": "base_url",
            "IPSAS_CURRENCY_CODE": "currency_code",
            "IPSAS_LOCALE": "locale",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        interval_env = env.get("IPSAS_AUTO_SAVE_INTERVAL_MS")
        if interval_env is not None and "auto_save_interval_ms" not in overrides:
            try:
                config_kwargs["auto_save_interval_ms"] = int(interval_env)
            except ValueError as exc:
                raise IpsasConfigError(f"IPSAS_AUTO_SAVE_INTERVAL_MS is not an integer: {interval_env!r}") from exc

        timeout_env = env.get("IPSAS_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise IpsasConfigError(f"IPSAS_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("IPSAS_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
