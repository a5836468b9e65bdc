from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..utils.logging import env_forces_debug


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    api_base_url: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    max_workers: int = 4


def _default_debug_logging() -> bool:
    return env_forces_debug()


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.api_key: str = ""
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def api_base_url(self) -> str:
        return self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: Any) -> None:
        self.config = replace(self.config, api_base_url=self._coerce_url(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: Any) -> None:
        coerced = self._coerce_int("request_timeout_s", value, minimum=1)
        self.config = replace(self.config, request_timeout_s=coerced)

    @property
    def retries(self) -> int:
        return self.config.retries

    @retries.setter
    def retries(self, value: Any) -> None:
        self.config = replace(self.config, retries=self._coerce_int("retries", value, minimum=0))

    @property
    def max_workers(self) -> int:
        return self.config.max_workers

    @max_workers.setter
    def max_workers(self, value: Any) -> None:
        coerced = self._coerce_int("max_workers", value, minimum=1)
        self.config = replace(self.config, max_workers=coerced)

    @property
    def offline(self) -> bool:
        """True when no API URL is configured and the offline catalog is used."""
        return not self.api_base_url

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        url = self.api_base_url
        if url and not url.startswith(("http://", "https://")):
            return False
        return self.request_timeout_s > 0 and self.max_workers > 0

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {*SettingsConfig.__annotations__.keys(), "api_key", "debug_logging"}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(
                f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}"
            )

        updates: Dict[str, Any] = {}
        for cfg_key in SettingsConfig.__annotations__.keys():
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])
        if updates:
            self.config = replace(self.config, **updates)

        if "api_key" in payload:
            self.api_key = self._coerce_optional_str(payload["api_key"])
        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot.update(
            {
                "api_key": self.api_key,
                "debug_logging": bool(self.debug_logging),
            }
        )
        return snapshot

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("api_base_url must start with http:// or https://.")
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key == "api_base_url":
            return self._coerce_url(raw)
        if key == "request_timeout_s":
            return self._coerce_int(key, raw, minimum=1)
        if key == "retries":
            return self._coerce_int(key, raw, minimum=0)
        if key == "max_workers":
            return self._coerce_int(key, raw, minimum=1)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_url(value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError("api_base_url must be a string.")
        return value.strip().rstrip("/")

    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: Optional[int] = None) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except ValueError as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if minimum is not None and coerced < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return coerced

