# kv.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from azure.core.exceptions import HttpResponseError, ServiceRequestError
from azure.identity import DefaultAzureCredential
from azure.keyvault.secrets import SecretClient

from .forecast import FORECAST_INTERVAL_MINUTES, QUICK_STAFFING_BUFFER
from .shrinkage import SHIFT_MINUTES
from .staffing import MAX_AGENTS, SCENARIO_SPAN

logger = logging.getLogger(__name__)

ENV_PREFIX = "BPO_"


@dataclass(frozen=True)
class Settings:
    max_agents: int = MAX_AGENTS
    scenario_span: int = SCENARIO_SPAN
    shift_minutes: float = SHIFT_MINUTES
    forecast_interval_minutes: float = FORECAST_INTERVAL_MINUTES
    quick_staffing_buffer: float = QUICK_STAFFING_BUFFER
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.max_agents < 1:
            raise ValueError("max_agents must be >= 1")
        if self.scenario_span < 0:
            raise ValueError("scenario_span must be >= 0")
        if self.shift_minutes <= 0:
            raise ValueError("shift_minutes must be > 0")
        if self.forecast_interval_minutes <= 0:
            raise ValueError("forecast_interval_minutes must be > 0")
        if self.quick_staffing_buffer <= 0:
            raise ValueError("quick_staffing_buffer must be > 0")
        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG,
            logging.INFO,
            logging.WARNING,
            logging.ERROR,
            logging.CRITICAL,
        ):
            raise ValueError(f"Unknown log_level: {self.log_level}")


_PARSERS: Dict[str, Callable[[str], Any]] = {
    "max_agents": int,
    "scenario_span": int,
    "shift_minutes": float,
    "forecast_interval_minutes": float,
    "quick_staffing_buffer": float,
    "log_level": lambda s: s.strip().upper(),
}


def _env_name(field_name: str) -> str:
    return f"{ENV_PREFIX}{field_name.upper()}"


def _secret_name(field_name: str) -> str:
    return "bpo-" + field_name.replace("_", "-")


def _parse(field_name: str, raw: str, source: str) -> Any:
    try:
        return _PARSERS[field_name](raw)
    except ValueError:
        raise ValueError(f"Invalid value for {source}: {raw!r}") from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Reads BPO_* environment variables, e.g. BPO_MAX_AGENTS=1000.
    Unset variables keep their defaults.
    """
    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for f in fields(Settings):
        raw = env.get(_env_name(f.name), "").strip()
        if raw:
            overrides[f.name] = _parse(f.name, raw, _env_name(f.name))
    return Settings(**overrides)


def _kv_uri_from_env() -> str:
    """
    Requires KEYVAULT_NAME in App Service configuration.
    Example: KEYVAULT_NAME = bpo-staffing-dev-kv
    """
    name = os.getenv("KEYVAULT_NAME", "").strip()
    if not name:
        raise RuntimeError(
            "Missing KEYVAULT_NAME environment variable. "
            "Set it in App Service Configuration (or your local env)."
        )
    return f"https://{name}.vault.azure.net/"


def _secret(client: SecretClient, name: str) -> Optional[str]:
    """
    Return a secret value or None if it is missing or the vault can't be reached.
    Keep this tolerant so the app can still run with partial configuration.
    """
    try:
        return client.get_secret(name).value
    except (HttpResponseError, ServiceRequestError) as e:
        logger.debug("Key Vault secret %s unavailable: %s", name, e)
        return None


def load_settings_from_key_vault(
    *,
    kv_uri: Optional[str] = None,
    client: Optional[SecretClient] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Secrets named bpo-max-agents, bpo-scenario-span, ... override the
    environment/default settings.

    Uses Managed Identity in Azure (DefaultAzureCredential) and also works locally
    via Azure CLI login, VS Code credentials, etc.
    """
    base = load_settings(environ)

    if client is None:
        uri = kv_uri or _kv_uri_from_env()
        credential = DefaultAzureCredential(
            exclude_interactive_browser_credential=True  # Streamlit shouldn't pop browsers in prod
        )
        client = SecretClient(vault_url=uri, credential=credential)

    overrides: Dict[str, Any] = {}
    for f in fields(Settings):
        value = _secret(client, _secret_name(f.name))
        if value is not None and value.strip():
            overrides[f.name] = _parse(f.name, value.strip(), f"secret {_secret_name(f.name)}")

    return replace(base, **overrides)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "Settings",
    "load_settings",
    "load_settings_from_key_vault",
    "configure_logging",
]
