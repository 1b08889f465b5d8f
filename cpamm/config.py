"""Engine configuration."""

import os
from dataclasses import dataclass

from cpamm.constants import DEFAULT_BASE_ASSET


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class EngineConfig:
    """Configuration shared by every pool the engine creates.

    Attributes:
        base_asset: Asset tag of the numeraire side of each pool
        log_level: Minimum level passed to configure_logging
        log_json: Render log events as JSON instead of console output
    """

    base_asset: str = DEFAULT_BASE_ASSET
    log_level: str = "INFO"
    log_json: bool = False


def load_config() -> EngineConfig:
    """Build an EngineConfig from environment variables.

    Configuration via environment variables:
    - CPAMM_BASE_ASSET: Numeraire asset tag (default: BASE)
    - CPAMM_LOG_LEVEL: Log level name (default: INFO)
    - CPAMM_LOG_JSON: Emit JSON logs (default: false)
    """
    return EngineConfig(
        base_asset=os.environ.get("CPAMM_BASE_ASSET", DEFAULT_BASE_ASSET),
        log_level=os.environ.get("CPAMM_LOG_LEVEL", "INFO").upper(),
        log_json=_env_flag("CPAMM_LOG_JSON", False),
    )


# Default configuration instance
DEFAULT_CONFIG = EngineConfig()
