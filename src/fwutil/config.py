"""
Configuration management for fwutil.

Loads resolver and command settings from environment variables or a .env file.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Check common locations for .env
env_locations = [
    Path.home() / ".fwutil" / ".env",
    Path.home() / ".config" / "fwutil" / ".env",
    Path.cwd() / ".env",
]
for env_path in env_locations:
    if env_path.exists():
        load_dotenv(env_path)
        break


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass
class FwutilConfig:
    """Resolver, command and logging settings."""

    # DNS servers used for hostname resolution; empty means the system resolver
    nameservers: list[str] = field(default_factory=list)
    resolver_timeout: float = 5.0

    # Timeout for the rule persistence command
    command_timeout: float = 60.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "FwutilConfig":
        """Load configuration from environment variables."""
        nameservers = [
            ns.strip()
            for ns in os.getenv("FWUTIL_NAMESERVERS", "").split(",")
            if ns.strip()
        ]
        return cls(
            nameservers=nameservers,
            resolver_timeout=_float_env("FWUTIL_RESOLVER_TIMEOUT", 5.0),
            command_timeout=_float_env("FWUTIL_COMMAND_TIMEOUT", 60.0),
            log_level=os.getenv("FWUTIL_LOG_LEVEL", "INFO").upper(),
        )


# Global config instance
_config: FwutilConfig | None = None


def get_config() -> FwutilConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = FwutilConfig.from_env()
    return _config


def set_config(config: FwutilConfig | None) -> None:
    """Set the global configuration instance (None reloads from the environment)."""
    global _config
    _config = config
