"""Configuration management for the tvctl daemon."""
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "tvctl.conf"


class DaemonConfig(BaseSettings):
    """Serial link and dispatch settings."""
    model_config = SettingsConfigDict(env_prefix="tvctl_")

    config_path: Path = Field(default=DEFAULT_CONFIG_PATH, description="Path to the key table config file")
    baud_rate: int = Field(default=9600, description="Serial speed, must match the firmware")
    repeat_delay: float = Field(default=0.3, description="Quiet interval between accepted codes (seconds)")
    injector_command: list[str] = Field(
        default=["xdotool", "key"],
        description="Command used to send a shortcut, the shortcut is appended as last argument"
    )

    @field_validator('baud_rate')
    @classmethod
    def validate_baud_rate(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Baud rate must be positive")
        return v

    @field_validator('repeat_delay')
    @classmethod
    def validate_repeat_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Repeat delay must not be negative")
        return v

    @field_validator('injector_command')
    @classmethod
    def validate_injector_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("Injector command must name an executable")
        return v


class RuntimeConfig(BaseSettings):
    """Configuration for logging."""
    model_config = SettingsConfigDict(env_prefix="tvctl_")

    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str | None = Field(default=None, description="Optional log file, stderr only when unset")


class ServiceConfig(BaseSettings):
    """Settings handed over by the service manager."""
    notify_socket: str | None = Field(default=None, description="systemd readiness socket (NOTIFY_SOCKET)")


daemon_config = DaemonConfig()
runtime_config = RuntimeConfig()
service_config = ServiceConfig()
