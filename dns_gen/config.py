import os
import re
from datetime import timedelta
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

CONFIG_PATH = os.environ.get("DNS_GEN_CONFIG_PATH", "dns-gen.yaml")

DEFAULT_INTERVAL = timedelta(seconds=5)

_DURATION_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> timedelta:
    """
    parse a duration such as "5s", "500ms" or "1m30s"
    :raises ValueError: if the string is not a valid duration
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    seconds = 0.0
    pos = 0
    for match in _DURATION_RE.finditer(text):
        if match.start() != pos:
            break
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos != len(text):
        raise ValueError(f"invalid duration {value!r}")
    return timedelta(seconds=seconds)


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DNS_GEN_",
        yaml_file=CONFIG_PATH,
    )

    interval: timedelta = DEFAULT_INTERVAL
    execute: str | None = None
    template: Path | None = None
    dest: Path | None = None
    tmp_dir: Path | None = None
    debug: bool = False
    hostnames: list[str] = []

    @field_validator("interval", mode="before")
    @classmethod
    def _parse_interval(cls, value):
        # bare numbers are seconds, ISO-8601 is left to pydantic
        if isinstance(value, str) and not value.startswith(("P", "-P")):
            try:
                return float(value)
            except ValueError:
                return parse_duration(value)
        return value

    @field_validator("interval")
    @classmethod
    def _check_interval(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("interval must be positive")
        return value

    @field_validator("execute", "template", "dest", "tmp_dir", mode="before")
    @classmethod
    def _empty_is_none(cls, value):
        # "" means "not configured", the same as leaving the option out
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, YamlConfigSettingsSource(settings_cls))
