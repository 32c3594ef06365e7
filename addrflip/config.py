"""Configuration for addrflip.

Reads from config/addrflip.ini if present, environment variables override.
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .codec import Variant
from .errors import ConfigError
from .transcoder import DEFAULT_PREFIX, Transcoder

_CONFIG_FILE = Path(__file__).resolve().parent.parent / "config" / "addrflip.ini"


@dataclass(frozen=True)
class AddrflipConfig:
    """Transcoder configuration. Immutable once loaded."""

    prefix: str = DEFAULT_PREFIX
    variant: str = Variant.BECH32.value
    log_level: str = "WARNING"

    def parsed_variant(self) -> Variant:
        try:
            return Variant.parse(self.variant)
        except ValueError as e:
            raise ConfigError(str(e)) from e


def load_config(config_path: Path | None = None) -> AddrflipConfig:
    """Load config from INI file, then override with environment variables."""
    path = config_path or _CONFIG_FILE
    kwargs: dict = {}

    if path.exists():
        parser = configparser.ConfigParser()
        parser.read(path)
        if parser.has_section("transcoder"):
            for ini_key, config_key in [
                ("prefix", "prefix"),
                ("variant", "variant"),
            ]:
                val = parser.get("transcoder", ini_key, fallback=None)
                if val is not None:
                    kwargs[config_key] = val
        if parser.has_section("logging"):
            val = parser.get("logging", "level", fallback=None)
            if val is not None:
                kwargs["log_level"] = val

    env_map = {
        "ADDRFLIP_PREFIX": "prefix",
        "ADDRFLIP_VARIANT": "variant",
        "ADDRFLIP_LOG_LEVEL": "log_level",
    }
    for env_key, config_key in env_map.items():
        val = os.getenv(env_key)
        if val is not None:
            kwargs[config_key] = val

    config = AddrflipConfig(**kwargs)
    config.parsed_variant()
    if not isinstance(logging.getLevelName(config.log_level.upper()), int):
        raise ConfigError(f"Unknown log level: {config.log_level!r}")
    return config


def build_transcoder(config: AddrflipConfig) -> Transcoder:
    return Transcoder.new(config.prefix, config.parsed_variant())
