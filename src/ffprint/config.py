"""Configuration management for ffprint.

Supports loading configuration from:
1. Environment variables (FFPRINT_*)
2. Config file (~/.ffprint/config.yaml, or a path given explicitly)
3. Default values

Example config file (~/.ffprint/config.yaml):
    tools:
      ffmpeg_path: "/usr/local/bin/ffmpeg"
      ffprobe_path: "/usr/local/bin/ffprobe"
      enable_mjpeg_workaround: true
    hash:
      algorithm: sha256
      mode: bounded
      mode_bytes:
        video: 80000000
      stream_types: [audio, video]
      parallel: 4
      include_chapters: true
      timeout: 600
    skip_mediainfo: true
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ffprint.errors import ConfigError
from ffprint.hashing.digest import DEFAULT_ALGORITHM, new_hash

logger = logging.getLogger(__name__)

# Config file search locations (in priority order)
CONFIG_LOCATIONS = [
    Path.home() / ".ffprint" / "config.yaml",
    Path.home() / ".config" / "ffprint" / "config.yaml",
    Path(".ffprint.yaml"),
]

STREAM_TYPES = ("audio", "video", "subtitle")

MODE_BOUNDED = "bounded"
MODE_EXHAUSTIVE = "exhaustive"
_MODE_ALIASES = {"fast": MODE_BOUNDED, "complete": MODE_EXHAUSTIVE}

DEFAULT_MODE_BYTES: dict[str, int] = {
    "audio": 10_000_000,
    "video": 80_000_000,
    "subtitle": 5_000,
}


@dataclass
class ToolsConfig:
    """External tool configuration."""

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    mediainfo_path: str = "mediainfo"
    # Kill ffmpeg as soon as an MJPEG stream reached its byte ceiling
    enable_mjpeg_workaround: bool = True


@dataclass
class HashConfig:
    """How streams, chapters and the format are hashed."""

    algorithm: str = DEFAULT_ALGORITHM
    mode: str = MODE_BOUNDED
    mode_bytes: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_MODE_BYTES))
    stream_types: list[str] = field(default_factory=lambda: list(STREAM_TYPES))
    # Overrides stream_types when non-empty
    stream_ids: list[int] = field(default_factory=list)
    parallel: int = 4
    include_chapters: bool = True
    timeout: float | None = None

    def validate(self) -> HashConfig:
        """Normalize and check the configuration.

        Returns:
            self, for chaining

        Raises:
            ConfigError: If any setting is invalid
        """
        self.mode = _MODE_ALIASES.get(self.mode, self.mode)
        if self.mode not in (MODE_BOUNDED, MODE_EXHAUSTIVE):
            raise ConfigError(f"Unknown hash mode: {self.mode!r}")
        new_hash(self.algorithm)
        if self.parallel < 1:
            raise ConfigError(f"parallel must be at least 1, got {self.parallel}")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        self.mode_bytes = {**DEFAULT_MODE_BYTES, **self.mode_bytes}
        for stream_type, ceiling in self.mode_bytes.items():
            if int(ceiling) <= 0:
                raise ConfigError(f"Byte ceiling for {stream_type!r} must be positive")
            self.mode_bytes[stream_type] = int(ceiling)
        unknown = set(self.stream_types) - set(STREAM_TYPES)
        if unknown:
            raise ConfigError(f"Unknown stream types: {', '.join(sorted(unknown))}")
        if any(i < 0 for i in self.stream_ids):
            raise ConfigError("Stream ids must be non-negative")
        return self

    def ceiling_for(self, codec_type: str) -> int | None:
        """Return the byte ceiling for a codec type, or None when unbounded."""
        if self.mode == MODE_EXHAUSTIVE:
            return None
        try:
            return self.mode_bytes[codec_type]
        except KeyError:
            raise ConfigError(f"No byte ceiling configured for {codec_type!r}") from None

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain dict."""
        return dataclasses.asdict(self)


@dataclass
class FingerprintConfig:
    """Main configuration for ffprint."""

    tools: ToolsConfig = field(default_factory=ToolsConfig)
    hash: HashConfig = field(default_factory=HashConfig)
    skip_probing: bool = False
    skip_chapters: bool = False
    skip_hashing: bool = False
    skip_mediainfo: bool = False
    skip_versions: bool = False
    skip_mediainfo_version: bool = False


def _load_yaml_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from an explicit YAML file or the first one found."""
    if path is not None:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data or {}

    for config_path in CONFIG_LOCATIONS:
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
                continue
            return data if isinstance(data, dict) else {}
    return {}


def _get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with FFPRINT_ prefix."""
    return os.environ.get(f"FFPRINT_{key}", default)


def _parse_bool(value: str | None) -> bool | None:
    """Parse boolean from string."""
    if value is None:
        return None
    return value.lower() in ("true", "1", "yes", "on")


def _pick_bool(env_key: str, section: dict[str, Any], key: str, default: bool) -> bool:
    env_value = _parse_bool(_get_env(env_key))
    if env_value is not None:
        return env_value
    return bool(section.get(key, default))


def _parse_list(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def load_config(path: str | Path | None = None) -> FingerprintConfig:
    """Load configuration from file and environment variables.

    Priority (highest first):
    1. Environment variables (FFPRINT_*)
    2. Config file (``path``, else the first of CONFIG_LOCATIONS)
    3. Default values

    Raises:
        ConfigError: If the resulting configuration is invalid
    """
    file_config = _load_yaml_config(path)

    tools_config = file_config.get("tools") or {}
    defaults = ToolsConfig()
    tools = ToolsConfig(
        ffmpeg_path=_get_env("FFMPEG_PATH") or tools_config.get("ffmpeg_path", defaults.ffmpeg_path),
        ffprobe_path=_get_env("FFPROBE_PATH")
        or tools_config.get("ffprobe_path", defaults.ffprobe_path),
        mediainfo_path=_get_env("MEDIAINFO_PATH")
        or tools_config.get("mediainfo_path", defaults.mediainfo_path),
        enable_mjpeg_workaround=_pick_bool(
            "MJPEG_WORKAROUND", tools_config, "enable_mjpeg_workaround", True
        ),
    )

    hash_section = file_config.get("hash") or {}
    timeout = _get_env("TIMEOUT") or hash_section.get("timeout")
    try:
        hash_config = HashConfig(
            algorithm=_get_env("HASH_ALGORITHM") or hash_section.get("algorithm", DEFAULT_ALGORITHM),
            mode=_get_env("HASH_MODE") or hash_section.get("mode", MODE_BOUNDED),
            mode_bytes=dict(hash_section.get("mode_bytes") or {}),
            stream_types=_parse_list(_get_env("STREAM_TYPES"))
            or list(hash_section.get("stream_types") or STREAM_TYPES),
            stream_ids=[int(i) for i in hash_section.get("stream_ids") or []],
            parallel=int(_get_env("PARALLEL") or hash_section.get("parallel", 4)),
            include_chapters=_pick_bool("INCLUDE_CHAPTERS", hash_section, "include_chapters", True),
            timeout=float(timeout) if timeout is not None else None,
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid hash configuration: {e}") from e

    return FingerprintConfig(
        tools=tools,
        hash=hash_config.validate(),
        skip_probing=_pick_bool("SKIP_PROBING", file_config, "skip_probing", False),
        skip_chapters=_pick_bool("SKIP_CHAPTERS", file_config, "skip_chapters", False),
        skip_hashing=_pick_bool("SKIP_HASHING", file_config, "skip_hashing", False),
        skip_mediainfo=_pick_bool("SKIP_MEDIAINFO", file_config, "skip_mediainfo", False),
        skip_versions=_pick_bool("SKIP_VERSIONS", file_config, "skip_versions", False),
        skip_mediainfo_version=_pick_bool(
            "SKIP_MEDIAINFO_VERSION", file_config, "skip_mediainfo_version", False
        ),
    )


# Global config instance (lazy loaded)
_config: FingerprintConfig | None = None


def get_config() -> FingerprintConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
