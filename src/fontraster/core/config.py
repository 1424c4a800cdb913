"""Configuration management for the font rasterization system."""

import logging
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidYamlError,
)

DEFAULT_GENERIC_FONTS: dict[str, list[str]] = {
    "sans": [
        "DejaVuSans.ttf",
        "LiberationSans-Regular.ttf",
        "NotoSans-Regular.ttf",
        "Arial.ttf",
        "arial.ttf",
    ],
    "sans-serif": [
        "DejaVuSans.ttf",
        "LiberationSans-Regular.ttf",
        "NotoSans-Regular.ttf",
        "Arial.ttf",
        "arial.ttf",
    ],
    "serif": [
        "DejaVuSerif.ttf",
        "LiberationSerif-Regular.ttf",
        "NotoSerif-Regular.ttf",
        "Times New Roman.ttf",
        "times.ttf",
    ],
    "monospace": [
        "DejaVuSansMono.ttf",
        "LiberationMono-Regular.ttf",
        "NotoSansMono-Regular.ttf",
        "Courier New.ttf",
        "cour.ttf",
        "Menlo.ttc",
    ],
}


class FontRasterConfig(BaseSettings):
    """Font lookup and cache configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FONTRASTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    lock_timeout: float | None = Field(
        None, gt=0.0, description="Seconds to wait for the cache lock (None waits indefinitely)"
    )
    use_fontconfig: bool = Field(True, description="Query fontconfig (fc-match/fc-list)")
    fontconfig_timeout: float = Field(10.0, gt=0.0, description="fontconfig subprocess timeout")
    font_dirs: list[Path] = Field(
        default_factory=list, description="Extra directories scanned for font files"
    )
    font_files: dict[str, Path] = Field(
        default_factory=dict, description="Explicit family name to font file overrides"
    )
    generic_fonts: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_GENERIC_FONTS.items()},
        description="Candidate file names for generic families",
    )
    log_level: str = Field("INFO", description="Log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("font_files")
    @classmethod
    def normalize_font_file_keys(cls, v: dict[str, Path]) -> dict[str, Path]:
        return {name.strip().lower(): path for name, path in v.items()}

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "FontRasterConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            raise EmptyConfigFileError(str(config_path))

        if issubclass(config_class, BaseSettings):
            # YAML values win; don't merge in a stray .env
            class TempConfig(config_class):
                model_config = SettingsConfigDict(
                    env_file=None,
                    case_sensitive=False,
                    extra="ignore",
                )

            return TempConfig(**config_data)
        return config_class(**config_data)

    except ConfigurationError:
        raise
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e
    except Exception as e:
        raise ConfigLoadError(str(e)) from e
