# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Layered per-region settings.

Region configuration is a pydantic-settings model whose sources are, from
lowest to highest priority:

    <config dir>/<region>/default.yaml       optional
    <config dir>/<region>/<run mode>.yaml    required
    <REGION>_<KEY> environment variables

Sources are merged key by key, so a mode-specific file only needs to carry
the values that differ from the defaults. The config directory is
$GIS_CONFIG_PATH, falling back to ./config, and the run mode is $RUN_MODE,
falling back to 'development'.
"""

import logging
import os
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, ClassVar

import yaml
from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
    YamlConfigSettingsSource,
)

from config.validation import MatcherConfig, RegionConfig, validate_region_config
from core.exceptions import ConfigurationError
from core.guards import validate_region_code
from core.types import RunMode

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "GIS_CONFIG_PATH"
RUN_MODE_ENV = "RUN_MODE"
DEFAULT_RUN_MODE = RunMode("development")
DEFAULT_CONFIG_DIRNAME = "config"
CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")

# Environment keys use a double underscore between nesting levels,
# e.g. AU_FETCHER_MATCHER__QUERY -> fetcher_matcher.query
NESTING_SEPARATOR = "__"
MATCHER_SECTION = "fetcher_matcher"
MATCHER_FIELDS = frozenset({"catalog", "rest_url", "query", "matcher"})

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_KEY_ALIASES = {
    "resturl": "rest_url",
    "fetchermatcher": "fetcher_matcher",
}


def canonical_key(key: Any) -> str:
    """Map camelCase, snake_case and upper-case spellings onto one snake_case key."""
    snake = _CAMEL_BOUNDARY.sub("_", str(key)).lower()
    return _KEY_ALIASES.get(snake, snake)


def normalize_keys(data: Any) -> Any:
    """Recursively apply canonical_key to every mapping key."""
    if isinstance(data, Mapping):
        return {canonical_key(k): normalize_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [normalize_keys(item) for item in data]
    return data


def resolve_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the base configuration directory."""
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return Path.cwd() / DEFAULT_CONFIG_DIRNAME


def resolve_run_mode(environ: Mapping[str, str] | None = None) -> RunMode:
    """Return the active run mode (selects the required mode-specific file)."""
    env = os.environ if environ is None else environ
    return RunMode(env.get(RUN_MODE_ENV) or DEFAULT_RUN_MODE)


def locate_layer(stem: Path) -> Path | None:
    """
    Find the file backing a configuration layer.

    The first existing file among '<stem>.yaml', '<stem>.yml' and
    '<stem>.json' is used.
    """
    for ext in CONFIG_EXTENSIONS:
        candidate = stem.with_name(stem.name + ext)
        if candidate.is_file():
            return candidate
    return None


class RegionYamlSettingsSource(YamlConfigSettingsSource):
    """
    One configuration file, with keys normalized to snake_case.

    JSON files are parsed by the YAML loader.
    """

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        try:
            with open(file_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Could not read configuration file {file_path}: {e}",
                details={"path": str(file_path)},
            ) from e

        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Configuration file {file_path} must contain a mapping, "
                f"got {type(data).__name__}",
                details={"path": str(file_path)},
            )

        logger.debug(f"Loaded configuration layer from {file_path}")
        return normalize_keys(data)


class RegionEnvSettingsSource(EnvSettingsSource):
    """
    Environment variables carrying a region prefix.

    'AU_QUERY=roads' sets fetcher_matcher.query for region 'au'. Keys naming
    a matcher field are placed under fetcher_matcher; other keys use '__' to
    address nested sections and are otherwise ignored.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        region_code: str,
        environ: Mapping[str, str] | None = None,
    ):
        # Read by _load_env_vars during the base initializer
        self.environ = environ
        self.prefix = f"{region_code}_".lower()
        super().__init__(
            settings_cls,
            env_prefix=self.prefix,
            env_nested_delimiter=NESTING_SEPARATOR,
            case_sensitive=False,
        )

    def _load_env_vars(self) -> Mapping[str, str | None]:
        env = os.environ if self.environ is None else self.environ
        env_vars: dict[str, str | None] = {}

        for var, value in env.items():
            key = var.lower()
            if key.startswith(self.prefix):
                raw_key = key[len(self.prefix) :]
                path = [canonical_key(part) for part in raw_key.split(NESTING_SEPARATOR) if part]
                if not path:
                    logger.debug(f"Ignoring environment variable {var}: no key after prefix")
                    continue
                if len(path) == 1 and path[0] in MATCHER_FIELDS:
                    path.insert(0, MATCHER_SECTION)
                key = self.prefix + NESTING_SEPARATOR.join(path)
                logger.debug(f"Environment override {var} -> {'.'.join(path)}")
            env_vars[key] = value

        return env_vars


class RegionSettings(BaseSettings):
    """
    Settings model for one region.

    Use for_region() to bind the region, its configuration files and the
    environment; the class itself carries no sources beyond init kwargs.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        env_nested_delimiter=NESTING_SEPARATOR,
        case_sensitive=False,
    )

    region_code: ClassVar[str] = ""
    layer_files: ClassVar[tuple[Path, ...]] = ()
    environ: ClassVar[Mapping[str, str] | None] = None

    fetcher_matcher: MatcherConfig

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Define the priority order for settings sources.

        Priority (highest to lowest):
        1. Init kwargs
        2. <REGION>_ environment variables
        3. Configuration files, last layer first
        """
        if not cls.region_code:
            return (init_settings,)

        files = [RegionYamlSettingsSource(settings_cls, yaml_file=path) for path in cls.layer_files]
        return (
            init_settings,
            RegionEnvSettingsSource(settings_cls, cls.region_code, cls.environ),
            *reversed(files),
        )

    @classmethod
    def for_region(
        cls,
        region_code: str,
        layer_files: Iterable[Path],
        environ: Mapping[str, str] | None = None,
    ) -> type["RegionSettings"]:
        """
        Create a settings class bound to one region.

        Args:
            region_code: Validated region code, used as the environment prefix
            layer_files: Existing configuration files, lowest priority first
            environ: Environment mapping (default: os.environ)

        Returns:
            RegionSettings subclass; instantiate it to read every source
        """
        name = f"{region_code.upper()}RegionSettings"
        namespace = {
            "__module__": cls.__module__,
            "__qualname__": name,
            "region_code": region_code,
            "layer_files": tuple(layer_files),
            "environ": environ,
        }
        return type(cls)(name, (cls,), namespace)


def region_layer_files(
    region_code: str,
    config_dir: Path | None = None,
    run_mode: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[Path]:
    """
    Locate the configuration files for a region.

    Args:
        region_code: Two-character region code (e.g. 'au')
        config_dir: Base configuration directory (default: resolved from environment)
        run_mode: Run mode selecting the required file (default: resolved from environment)
        environ: Environment mapping (default: os.environ)

    Returns:
        Existing files, lowest priority first

    Raises:
        InvalidRegionCodeError: If region_code is malformed
        ConfigurationError: If the run-mode file does not exist
    """
    region = validate_region_code(region_code, "load")
    base = (config_dir or resolve_config_dir(environ)) / region
    mode = run_mode or resolve_run_mode(environ)

    default_file = locate_layer(base / "default")
    if default_file is None:
        logger.debug(f"Optional configuration {base / 'default'} not present, skipping")

    mode_file = locate_layer(base / mode)
    if mode_file is None:
        raise ConfigurationError(
            f"Configuration file not found: {base / mode}{{{','.join(CONFIG_EXTENSIONS)}}}",
            details={"path": str(base / mode), "run_mode": mode},
        )

    return [path for path in (default_file, mode_file) if path is not None]


def _format_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def merge_region_config(
    region_code: str,
    config_dir: Path | None = None,
    run_mode: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> RegionConfig:
    """
    Merge every configuration layer for a region and validate the result.

    Args:
        region_code: Two-character region code (e.g. 'au')
        config_dir: Base configuration directory (default: resolved from environment)
        run_mode: Run mode selecting the required file (default: resolved from environment)
        environ: Environment mapping (default: os.environ)

    Returns:
        Validated RegionConfig

    Raises:
        InvalidRegionCodeError: If region_code is malformed
        ConfigurationError: If the run-mode file is missing or the merged
            settings do not validate
    """
    files = region_layer_files(region_code, config_dir, run_mode, environ)
    settings_cls = RegionSettings.for_region(region_code, files, environ)

    try:
        settings = settings_cls()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration for region '{region_code}': {_format_validation_error(e)}",
            details={"region_code": region_code, "errors": e.errors(include_url=False)},
        ) from e
    except SettingsError as e:
        raise ConfigurationError(
            f"Invalid environment configuration for region '{region_code}': {e}",
            details={"region_code": region_code},
        ) from e

    logger.debug(f"Merged {len(files)} configuration file(s) and environment for {region_code}")
    return validate_region_config({"fetcher_matcher": settings.fetcher_matcher})
