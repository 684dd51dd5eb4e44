# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""Scaffolding of configuration files for a new region."""

import logging
from pathlib import Path
from typing import Any

import yaml

from config.settings import DEFAULT_RUN_MODE, resolve_config_dir
from config.validation import generate_config_template
from core.guards import validate_region_code

logger = logging.getLogger(__name__)


def _write_yaml(path: Path, payload: dict[str, Any], overwrite: bool) -> bool:
    if path.exists() and not overwrite:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(payload, f, sort_keys=False)
    return True


def scaffold_region_config(
    region_code: str,
    config_dir: Path | None = None,
    catalog: str | None = None,
    run_mode: str = DEFAULT_RUN_MODE,
    overwrite: bool = False,
) -> list[Path]:
    """
    Write default.yaml and <run mode>.yaml for a region.

    The query is left empty in both files; the region loads, but its
    fetcher refuses to run until a query is filled in.

    Args:
        region_code: Two-character region code (e.g. 'nz')
        config_dir: Base configuration directory (default: resolved from environment)
        catalog: Catalog host (defaults to 'data.gov.<code>')
        run_mode: Run mode whose file is created next to the defaults
        overwrite: Replace files that already exist

    Returns:
        Paths of the files written

    Raises:
        InvalidRegionCodeError: If region_code is malformed
    """
    code = validate_region_code(region_code, "scaffold").lower()
    region_dir = (config_dir or resolve_config_dir()) / code
    created: list[Path] = []

    default_path = region_dir / "default.yaml"
    if _write_yaml(default_path, generate_config_template(code, catalog), overwrite):
        created.append(default_path)

    mode_path = region_dir / f"{run_mode}.yaml"
    if _write_yaml(mode_path, {"fetcher_matcher": {"query": None}}, overwrite):
        created.append(mode_path)

    for path in created:
        logger.info(f"Wrote {path}")
    return created
