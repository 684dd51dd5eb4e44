# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for region configuration scaffolding and the setup_region task."""

from pathlib import Path

import pytest
import yaml

import tasks
from config.scaffold import scaffold_region_config
from config.settings import merge_region_config
from core.exceptions import InvalidRegionCodeError, MatcherConfigError
from data_fetchers.shared.catalog_search import CatalogSearchFetcher


class DummyContext:
    """Minimal Invoke-like context with a run method that records commands."""

    def __init__(self):
        self.commands: list[str] = []

    def run(self, cmd: str, pty: bool | None = None, warn: bool | None = None):  # noqa: ARG002
        self.commands.append(cmd)


def test_setup_region_task_creates_expected_files(monkeypatch, tmp_path, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GIS_CONFIG_PATH", raising=False)
    ctx = DummyContext()

    # Call the underlying function body to avoid Invoke's Context type check
    tasks.setup_region.body(ctx, "NZ")

    default = yaml.safe_load(Path("config/nz/default.yaml").read_text(encoding="utf-8"))
    assert default["fetcher_matcher"]["catalog"] == "data.gov.nz"
    assert Path("config/nz/development.yaml").exists()
    assert ctx.commands == []
    assert "NZ_QUERY" in capsys.readouterr().out


def test_scaffolded_region_loads_but_fetcher_requires_query(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    scaffold_region_config("nz", config_dir=config_dir)

    config = merge_region_config("nz", config_dir=config_dir, environ={})

    assert config.fetcher_matcher.query is None
    with pytest.raises(MatcherConfigError) as exc:
        CatalogSearchFetcher(config.fetcher_matcher)
    assert exc.value.missing_fields == ["query"]


def test_scaffolded_region_accepts_query_from_environment(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    scaffold_region_config("nz", config_dir=config_dir, catalog="catalogue.data.govt.nz")

    config = merge_region_config("nz", config_dir=config_dir, environ={"NZ_QUERY": "parcels"})
    fetcher = CatalogSearchFetcher(config.fetcher_matcher)

    assert fetcher.query == "parcels"
    assert fetcher.rest_url == "https://catalogue.data.govt.nz/api/v0/search/datasets"


def test_scaffold_keeps_existing_files_unless_overwrite(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    default = config_dir / "nz" / "default.yaml"
    default.parent.mkdir(parents=True)
    default.write_text("fetcher_matcher: {catalog: mine}\n", encoding="utf-8")

    created = scaffold_region_config("nz", config_dir=config_dir, run_mode="production")

    assert created == [config_dir / "nz" / "production.yaml"]
    assert "mine" in default.read_text(encoding="utf-8")

    created = scaffold_region_config("nz", config_dir=config_dir, overwrite=True)

    assert default in created
    assert "data.gov.nz" in default.read_text(encoding="utf-8")


def test_scaffold_rejects_invalid_region_code(tmp_path: Path) -> None:
    with pytest.raises(InvalidRegionCodeError):
        scaffold_region_config("nzl", config_dir=tmp_path)

    assert not any(tmp_path.iterdir())
