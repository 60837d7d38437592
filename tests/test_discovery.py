"""Tests for style discovery."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

import pytest

from themekit.config.settings import BuildConfig
from themekit.core.discovery import StyleDiscovery, parse_theme_name
from themekit.errors import ErrorCode, ThemeNamingError

from conftest import write_style


def test_shared_styles_sorted(config: BuildConfig) -> None:
    shared = asyncio.run(StyleDiscovery(config).shared_styles())
    assert [p.name for p in shared] == ["_mixins.scss", "_reset.scss"]


def test_component_styles_follow_directory_order(config: BuildConfig) -> None:
    components = asyncio.run(StyleDiscovery(config).component_styles())
    assert [p.relative_to(config.components_dir).as_posix() for p in components] == [
        "Content/Content.scss",
        "Header/Header.scss",
    ]


def test_component_styles_skip_nested_dirs_and_root_files(config: BuildConfig) -> None:
    write_style(config.components_dir / "Header" / "parts" / "Deep.scss", ".deep {}\n")
    write_style(config.components_dir / "loose.scss", ".loose {}\n")
    components = asyncio.run(StyleDiscovery(config).component_styles())
    names = [p.name for p in components]
    assert "Deep.scss" not in names
    assert "loose.scss" not in names


def test_common_styles_keeps_groups_apart(config: BuildConfig) -> None:
    styles = asyncio.run(StyleDiscovery(config).common_styles())
    assert all(config.shared_dir in p.parents for p in styles.shared_styles)
    assert all(config.components_dir in p.parents for p in styles.component_styles)
    assert not set(styles.shared_styles) & set(styles.component_styles)


def test_themes_parsed_from_filenames(config: BuildConfig) -> None:
    themes = asyncio.run(StyleDiscovery(config).themes())
    assert [(t.name, t.location.name) for t in themes] == [
        ("dark", "dark.theme.scss"),
        ("light", "light.theme.scss"),
    ]


def test_misnamed_theme_recorded_as_naming_error(config: BuildConfig) -> None:
    write_style(config.themes_dir / "old.theme.scss.orig", "$bg: red;\n")
    discovery = StyleDiscovery(config)
    themes = asyncio.run(discovery.themes())
    assert [t.name for t in themes] == ["dark", "light"]
    assert len(discovery.naming_errors) == 1
    assert discovery.naming_errors[0].code is ErrorCode.THEME_NAME_INVALID


def test_missing_directories_are_soft_failures(tmp_path: Path) -> None:
    config = BuildConfig.from_root(tmp_path / "empty-src")
    discovery = StyleDiscovery(config)
    styles = asyncio.run(discovery.common_styles())
    themes = asyncio.run(discovery.themes())
    assert styles.shared_styles == ()
    assert styles.component_styles == ()
    assert themes == []
    assert {w.code for w in discovery.warnings} == {ErrorCode.DIR_NOT_FOUND}
    assert discovery.errors == []


def test_missing_shared_dir_keeps_components(config: BuildConfig) -> None:
    shutil.rmtree(config.shared_dir)
    styles = asyncio.run(StyleDiscovery(config).common_styles())
    assert styles.shared_styles == ()
    assert len(styles.component_styles) == 2


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("light.theme.scss", "light"),
        ("high-contrast.theme.scss", "high-contrast"),
        ("brand.v2.theme.scss", "brand.v2"),
    ],
)
def test_parse_theme_name(config: BuildConfig, filename: str, expected: str) -> None:
    assert parse_theme_name(Path("/x") / filename, config) == expected


@pytest.mark.parametrize("filename", [".theme.scss", "light.scss", "light.theme.scss.bak"])
def test_parse_theme_name_rejects(config: BuildConfig, filename: str) -> None:
    with pytest.raises(ThemeNamingError):
        parse_theme_name(Path("/x") / filename, config)
