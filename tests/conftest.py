"""Shared fixtures: a throwaway component library source tree."""

from __future__ import annotations

from pathlib import Path

import pytest

from themekit.config.settings import BuildConfig


def write_style(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def src_root(tmp_path: Path) -> Path:
    """A source tree with two themes, shared styles and two components."""
    src = tmp_path / "src"
    write_style(src / "themes" / "light.theme.scss", "$bg: #ffffff;\n$fg: #111111;\n")
    write_style(src / "themes" / "dark.theme.scss", "$bg: #111111;\n$fg: #eeeeee;\n")
    write_style(src / "themes" / "README.md", "not a theme\n")
    write_style(src / "themes" / "shared" / "_reset.scss", "* { box-sizing: border-box; }\n")
    write_style(src / "themes" / "shared" / "_mixins.scss", "@mixin pad { padding: 4px; }\n")
    write_style(
        src / "components" / "Header" / "Header.scss",
        ".header { background: $bg; color: $fg; @include pad; }\n",
    )
    write_style(src / "components" / "Header" / "Header.js", "export default null;\n")
    write_style(
        src / "components" / "Content" / "Content.scss",
        ".content { color: $fg; }\n",
    )
    write_style(src / "components" / "index.js", "export {};\n")
    return src


@pytest.fixture
def config(src_root: Path) -> BuildConfig:
    return BuildConfig.from_root(src_root, lib_name="my-lib")
