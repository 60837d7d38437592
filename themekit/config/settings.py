"""Build configuration passed explicitly into every pipeline stage."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

DEFAULT_LIB_NAME = "my-lib"
STYLE_EXTENSION = ".scss"


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Library name, source roots and output roots for one style build."""

    lib_name: str
    themes_dir: Path
    shared_dir: Path
    components_dir: Path
    dist_dir: Path
    watch_root: Path
    style_extension: str = STYLE_EXTENSION

    @classmethod
    def from_root(
        cls,
        root: str | Path,
        *,
        dist: str | Path | None = None,
        lib_name: str = DEFAULT_LIB_NAME,
    ) -> BuildConfig:
        """Derive the standard layout from a source root.

        Themes live in ``<root>/themes``, shared styles in
        ``<root>/themes/shared`` and component styles in
        ``<root>/components/<name>``. Output defaults to ``<root>/../dist``.
        """
        src = Path(root).resolve()
        dist_dir = Path(dist).resolve() if dist is not None else (src.parent / "dist")
        return cls(
            lib_name=lib_name,
            themes_dir=src / "themes",
            shared_dir=src / "themes" / "shared",
            components_dir=src / "components",
            dist_dir=dist_dir,
            watch_root=src,
        )

    @property
    def scss_out_dir(self) -> Path:
        return self.dist_dir / "scss"

    @property
    def css_out_dir(self) -> Path:
        return self.dist_dir / "css"

    @property
    def log_dir(self) -> Path:
        return self.dist_dir / "logs"

    @property
    def style_pattern(self) -> re.Pattern[str]:
        return re.compile(re.escape(self.style_extension) + r"$")

    @property
    def theme_filter(self) -> re.Pattern[str]:
        # Unanchored. "x.theme.scss.orig" passes here and fails theme_pattern.
        return re.compile(r"\.theme" + re.escape(self.style_extension))

    @property
    def theme_pattern(self) -> re.Pattern[str]:
        return re.compile(r"^(?P<name>.+?)\.theme" + re.escape(self.style_extension) + r"$")

    def output_basename(self, theme_name: str) -> str:
        return f"{self.lib_name}.{theme_name}"

    def aggregate_path(self, theme_name: str) -> Path:
        return self.scss_out_dir / f"{self.output_basename(theme_name)}{self.style_extension}"

    def css_path(self, theme_name: str) -> Path:
        return self.css_out_dir / f"{self.output_basename(theme_name)}.css"

    def source_map_path(self, theme_name: str) -> Path:
        return self.css_out_dir / f"{self.output_basename(theme_name)}.css.map"
