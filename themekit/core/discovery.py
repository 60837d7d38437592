"""Find shared, component and theme stylesheets."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from themekit.config.settings import BuildConfig
from themekit.core.models import StyleSet, ThemeDescriptor
from themekit.core.scanner import list_items
from themekit.errors import ErrorCode, ScanError, ThemekitError, ThemeNamingError

logger = logging.getLogger(__name__)


def parse_theme_name(location: Path, config: BuildConfig) -> str:
    """Return ``name`` from ``<name>.theme.<ext>`` or raise ThemeNamingError."""
    match = config.theme_pattern.match(location.name)
    if match is None:
        raise ThemeNamingError(path=location, details={"filename": location.name})
    return match.group("name")


class StyleDiscovery:
    """Collects stylesheet locations for one build run.

    Missing directories and listing failures never raise; they are logged,
    recorded on :attr:`warnings` / :attr:`errors` and treated as empty.
    """

    def __init__(self, config: BuildConfig) -> None:
        self._config = config
        self.errors: list[ThemekitError] = []
        self.warnings: list[ThemekitError] = []
        self.naming_errors: list[ThemeNamingError] = []

    async def _soft_list(self, directory: Path, **options) -> list:
        try:
            return await list_items(directory, **options)
        except ScanError as exc:
            if exc.code is ErrorCode.DIR_NOT_FOUND:
                logger.warning("%s", exc)
                self.warnings.append(exc)
            else:
                logger.error("%s", exc)
                self.errors.append(exc)
            return []

    async def shared_styles(self) -> list[Path]:
        entries = await self._soft_list(self._config.shared_dir)
        return [entry.location for entry in entries]

    async def component_styles(self) -> list[Path]:
        dirs = await self._soft_list(self._config.components_dir, omit_files=True)
        per_component = await asyncio.gather(
            *(
                self._soft_list(entry.location, filter_files=self._config.style_pattern)
                for entry in dirs
            )
        )
        return [entry.location for entries in per_component for entry in entries]

    async def common_styles(self) -> StyleSet:
        shared, components = await asyncio.gather(self.shared_styles(), self.component_styles())
        return StyleSet(shared_styles=tuple(shared), component_styles=tuple(components))

    async def themes(self) -> list[ThemeDescriptor]:
        """Theme descriptors in filename order.

        Files that pass the theme filter but not the naming convention are
        collected on :attr:`naming_errors`.
        """
        entries = await self._soft_list(self._config.themes_dir, filter_files=self._config.theme_filter)
        themes: list[ThemeDescriptor] = []
        for entry in entries:
            try:
                name = parse_theme_name(entry.location, self._config)
            except ThemeNamingError as exc:
                logger.error("%s", exc)
                self.naming_errors.append(exc)
                continue
            themes.append(ThemeDescriptor(location=entry.location, name=name))
        return themes
