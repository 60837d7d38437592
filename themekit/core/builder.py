"""Run the complete style build: clean, discover, compile."""

from __future__ import annotations

import asyncio
import logging
from time import monotonic

from themekit.config.settings import BuildConfig
from themekit.core import fs
from themekit.core.compiler import ThemeCompiler
from themekit.core.discovery import StyleDiscovery
from themekit.core.models import BuildReport, ThemeOutcome, ThemeStatus
from themekit.errors import classify_exception

logger = logging.getLogger(__name__)


class StyleBuilder:
    """Orchestrates one full rebuild of every theme.

    :meth:`compile` never raises; stage failures are logged and recorded on
    the returned :class:`BuildReport`.
    """

    def __init__(self, config: BuildConfig) -> None:
        self._config = config

    @property
    def config(self) -> BuildConfig:
        return self._config

    async def clean_output(self) -> None:
        await asyncio.gather(
            fs.clean_dir(self._config.scss_out_dir),
            fs.clean_dir(self._config.css_out_dir),
        )

    async def write_theme_styles(self, report: BuildReport) -> None:
        discovery = StyleDiscovery(self._config)
        styles = await discovery.common_styles()
        themes = await discovery.themes()
        logger.debug(
            "discovered %d shared, %d component styles and %d themes",
            len(styles.shared_styles),
            len(styles.component_styles),
            len(themes),
        )

        report.warnings.extend(discovery.warnings)
        report.errors.extend(discovery.errors)
        for naming_error in discovery.naming_errors:
            name = naming_error.path.name if naming_error.path else "?"
            report.outcomes.append(ThemeOutcome(name, ThemeStatus.FAILED, error=naming_error))

        report.outcomes.extend(await ThemeCompiler(self._config).compile_all(themes, styles))

    async def compile(self) -> BuildReport:
        start = monotonic()
        report = BuildReport()
        try:
            await self.clean_output()
            await self.write_theme_styles(report)
        except Exception as exc:
            error = classify_exception(exc)
            logger.error("style build failed: %s", error)
            report.errors.append(error)
        report.elapsed_ms = (monotonic() - start) * 1000
        logger.info("completed rendering styles in %dms", report.elapsed_ms)
        return report

    def build(self) -> BuildReport:
        """Blocking wrapper around :meth:`compile`."""
        return asyncio.run(self.compile())
