"""Assemble per-theme aggregate stylesheets and compile them with libsass."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from pathlib import Path

import sass

from themekit.config.settings import BuildConfig
from themekit.core import fs
from themekit.core.models import AggregateBuild, StyleSet, ThemeDescriptor, ThemeOutcome, ThemeStatus
from themekit.errors import ErrorCode, StyleCompileError, ThemekitError, classify_exception

logger = logging.getLogger(__name__)

_SASS_LOCATION_RE = re.compile(r"on line (?P<line>\d+)(?::(?P<column>\d+))? of (?P<file>[^\n]+)")


def import_directive(style: Path, aggregate_dir: Path) -> str:
    """``@import`` line for ``style`` relative to the aggregate's directory."""
    relative = Path(os.path.relpath(style, aggregate_dir)).as_posix()
    return f"@import '{relative}';\n"


def parse_compile_error(exc: sass.CompileError, source: Path) -> StyleCompileError:
    """Turn libsass' formatted error text into a StyleCompileError."""
    text = exc.args[0] if exc.args else str(exc)
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    text = str(text)
    first_line = text.strip().splitlines()[0] if text.strip() else "unknown error"
    message = first_line.removeprefix("Error: ").strip()

    match = _SASS_LOCATION_RE.search(text)
    if match is None:
        return StyleCompileError(message=message, path=source)
    column = match.group("column")
    return StyleCompileError(
        message=message,
        path=Path(match.group("file").strip()),
        line=int(match.group("line")),
        column=int(column) if column else None,
    )


def _compile_sass(build: AggregateBuild) -> tuple[str, str]:
    css, source_map = sass.compile(
        filename=str(build.source_path),
        output_style="expanded",
        source_map_filename=str(build.map_path),
        output_filename_hint=str(build.output_path),
    )
    return css, source_map


class ThemeCompiler:
    """Writes aggregates and compiled CSS for every theme of a run."""

    def __init__(self, config: BuildConfig) -> None:
        self._config = config

    async def compile_all(self, themes: list[ThemeDescriptor], styles: StyleSet) -> list[ThemeOutcome]:
        """Compile every theme concurrently; one outcome per theme, in input order."""
        return list(await asyncio.gather(*(self.compile_theme(theme, styles) for theme in themes)))

    async def write_aggregate(self, build: AggregateBuild) -> list[ThemekitError]:
        """Write the ``@import`` list for ``build``; returns the failed writes."""
        aggregate_dir = build.source_path.parent
        stream = await fs.open_stream(build.source_path)
        failures: list[ThemekitError] = []

        async def _write(style: Path) -> None:
            try:
                await fs.write_to_stream(stream, import_directive(style, aggregate_dir))
            except (OSError, ValueError) as exc:
                error = classify_exception(exc, build.source_path)
                logger.error("could not write import for %s: %s", style, error)
                failures.append(error)

        try:
            await asyncio.gather(*(_write(style) for style in build.styles))
        finally:
            await stream.close()
        return failures

    async def compile_theme(self, theme: ThemeDescriptor, styles: StyleSet) -> ThemeOutcome:
        build = AggregateBuild.for_theme(theme, styles, self._config)
        try:
            failures = await self.write_aggregate(build)
            if failures:
                raise ThemekitError(
                    ErrorCode.AGGREGATE_PARTIAL,
                    path=build.source_path,
                    details={"failed_writes": len(failures)},
                )
            logger.info("rendered %s to %s", build.source_path.name, build.source_path.parent)

            try:
                css, source_map = await asyncio.get_running_loop().run_in_executor(
                    None, _compile_sass, build
                )
            except sass.CompileError as exc:
                raise parse_compile_error(exc, build.source_path) from exc

            await asyncio.gather(
                fs.write_file(build.output_path, css),
                fs.write_file(build.map_path, source_map),
            )
            logger.info("rendered %s to %s", build.output_path.name, build.output_path.parent)
        except StyleCompileError as exc:
            logger.error("ERROR RENDERING %s", theme.location.name)
            logger.error("%s", exc.path)
            logger.error("%s: %s", exc.location(), exc.message)
            return ThemeOutcome(theme.name, ThemeStatus.FAILED, build.source_path, None, exc)
        except (ThemekitError, OSError) as exc:
            error = classify_exception(exc, build.source_path)
            logger.error("ERROR RENDERING %s: %s", theme.location.name, error)
            return ThemeOutcome(theme.name, ThemeStatus.FAILED, build.source_path, None, error)

        return ThemeOutcome(theme.name, ThemeStatus.COMPILED, build.source_path, build.output_path)
