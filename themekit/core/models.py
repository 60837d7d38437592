"""Style build models."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from themekit.config.settings import BuildConfig
from themekit.errors import ThemekitError


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """One classified item of a directory listing."""

    location: Path
    kind: EntryKind
    stat: os.stat_result | None = field(default=None, compare=False, repr=False)

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


@dataclass(frozen=True, slots=True)
class StyleSet:
    """Styles common to every theme, in cascade order."""

    shared_styles: tuple[Path, ...] = ()
    component_styles: tuple[Path, ...] = ()


@dataclass(frozen=True, slots=True)
class ThemeDescriptor:
    """A theme definition file and the theme name parsed from it."""

    location: Path
    name: str


@dataclass(frozen=True, slots=True)
class AggregateBuild:
    """Everything needed to assemble and compile one theme."""

    theme: ThemeDescriptor
    styles: tuple[Path, ...]
    source_path: Path
    output_path: Path
    map_path: Path

    @classmethod
    def for_theme(cls, theme: ThemeDescriptor, styles: StyleSet, config: BuildConfig) -> AggregateBuild:
        return cls(
            theme=theme,
            styles=(*styles.shared_styles, theme.location, *styles.component_styles),
            source_path=config.aggregate_path(theme.name),
            output_path=config.css_path(theme.name),
            map_path=config.source_map_path(theme.name),
        )


class ThemeStatus(Enum):
    COMPILED = "compiled"
    FAILED = "failed"


@dataclass(slots=True)
class ThemeOutcome:
    """Result of compiling one theme."""

    theme_name: str
    status: ThemeStatus
    source_path: Path | None = None
    output_path: Path | None = None
    error: ThemekitError | None = None

    @property
    def ok(self) -> bool:
        return self.status is ThemeStatus.COMPILED


@dataclass(slots=True)
class BuildReport:
    """Per-theme outcomes and stage errors of one compile run."""

    outcomes: list[ThemeOutcome] = field(default_factory=list)
    errors: list[ThemekitError] = field(default_factory=list)
    warnings: list[ThemekitError] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def compiled(self) -> list[ThemeOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> list[ThemeOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.errors and not self.failed
