"""List and classify directory entries."""

from __future__ import annotations

import asyncio
import logging
import os
import re
import stat
from pathlib import Path

from themekit.core import fs
from themekit.core.models import DirectoryEntry, EntryKind
from themekit.errors import ErrorCode, ScanError, classify_exception

logger = logging.getLogger(__name__)


def classify(location: Path, st: os.stat_result) -> DirectoryEntry:
    """Tag a stat result as file, directory or unsupported."""
    if stat.S_ISREG(st.st_mode):
        return DirectoryEntry(location=location, kind=EntryKind.FILE, stat=st)
    if stat.S_ISDIR(st.st_mode):
        return DirectoryEntry(location=location, kind=EntryKind.DIRECTORY, stat=st)
    return DirectoryEntry(location=location, kind=EntryKind.UNSUPPORTED, stat=st)


def _select(
    names: list[str],
    filter_files: re.Pattern[str] | str | None,
) -> list[str]:
    if filter_files is not None:
        pattern = re.compile(filter_files) if isinstance(filter_files, str) else filter_files
        names = [name for name in names if pattern.search(name)]
    return sorted(names)


def _apply_policy(
    entries: list[DirectoryEntry | None],
    *,
    include_dirs: bool,
    omit_files: bool,
) -> list[DirectoryEntry]:
    kept: list[DirectoryEntry] = []
    for entry in entries:
        if entry is None:
            continue
        if entry.kind is EntryKind.UNSUPPORTED:
            logger.debug("skipping unsupported entry %s (mode=%o)", entry.location, entry.stat.st_mode)
            continue
        if include_dirs:
            kept.append(entry)
        elif omit_files:
            if entry.is_directory:
                kept.append(entry)
        elif entry.is_file:
            kept.append(entry)
    return kept


def _missing_dir(directory: Path, exc: OSError) -> ScanError:
    return ScanError(
        ErrorCode.DIR_NOT_FOUND,
        path=directory,
        details={"original": str(exc)},
    )


async def _classify_one(location: Path) -> DirectoryEntry | None:
    try:
        st = await fs.lstat(location)
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.error("%s", classify_exception(exc, location))
        return None
    return classify(location, st)


async def list_items(
    directory: str | Path,
    *,
    filter_files: re.Pattern[str] | str | None = None,
    include_dirs: bool = False,
    omit_files: bool = False,
) -> list[DirectoryEntry]:
    """Return the classified entries of ``directory`` sorted by name.

    ``filter_files`` is searched in every filename before classification.
    By default only files are returned; ``include_dirs`` returns files and
    directories, ``omit_files`` returns only directories. A missing
    directory raises :class:`ScanError` with ``DIR_NOT_FOUND``.
    """
    directory = Path(directory)
    try:
        names = await fs.readdir(directory)
    except FileNotFoundError as exc:
        raise _missing_dir(directory, exc) from exc
    except OSError as exc:
        raise ScanError(ErrorCode.IO_FAILED, path=directory, details={"original": str(exc)}) from exc

    targets = _select(names, filter_files)
    entries = await asyncio.gather(*(_classify_one(directory / name) for name in targets))
    return _apply_policy(list(entries), include_dirs=include_dirs, omit_files=omit_files)


def list_items_sync(
    directory: str | Path,
    *,
    filter_files: re.Pattern[str] | str | None = None,
    include_dirs: bool = False,
    omit_files: bool = False,
) -> list[DirectoryEntry]:
    """Blocking variant of :func:`list_items` for use outside an event loop."""
    directory = Path(directory)
    try:
        names = os.listdir(directory)
    except FileNotFoundError as exc:
        raise _missing_dir(directory, exc) from exc
    except OSError as exc:
        raise ScanError(ErrorCode.IO_FAILED, path=directory, details={"original": str(exc)}) from exc

    entries: list[DirectoryEntry | None] = []
    for name in _select(names, filter_files):
        location = directory / name
        try:
            entries.append(classify(location, os.lstat(location)))
        except FileNotFoundError:
            continue
        except OSError as exc:
            logger.error("%s", classify_exception(exc, location))
    return _apply_policy(entries, include_dirs=include_dirs, omit_files=omit_files)
