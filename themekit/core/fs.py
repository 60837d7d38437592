"""Awaitable wrappers around blocking filesystem primitives."""

from __future__ import annotations

import asyncio
import logging
import os
from functools import partial
from pathlib import Path
from typing import IO, Any, Callable

logger = logging.getLogger(__name__)


async def _run(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))


async def readdir(path: Path) -> list[str]:
    return await _run(os.listdir, path)


async def lstat(path: Path) -> os.stat_result:
    return await _run(os.lstat, path)


async def rmdir(path: Path) -> None:
    await _run(os.rmdir, path)


async def mkdir(path: Path) -> None:
    await _run(os.mkdir, path)


async def unlink(path: Path) -> None:
    await _run(os.unlink, path)


async def write_file(path: Path, data: str) -> None:
    await _run(Path(path).write_text, data, encoding="utf-8")


async def rmdir_if_exists(path: Path) -> None:
    """Remove an empty directory; a missing directory is not an error."""
    try:
        await rmdir(path)
    except FileNotFoundError:
        return


class OutputStream:
    """Text output stream whose writes land in call order.

    Writes may be issued without awaiting the previous one; a per-stream
    lock queues them so the file content follows the order of the calls.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._fh: IO[str] | None = None
        self._lock = asyncio.Lock()

    async def open(self) -> OutputStream:
        self._fh = await _run(open, self.path, "w", encoding="utf-8", newline="\n")
        return self

    async def close(self) -> None:
        async with self._lock:
            if self._fh is None:
                return
            fh, self._fh = self._fh, None
            await _run(fh.close)

    @property
    def closed(self) -> bool:
        return self._fh is None

    async def write(self, data: str) -> None:
        async with self._lock:
            if self._fh is None:
                raise ValueError(f"write to closed stream: {self.path}")
            await _run(self._fh.write, data)


async def open_stream(path: Path) -> OutputStream:
    return await OutputStream(path).open()


async def write_to_stream(stream: OutputStream, data: str) -> None:
    await stream.write(data)


async def empty_dir(path: Path) -> bool:
    """Unlink every entry in ``path``.

    Returns True when the directory existed, False when it did not. A
    subdirectory makes ``unlink`` fail and the error propagates.
    """
    try:
        names = await readdir(path)
    except FileNotFoundError:
        return False
    await asyncio.gather(*(unlink(Path(path) / name) for name in names))
    return True


async def clean_dir(path: Path) -> None:
    """Empty ``path``, remove it if it existed, then recreate it."""
    existed = await empty_dir(path)
    if existed:
        await rmdir_if_exists(path)
    await _run(Path(path).parent.mkdir, parents=True, exist_ok=True)
    await mkdir(path)
    logger.debug("cleaned %s", path)
