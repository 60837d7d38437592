"""Command-line bootstrap for the style build."""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
import signal
import sys
from pathlib import Path

from themekit.config.settings import DEFAULT_LIB_NAME, BuildConfig
from themekit.core.builder import StyleBuilder

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(config: BuildConfig, *, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("themekit")
    if logger.handlers:
        return logger

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console)

    config.log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        config.log_dir / "build.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="themekit",
        description="Compile per-theme SCSS aggregates into CSS.",
    )
    parser.add_argument("-w", "--watch", action="store_true", help="rebuild when a .scss file changes")
    parser.add_argument("--root", default=".", help="source root holding themes/ and components/")
    parser.add_argument("--dist", default=None, help="output root (default: <root>/../dist)")
    parser.add_argument("--lib", default=DEFAULT_LIB_NAME, help="library name used in output filenames")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def run_watch(builder: StyleBuilder) -> int:
    """Start the Qt event loop with a StyleWatcher until interrupted."""
    from PySide6.QtCore import QCoreApplication, QTimer

    from themekit.watch.watcher import StyleWatcher

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    watcher = StyleWatcher(builder)
    watcher.start()

    signal.signal(signal.SIGINT, lambda *_: app.quit())
    # Lets the interpreter run the SIGINT handler while Qt owns the loop.
    heartbeat = QTimer()
    heartbeat.timeout.connect(lambda: None)
    heartbeat.start(250)

    exit_code = app.exec()
    watcher.stop()
    return exit_code


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = BuildConfig.from_root(Path(args.root), dist=args.dist, lib_name=args.lib)
    logger = configure_logging(config, verbose=args.verbose)
    logger.debug("source root=%s dist=%s lib=%s", config.watch_root, config.dist_dir, config.lib_name)

    builder = StyleBuilder(config)
    report = builder.build()

    if args.watch:
        return run_watch(builder)

    for outcome in report.failed:
        logger.warning("theme %s failed: %s", outcome.theme_name, outcome.error)
    return 0 if report.ok else 1
