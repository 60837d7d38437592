"""Watch-mode exports."""

from themekit.watch.watcher import StyleWatcher

__all__ = [
    "StyleWatcher",
]
