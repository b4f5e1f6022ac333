"""Command-line entry point: ``qtri [--dump-rc] [--verbose] [topic ...]``."""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from qtri import __version__
from qtri.services.command_runner import CommandRunner
from qtri.services.documentation_cache import DocumentationCache
from qtri.settings_store import SettingsStoreError, YamlSettingsStore
from qtri.ui.browser_window import BrowserWindow

log = logging.getLogger(__name__)

DUMP_RC_ARG = "--dump-rc"
VERBOSE_ARG = "--verbose"


def _split_startup_args(argv: list[str]) -> tuple[list[str], bool, bool]:
    topics: list[str] = []
    dump_rc = False
    verbose = False
    for arg in argv:
        if arg == DUMP_RC_ARG:
            dump_rc = True
            continue
        if arg in (VERBOSE_ARG, "-v"):
            verbose = True
            continue
        topics.append(arg)
    return topics, dump_rc, verbose


def _dump_rc(store: YamlSettingsStore) -> int:
    try:
        path = store.dump()
    except SettingsStoreError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(f"Settings written to {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    topics, dump_rc, verbose = _split_startup_args(args)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = YamlSettingsStore()
    store.load()
    if dump_rc:
        return _dump_rc(store)

    settings = store.resolve()
    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("qtri")
    app.setApplicationVersion(__version__)
    app.setStyle("Fusion")

    runner = CommandRunner(settings.commands)
    log.debug("Documentation command: %s", runner.template)
    cache = DocumentationCache(runner.run, settings_path=str(store.path))

    window = BrowserWindow(
        settings,
        cache,
        settings_path=store.path,
        settings_error=store.last_error,
    )
    window.show()
    for topic in topics:
        window.go(topic, new_tab=True)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
