from __future__ import annotations

import argparse
import sys
import uuid

from PySide6.QtWidgets import QApplication

from traumadesk.app.bootstrap import resolve_data_dir, resolve_log_dir
from traumadesk.app.bootstrap_logging import configure_logging, get_logger, set_run_context
from traumadesk.app.container import build_container
from traumadesk.app.crash_handler import install_global_exception_hook
from traumadesk.app.ui.main_window import MainWindow

LOGGER = get_logger(__name__)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="traumadesk", description="Registro de pacientes de trauma.")
    parser.add_argument("--data-dir", default=None, help="Directorio de archivos de pacientes.")
    parser.add_argument("--log-level", default="INFO")
    args, _qt_args = parser.parse_known_args(argv)
    return args


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(list(sys.argv[1:] if argv is None else argv))
    data_dir = resolve_data_dir(args.data_dir, emit_log=False)
    configure_logging("traumadesk-ui", resolve_log_dir(data_dir), level=args.log_level, json=True)
    set_run_context(uuid.uuid4().hex[:8])
    install_global_exception_hook(LOGGER)
    resolve_data_dir(args.data_dir)

    app = QApplication(sys.argv)
    container = build_container(data_dir)
    window = MainWindow(container)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
