"""Console entrypoint for the GUI (bo gui)."""

from __future__ import annotations

import sys
from pathlib import Path


def main(config_path: Path | None = None) -> int:
    """Launch the GUI application."""
    # Configure logging before anything else
    from bo_common.api import configure_logging

    configure_logging()

    # Import Qt after logging is configured
    from PySide6.QtWidgets import QApplication

    from bo_gui.app import create_app

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Back Office")
    app.setOrganizationName("bo")

    window = create_app(config_path)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
