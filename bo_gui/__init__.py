"""PySide6 front end for back-office list screens."""
