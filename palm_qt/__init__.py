"""PySide6 shell for the Palm inbox."""
