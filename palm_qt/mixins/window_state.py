from palm.constants import QT_WINDOW_DEFAULT_GEOMETRY, QT_WINDOW_MIN_HEIGHT, QT_WINDOW_MIN_WIDTH


def parse_geometry(geometry):
    """Parse ``"WIDTHxHEIGHT"``, clamped to the minimum window size."""
    try:
        width_text, height_text = str(geometry).lower().split("x")
        width, height = int(width_text), int(height_text)
    except (TypeError, ValueError):
        width_text, height_text = QT_WINDOW_DEFAULT_GEOMETRY.split("x")
        width, height = int(width_text), int(height_text)
    return max(QT_WINDOW_MIN_WIDTH, width), max(QT_WINDOW_MIN_HEIGHT, height)


class WindowStateMixin:
    def _restore_window_geometry(self):
        width, height = parse_geometry(self.config.get("window_geometry", QT_WINDOW_DEFAULT_GEOMETRY))
        self.resize(width, height)

    def closeEvent(self, event):
        inbox = getattr(self, "inbox", None)
        if inbox is not None:
            inbox.close()
        workers = getattr(self, "workers", None)
        if workers is not None:
            workers.wait_for_done(2000)
        store = getattr(self, "store", None)
        if store is not None:
            store.close()
        self.config.set("window_geometry", f"{self.width()}x{self.height()}")
        super().closeEvent(event)


__all__ = ["WindowStateMixin", "parse_geometry"]
