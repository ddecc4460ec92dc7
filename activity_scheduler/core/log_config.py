import logging

CONTEXT_KEYS = ("booking_id", "resource", "date", "time", "status", "recipient", "reason")


class ContextFormatter(logging.Formatter):
    """Appends booking context passed via `extra=` as key=value pairs."""

    def __init__(self, fmt: str | None = None, keys: tuple[str, ...] = CONTEXT_KEYS) -> None:
        super().__init__(fmt)
        self._keys = keys

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in self._keys
            if getattr(record, key, None) not in (None, "")
        ]
        if not context:
            return base
        return f"{base} | {' '.join(context)}"


def configure_logging(level: str) -> logging.Handler:
    """Route the root logger through a single stream handler with booking context."""
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    return handler
