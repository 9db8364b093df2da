"""Post-commit sale notifications for views that refresh without polling."""
import logging
import threading
from typing import Callable, List

logger = logging.getLogger(__name__)

SaleListener = Callable[[object], None]


class SaleNotifier:
    """Registry of callbacks invoked with each newly created sale."""

    def __init__(self):
        self._listeners: List[SaleListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: SaleListener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def notify(self, sale) -> None:
        """Call every listener. A failing listener is logged and skipped; the sale stands."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(sale)
            except Exception:
                logger.exception(f"[SALES] Listener {listener!r} failed for sale {sale.id}")

    def __len__(self):
        return len(self._listeners)
