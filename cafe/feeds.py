"""
Push-style change notification on top of DynamoDB polling.

DynamoDB has no client-side listener API, so a daemon thread polls and
calls subscribers whenever the observed value changes. The thread runs
only while at least one subscription is open.
"""
import logging
import threading

from .board import build_board

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 2.0


class Subscription:
    """Handle returned by ``subscribe``. Close it when the view goes away."""

    def __init__(self, source, callback):
        self._source = source
        self.callback = callback
        self.closed = False

    def close(self):
        if not self.closed:
            self.closed = True
            self._source._unsubscribe(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class _PollingSource:
    name = "poller"

    def __init__(self, interval=DEFAULT_INTERVAL):
        self.interval = interval
        self._subscriptions = []
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread = None
        self._value = None
        self._has_value = False

    def fetch(self):
        raise NotImplementedError

    def present(self, value):
        """Shape the raw polled value handed to subscribers."""
        return value

    @property
    def value(self):
        return self.present(self._value)

    def subscribe(self, callback, start=True):
        """
        Register ``callback`` and call it at once with the current value.

        With ``start=False`` no polling thread is started; the caller
        drives updates with ``poll_once``.
        """
        sub = Subscription(self, callback)
        with self._lock:
            # Refresh before registering so a failed fetch leaves nothing behind.
            if not self._has_value or not self._subscriptions:
                self._refresh()
            self._subscriptions.append(sub)
            current = self.present(self._value)
        callback(current)
        if start:
            self._ensure_thread()
        return sub

    def _unsubscribe(self, sub):
        with self._lock:
            if sub in self._subscriptions:
                self._subscriptions.remove(sub)
            if not self._subscriptions:
                self.stop()

    @property
    def subscriber_count(self):
        with self._lock:
            return len(self._subscriptions)

    def _refresh(self):
        """Fetch and store; return True when the value changed."""
        new_value = self.fetch()
        changed = not self._has_value or new_value != self._value
        self._value = new_value
        self._has_value = True
        return changed

    def poll_once(self):
        with self._lock:
            changed = self._refresh()
            targets = list(self._subscriptions) if changed else []
            current = self.present(self._value)
        for sub in targets:
            if not sub.closed:
                sub.callback(current)
        return changed

    def _ensure_thread(self):
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name=self.name,
                daemon=True,
            )
            self._thread.start()

    def _run(self, stop_event):
        while not stop_event.wait(self.interval):
            try:
                self.poll_once()
            except Exception:
                # Keep the thread alive; the next poll may succeed.
                logger.exception("%s poll failed", self.name)

    def stop(self, join=False):
        with self._lock:
            self._stop_event.set()
            thread = self._thread
            self._thread = None
        if join and thread is not None and thread is not threading.current_thread():
            thread.join()


class ConnectionMonitor(_PollingSource):
    """Tracks whether the Orders table is reachable."""

    name = "connection-monitor"

    CONNECTED_TEXT = "연결됨 ✅"
    DISCONNECTED_TEXT = "연결 실패 ❌"

    def __init__(self, store, table, interval=DEFAULT_INTERVAL):
        super().__init__(interval)
        self.store = store
        self.table = table

    def fetch(self):
        return bool(self.store.ping(self.table))

    def check(self):
        """Probe now and notify subscribers if reachability changed."""
        self.poll_once()
        return self.is_connected

    @property
    def is_connected(self):
        return bool(self._value)

    @property
    def status_text(self):
        if not self._has_value:
            return "연결 중..."
        return self.CONNECTED_TEXT if self.is_connected else self.DISCONNECTED_TEXT

    def _refresh(self):
        was = self._value
        changed = super()._refresh()
        if changed and was is not None:
            if self._value:
                logger.info("DynamoDB connection restored")
            else:
                logger.warning("DynamoDB connection lost")
        return changed


class OrderFeed(_PollingSource):
    """Delivers a fresh Board to subscribers whenever any order changes."""

    name = "order-feed"

    def __init__(self, service, interval=DEFAULT_INTERVAL):
        super().__init__(interval)
        self.service = service

    def fetch(self):
        return tuple(sorted(self.service.list_orders(), key=lambda o: o.order_number))

    def present(self, value):
        return build_board(value or ())

    def _refresh(self):
        before = {o.order_number for o in self._value or ()}
        had_value = self._has_value
        changed = super()._refresh()
        if changed and had_value:
            arrived = sorted({o.order_number for o in self._value} - before)
            if arrived:
                logger.info("New orders: %s", ", ".join(f"#{n}" for n in arrived))
        return changed
