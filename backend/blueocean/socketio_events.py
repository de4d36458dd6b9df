from flask_socketio import emit
from flask import current_app, request
from typing import Any, Callable, Dict
import threading
from blueocean import socketio
from blueocean.services.game import EventRouter, Outcome
from blueocean.services.game.router import EVENTS


def _router() -> EventRouter:
    return current_app.extensions['blueocean']


class StateBroadcaster:
    """Fans the newest projection out to every observer.

    Handlers may finish out of order under threaded async modes, so each
    outcome is checked against the last version sent and stale ones are
    dropped. The check and the emit share one lock, which never covers
    the router's own lock.
    """

    def __init__(self, emit_state: Callable[[Dict[str, Any]], None]):
        self._emit_state = emit_state
        self._lock = threading.Lock()
        self._last_version = 0

    def publish(self, outcome: Outcome) -> bool:
        if not outcome.broadcast:
            return False
        with self._lock:
            if outcome.version <= self._last_version:
                return False
            self._last_version = outcome.version
            self._emit_state(outcome.state)
            return True


def make_broadcaster(namespace: str = '/') -> StateBroadcaster:
    # Everyone in the namespace, sender included
    return StateBroadcaster(lambda state: socketio.emit('state', state, namespace=namespace))


def _broadcaster() -> StateBroadcaster:
    return current_app.extensions['blueocean_broadcaster']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    state = _router().connect(_get_sid())
    current_app.logger.info(f"[connect] sid={_get_sid()}")
    emit('state', state)


def handle_disconnect(*args):
    _router().disconnect(_get_sid())
    current_app.logger.info(f"[disconnect] sid={_get_sid()}")


def _make_handler(event_name: str):
    def handler(data=None):
        outcome = _router().dispatch(_get_sid(), event_name, data)
        for reply_name, reply_data in outcome.replies:
            emit(reply_name, reply_data)
        _broadcaster().publish(outcome)
    handler.__name__ = f"handle_{event_name.replace(':', '_')}"
    return handler


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers.

    Every game action shares one handler shape: hand the payload to the
    router, reply to the sender, then broadcast the fresh state. Dropped
    actions produce no traffic at all.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    for event_name in EVENTS:
        socketio.on_event(event_name, _make_handler(event_name), namespace=namespace)
