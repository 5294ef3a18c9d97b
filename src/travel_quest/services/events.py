from collections.abc import Callable

Listener = Callable[[], None]


class ChangeSignal:
    """Notifies subscribers after a component's state has changed."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self) -> None:
        for listener in list(self._listeners):
            listener()
