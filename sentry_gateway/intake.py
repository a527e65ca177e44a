import queue
import threading
from typing import Iterator, Optional

from .errors import IntakeClosedError
from .models import WebhookMessage

_CLOSED = object()


class IntakeQueue:
    """Fila FIFO sem limite entre os handlers HTTP e o worker de dispatch.

    Vários produtores, um único consumidor. ``task_done`` é chamado pelo
    consumidor depois de processar cada mensagem, o que permite esperar o
    dreno completo em ``wait_drained`` sem polling.
    """

    def __init__(self):
        self._queue: "queue.Queue" = queue.Queue()
        self._lock = threading.Lock()
        self._drained = threading.Condition(self._lock)
        self._pending = 0
        self._unfinished = 0
        self._closed = False
        self._exhausted = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, message: WebhookMessage) -> None:
        with self._lock:
            if self._closed:
                raise IntakeClosedError("intake queue is closed")
            self._pending += 1
            self._unfinished += 1
            self._queue.put(message)

    def get(self) -> Optional[WebhookMessage]:
        """Bloqueia até a próxima mensagem; retorna None depois de fechada e vazia."""
        if self._exhausted:
            return None
        item = self._queue.get()
        if item is _CLOSED:
            self._exhausted = True
            return None
        with self._lock:
            self._pending -= 1
        return item

    def __iter__(self) -> Iterator[WebhookMessage]:
        while True:
            message = self.get()
            if message is None:
                return
            yield message

    def depth(self) -> int:
        with self._lock:
            return self._pending

    def task_done(self) -> None:
        with self._lock:
            if self._unfinished <= 0:
                raise ValueError("task_done() called too many times")
            self._unfinished -= 1
            if self._unfinished == 0:
                self._drained.notify_all()

    def wait_drained(self, timeout: Optional[float] = None) -> bool:
        """Espera até todas as mensagens enfileiradas terem sido processadas."""
        with self._lock:
            return self._drained.wait_for(lambda: self._unfinished == 0, timeout)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)
