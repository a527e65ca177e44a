import enum
import logging
import signal
import threading
from typing import Optional

from .errors import ShutdownTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_GRACE_SECONDS = 10.0


class State(str, enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


class ShutdownCoordinator:
    """
    Controla o ciclo de vida do listener HTTP e do worker.
    Fluxo:
    - RUNNING: listener servindo em thread própria, worker consumindo a fila
    - SIGTERM/SIGINT -> DRAINING: para o listener, limitado ao grace period
    - Fila drenada e fechada, worker finalizado -> STOPPED
    """

    SIGNALS = (signal.SIGTERM, signal.SIGINT)

    def __init__(self, server, intake, worker, grace_seconds: float = DEFAULT_GRACE_SECONDS):
        self.server = server
        self.intake = intake
        self.worker = worker
        self.grace_seconds = grace_seconds
        self.state = State.RUNNING
        self._signalled = threading.Event()
        self._listener: Optional[threading.Thread] = None

    def serve(self):
        self._listener = threading.Thread(target=self.server.serve_forever, name="http-listener", daemon=True)
        self._listener.start()

    def install_signal_handlers(self):
        for sig in self.SIGNALS:
            signal.signal(sig, self._handle_signal)

    def _handle_signal(self, signum, frame):
        logger.info(f"Sinal {signal.Signals(signum).name} recebido, iniciando shutdown")
        self._signalled.set()

    def request_shutdown(self):
        self._signalled.set()

    def wait_for_signal(self, timeout: Optional[float] = None) -> bool:
        return self._signalled.wait(timeout)

    def _close_server(self):
        if self._listener is None:
            self.server.server_close()
            return
        self.server.shutdown()
        # serve_forever chama server_close ao sair, que aguarda as requisições em andamento
        self._listener.join()

    def stop_listener(self):
        stopper = threading.Thread(target=self._close_server, name="listener-shutdown", daemon=True)
        stopper.start()
        stopper.join(self.grace_seconds)
        if stopper.is_alive():
            raise ShutdownTimeoutError(f"HTTP listener did not stop within {self.grace_seconds:g}s")

    def shutdown(self):
        self.state = State.DRAINING
        try:
            self.stop_listener()
            logger.info(f"Listener parado; drenando fila ({self.intake.depth()} mensagens pendentes)")
            self.intake.wait_drained()
            self.intake.close()
            self.worker.join()
        finally:
            self.state = State.STOPPED
        logger.info("Shutdown concluído")

    def run(self):
        self.install_signal_handlers()
        self.serve()
        self.wait_for_signal()
        self.shutdown()
