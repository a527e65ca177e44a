import logging
import threading

from .constants import FALLBACK_MESSAGE
from .errors import TemplateRenderError
from .events import build_event
from .intake import IntakeQueue
from .models import Alert, WebhookMessage
from .services import SentryClient
from .templating import TemplateEngine

logger = logging.getLogger(__name__)


class DispatchWorker(threading.Thread):
    """Consome a fila e envia cada alerta ao Sentry, um de cada vez, na ordem recebida."""

    def __init__(self, intake: IntakeQueue, engine: TemplateEngine, client: SentryClient):
        super().__init__(name="dispatch-worker", daemon=True)
        self.intake = intake
        self.engine = engine
        self.client = client

    def run(self):
        logger.debug("DispatchWorker iniciado")
        for message in self.intake:
            try:
                self.dispatch_message(message)
            finally:
                self.intake.task_done()
        logger.debug("DispatchWorker finalizado: fila fechada")

    def dispatch_message(self, message: WebhookMessage):
        for alert in message.alerts:
            try:
                self.dispatch_alert(alert)
            except Exception:
                logger.exception(f"Erro inesperado ao processar alerta {alert.alertname!r}")

    def render_message(self, alert: Alert) -> str:
        try:
            return self.engine.render(alert)
        except TemplateRenderError as exc:
            logger.error(f"Invalid template: {exc}")
            return alert.alertname or FALLBACK_MESSAGE

    def dispatch_alert(self, alert: Alert) -> str:
        message = self.render_message(alert)
        event = build_event(message, alert)
        event_id = self.client.capture(event, alert.labels)
        logger.info(f"event_id:{event_id} alert_name:{alert.alertname}")
        return event_id
