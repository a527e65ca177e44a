import logging

from flask import Flask, request
from pydantic import ValidationError

from .errors import IntakeClosedError
from .intake import IntakeQueue
from .models import WebhookMessage

logger = logging.getLogger(__name__)


def create_app(intake: IntakeQueue):
    app = Flask(__name__)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'sentry-gateway'}, 200

    # Qualquer caminho aceita o webhook
    @app.route('/', defaults={'path': ''}, methods=['POST'])
    @app.route('/<path:path>', methods=['POST'])
    def webhook(path):
        # Apenas decodifica e enfileira; render e envio ficam com o worker
        try:
            message = WebhookMessage.model_validate_json(request.get_data())
        except ValidationError as exc:
            logger.error(f"Invalid webhook: {exc}")
            return '', 200

        try:
            intake.put(message)
        except IntakeClosedError:
            logger.warning("Webhook recebido durante o shutdown; descartado")
            return '', 503

        logger.debug(f"Webhook enfileirado: {len(message.alerts)} alertas (groupKey={message.groupKey})")
        return '', 200

    return app
