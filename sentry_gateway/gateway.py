import logging

from werkzeug.serving import WSGIRequestHandler, make_server

from .constants import Settings
from .controller import create_app
from .intake import IntakeQueue
from .services import SentryClient
from .shutdown import ShutdownCoordinator
from .templating import TemplateEngine
from .worker import DispatchWorker

logger = logging.getLogger(__name__)


class WebhookRequestHandler(WSGIRequestHandler):
    # Uma requisição por conexão; server_close não fica preso em conexões ociosas
    protocol_version = "HTTP/1.0"


def build_server(settings: Settings, app):
    host, port = settings.bind
    server = make_server(host, port, app, threaded=True, request_handler=WebhookRequestHandler)
    # Threads não-daemon para que server_close aguarde as requisições em andamento
    server.daemon_threads = False
    server.block_on_close = True
    return server


def run_gateway(settings: Settings):
    """Inicializa todos os componentes e bloqueia até o shutdown terminar.

    Erros de configuração, template e bind sobem antes de qualquer tráfego.
    """
    engine = TemplateEngine.from_path(settings.template_path)
    client = SentryClient(settings)
    intake = IntakeQueue()
    worker = DispatchWorker(intake, engine, client)
    server = build_server(settings, create_app(intake))

    coordinator = ShutdownCoordinator(server, intake, worker, settings.shutdown_grace_seconds)
    worker.start()
    logger.info(f"Escutando webhooks em {settings.listen_addr}")
    coordinator.run()
