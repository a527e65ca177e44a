import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from .constants import EVENT_LOGGER
from .models import Alert
from .utils import format_timestamp, utcnow


def build_fingerprint(alert: Alert):
    return [alert.label("alertname"), alert.label("namespace"), alert.label("pod_name")]


def build_server_name(alert: Alert) -> str:
    return f"{alert.label('namespace')}/{alert.label('pod_name')}"


def build_event(message: str, alert: Alert, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Monta o registro de evento do Sentry para um alerta já renderizado.

    ``timestamp`` é o momento da captura, não o início do alerta; os horários
    do alerta vão em ``extra``.
    """
    return {
        "event_id": uuid.uuid4().hex,
        "timestamp": format_timestamp(now or utcnow()),
        "level": "error",
        "platform": "other",
        "logger": EVENT_LOGGER,
        "message": message,
        "extra": {
            "firing_since": format_timestamp(alert.startsAt),
            "firing_until": format_timestamp(alert.endsAt),
        },
        "fingerprint": build_fingerprint(alert),
        "server_name": build_server_name(alert),
    }
