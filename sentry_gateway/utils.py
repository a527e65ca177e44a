from datetime import datetime, timezone
from typing import Optional

# Representação do "zero time" (alerta ainda disparando)
ZERO_TIMESTAMP = "0001-01-01T00:00:00"


def format_timestamp(value: Optional[datetime]) -> str:
    """Formata um datetime no padrão de timestamp do Sentry (UTC, sem fuso)."""
    if value is None:
        return ZERO_TIMESTAMP
    if value.tzinfo is not None:
        if value.year <= 1:
            return ZERO_TIMESTAMP
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None, microsecond=0).isoformat()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
