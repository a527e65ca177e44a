import os
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigurationError

# Versão injetada no build
VERSION = os.getenv("GATEWAY_VERSION", "latest")
COMMIT = os.getenv("GATEWAY_COMMIT", "HEAD")

# Configurações globais de ambiente
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
TEMPLATE_PATH = os.getenv("TEMPLATE_PATH", "")
LISTEN_ADDR = os.getenv("LISTEN_ADDR", "0.0.0.0:9096")
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# Timeout por evento enviado ao Sentry (segundos); validados em Settings
DISPATCH_TIMEOUT_SECONDS = os.getenv("DISPATCH_TIMEOUT_SECONDS", "10")
# Tempo máximo para o listener HTTP parar no shutdown
SHUTDOWN_GRACE_SECONDS = os.getenv("SHUTDOWN_GRACE_SECONDS", "10")

# Valores fixos do evento
EVENT_LOGGER = "alertmanager"
FALLBACK_MESSAGE = "fallback"
USER_AGENT = f"sentry-gateway/{VERSION}"


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    dsn: str
    template_path: Optional[str] = None
    listen_addr: str = LISTEN_ADDR
    dispatch_timeout_seconds: float = DISPATCH_TIMEOUT_SECONDS
    shutdown_grace_seconds: float = SHUTDOWN_GRACE_SECONDS

    @field_validator("dsn")
    @classmethod
    def validate_dsn(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Sentry DSN required")
        return v

    @field_validator("listen_addr")
    @classmethod
    def validate_listen_addr(cls, v: str) -> str:
        host, sep, port = v.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"invalid listen address: {v!r}")
        return v

    @field_validator("dispatch_timeout_seconds", "shutdown_grace_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @property
    def bind(self) -> Tuple[str, int]:
        host, _, port = self.listen_addr.rpartition(":")
        # ":9096" escuta em todas as interfaces
        return host or "0.0.0.0", int(port)


def _describe(err) -> str:
    if err["type"] == "value_error":
        return err["msg"].removeprefix("Value error, ")
    field = ".".join(str(p) for p in err["loc"])
    return f"{field}: {err['msg']}"


def build_settings(dsn=None, template_path=None, listen_addr=None, **overrides) -> Settings:
    """Monta as configurações a partir das flags, caindo para o ambiente."""
    values = {
        "dsn": dsn if dsn is not None else SENTRY_DSN,
        "template_path": (template_path if template_path is not None else TEMPLATE_PATH) or None,
        "listen_addr": listen_addr or LISTEN_ADDR,
    }
    values.update(overrides)
    try:
        return Settings(**values)
    except ValidationError as exc:
        errors = "; ".join(_describe(err) for err in exc.errors())
        raise ConfigurationError(errors) from exc
