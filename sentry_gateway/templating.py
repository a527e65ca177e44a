"""Compilação e renderização do template de mensagem do evento.

O template é compilado uma única vez na inicialização; chaves ausentes em
``labels``/``annotations`` renderizam como string vazia em vez de falhar.
"""
import logging
import re
from collections.abc import Mapping
from typing import Optional

from jinja2 import ChainableUndefined, Environment, TemplateSyntaxError
from markupsafe import Markup

from .errors import ConfigurationError, TemplateCompileError, TemplateRenderError
from .models import Alert

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = (
    "{{ labels.alertname }} - {{ labels.namespace }}/{{ labels.pod_name }}\n"
    "{{ annotations.message }}"
)


def _title(text):
    return str(text).title()


def _trim_space(text):
    return str(text).strip()


def _join(sep, items):
    return str(sep).join(str(i) for i in items)


def _match(pattern, text):
    return re.search(pattern, str(text)) is not None


def _re_replace_all(pattern, repl, text):
    # Referências no estilo $1 do Alertmanager
    repl = re.sub(r"\$(\d+)", r"\\\1", str(repl))
    return re.sub(pattern, repl, str(text))


def _safe_html(text):
    return Markup(text)


def _string_slice(*items):
    return list(items)


ALERTMANAGER_FUNCS = {
    "toUpper": lambda text: str(text).upper(),
    "toLower": lambda text: str(text).lower(),
    "title": _title,
    "trimSpace": _trim_space,
    "join": _join,
    "match": _match,
    "reReplaceAll": _re_replace_all,
    "safeHtml": _safe_html,
    "stringSlice": _string_slice,
}

UNARY_FILTERS = ("toUpper", "toLower", "title", "trimSpace")


def load_template_source(path: Optional[str]) -> str:
    """Retorna o template padrão ou o conteúdo completo do arquivo informado."""
    if not path:
        return DEFAULT_TEMPLATE
    try:
        with open(path, "r", encoding="utf-8") as fp:
            return fp.read()
    except OSError as exc:
        raise ConfigurationError(f"unable to read template {path}: {exc}") from exc


class AlertEnvironment(Environment):
    """Resolve `labels.x`/`annotations.x` pela chave antes dos atributos do dict."""

    def getattr(self, obj, attribute):
        if isinstance(obj, Mapping):
            try:
                return obj[attribute]
            except (KeyError, TypeError):
                pass
        return super().getattr(obj, attribute)


def build_environment() -> Environment:
    env = AlertEnvironment(
        undefined=ChainableUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )
    env.globals.update(ALERTMANAGER_FUNCS)
    for name in UNARY_FILTERS:
        env.filters[name] = ALERTMANAGER_FUNCS[name]
    return env


class TemplateEngine:
    def __init__(self, source: str = DEFAULT_TEMPLATE):
        self.source = source
        try:
            self._template = build_environment().from_string(source)
        except TemplateSyntaxError as exc:
            raise TemplateCompileError(f"invalid template (line {exc.lineno}): {exc.message}") from exc

    @classmethod
    def from_path(cls, path: Optional[str]) -> "TemplateEngine":
        return cls(load_template_source(path))

    @staticmethod
    def context(alert: Alert) -> dict:
        return {
            "labels": alert.labels,
            "annotations": alert.annotations,
            "status": alert.status,
            "startsAt": alert.startsAt,
            "endsAt": alert.endsAt,
            "generatorURL": alert.generatorURL,
            "fingerprint": alert.fingerprint,
        }

    def render(self, alert: Alert) -> str:
        try:
            return self._template.render(self.context(alert))
        except Exception as exc:
            raise TemplateRenderError(str(exc)) from exc
