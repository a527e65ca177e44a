class GatewayError(Exception):
    """Erro base do gateway."""


class ConfigurationError(GatewayError):
    """Configuração inválida ou ausente; aborta a inicialização."""


class TemplateCompileError(ConfigurationError):
    pass


class TemplateRenderError(GatewayError):
    pass


class IntakeClosedError(GatewayError):
    pass


class ShutdownTimeoutError(GatewayError):
    pass
