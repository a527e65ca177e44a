"""Gateway Alertmanager -> Sentry.

Este pacote contém:
- constants: variáveis de ambiente e Settings
- models: payload de webhook do Alertmanager
- templating: compilação/renderização do template de mensagem
- events: montagem do evento do Sentry
- services: integração com o Sentry (DSN, envio)
- intake: fila entre os handlers HTTP e o worker
- worker: consumo da fila e envio dos alertas
- controller: criação do Flask app e endpoints
- shutdown: coordenação do shutdown gracioso
- gateway: montagem dos componentes
"""
