"""
Core do Helpdesk Workflow.

Domínios:
- tickets: entidades, TicketStateMachine e use cases
- sla: varredura e escalada de tickets atrasados
- jobs: fila at-least-once (producer, consumer, handlers)
- reports: métricas por agente para exportação/e-mail

Nada aqui importa Django ou kombu; tudo roda com os adapters em memória.
"""
