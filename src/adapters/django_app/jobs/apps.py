"""
Configuração do Django App para Jobs.
"""

from django.apps import AppConfig


class JobsConfig(AppConfig):
    """
    Configuração do app Jobs.

    ``ready()`` inicializa o container DI (e a conexão da fila)
    uma única vez por processo.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.jobs'
    label = 'jobs'
    verbose_name = 'Jobs assíncronos'

    def ready(self):
        from src.config.container import init_container

        init_container()
