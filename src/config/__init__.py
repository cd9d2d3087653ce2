"""
Configuração do projeto Helpdesk.

Módulos:
- settings: Configurações Django
- urls: Rotas principais
- container: Dependency Injection Container (init/get/shutdown)
"""
