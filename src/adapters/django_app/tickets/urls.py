"""
URL patterns para o domínio de Tickets.

Endpoints API JSON (montados em /api/tickets/):
- POST  /api/tickets/       - Registrar ticket
- GET   /api/tickets/<id>/  - Obter ticket
- PATCH /api/tickets/<id>/  - Atualizar ticket
"""

from django.urls import path

from . import api_views

app_name = 'tickets'

urlpatterns = [
    path('', api_views.TicketAPIListView.as_view(), name='api_list'),
    path('<str:pk>/', api_views.TicketAPIDetailView.as_view(), name='api_detail'),
]
