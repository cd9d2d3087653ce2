"""
URL patterns de analytics (montados em /api/analytics/).

Inclui as rotas de SLA, cujas views vivem no app de Tickets.
"""

from django.urls import path

from ..tickets.api_views import SlaAutomateAPIView, SlaBreachesAPIView
from . import api_views

app_name = 'analytics'

urlpatterns = [
    # SLA
    path('sla/automate/', SlaAutomateAPIView.as_view(), name='sla_automate'),
    path('sla/breaches/', SlaBreachesAPIView.as_view(), name='sla_breaches'),

    # Relatórios e notificações (assíncronos)
    path('agent/<str:agent_id>/report/export/', api_views.ReportExportAPIView.as_view(), name='report_export'),
    path('agent/<str:agent_id>/report/email/', api_views.ReportEmailAPIView.as_view(), name='report_email'),
    path('notifications/', api_views.NotificationAPIView.as_view(), name='notifications'),

    # Status de jobs
    path('jobs/', api_views.JobListAPIView.as_view(), name='job_list'),
    path('jobs/<str:job_id>/', api_views.JobDetailAPIView.as_view(), name='job_detail'),
]
