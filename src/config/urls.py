"""
URL Configuration do Helpdesk.

Estrutura:
- /admin/ - Django Admin
- /api/tickets/ - API de Tickets
- /api/supervisors/<id>/activity/ - Atividade do supervisor
- /api/analytics/ - SLA, relatórios, notificações e jobs
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include

from src.adapters.django_app.tickets.api_views import SupervisorActivityAPIView

urlpatterns = [
    # Django Admin
    path('admin/', admin.site.urls),

    # APIs
    path('api/tickets/', include('src.adapters.django_app.tickets.urls')),
    path(
        'api/supervisors/<str:supervisor_id>/activity/',
        SupervisorActivityAPIView.as_view(),
        name='supervisor_activity',
    ),
    path('api/analytics/', include('src.adapters.django_app.jobs.urls')),

    # Health check
    path('health/', lambda r: JsonResponse({'status': 'ok'})),
]

# Relatórios exportados servidos pelo Django em desenvolvimento
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
