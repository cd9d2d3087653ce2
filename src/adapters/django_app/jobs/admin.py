"""
Django Admin para Jobs, mensagens e agentes.

Jobs são somente leitura: o estado só muda pelo worker.
"""

from django.contrib import admin

from .models import AgentModel, AsyncJobModel, BroadcastMessageModel


@admin.register(AsyncJobModel)
class AsyncJobAdmin(admin.ModelAdmin):
    list_display = ['job_id', 'type', 'status', 'attempts', 'created_at', 'updated_at']
    list_filter = ['type', 'status']
    search_fields = ['job_id', 'error']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(BroadcastMessageModel)
class BroadcastMessageAdmin(admin.ModelAdmin):
    list_display = ['message_id', 'sender_id', 'receiver_id', 'timestamp']
    search_fields = ['content', 'receiver_id']
    readonly_fields = ['message_id', 'timestamp']


@admin.register(AgentModel)
class AgentAdmin(admin.ModelAdmin):
    list_display = ['agent_id', 'name', 'email']
    search_fields = ['agent_id', 'name', 'email']
