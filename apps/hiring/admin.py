from django.contrib import admin
from .models import Hire


@admin.register(Hire)
class HireAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'worker', 'status', 'amount', 'created_at', 'ended_at']
    list_filter = ['status', 'created_at']
    search_fields = ['user__email', 'user__username', 'worker__name']
    readonly_fields = ['created_at', 'ended_at']
    list_select_related = ['user', 'worker']
