from django.contrib import admin
from .models import BalanceEntry


@admin.register(BalanceEntry)
class BalanceEntryAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'entry_type', 'amount', 'balance_after', 'hire_id', 'created_at']
    list_filter = ['entry_type', 'created_at']
    search_fields = ['user__email', 'user__username', 'description']
    readonly_fields = ['created_at']
    date_hierarchy = 'created_at'
