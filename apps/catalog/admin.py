from django.contrib import admin
from .models import Worker


@admin.register(Worker)
class WorkerAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'hourly_rate', 'rating', 'availability', 'location']
    list_filter = ['category', 'availability']
    search_fields = ['name', 'title', 'description', 'location']
    readonly_fields = ['created_at']
