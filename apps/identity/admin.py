from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, PasswordResetToken


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'email', 'name', 'balance', 'is_staff', 'is_active', 'date_joined']
    list_filter = ['is_staff', 'is_active']
    search_fields = ['username', 'email', 'name']
    readonly_fields = ['balance', 'last_login', 'date_joined']
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Marketplace', {'fields': ('name', 'age', 'avatar', 'balance')}),
    )


@admin.register(PasswordResetToken)
class PasswordResetTokenAdmin(admin.ModelAdmin):
    list_display = ['user', 'expires_at', 'used_at', 'created_at']
    search_fields = ['user__email']
    readonly_fields = ['token', 'created_at']
