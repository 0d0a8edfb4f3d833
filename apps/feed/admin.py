from django.contrib import admin
from .models import Post, Comment


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    readonly_fields = ['created_at']


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'title', 'category', 'created_at']
    list_filter = ['category', 'created_at']
    search_fields = ['title', 'content', 'user__email']
    readonly_fields = ['created_at']
    filter_horizontal = ['likes']
    inlines = [CommentInline]


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ['id', 'post', 'user', 'text', 'created_at']
    search_fields = ['text', 'user__email']
    readonly_fields = ['created_at']
