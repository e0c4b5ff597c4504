from django.contrib import admin
from .models import Post, Comment, Like


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    readonly_fields = ['created_at']


class LikeInline(admin.TabularInline):
    model = Like
    extra = 0
    readonly_fields = ['created_at']


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'text', 'created_at']
    search_fields = ['text', 'user__username']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [LikeInline, CommentInline]
