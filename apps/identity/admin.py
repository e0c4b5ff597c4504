from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'full_name', 'email', 'is_active', 'created_at']
    list_filter = ['is_active', 'is_staff']
    search_fields = ['username', 'full_name', 'email']
    ordering = ['username']
    filter_horizontal = ['following', 'groups', 'user_permissions']
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Profile', {'fields': ('full_name', 'bio', 'link', 'profile_img', 'cover_img', 'following')}),
    )
