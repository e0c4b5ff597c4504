from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['type', 'sender', 'recipient', 'read', 'created_at']
    list_filter = ['type', 'read']
    search_fields = ['sender__username', 'recipient__username']
