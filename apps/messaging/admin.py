from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["match", "sender", "recipient", "read", "created_at"]
    list_filter = ["read"]
