from django.contrib import admin

from .models import Brief, Client


class BriefInline(admin.TabularInline):
    model = Brief
    extra = 0
    fields = ["title", "budget", "timeline_weeks", "priority", "status"]


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ["company", "name", "email", "industry", "created_at"]
    list_filter = ["industry"]
    search_fields = ["company", "name", "email"]
    inlines = [BriefInline]


@admin.register(Brief)
class BriefAdmin(admin.ModelAdmin):
    list_display = ["title", "client", "budget", "priority", "status", "created_at"]
    list_filter = ["priority", "status"]
    search_fields = ["title", "client__company"]
