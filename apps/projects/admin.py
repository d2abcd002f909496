from django.contrib import admin

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ["title", "client", "partner", "status", "contract_value", "created_at"]
    list_filter = ["status"]
    search_fields = ["title", "client__company", "partner__company"]
