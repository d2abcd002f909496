from django.contrib import admin

from .models import Partner


@admin.register(Partner)
class PartnerAdmin(admin.ModelAdmin):
    list_display = ["company", "industry", "capacity", "rating", "verified", "created_at"]
    list_filter = ["capacity", "verified", "industry"]
    search_fields = ["company", "name", "email"]
