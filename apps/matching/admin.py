from django.contrib import admin

from .models import Match


@admin.register(Match)
class MatchAdmin(admin.ModelAdmin):
    list_display = [
        "client", "partner", "score", "client_decision", "partner_decision",
        "status", "created_at",
    ]
    list_filter = ["status", "client_decision", "partner_decision"]
    search_fields = ["client__company", "partner__company", "brief__title"]
    readonly_fields = [
        "client_decision", "partner_decision", "status", "version",
        "score", "score_breakdown", "reasons", "responded_at",
    ]
