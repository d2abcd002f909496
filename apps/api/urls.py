"""API URL configuration."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

app_name = "api"

router = DefaultRouter()
router.register("clients", views.ClientViewSet)
router.register("partners", views.PartnerViewSet)
router.register("briefs", views.BriefViewSet)
router.register("matches", views.MatchViewSet)

urlpatterns = [
    path("", include(router.urls)),
]

# ── Example payloads ───────────────────────────────────
#
# POST /api/briefs/
# {"title": "CRM rollout", "modules": ["CRM", "Accounting"],
#  "budget": "$50,000 - $100,000", "timeline_weeks": 12, "priority": "high"}
# Response 201: {"brief": {...}, "matches": [{"score": 87, "reasons": [...], ...}]}
#
# POST /api/matches/client-swipe/
# {"partner_id": "uuid", "liked": true}
# Response: {"matched": false, "match": {...}}
#
# POST /api/matches/partner-swipe/
# {"match_id": "uuid", "accepted": true}
# Response: {"matched": true, "match": {...}, "client_id": "uuid"}
#
# PATCH /api/matches/{uuid}/
# {"expected_revenue": "45000.00", "expected_closing_date": "2026-12-01"}
