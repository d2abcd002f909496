"""Partner pipeline metrics."""
from django.db.models import Count, Q, Sum

from apps.projects.models import Project

from .models import Match


def partner_metrics(partner_id) -> dict:
    counts = Match.objects.filter(partner_id=partner_id).aggregate(
        matches_received=Count("id"),
        matches_accepted=Count("id", filter=Q(status=Match.Status.ACCEPTED)),
        conversions=Count("id", filter=Q(status=Match.Status.CONVERTED)),
    )
    total = Project.objects.filter(partner_id=partner_id).aggregate(
        total=Sum("contract_value")
    )["total"]
    counts["total_project_value"] = total or 0
    return counts
