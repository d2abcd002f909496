"""Project creation; converts the underlying match."""
import logging

from django.db import transaction

from apps.matching.state import MatchStateMachine

from .models import Project

logger = logging.getLogger(__name__)


def create_project(match_id, actor, title: str = "", contract_value=None, start_date=None,
                   end_date=None, machine: MatchStateMachine = None) -> Project:
    """Open the project for a mutual match; repeated calls return the same project."""
    machine = machine or MatchStateMachine()
    with transaction.atomic():
        match = machine.convert_match(match_id, actor).match
        project, created = Project.objects.get_or_create(
            match=match,
            defaults={
                "client_id": match.client_id,
                "partner_id": match.partner_id,
                "title": title or (match.brief.title if match.brief else f"{match.client.company} project"),
                "contract_value": contract_value if contract_value is not None else match.expected_revenue,
                "start_date": start_date,
                "end_date": end_date,
            },
        )
    if created:
        logger.info("Project %s opened for match %s", project.pk, match.pk)
    return project
