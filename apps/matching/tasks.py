"""Celery tasks — matching."""
import logging

from celery import shared_task

from apps.partners.models import Partner

from .models import Decision, Match
from .repository import DjangoMatchRepository
from .scoring import score_partner

logger = logging.getLogger(__name__)


@shared_task(bind=True, queue="matching", max_retries=2, default_retry_delay=30)
def rescore_partner_matches(self, partner_id: str):
    """Refresh scores of a partner's suggestions it has not answered yet."""
    try:
        partner = Partner.objects.get(pk=partner_id)
    except Partner.DoesNotExist:
        logger.error("Not found: partner=%s", partner_id)
        return

    repository = DjangoMatchRepository()
    pending = (
        Match.objects.filter(
            partner=partner,
            partner_decision=Decision.UNDECIDED,
            status=Match.Status.SUGGESTED,
            brief__isnull=False,
        )
        .select_related("client", "brief")
    )
    try:
        updated = skipped = 0
        for match in pending:
            result = score_partner(match.brief, partner, match.client.industry)
            fields = {
                "score": result.score,
                "score_breakdown": result.breakdown,
                "reasons": result.reasons,
            }
            if repository.compare_and_set(match, fields):
                updated += 1
            else:
                # changed concurrently
                skipped += 1
    except Exception as exc:
        logger.exception("Rescoring failed: partner=%s", partner_id)
        raise self.retry(exc=exc)

    logger.info("Partner %s: %d matches rescored, %d skipped", partner.company, updated, skipped)
    return {"updated": updated, "skipped": skipped}
