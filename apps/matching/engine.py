"""Matching engine — rank partners for a brief and materialize suggestions."""
import logging

from django.conf import settings

from apps.clients.models import Brief

from .models import Decision, Match
from .repository import DjangoMatchRepository, MatchRepository
from .scoring import score_partner
from .state import derive_status

logger = logging.getLogger(__name__)


def rank_partners(brief: Brief, partners, client_industry: str = "") -> list:
    """Score every partner and sort best first; ties keep input order."""
    scored = [(partner, score_partner(brief, partner, client_industry)) for partner in partners]
    return sorted(scored, key=lambda pair: pair[1].score, reverse=True)


def generate_matches(brief: Brief, partners=None, repository: MatchRepository = None, limit: int = None) -> list[Match]:
    """Create ``suggested`` matches between ``brief`` and its best partners.

    Submitting the brief counts as the client's interest, so new matches start
    with the client side accepted and the partner undecided. Partners whose
    match with this client is no longer ``suggested`` are not candidates. An
    existing suggested match is re-attached to this brief and re-scored; the
    client side is marked accepted unless the partner already answered, in
    which case the client still has to swipe explicitly.
    """
    repository = repository or DjangoMatchRepository()
    if partners is None:
        partners = repository.all_partners()
    limit = limit or settings.MATCHING_MAX_CANDIDATES

    client = brief.client
    decided = {
        match.partner_id for match in repository.matches_for_client(client.pk)
        if match.status != Match.Status.SUGGESTED
    }
    candidates = [partner for partner in partners if partner.pk not in decided]
    ranked = rank_partners(brief, candidates, client.industry)[:limit]

    matches = []
    for partner, result in ranked:
        scored = {
            "brief": brief,
            "score": result.score,
            "score_breakdown": result.breakdown,
            "reasons": result.reasons,
        }
        match, created = repository.get_or_create_match(
            client.pk,
            partner.pk,
            defaults={
                **scored,
                "client_decision": Decision.ACCEPTED,
                "partner_decision": Decision.UNDECIDED,
                "status": derive_status(Decision.ACCEPTED, Decision.UNDECIDED),
            },
        )
        if not created:
            match = _reattach(repository, match, scored)
            if match is None:
                continue
        matches.append(match)

    if brief.status in (Brief.Status.DRAFT, Brief.Status.ACTIVE):
        brief.status = Brief.Status.MATCHING
        brief.save(update_fields=["status", "updated_at"])

    logger.info(
        "Brief %s (%s): %d partners scored, %d matches",
        brief.pk, client.company, len(candidates), len(matches),
    )
    return matches


def _reattach(repository: MatchRepository, match: Match, scored: dict):
    """Point an existing suggested match at the new brief; None if it moved on."""
    for _ in range(settings.MATCHING_MAX_TRANSITION_ATTEMPTS):
        if match.status != Match.Status.SUGGESTED:
            return None
        fields = dict(scored)
        if match.partner_decision == Decision.UNDECIDED and match.client_decision != Decision.ACCEPTED:
            fields["client_decision"] = Decision.ACCEPTED
        if repository.compare_and_set(match, fields):
            return match
        match = repository.get_match(match.pk)
    logger.warning("Match %s kept changing; left out of brief %s", match.pk, scored["brief"].pk)
    return None
