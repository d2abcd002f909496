"""Swipe coordinators: each side's discovery queue and decisions."""
from dataclasses import dataclass
from typing import Optional

from apps.clients.models import Brief, Client
from apps.partners.models import Partner

from .models import Match
from .repository import DjangoMatchRepository, MatchRepository
from .state import MatchStateMachine


@dataclass
class SwipeResult:
    matched: bool
    match: Match

    @property
    def client_id(self):
        return self.match.client_id


@dataclass
class PendingRequest:
    client: Client
    match: Match
    brief: Optional[Brief]


class ClientSwipeCoordinator:
    """Partners a client has not decided on yet, and the client's swipes."""

    def __init__(self, repository: MatchRepository = None, machine: MatchStateMachine = None):
        self.repository = repository or DjangoMatchRepository()
        self.machine = machine or MatchStateMachine(self.repository)

    def unswiped_partners(self, client_id) -> list[Partner]:
        return self.repository.partners_without_match(client_id)

    def swipe(self, client_id, partner_id, liked: bool, actor) -> SwipeResult:
        transition = self.machine.record_client_decision(client_id, partner_id, liked, actor)
        return SwipeResult(matched=transition.matched, match=transition.match)


class PartnerSwipeCoordinator:
    """Clients waiting on a partner's answer, and the partner's swipes."""

    def __init__(self, repository: MatchRepository = None, machine: MatchStateMachine = None):
        self.repository = repository or DjangoMatchRepository()
        self.machine = machine or MatchStateMachine(self.repository)

    def pending_requests(self, partner_id) -> list[PendingRequest]:
        return [
            PendingRequest(client=match.client, match=match, brief=match.brief)
            for match in self.repository.pending_for_partner(partner_id)
        ]

    def swipe(self, match_id, accepted: bool, actor) -> SwipeResult:
        transition = self.machine.record_partner_decision(match_id, accepted, actor)
        return SwipeResult(matched=transition.matched, match=transition.match)
