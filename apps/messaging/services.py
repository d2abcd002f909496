"""Store-and-poll messaging, unlocked by a mutual match."""
import logging

from apps.core.exceptions import AuthorizationError, ValidationError
from apps.matching.repository import DjangoMatchRepository

from .models import Message

logger = logging.getLogger(__name__)


def _open_conversation(match_id, actor, repository=None):
    """Return (match, other party's user id) or raise."""
    match = (repository or DjangoMatchRepository()).get_match(match_id)
    client_user, partner_user = match.client.user_id, match.partner.user_id
    if actor is None or actor.pk not in (client_user, partner_user):
        raise AuthorizationError("Not a party to this match")
    if not match.is_mutual:
        raise ValidationError(
            "Messaging opens once both sides have accepted",
            detail={"match": f"Match is {match.status}."},
        )
    other = partner_user if actor.pk == client_user else client_user
    return match, other


def send_message(match_id, actor, body: str, repository=None) -> Message:
    match, recipient_id = _open_conversation(match_id, actor, repository)
    body = (body or "").strip()
    if not body:
        raise ValidationError("Empty message", detail={"body": "This field may not be blank."})
    message = Message.objects.create(
        match=match, sender=actor, recipient_id=recipient_id, body=body
    )
    logger.debug("Message %s on match %s", message.pk, match.pk)
    return message


def list_messages(match_id, actor, repository=None) -> list[Message]:
    match, _ = _open_conversation(match_id, actor, repository)
    return list(match.messages.order_by("created_at"))


def mark_read(match_id, actor, repository=None) -> int:
    """Mark everything addressed to ``actor`` as read; returns how many changed."""
    match, _ = _open_conversation(match_id, actor, repository)
    return match.messages.filter(recipient=actor, read=False).update(read=True)
