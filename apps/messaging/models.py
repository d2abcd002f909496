"""Messages exchanged between the two parties of a mutual match."""
from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel
from apps.core.utils import truncate
from apps.matching.models import Match


class Message(TimeStampedModel):
    match = models.ForeignKey(Match, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_messages"
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="received_messages"
    )
    body = models.TextField("Message")
    read = models.BooleanField("Read", default=False)

    class Meta:
        verbose_name = "Message"
        verbose_name_plural = "Messages"
        ordering = ["created_at"]

    def __str__(self):
        return truncate(self.body, 60)
