"""
Notification dispatcher.

Turns wishlist domain events into email messages and hands them to a send
function. Each kind has a fixed subject and an HTML template under
``templates/notifications/``; the same inputs always produce the same
message.

Delivery is best-effort: a transport failure is logged and re-raised as
``DeliveryFailedError`` so the caller can decide to carry on. The send
function is injected, which keeps workflows testable without an SMTP
server.

Example::

    dispatcher = NotificationDispatcher()
    dispatcher.notify(
        NotificationKind.MEMBER_ADDED,
        recipient=new_member,
        group=group,
        actor_name=request.user.username,
    )
"""

import functools
import logging
from typing import Callable, NamedTuple, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import models
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from .exceptions import DeliveryFailedError, UnknownNotificationKindError

logger = logging.getLogger(__name__)


class NotificationKind(models.TextChoices):
    MEMBER_ADDED = 'member_added', 'Member added'
    ITEM_ADDED = 'item_added', 'Item added'
    ITEM_PURCHASED = 'item_purchased', 'Item purchased'


SUBJECTS = {
    NotificationKind.MEMBER_ADDED: 'New Member in {group}',
    NotificationKind.ITEM_ADDED: 'New Item in {group}',
    NotificationKind.ITEM_PURCHASED: 'Item Marked as Purchased',
}

# Kinds whose template needs the wishlist item
ITEM_KINDS = {NotificationKind.ITEM_ADDED}


class Message(NamedTuple):
    to: str
    subject: str
    html: str


def send_email_message(message: Message) -> None:
    """Send a message through the configured Django email backend."""
    email = EmailMultiAlternatives(
        subject=message.subject,
        body=strip_tags(message.html).strip(),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[message.to],
    )
    email.attach_alternative(message.html, 'text/html')
    email.send(fail_silently=False)


class NotificationDispatcher:
    """Builds and sends wishlist notification emails."""

    def __init__(
        self,
        send: Optional[Callable[[Message], None]] = None,
        enabled: bool = True,
    ):
        self._send = send or send_email_message
        self.enabled = enabled

    def build_message(
        self,
        kind,
        *,
        recipient,
        group,
        item=None,
        actor_name: Optional[str] = None,
    ) -> Message:
        """
        Render the message for one notification.

        Args:
            kind: NotificationKind value
            recipient: User who will receive the email
            group: Group the event happened in
            item: WishlistItem, required for item_added
            actor_name: Display name of the user who triggered the event

        Returns:
            Message with recipient address, subject and HTML body

        Raises:
            UnknownNotificationKindError: If kind is not supported
            ValueError: If an item-based kind is built without an item
        """
        try:
            kind = NotificationKind(kind)
        except ValueError:
            raise UnknownNotificationKindError(f"Unknown notification kind: {kind}")

        if kind in ITEM_KINDS and item is None:
            raise ValueError(f"{kind} notification requires an item")

        # item_purchased only ever sees the group, so the buyer and the
        # item details cannot leak into the owner's inbox
        context = {'group': group, 'actor_name': actor_name}
        if kind in ITEM_KINDS:
            context['item'] = item

        html = render_to_string(f'notifications/{kind.value}.html', context)
        subject = SUBJECTS[kind].format(group=group.name)

        return Message(to=recipient.email, subject=subject, html=html)

    def notify(
        self,
        kind,
        *,
        recipient,
        group,
        item=None,
        actor_name: Optional[str] = None,
    ) -> Optional[Message]:
        """
        Build and send one notification.

        Returns the sent Message, or None when notifications are disabled or
        the recipient has no email address.

        Raises:
            DeliveryFailedError: If the send function fails
        """
        if not self.enabled:
            logger.debug("Notifications disabled; not sending %s", kind)
            return None

        if not recipient.email:
            logger.warning(
                "User %s has no email address; skipping %s notification",
                recipient.username, kind,
            )
            return None

        message = self.build_message(
            kind,
            recipient=recipient,
            group=group,
            item=item,
            actor_name=actor_name,
        )

        try:
            self._send(message)
        except Exception as e:
            logger.exception("Failed to send %s notification to %s", kind, message.to)
            raise DeliveryFailedError(kind, message.to, e) from e

        logger.info("Sent %s notification to %s", kind, message.to)
        return message


@functools.lru_cache(maxsize=None)
def get_dispatcher() -> NotificationDispatcher:
    """Process-wide dispatcher used by the HTTP layer."""
    return NotificationDispatcher(enabled=settings.NOTIFICATIONS_ENABLED)
