from __future__ import annotations

import logging
from typing import Iterable

from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import F
from django.db.models.functions import Greatest
from django.utils import timezone

from .models import Notification, NotificationCounter

logger = logging.getLogger(__name__)


def get_counter(user, *, using: str = DEFAULT_DB_ALIAS) -> NotificationCounter:
    counter, created = NotificationCounter.objects.using(using).get_or_create(user=user)
    if created:
        logger.debug("Created notification counter for user %s", user.pk)
    return counter


def _apply(user, expression, *, using: str) -> int:
    counter = get_counter(user, using=using)
    NotificationCounter.objects.using(using).filter(pk=counter.pk).update(
        count=expression,
        updated_at=timezone.now(),
    )
    counter.refresh_from_db(using=using, fields=["count"])
    return counter.count


def increment(user, by: int = 1, *, using: str = DEFAULT_DB_ALIAS) -> int:
    """Add ``by`` unread notifications to the user's counter and return the new count."""
    if by < 0:
        raise ValueError("Increment must not be negative.")
    return _apply(user, F("count") + by, using=using)


def decrement(user, by: int = 1, *, using: str = DEFAULT_DB_ALIAS) -> int:
    """Remove ``by`` unread notifications, never going below zero."""
    if by < 0:
        raise ValueError("Decrement must not be negative.")
    return _apply(user, Greatest(F("count") - by, 0), using=using)


def notify(user, message: str, *, booking=None, using: str = DEFAULT_DB_ALIAS) -> Notification:
    with transaction.atomic(using=using):
        notification = Notification.objects.using(using).create(
            user=user,
            message=message,
            booking=booking,
        )
        increment(user, using=using)
    logger.info("Notified user %s: %s", user.pk, message)
    return notification


def mark_read(user, ids: Iterable[int], *, using: str = DEFAULT_DB_ALIAS) -> int:
    """Mark the user's unread notifications in ``ids`` as read; returns how many changed."""
    with transaction.atomic(using=using):
        changed = Notification.objects.using(using).filter(
            user=user, pk__in=list(ids), is_read=False
        ).update(is_read=True)
        if changed:
            decrement(user, changed, using=using)
    return changed


def mark_unread(user, ids: Iterable[int], *, using: str = DEFAULT_DB_ALIAS) -> int:
    with transaction.atomic(using=using):
        changed = Notification.objects.using(using).filter(
            user=user, pk__in=list(ids), is_read=True
        ).update(is_read=False)
        if changed:
            increment(user, changed, using=using)
    return changed
