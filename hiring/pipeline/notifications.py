"""Candidate notification port and its adapters.

The pipeline calls :func:`dispatch` after a transition has been committed.
Delivery problems are logged and swallowed here: a failed email never
rolls back or fails the state change that triggered it.
"""
from flask import current_app

from ..errors import DeliveryError
from ..extensions import rq
from ..statuses import NotificationEvent


class NotificationPort:
    def notify(self, event, email, name, payload):
        """Deliver ``event`` to the candidate. Raises DeliveryError on failure."""
        raise NotImplementedError


class NullNotifier(NotificationPort):
    def notify(self, event, email, name, payload):
        current_app.logger.info('Mail disabled, dropping %s for %s', event.value, payload.get('application_id'))


class SendGridNotifier(NotificationPort):
    """Sends inline, inside the request."""

    def notify(self, event, email, name, payload):
        from ..jobs.notify import deliver_notification
        deliver_notification(event.value, email, name, payload)


class QueuedNotifier(NotificationPort):
    """Hands delivery to the RQ worker (or runs it inline when Redis is down)."""

    def notify(self, event, email, name, payload):
        from ..jobs.notify import deliver_notification
        try:
            rq.enqueue(deliver_notification, event.value, email, name, payload, job_timeout=60)
        except Exception as e:
            raise DeliveryError(f"could not enqueue {event.value} notification", cause=str(e)) from e


def default_notifier(app):
    if not app.config.get("MAIL_ENABLED", True):
        return NullNotifier()
    if app.config.get("RQ_ENABLED", True):
        return QueuedNotifier()
    return SendGridNotifier()


def dispatch(port, event, candidate, **payload):
    """Attempt delivery of ``event`` exactly once for ``candidate``."""
    event = NotificationEvent(event)
    payload["candidate_id"] = candidate.id
    payload.setdefault("application_id", candidate.application_id)
    try:
        port.notify(event, candidate.email, candidate.name, payload)
    except DeliveryError as e:
        current_app.logger.error('Notification %s for candidate %s failed: %s (%s)',
                                 event.value, candidate.id, e.message, e.context)
    except Exception:
        current_app.logger.exception('Notification %s for candidate %s failed', event.value, candidate.id)
