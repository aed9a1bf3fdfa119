from datetime import datetime

from flask import current_app, render_template

from ..errors import DeliveryError
from ..extensions import db
from ..models.base import utcnow
from ..models.notification import Notification
from ..services.mail import send_email
from ..statuses import NotificationEvent

# event -> (subject, template)
TEMPLATES = {
    NotificationEvent.APPLICATION_RECEIVED: (
        "Application Received - Engineer Hiring Management System", "emails/application_received.html"),
    NotificationEvent.TASK_SUBMITTED: (
        "Task Submitted Successfully", "emails/task_submitted.html"),
    NotificationEvent.INTERVIEW_SCHEDULED: (
        "Interview Scheduled - Engineer Hiring Management System", "emails/interview_scheduled.html"),
    NotificationEvent.SELECTED: (
        "Congratulations! You Have Been Selected", "emails/selected.html"),
    NotificationEvent.REJECTED: (
        "Application Update - Engineer Hiring Management System", "emails/rejected.html"),
}


def render_notification(event, name, payload):
    subject, template = TEMPLATES[NotificationEvent(event)]
    context = dict(payload, name=name)
    if payload.get("interview_date"):
        context["interview_at"] = datetime.fromisoformat(payload["interview_date"])
    return subject, render_template(template, **context)


def deliver_notification(event, to_email, name, payload):
    """Render and send one candidate notification, recording the attempt.

    Runs in the RQ worker (or inline). Raises DeliveryError when the provider
    refuses or is unreachable; the failed attempt is still recorded.
    """
    subject, html = render_notification(event, name, payload)
    n = Notification(candidate_id=payload.get("candidate_id"), event=event,
                     type="sendgrid", sent_to=to_email, subject=subject, body=html)
    try:
        status, message_id = send_email(to_email, subject, html)
        if status >= 400:
            raise DeliveryError(f"mail provider returned {status}", status=status)
    except DeliveryError as e:
        n.status, n.error = "failed", e.message
        raise
    except Exception as e:
        n.status, n.error = "failed", str(e)
        raise DeliveryError(f"could not send {event} notification", cause=str(e)) from e
    else:
        n.status = "sent"
        n.provider_message_id = message_id
        n.sent_at = utcnow()
        current_app.logger.info('Sent %s to %s (%s)', event, to_email, message_id)
    finally:
        db.session.add(n)
        db.session.commit()
    return n.id
