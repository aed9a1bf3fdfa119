import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from hiring.errors import DeliveryError
from hiring.extensions import db, rq
from hiring.jobs import notify
from hiring.models.notification import Notification
from hiring.pipeline.notifications import QueuedNotifier, SendGridNotifier, default_notifier, NullNotifier
from hiring.statuses import NotificationEvent


def _rows():
    return db.session.execute(db.select(Notification).order_by(Notification.id)).scalars().all()


def test_deliver_records_sent_notification(app, monkeypatch):
    calls = []

    def fake_send(to_email, subject, html):
        calls.append((to_email, subject, html))
        return 202, "msg-1"

    monkeypatch.setattr(notify, "send_email", fake_send)
    notify.deliver_notification("ApplicationReceived", "ada@example.com", "Ada", {
        "candidate_id": 1,
        "application_id": "APP-1-ABC",
        "task_link": "https://tasks.example.com/t",
        "submission_link": "https://app.example.com/application/APP-1-ABC",
    })

    to_email, subject, html = calls[0]
    assert subject == "Application Received - Engineer Hiring Management System"
    assert "Dear Ada" in html
    assert "APP-1-ABC" in html
    assert "https://tasks.example.com/t" in html
    row = _rows()[0]
    assert (row.status, row.provider_message_id, row.candidate_id) == ("sent", "msg-1", 1)
    assert row.sent_at is not None


def test_interview_mail_shows_date_and_interviewer(app, monkeypatch):
    sent = {}
    monkeypatch.setattr(notify, "send_email", lambda to, subject, html: sent.update(html=html) or (202, None))
    notify.deliver_notification("InterviewScheduled", "ada@example.com", "Ada", {
        "candidate_id": 1, "application_id": "APP-1-ABC",
        "interview_date": "2030-03-01T09:30:00", "interviewer": "Grace Hopper",
    })
    assert "2030-03-01" in sent["html"]
    assert "09:30" in sent["html"]
    assert "Grace Hopper" in sent["html"]


@pytest.mark.parametrize("event,subject", [
    ("TaskSubmitted", "Task Submitted Successfully"),
    ("Selected", "Congratulations! You Have Been Selected"),
    ("Rejected", "Application Update - Engineer Hiring Management System"),
])
def test_subjects(app, event, subject):
    got, html = notify.render_notification(event, "Ada", {"application_id": "APP-1-ABC"})
    assert got == subject
    assert "APP-1-ABC" in html


def test_provider_failure_is_recorded_and_raised(app, monkeypatch):
    def boom(to_email, subject, html):
        raise RuntimeError("connection refused")

    monkeypatch.setattr(notify, "send_email", boom)
    with pytest.raises(DeliveryError):
        notify.deliver_notification("Selected", "ada@example.com", "Ada", {"candidate_id": 7, "application_id": "A"})
    row = _rows()[0]
    assert row.status == "failed"
    assert "connection refused" in row.error


def test_provider_error_status_is_failure(app, monkeypatch):
    monkeypatch.setattr(notify, "send_email", lambda to, subject, html: (500, None))
    with pytest.raises(DeliveryError):
        notify.deliver_notification("Rejected", "ada@example.com", "Ada", {"candidate_id": 7, "application_id": "A"})
    assert _rows()[0].status == "failed"


def test_queued_notifier_runs_inline_without_redis(app, monkeypatch):
    delivered = []
    monkeypatch.setattr(notify, "deliver_notification", lambda *args, **kw: delivered.append(args))
    assert rq.queue is None
    QueuedNotifier().notify(NotificationEvent.TASK_SUBMITTED, "ada@example.com", "Ada", {"candidate_id": 1})
    assert delivered == [("TaskSubmitted", "ada@example.com", "Ada", {"candidate_id": 1})]


def test_default_notifier_follows_config(app):
    app.config["MAIL_ENABLED"] = False
    assert isinstance(default_notifier(app), NullNotifier)
    app.config.update(MAIL_ENABLED=True, RQ_ENABLED=False)
    assert isinstance(default_notifier(app), SendGridNotifier)
    app.config["RQ_ENABLED"] = True
    assert isinstance(default_notifier(app), QueuedNotifier)
