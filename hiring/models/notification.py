from ..extensions import db
from .base import TimestampMixin


class Notification(db.Model, TimestampMixin):
    __tablename__ = "notifications"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, index=True)
    event = db.Column(db.String(40), nullable=False)
    type = db.Column(db.String(50), default="sendgrid")
    sent_to = db.Column(db.String(255))
    subject = db.Column(db.String(255))
    body = db.Column(db.Text)
    status = db.Column(db.String(20))  # sent/failed
    error = db.Column(db.Text)
    provider_message_id = db.Column(db.String(255))
    sent_at = db.Column(db.DateTime)
