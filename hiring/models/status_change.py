from ..extensions import db
from .base import TimestampMixin, isoformat


class StatusChange(db.Model, TimestampMixin):
    """Audit row written for every candidate status transition, including overrides."""
    __tablename__ = "status_changes"

    id = db.Column(db.Integer, primary_key=True)
    # no FK: the trail outlives an administrative delete of the candidate
    candidate_id = db.Column(db.Integer, nullable=False, index=True)
    application_id = db.Column(db.String(40), index=True)
    operation = db.Column(db.String(40), nullable=False)
    from_status = db.Column(db.String(30))
    to_status = db.Column(db.String(30))
    actor_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    note = db.Column(db.Text)

    def to_dict(self):
        return {
            "id": self.id,
            "candidate_id": self.candidate_id,
            "application_id": self.application_id,
            "operation": self.operation,
            "from_status": self.from_status,
            "to_status": self.to_status,
            "actor_id": self.actor_id,
            "note": self.note,
            "created_at": isoformat(self.created_at),
        }
