from ..extensions import db
from .base import TimestampMixin, isoformat
from ..statuses import InterviewStatus, InterviewResult, InterviewType, InterviewLocation, OPEN_INTERVIEW_STATUSES


class Interview(db.Model, TimestampMixin):
    __tablename__ = "interviews"

    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)
    job_pk = db.Column(db.Integer, db.ForeignKey("jobs.id"), nullable=False)

    scheduled_date = db.Column(db.DateTime, nullable=False, index=True)
    duration = db.Column(db.Integer, nullable=False, default=60)  # minutes
    interviewer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    scheduled_by_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    interview_type = db.Column(db.String(20), nullable=False, default=InterviewType.TECHNICAL.value)
    location = db.Column(db.String(20), nullable=False, default=InterviewLocation.IN_PERSON.value)
    meeting_link = db.Column(db.String(500))
    notes = db.Column(db.Text)

    status = db.Column(db.String(20), nullable=False, default=InterviewStatus.SCHEDULED.value, index=True)
    result = db.Column(db.String(20), nullable=False, default=InterviewResult.PENDING.value)
    feedback = db.Column(db.Text)
    score = db.Column(db.Integer)

    completed_at = db.Column(db.DateTime)
    completed_by_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    cancelled_at = db.Column(db.DateTime)
    cancelled_by_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    cancellation_reason = db.Column(db.Text)
    rescheduled_at = db.Column(db.DateTime)
    rescheduled_by_id = db.Column(db.Integer, db.ForeignKey("users.id"))

    candidate = db.relationship("Candidate", back_populates="interviews", foreign_keys=[candidate_id])
    interviewer = db.relationship("User", foreign_keys=[interviewer_id], lazy="joined")

    @property
    def is_open(self):
        return self.status in {s.value for s in OPEN_INTERVIEW_STATUSES}

    def to_dict(self):
        return {
            "id": self.id,
            "candidate_id": self.candidate_id,
            "job_id": self.job_pk,
            "scheduled_date": isoformat(self.scheduled_date),
            "duration": self.duration,
            "interviewer": self.interviewer.to_dict() if self.interviewer else self.interviewer_id,
            "scheduled_by": self.scheduled_by_id,
            "interview_type": self.interview_type,
            "location": self.location,
            "meeting_link": self.meeting_link,
            "notes": self.notes,
            "status": self.status,
            "result": self.result,
            "feedback": self.feedback,
            "score": self.score,
            "completed_at": isoformat(self.completed_at),
            "completed_by": self.completed_by_id,
            "cancelled_at": isoformat(self.cancelled_at),
            "cancelled_by": self.cancelled_by_id,
            "cancellation_reason": self.cancellation_reason,
            "rescheduled_at": isoformat(self.rescheduled_at),
            "rescheduled_by": self.rescheduled_by_id,
        }

    def __repr__(self) -> str:
        return f"<Interview id={self.id} candidate_id={self.candidate_id} status={self.status!r}>"
