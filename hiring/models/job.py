from ..extensions import db
from .base import TimestampMixin, isoformat


class Job(db.Model, TimestampMixin):
    __tablename__ = "jobs"

    id = db.Column(db.Integer, primary_key=True)
    # public 8-char code shown to applicants (A-Z0-9)
    job_id = db.Column(db.String(8), unique=True, nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    designation = db.Column(db.String(200), nullable=False)
    salary_range = db.Column(db.String(100), nullable=False)
    job_description = db.Column(db.Text, nullable=False)
    experience_in_year = db.Column(db.String(50))
    task_link = db.Column(db.String(500))
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    created_by_id = db.Column(db.Integer, db.ForeignKey("users.id"))

    candidates = db.relationship("Candidate", back_populates="job", lazy="dynamic")

    def to_dict(self):
        return {
            "id": self.id,
            "job_id": self.job_id,
            "title": self.title,
            "designation": self.designation,
            "salary_range": self.salary_range,
            "job_description": self.job_description,
            "experience_in_year": self.experience_in_year,
            "task_link": self.task_link,
            "is_active": self.is_active,
            "created_at": isoformat(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Job id={self.id} job_id={self.job_id!r}>"
