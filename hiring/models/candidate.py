from ..extensions import db
from .base import TimestampMixin, isoformat
from .experience import candidate_experiences
from ..statuses import CandidateStatus


class Candidate(db.Model, TimestampMixin):
    __tablename__ = "candidates"
    __table_args__ = (
        db.UniqueConstraint("email", "job_pk", name="uq_candidates_email_job"),
    )

    id = db.Column(db.Integer, primary_key=True)
    application_id = db.Column(db.String(40), unique=True, nullable=False, index=True)
    job_pk = db.Column(db.Integer, db.ForeignKey("jobs.id"), nullable=False, index=True)

    # applicant profile
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False)
    cv_file_path = db.Column(db.String(500), nullable=False)
    reference_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    years_of_experience = db.Column(db.Float, nullable=False, default=0)
    expected_salary = db.Column(db.Float, nullable=False, default=0)
    notice_period_in_months = db.Column(db.Integer, nullable=False, default=1)

    # coding task: [{"url": ..., "type": "github"|"live"|"other"}]
    task_submission = db.Column(db.JSON, nullable=False, default=list)
    task_submitted_at = db.Column(db.DateTime)

    # evaluation
    evaluation_score = db.Column(db.Integer)
    evaluated_by_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    evaluated_at = db.Column(db.DateTime)
    evaluation_comments = db.Column(db.Text)

    # interview summary, projected from the authoritative Interview row
    current_interview_id = db.Column(db.Integer, db.ForeignKey("interviews.id", use_alter=True, name="fk_candidates_current_interview"))
    interview_scheduled_date = db.Column(db.DateTime)
    interview_interviewer_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    interview_location = db.Column(db.String(20))
    interview_meeting_link = db.Column(db.String(500))
    interview_result = db.Column(db.String(20))
    interview_feedback = db.Column(db.Text)
    interview_completed_at = db.Column(db.DateTime)

    # final selection
    selected = db.Column(db.Boolean, nullable=False, default=False)
    offer_letter_path = db.Column(db.String(500))
    selected_by_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    selected_at = db.Column(db.DateTime)

    status = db.Column(db.String(30), nullable=False, default=CandidateStatus.APPLIED.value, index=True)
    version_id = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    job = db.relationship("Job", back_populates="candidates")
    core_experience = db.relationship("Experience", secondary=candidate_experiences, lazy="selectin")
    interviews = db.relationship(
        "Interview",
        back_populates="candidate",
        foreign_keys="Interview.candidate_id",
        cascade="all, delete-orphan",
        order_by="Interview.scheduled_date.desc()",
    )

    def to_dict(self, include_interviews=False):
        data = {
            "id": self.id,
            "application_id": self.application_id,
            "job": self.job.to_dict() if self.job else None,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "cv_file_path": self.cv_file_path,
            "reference_id": self.reference_id,
            "years_of_experience": self.years_of_experience,
            "expected_salary": self.expected_salary,
            "notice_period_in_months": self.notice_period_in_months,
            "core_experience": [e.to_dict() for e in self.core_experience],
            "task_submission": {
                "links": list(self.task_submission or []),
                "submitted_at": isoformat(self.task_submitted_at),
            },
            "evaluation": {
                "score": self.evaluation_score,
                "evaluated_by": self.evaluated_by_id,
                "evaluated_at": isoformat(self.evaluated_at),
                "comments": self.evaluation_comments,
            },
            "interview": {
                "interview_id": self.current_interview_id,
                "scheduled_date": isoformat(self.interview_scheduled_date),
                "interviewer": self.interview_interviewer_id,
                "location": self.interview_location,
                "meeting_link": self.interview_meeting_link,
                "result": self.interview_result,
                "feedback": self.interview_feedback,
                "completed_at": isoformat(self.interview_completed_at),
            },
            "final_selection": {
                "selected": self.selected,
                "offer_letter_path": self.offer_letter_path,
                "selected_by": self.selected_by_id,
                "selected_at": isoformat(self.selected_at),
            },
            "status": self.status,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
        if include_interviews:
            data["interviews"] = [i.to_dict() for i in self.interviews]
        return data

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} application_id={self.application_id!r} status={self.status!r}>"
