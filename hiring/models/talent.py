from ..extensions import db
from .base import TimestampMixin, isoformat, utcnow
from .experience import talent_experiences


class Talent(db.Model, TimestampMixin):
    __tablename__ = "talents"

    id = db.Column(db.Integer, primary_key=True)
    talent_pool_id = db.Column(db.String(8), unique=True, nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False)
    cv_file_path = db.Column(db.String(500), nullable=False)
    reference_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    years_of_experience = db.Column(db.Float, nullable=False)
    expected_salary = db.Column(db.Float, nullable=False)
    notice_period_in_months = db.Column(db.Integer, nullable=False)
    current_employment_status = db.Column(db.Boolean, nullable=False, default=True)
    current_company_name = db.Column(db.String(200))
    write_about_yourself = db.Column(db.Text, default="")
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    submission_date = db.Column(db.DateTime, nullable=False, default=utcnow)

    core_experience = db.relationship("Experience", secondary=talent_experiences, lazy="selectin")

    def to_dict(self):
        return {
            "id": self.id,
            "talent_pool_id": self.talent_pool_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "cv_file_path": self.cv_file_path,
            "reference_id": self.reference_id,
            "years_of_experience": self.years_of_experience,
            "expected_salary": self.expected_salary,
            "notice_period_in_months": self.notice_period_in_months,
            "current_employment_status": self.current_employment_status,
            "current_company_name": self.current_company_name,
            "write_about_yourself": self.write_about_yourself,
            "core_experience": [e.to_dict() for e in self.core_experience],
            "is_active": self.is_active,
            "submission_date": isoformat(self.submission_date),
        }
