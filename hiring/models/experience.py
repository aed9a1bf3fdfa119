from ..extensions import db
from .base import TimestampMixin

candidate_experiences = db.Table(
    "candidate_experiences",
    db.Column("candidate_id", db.Integer, db.ForeignKey("candidates.id", ondelete="CASCADE"), primary_key=True),
    db.Column("experience_id", db.Integer, db.ForeignKey("experiences.id"), primary_key=True),
)

talent_experiences = db.Table(
    "talent_experiences",
    db.Column("talent_id", db.Integer, db.ForeignKey("talents.id", ondelete="CASCADE"), primary_key=True),
    db.Column("experience_id", db.Integer, db.ForeignKey("experiences.id"), primary_key=True),
)


class Experience(db.Model, TimestampMixin):
    __tablename__ = "experiences"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True)
    active = db.Column(db.Boolean, nullable=False, default=True, index=True)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "active": self.active}

    def __repr__(self) -> str:
        return f"<Experience id={self.id} name={self.name!r}>"
