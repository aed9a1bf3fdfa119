"""SQLAlchemy-backed record stores used by the pipeline.

The stores only read and stage writes on the shared Flask-SQLAlchemy
session; committing is the job of :func:`transaction`, so a candidate and
its interview are always persisted by a single commit.
"""
import math
from contextlib import contextmanager

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from ..extensions import db
from ..errors import NotFound, Conflict, InvalidInput, StorageError
from ..models.candidate import Candidate
from ..models.experience import Experience
from ..models.interview import Interview
from ..models.job import Job
from ..models.user import User
from ..statuses import OPEN_INTERVIEW_STATUSES, InterviewResult


@contextmanager
def transaction(operation):
    """Commit everything staged in the block, or roll it all back."""
    try:
        yield db.session
        db.session.commit()
    except StaleDataError as e:
        db.session.rollback()
        current_app.logger.warning('%s: concurrent modification detected: %s', operation, e)
        raise Conflict("record was modified concurrently, retry the operation", operation=operation) from e
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning('%s: integrity violation: %s', operation, e.orig)
        raise Conflict("uniqueness constraint violated", operation=operation) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception('%s: storage failure', operation)
        raise StorageError("storage failure, retry the operation", operation=operation) from e
    except Exception:
        db.session.rollback()
        raise


def _select(model, for_update, **criteria):
    stmt = db.select(model).filter_by(**criteria)
    if for_update:
        # re-read committed state even if the row is already in the identity map
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    return db.session.execute(stmt).scalar_one_or_none()


def paginate(page, limit, total):
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "current_page": page,
        "total_pages": total_pages,
        "total_items": total,
        "items_per_page": limit,
        "has_next_page": page < total_pages,
        "has_prev_page": page > 1,
        "next_page": page + 1 if page < total_pages else None,
        "prev_page": page - 1 if page > 1 else None,
    }


def _escape_like(term):
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CandidateStore:
    def get(self, candidate_id, for_update=False):
        candidate = _select(Candidate, for_update, id=candidate_id)
        if candidate is None:
            raise NotFound("Candidate not found", candidate_id=candidate_id)
        return candidate

    def get_by_application_id(self, application_id, for_update=False):
        candidate = _select(Candidate, for_update, application_id=application_id)
        if candidate is None:
            raise NotFound("Application not found", application_id=application_id)
        return candidate

    def application_id_exists(self, application_id):
        stmt = db.select(Candidate.id).filter_by(application_id=application_id)
        return db.session.execute(stmt).first() is not None

    def find_by_email_and_job(self, email, job_pk):
        stmt = db.select(Candidate).filter_by(email=email, job_pk=job_pk)
        return db.session.execute(stmt).scalar_one_or_none()

    def create(self, candidate):
        db.session.add(candidate)
        db.session.flush()
        return candidate

    def update(self, candidate, **fields):
        for key, value in fields.items():
            setattr(candidate, key, value)
        return candidate

    def delete(self, candidate):
        db.session.delete(candidate)

    def list(self, search=None, status=None, job_code=None, page=1, limit=10):
        query = db.select(Candidate)
        if search:
            like = f"%{_escape_like(search)}%"
            query = query.filter(or_(
                Candidate.name.ilike(like, escape="\\"),
                Candidate.email.ilike(like, escape="\\"),
                Candidate.application_id.ilike(like, escape="\\"),
            ))
        if status:
            query = query.filter(Candidate.status == status)
        if job_code:
            query = query.join(Job, Job.id == Candidate.job_pk).filter(Job.job_id == job_code)
        pagination = db.paginate(query.order_by(Candidate.created_at.desc(), Candidate.id.desc()),
                                 page=page, per_page=limit, error_out=False)
        return pagination.items, paginate(page, limit, pagination.total or 0)


class InterviewStore:
    def get(self, interview_id, for_update=False):
        interview = _select(Interview, for_update, id=interview_id)
        if interview is None:
            raise NotFound("Interview not found", interview_id=interview_id)
        return interview

    def find_open_by_candidate(self, candidate_id):
        stmt = (
            db.select(Interview)
            .filter(Interview.candidate_id == candidate_id)
            .filter(Interview.status.in_([s.value for s in OPEN_INTERVIEW_STATUSES]))
            .order_by(Interview.scheduled_date.desc())
        )
        return db.session.execute(stmt).scalars().first()

    def list_by_candidate(self, candidate_id):
        stmt = db.select(Interview).filter_by(candidate_id=candidate_id).order_by(Interview.scheduled_date.desc())
        return db.session.execute(stmt).scalars().all()

    def create(self, interview):
        db.session.add(interview)
        db.session.flush()
        return interview

    def update(self, interview, **fields):
        for key, value in fields.items():
            setattr(interview, key, value)
        return interview

    def list(self, status=None, result=None, interviewer_id=None, page=1, limit=10):
        query = db.select(Interview)
        if status:
            query = query.filter(Interview.status == status)
        if result:
            query = query.filter(Interview.result == result)
        if interviewer_id:
            query = query.filter(Interview.interviewer_id == interviewer_id)
        pagination = db.paginate(query.order_by(Interview.scheduled_date.desc()),
                                 page=page, per_page=limit, error_out=False)
        return pagination.items, paginate(page, limit, pagination.total or 0)

    def upcoming(self, now, limit=10):
        stmt = (
            db.select(Interview)
            .filter(Interview.scheduled_date >= now)
            .filter(Interview.status.in_([s.value for s in OPEN_INTERVIEW_STATUSES]))
            .filter(Interview.result == InterviewResult.PENDING.value)
            .order_by(Interview.scheduled_date.asc())
            .limit(limit)
        )
        return db.session.execute(stmt).scalars().all()


class JobDirectory:
    def get_active_job(self, job_code):
        stmt = db.select(Job).filter_by(job_id=job_code, is_active=True)
        job = db.session.execute(stmt).scalar_one_or_none()
        if job is None:
            raise NotFound("Job not found or inactive", job_id=job_code)
        return job


class StaffDirectory:
    def get(self, user_id):
        user = db.session.get(User, user_id) if user_id is not None else None
        if user is None or not user.is_active:
            raise NotFound("User not found", user_id=user_id)
        return user


class ExperienceCatalog:
    def active(self, experience_ids):
        """Resolve ids to active Experience rows; every id must match."""
        if not experience_ids:
            return []
        experiences = db.session.execute(
            db.select(Experience).filter(Experience.id.in_(experience_ids), Experience.active.is_(True))
        ).scalars().all()
        if len(experiences) != len(set(experience_ids)):
            raise InvalidInput("Unknown core experience", field="core_experience")
        return experiences
