"""Candidate lifecycle state machine.

Every operation that changes a candidate's status goes through
:class:`PipelineEngine` (or, for interviews, :class:`InterviewCoordinator`).
Each one follows the same shape:

1. validate the payload (``InvalidInput``) without touching the database,
2. take the per-candidate lock and re-read the row ``FOR UPDATE``,
3. check the transition guard (``InvalidState``),
4. stage all writes and commit them together,
5. fire at most one notification, outside the transaction.
"""
from flask import current_app

from ..errors import Conflict, InvalidInput, InvalidState, NotFound
from ..models.base import utcnow
from ..models.candidate import Candidate
from ..extensions import db
from ..statuses import (
    CandidateStatus,
    InterviewResult,
    InterviewStatus,
    NotificationEvent,
    TASK_SUBMISSION_STATUSES,
)
from . import identity
from .audit import record_transition
from .evaluation import derive_status, normalize_score, PASS_THRESHOLD
from .locking import candidate_locks
from .mirror import sync_interview_mirror
from .notifications import NullNotifier, dispatch
from .stores import CandidateStore, ExperienceCatalog, InterviewStore, JobDirectory, StaffDirectory, transaction
from .validation import clean_applicant, clean_profile_edit, clean_task_links, MAX_TASK_LINKS


class PipelineEngine:
    def __init__(self, notifier=None, candidates=None, interviews=None, jobs=None, staff=None, locks=None,
                 experiences=None):
        self.notifier = notifier or NullNotifier()
        self.candidates = candidates or CandidateStore()
        self.interviews = interviews or InterviewStore()
        self.jobs = jobs or JobDirectory()
        self.staff = staff or StaffDirectory()
        self.locks = locks or candidate_locks
        self.experiences = experiences or ExperienceCatalog()

    # reads

    def get_candidate(self, candidate_id):
        return self.candidates.get(candidate_id)

    def get_by_application_id(self, application_id):
        return self.candidates.get_by_application_id(application_id)

    def list_candidates(self, **filters):
        return self.candidates.list(**filters)

    def update_candidate(self, candidate_id, data, actor_id):
        """Correct profile fields. Status only moves through the transitions below."""
        fields = clean_profile_edit(data)
        if not fields:
            raise InvalidInput("No editable fields supplied")
        changed = sorted(fields)

        with self.locks.hold(candidate_id):
            candidate = self.candidates.get(candidate_id, for_update=True)
            email = fields.get("email")
            if email is not None and email != candidate.email:
                other = self.candidates.find_by_email_and_job(email, candidate.job_pk)
                if other is not None and other.id != candidate.id:
                    raise Conflict("Email is already taken by another candidate for this job",
                                   email=email, candidate_id=candidate.id)
            experiences = None
            if "core_experience" in fields:
                experiences = self.experiences.active(fields.pop("core_experience"))
            if "reference_id" in fields:
                self._check_reference(fields["reference_id"])

            with transaction("update_candidate"):
                self.candidates.update(candidate, **fields)
                if experiences is not None:
                    candidate.core_experience = experiences
        current_app.logger.info('Candidate %s profile edited by %s: %s',
                                candidate.application_id, actor_id, changed)
        return candidate

    # transitions

    def intake(self, job_code, data, cv_ref):
        """Create an application against an active job. The only creation path."""
        fields = clean_applicant(data, cv_ref)
        job = self.jobs.get_active_job(job_code)

        with self.locks.hold(("intake", job.id, fields["email"])):
            if self.candidates.find_by_email_and_job(fields["email"], job.id) is not None:
                raise Conflict("You have already applied for this position", email=fields["email"], job_id=job_code)

            experiences = self.experiences.active(fields.pop("core_experience"))
            self._check_reference(fields["reference_id"])

            with transaction("intake"):
                candidate = Candidate(
                    application_id=identity.allocate(identity.APPLICATION, self.candidates.application_id_exists),
                    job_pk=job.id,
                    status=CandidateStatus.APPLIED.value,
                    task_submission=[],
                    **fields,
                )
                candidate.core_experience = experiences
                self.candidates.create(candidate)
                record_transition(candidate, "intake", None)

        frontend = current_app.config.get("FRONTEND_URL", "")
        dispatch(self.notifier, NotificationEvent.APPLICATION_RECEIVED, candidate,
                 task_link=job.task_link or f"{frontend}/task-instructions",
                 submission_link=f"{frontend}/application/{candidate.application_id}")
        return candidate

    def submit_task(self, application_id, links):
        max_links = current_app.config.get("MAX_TASK_LINKS", MAX_TASK_LINKS)
        cleaned = clean_task_links(links, max_links)
        candidate_id = self.candidates.get_by_application_id(application_id).id

        with self.locks.hold(candidate_id):
            candidate = self.candidates.get(candidate_id, for_update=True)
            self._require(candidate, TASK_SUBMISSION_STATUSES, "submit_task",
                          "Task submission is not allowed at this stage")
            previous = candidate.status
            with transaction("submit_task"):
                self.candidates.update(
                    candidate,
                    task_submission=cleaned,
                    task_submitted_at=utcnow(),
                    status=CandidateStatus.TASK_SUBMITTED.value,
                )
                record_transition(candidate, "submit_task", previous)

        dispatch(self.notifier, NotificationEvent.TASK_SUBMITTED, candidate)
        return candidate

    def evaluate(self, candidate_id, score, comments, evaluator_id):
        raw_score, score = score, normalize_score(score)
        if score is None:
            raise InvalidInput("Score must be between 0 and 100", field="score", score=raw_score)

        with self.locks.hold(candidate_id):
            candidate = self.candidates.get(candidate_id, for_update=True)
            self._require(candidate, {CandidateStatus.TASK_SUBMITTED}, "evaluate",
                          "Candidate is not in task submitted status")
            previous = candidate.status
            threshold = current_app.config.get("EVALUATION_PASS_THRESHOLD", PASS_THRESHOLD)
            with transaction("evaluate"):
                self.candidates.update(
                    candidate,
                    evaluation_score=score,
                    evaluation_comments=comments,
                    evaluated_by_id=evaluator_id,
                    evaluated_at=utcnow(),
                    status=derive_status(score, threshold).value,
                )
                record_transition(candidate, "evaluate", previous, evaluator_id, note=f"score={score}")
        return candidate

    def set_status(self, candidate_id, new_status, actor_id, note=None):
        """Administrative override: any status to any status, audited but unguarded."""
        status = CandidateStatus.parse(new_status)
        if status is None:
            raise InvalidInput("Invalid status", field="status", status=new_status)

        with self.locks.hold(candidate_id):
            candidate = self.candidates.get(candidate_id, for_update=True)
            previous = candidate.status
            with transaction("set_status"):
                self.candidates.update(candidate, status=status.value)
                record_transition(candidate, "set_status", previous, actor_id, note=note)
        current_app.logger.warning('Status override on %s by user %s at %s: %s -> %s',
                                   candidate.application_id, actor_id, utcnow().isoformat(), previous, status.value)
        return candidate

    def finalize_selection(self, candidate_id, selected, offer_ref, actor_id):
        if not isinstance(selected, bool):
            raise InvalidInput("Selected must be a boolean", field="selected")

        with self.locks.hold(candidate_id):
            candidate = self.candidates.get(candidate_id, for_update=True)
            current = CandidateStatus.parse(candidate.status)
            if current is not None and current.is_terminal:
                current_app.logger.warning('finalize_selection rejected for %s: already %s',
                                           candidate.application_id, candidate.status)
                raise InvalidState("Final selection has already been made",
                                   status=candidate.status, operation="finalize_selection")
            previous = candidate.status
            now = utcnow()
            with transaction("finalize_selection"):
                fields = {
                    "selected": selected,
                    "selected_by_id": actor_id,
                    "selected_at": now,
                    "status": (CandidateStatus.SELECTED if selected else CandidateStatus.REJECTED).value,
                }
                if offer_ref:
                    fields["offer_letter_path"] = offer_ref
                self.candidates.update(candidate, **fields)

                # the latest interview carries the decision as its result;
                # one still open at decision time is closed with it
                interview = self._decided_interview(candidate)
                if interview is not None:
                    self.interviews.update(
                        interview,
                        status=InterviewStatus.COMPLETED.value,
                        result=(InterviewResult.PASSED if selected else InterviewResult.FAILED).value,
                        completed_at=interview.completed_at or now,
                        completed_by_id=interview.completed_by_id or actor_id,
                    )
                    sync_interview_mirror(candidate, interview)
                record_transition(candidate, "finalize_selection", previous, actor_id)

        event = NotificationEvent.SELECTED if selected else NotificationEvent.REJECTED
        dispatch(self.notifier, event, candidate)
        return candidate

    def delete_candidate(self, candidate_id, actor_id):
        """Hard delete, outside the state machine. Interviews go with the candidate."""
        with self.locks.hold(candidate_id):
            candidate = self.candidates.get(candidate_id, for_update=True)
            application_id = candidate.application_id
            with transaction("delete_candidate"):
                previous = candidate.status
                # break the candidate -> interview reference before the cascade
                candidate.current_interview_id = None
                db.session.flush()
                record_transition(candidate, "delete_candidate", previous, actor_id, note="deleted")
                self.candidates.delete(candidate)
        current_app.logger.warning('Candidate %s deleted by user %s', application_id, actor_id)

    # helpers

    def _check_reference(self, user_id):
        if user_id is None:
            return
        try:
            self.staff.get(user_id)
        except NotFound:
            raise InvalidInput("Invalid reference user", field="reference_id") from None

    def _decided_interview(self, candidate):
        interview = self.interviews.find_open_by_candidate(candidate.id)
        if interview is not None:
            return interview
        # cancelled interviews never produced an outcome and are left alone
        for interview in self.interviews.list_by_candidate(candidate.id):
            if interview.status != InterviewStatus.CANCELLED.value:
                return interview
        return None

    def _require(self, candidate, allowed, operation, message):
        if CandidateStatus.parse(candidate.status) not in allowed:
            current_app.logger.warning('%s rejected for %s in status %s',
                                       operation, candidate.application_id, candidate.status)
            raise InvalidState(message, status=candidate.status, operation=operation)
