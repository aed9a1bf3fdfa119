"""Interview sub-machine and its back-reference into the candidate.

Interview lifecycle (``status``)::

    Scheduled ──► Completed | Cancelled | Rescheduled
    Rescheduled ─► Completed | Cancelled | Rescheduled

Outcome (``result``) is a separate axis: Pending until complete() records
Taken, Passed, Failed, No Show or Cancelled. Only one open (Scheduled or
Rescheduled) interview may exist per candidate.
"""
from datetime import datetime, timezone

from flask import current_app

from ..errors import Conflict, InvalidInput, InvalidState
from ..models.base import utcnow
from ..models.interview import Interview
from ..statuses import (
    CandidateStatus,
    COMPLETION_RESULTS,
    InterviewLocation,
    InterviewResult,
    InterviewStatus,
    InterviewType,
    NotificationEvent,
    SCHEDULABLE_STATUSES,
)
from .audit import record_transition
from .evaluation import normalize_score
from .locking import candidate_locks
from .mirror import clear_interview_mirror, sync_interview_mirror
from .notifications import NullNotifier, dispatch
from .stores import CandidateStore, InterviewStore, StaffDirectory, transaction
from .validation import is_valid_url

MIN_DURATION = 15
MAX_DURATION = 240

# candidate status after complete(), keyed by interview result
_RESULT_TO_STATUS = {
    InterviewResult.PASSED: CandidateStatus.SHORTLISTED,
    InterviewResult.FAILED: CandidateStatus.REJECTED,
    InterviewResult.NO_SHOW: CandidateStatus.REJECTED,
    InterviewResult.TAKEN: CandidateStatus.INTERVIEW_COMPLETED,
    InterviewResult.CANCELLED: CandidateStatus.INTERVIEW_COMPLETED,
}


def candidate_status_for_result(result):
    return _RESULT_TO_STATUS[InterviewResult(result)]


def _parse_enum(enum_cls, value, field, default):
    if value in (None, ""):
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidInput(f"Invalid {field}", field=field, value=value) from None


def _require_datetime(value, field="scheduled_date"):
    if not isinstance(value, datetime):
        raise InvalidInput("Valid scheduled date is required", field=field)
    if value.tzinfo is not None:
        # stored as naive UTC
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class InterviewCoordinator:
    def __init__(self, notifier=None, candidates=None, interviews=None, staff=None, locks=None):
        self.notifier = notifier or NullNotifier()
        self.candidates = candidates or CandidateStore()
        self.interviews = interviews or InterviewStore()
        self.staff = staff or StaffDirectory()
        self.locks = locks or candidate_locks

    # reads

    def get(self, interview_id):
        return self.interviews.get(interview_id)

    def list(self, **filters):
        return self.interviews.list(**filters)

    def for_candidate(self, candidate_id):
        self.candidates.get(candidate_id)
        return self.interviews.list_by_candidate(candidate_id)

    def upcoming(self, limit=10):
        return self.interviews.upcoming(utcnow(), limit=limit)

    # transitions

    def schedule(self, candidate_id, scheduled_date, interviewer_id, scheduler_id,
                 interview_type=None, location=None, meeting_link=None, duration=60, notes=None):
        scheduled_date = _require_datetime(scheduled_date)
        interview_type = _parse_enum(InterviewType, interview_type, "interview_type", InterviewType.TECHNICAL)
        location = _parse_enum(InterviewLocation, location, "location", InterviewLocation.IN_PERSON)
        duration = 60 if duration is None else duration
        if not isinstance(duration, int) or not MIN_DURATION <= duration <= MAX_DURATION:
            raise InvalidInput(f"Duration must be between {MIN_DURATION} and {MAX_DURATION} minutes", field="duration")
        if location is InterviewLocation.ONLINE:
            if not is_valid_url(meeting_link):
                raise InvalidInput("Meeting link must be a valid URL", field="meeting_link")
        else:
            meeting_link = None

        with self.locks.hold(candidate_id):
            candidate = self.candidates.get(candidate_id, for_update=True)
            if CandidateStatus.parse(candidate.status) not in SCHEDULABLE_STATUSES:
                current_app.logger.warning('schedule rejected for %s in status %s',
                                           candidate.application_id, candidate.status)
                raise InvalidState("Candidate is not eligible for interview",
                                   status=candidate.status, operation="schedule")
            interviewer = self.staff.get(interviewer_id)
            open_interview = self.interviews.find_open_by_candidate(candidate.id)
            if open_interview is not None:
                raise Conflict("Candidate already has an open interview",
                               interview_id=open_interview.id, candidate_id=candidate.id)

            previous = candidate.status
            with transaction("schedule_interview"):
                interview = self.interviews.create(Interview(
                    candidate_id=candidate.id,
                    job_pk=candidate.job_pk,
                    scheduled_date=scheduled_date,
                    duration=duration,
                    interviewer_id=interviewer.id,
                    scheduled_by_id=scheduler_id,
                    interview_type=interview_type.value,
                    location=location.value,
                    meeting_link=meeting_link,
                    notes=notes,
                    status=InterviewStatus.SCHEDULED.value,
                    result=InterviewResult.PENDING.value,
                ))
                candidate.status = CandidateStatus.INTERVIEW_SCHEDULED.value
                sync_interview_mirror(candidate, interview)
                record_transition(candidate, "schedule_interview", previous, scheduler_id,
                                  note=f"interview={interview.id}")
            interviewer_name = interviewer.name

        self._notify_scheduled(candidate, interview, interviewer_name)
        return interview

    def reschedule(self, interview_id, new_date, actor_id, notes=None):
        new_date = _require_datetime(new_date)
        candidate_id = self.interviews.get(interview_id).candidate_id

        with self.locks.hold(candidate_id):
            interview = self.interviews.get(interview_id, for_update=True)
            self._require_open(interview, "reschedule", require_pending=True)
            candidate = self.candidates.get(candidate_id, for_update=True)
            with transaction("reschedule_interview"):
                fields = {
                    "scheduled_date": new_date,
                    "status": InterviewStatus.RESCHEDULED.value,
                    "rescheduled_at": utcnow(),
                    "rescheduled_by_id": actor_id,
                }
                if notes:
                    fields["notes"] = notes
                self.interviews.update(interview, **fields)
                sync_interview_mirror(candidate, interview)
            interviewer_name = interview.interviewer.name if interview.interviewer else None
            current_app.logger.info('reschedule_interview: interview %s of %s moved to %s by %s',
                                    interview.id, candidate.application_id, new_date.isoformat(), actor_id)

        self._notify_scheduled(candidate, interview, interviewer_name)
        return interview

    def cancel(self, interview_id, reason, actor_id):
        candidate_id = self.interviews.get(interview_id).candidate_id

        with self.locks.hold(candidate_id):
            interview = self.interviews.get(interview_id, for_update=True)
            if interview.result != InterviewResult.PENDING.value:
                current_app.logger.warning('cancel rejected for interview %s with result %s',
                                           interview.id, interview.result)
                raise InvalidState("Cannot cancel completed interview",
                                   result=interview.result, operation="cancel")
            self._require_open(interview, "cancel")
            candidate = self.candidates.get(candidate_id, for_update=True)
            previous = candidate.status
            with transaction("cancel_interview"):
                self.interviews.update(
                    interview,
                    status=InterviewStatus.CANCELLED.value,
                    cancelled_at=utcnow(),
                    cancelled_by_id=actor_id,
                    cancellation_reason=reason,
                )
                candidate.status = CandidateStatus.INTERVIEW_ELIGIBLE.value
                clear_interview_mirror(candidate)
                record_transition(candidate, "cancel_interview", previous, actor_id, note=reason)
        return interview

    def complete(self, interview_id, result, feedback=None, score=None, actor_id=None):
        try:
            result = InterviewResult(result)
        except ValueError:
            raise InvalidInput("Invalid interview result", field="result", result=result) from None
        if result not in COMPLETION_RESULTS:
            raise InvalidInput("Invalid interview result", field="result", result=result.value)
        if score is not None:
            score = normalize_score(score)
            if score is None:
                raise InvalidInput("Score must be between 0 and 100", field="score")

        candidate_id = self.interviews.get(interview_id).candidate_id

        with self.locks.hold(candidate_id):
            interview = self.interviews.get(interview_id, for_update=True)
            self._require_open(interview, "complete", require_pending=True)
            candidate = self.candidates.get(candidate_id, for_update=True)
            previous = candidate.status
            with transaction("complete_interview"):
                fields = {
                    "status": InterviewStatus.COMPLETED.value,
                    "result": result.value,
                    "feedback": feedback,
                    "completed_at": utcnow(),
                    "completed_by_id": actor_id,
                }
                if score is not None:
                    fields["score"] = score
                self.interviews.update(interview, **fields)
                candidate.status = candidate_status_for_result(result).value
                sync_interview_mirror(candidate, interview)
                record_transition(candidate, "complete_interview", previous, actor_id,
                                  note=f"interview={interview.id} result={result.value}")
        return interview

    # helpers

    def _require_open(self, interview, operation, require_pending=False):
        if not interview.is_open or (require_pending and interview.result != InterviewResult.PENDING.value):
            current_app.logger.warning('%s rejected for interview %s (status=%s, result=%s)',
                                       operation, interview.id, interview.status, interview.result)
            raise InvalidState("Interview is no longer open",
                               status=interview.status, result=interview.result, operation=operation)

    def _notify_scheduled(self, candidate, interview, interviewer_name):
        dispatch(self.notifier, NotificationEvent.INTERVIEW_SCHEDULED, candidate,
                 interview_id=interview.id,
                 interview_date=interview.scheduled_date.isoformat(),
                 interviewer=interviewer_name,
                 location=interview.location,
                 meeting_link=interview.meeting_link)
