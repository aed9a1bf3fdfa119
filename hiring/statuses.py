"""Closed value sets for the hiring pipeline.

All enums inherit from ``(str, Enum)`` so members compare equal to the plain
strings stored in the database and serialize naturally at the API boundary.
"""

from enum import Enum


class CandidateStatus(str, Enum):
    APPLIED = "Applied"
    TASK_PENDING = "Task Pending"
    TASK_SUBMITTED = "Task Submitted"
    UNDER_REVIEW = "Under Review"
    INTERVIEW_ELIGIBLE = "Interview Eligible"
    INTERVIEW_SCHEDULED = "Interview Scheduled"
    INTERVIEW_COMPLETED = "Interview Completed"
    SHORTLISTED = "Shortlisted"
    SELECTED = "Selected"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value):
        """Return the member for ``value`` or None when it is not a status."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_terminal(self):
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({CandidateStatus.SELECTED, CandidateStatus.REJECTED})

# statuses from which a (re)submission of the coding task is accepted
TASK_SUBMISSION_STATUSES = frozenset({CandidateStatus.APPLIED, CandidateStatus.TASK_PENDING})

# statuses from which an interview may be scheduled
SCHEDULABLE_STATUSES = frozenset({CandidateStatus.INTERVIEW_ELIGIBLE, CandidateStatus.SHORTLISTED})


class InterviewStatus(str, Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    RESCHEDULED = "Rescheduled"


OPEN_INTERVIEW_STATUSES = frozenset({InterviewStatus.SCHEDULED, InterviewStatus.RESCHEDULED})


class InterviewResult(str, Enum):
    PENDING = "Pending"
    TAKEN = "Taken"
    PASSED = "Passed"
    FAILED = "Failed"
    NO_SHOW = "No Show"
    # the meeting was called off while being held; distinct from the
    # Cancelled lifecycle status set by cancel()
    CANCELLED = "Cancelled"


COMPLETION_RESULTS = frozenset({
    InterviewResult.TAKEN,
    InterviewResult.PASSED,
    InterviewResult.FAILED,
    InterviewResult.NO_SHOW,
    InterviewResult.CANCELLED,
})


class InterviewType(str, Enum):
    TECHNICAL = "Technical"
    HR = "HR"
    FINAL = "Final"
    PANEL = "Panel"


class InterviewLocation(str, Enum):
    ONLINE = "Online"
    IN_PERSON = "In-Person"


class LinkType(str, Enum):
    GITHUB = "github"
    LIVE = "live"
    OTHER = "other"


class Role(str, Enum):
    SUPER_ADMIN = "Super Admin"
    MD = "MD"
    HR = "HR"
    EVALUATOR = "Evaluator"


class NotificationEvent(str, Enum):
    APPLICATION_RECEIVED = "ApplicationReceived"
    TASK_SUBMITTED = "TaskSubmitted"
    INTERVIEW_SCHEDULED = "InterviewScheduled"
    SELECTED = "Selected"
    REJECTED = "Rejected"


def values(enum_cls):
    return [m.value for m in enum_cls]
