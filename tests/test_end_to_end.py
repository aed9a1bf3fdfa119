import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import timedelta

from hiring.extensions import db
from hiring.models.base import utcnow
from hiring.models.status_change import StatusChange
from hiring.statuses import CandidateStatus, Role


def test_happy_path_sends_four_notifications(engine, coordinator, make_job, make_user, applicant, notifier):
    job = make_job()
    evaluator = make_user(Role.EVALUATOR)
    interviewer = make_user(Role.HR)
    md = make_user(Role.MD)

    candidate = engine.intake(job.job_id, applicant(email="a@x.com"), "cvs/a.pdf")
    assert candidate.status == CandidateStatus.APPLIED.value

    candidate = engine.submit_task(candidate.application_id, [
        "https://github.com/a/task",
        "https://a.example.com/live",
        {"url": "https://github.com/a/tests", "type": "github"},
    ])
    assert candidate.status == CandidateStatus.TASK_SUBMITTED.value

    candidate = engine.evaluate(candidate.id, 85, "clean code", evaluator.id)
    assert candidate.status == CandidateStatus.INTERVIEW_ELIGIBLE.value

    interview = coordinator.schedule(candidate.id, utcnow() + timedelta(days=7), interviewer.id, md.id)
    assert candidate.status == CandidateStatus.INTERVIEW_SCHEDULED.value

    coordinator.complete(interview.id, "Passed", feedback="strong", actor_id=interviewer.id)
    assert candidate.status == CandidateStatus.SHORTLISTED.value

    candidate = engine.finalize_selection(candidate.id, True, None, md.id)
    assert candidate.status == CandidateStatus.SELECTED.value

    assert notifier.events == ["ApplicationReceived", "TaskSubmitted", "InterviewScheduled", "Selected"]
    assert {email for _, email, _ in notifier.sent} == {"a@x.com"}

    trail = db.session.execute(
        db.select(StatusChange.to_status).filter_by(candidate_id=candidate.id).order_by(StatusChange.id)
    ).scalars().all()
    assert trail == ["Applied", "Task Submitted", "Interview Eligible", "Interview Scheduled", "Shortlisted", "Selected"]
