"""Projection of the authoritative Interview row onto its candidate.

These two functions are the only writers of the candidate's interview_*
columns, and they always run in the same transaction as the interview
write they reflect.
"""


def sync_interview_mirror(candidate, interview):
    candidate.current_interview_id = interview.id
    candidate.interview_scheduled_date = interview.scheduled_date
    candidate.interview_interviewer_id = interview.interviewer_id
    candidate.interview_location = interview.location
    candidate.interview_meeting_link = interview.meeting_link
    candidate.interview_result = interview.result
    candidate.interview_feedback = interview.feedback
    candidate.interview_completed_at = interview.completed_at


def clear_interview_mirror(candidate):
    candidate.current_interview_id = None
    candidate.interview_scheduled_date = None
    candidate.interview_interviewer_id = None
    candidate.interview_location = None
    candidate.interview_meeting_link = None
    candidate.interview_result = None
    candidate.interview_feedback = None
    candidate.interview_completed_at = None
