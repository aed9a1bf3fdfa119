from ..statuses import CandidateStatus

PASS_THRESHOLD = 60
MIN_SCORE = 0
MAX_SCORE = 100


def derive_status(score, threshold=PASS_THRESHOLD):
    """Status a candidate moves to once their coding task is scored.

    Passing candidates become eligible for an interview; the rest are parked
    in Under Review, where staff may still promote them by hand.
    """
    if score >= threshold:
        return CandidateStatus.INTERVIEW_ELIGIBLE
    return CandidateStatus.UNDER_REVIEW


def normalize_score(score):
    """Integer score in range, or None. Integral floats such as 85.0 count."""
    if isinstance(score, bool):
        return None
    if isinstance(score, float) and score.is_integer():
        score = int(score)
    if not isinstance(score, int) or not MIN_SCORE <= score <= MAX_SCORE:
        return None
    return score


def is_valid_score(score):
    return normalize_score(score) is not None
