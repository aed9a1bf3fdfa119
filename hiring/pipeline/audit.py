from flask import current_app

from ..extensions import db
from ..models.status_change import StatusChange


def record_transition(candidate, operation, from_status, actor_id=None, note=None):
    """Stage an audit row for a status change in the current transaction."""
    to_status = candidate.status
    db.session.add(StatusChange(
        candidate_id=candidate.id,
        application_id=candidate.application_id,
        operation=operation,
        from_status=from_status,
        to_status=to_status,
        actor_id=actor_id,
        note=note,
    ))
    current_app.logger.info('%s: candidate %s %s -> %s (actor=%s)',
                            operation, candidate.application_id, from_status, to_status, actor_id)
