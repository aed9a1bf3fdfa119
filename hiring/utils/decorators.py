from functools import wraps
from flask import abort
from flask_login import current_user

from ..statuses import Role

# higher rank includes every permission of the lower ones
ROLE_RANK = {
    Role.EVALUATOR.value: 1,
    Role.HR.value: 2,
    Role.MD.value: 3,
    Role.SUPER_ADMIN.value: 4,
}

# minimum role per operation
PERMISSIONS = {
    "candidates.read": Role.EVALUATOR,
    "candidates.evaluate": Role.EVALUATOR,
    "candidates.edit": Role.EVALUATOR,
    "candidates.override_status": Role.MD,
    "candidates.final_selection": Role.MD,
    "candidates.delete": Role.SUPER_ADMIN,
    "interviews.manage": Role.HR,
    "jobs.manage": Role.HR,
    "talents.manage": Role.HR,
    "experiences.manage": Role.HR,
    "users.manage": Role.SUPER_ADMIN,
}


def can_perform(role, operation):
    required = PERMISSIONS[operation]
    return ROLE_RANK.get(role, 0) >= ROLE_RANK[required.value]


def permission_required(operation):
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)
            if not can_perform(getattr(current_user, "role", None), operation):
                abort(403)
            return view(*args, **kwargs)
        return wrapped
    return decorator
