from flask import current_app, jsonify, request
from flask_login import current_user

from . import bp
from .forms import UserCreateForm, UserUpdateForm
from ...errors import Conflict, InvalidInput, NotFound
from ...extensions import db
from ...models.user import User
from ...pipeline.stores import transaction
from ...statuses import Role, values
from ...utils.decorators import permission_required
from ...utils.forms import validated


def _get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found", user_id=user_id)
    return user


@bp.get("")
@permission_required("users.manage")
def list_users():
    users = db.session.execute(db.select(User).order_by(User.id)).scalars().all()
    return jsonify({"success": True, "data": [u.to_dict() for u in users]})


@bp.get("/staff")
@permission_required("candidates.read")
def list_staff():
    """Active staff, for interviewer and reference pickers."""
    users = db.session.execute(
        db.select(User).filter_by(is_active=True).order_by(User.name)
    ).scalars().all()
    return jsonify({"success": True, "data": [{"id": u.id, "name": u.name, "role": u.role} for u in users]})


@bp.post("")
@permission_required("users.manage")
def create_user():
    form = validated(UserCreateForm)
    email = form.email.data.strip().lower()
    if db.session.execute(db.select(User.id).filter_by(email=email)).first():
        raise Conflict("A user with this email already exists", email=email)
    user = User(name=form.name.data.strip(), email=email, role=form.role.data)
    user.set_password(form.password.data)
    with transaction("create_user"):
        db.session.add(user)
    current_app.logger.info('User %s (%s) created by %s', user.id, user.role, current_user.id)
    return jsonify({"success": True, "data": user.to_dict()}), 201


@bp.patch("/<int:user_id>")
@permission_required("users.manage")
def update_user(user_id):
    user = _get_user(user_id)
    form = validated(UserUpdateForm)
    body = request.get_json(silent=True) or {}
    if form.role.data and form.role.data not in values(Role):
        raise InvalidInput("Invalid role", field="role")
    if user.id == current_user.id and (
        ("is_active" in body and not form.is_active.data) or (form.role.data and form.role.data != user.role)
    ):
        raise InvalidInput("You cannot demote or deactivate yourself")
    with transaction("update_user"):
        if form.name.data:
            user.name = form.name.data.strip()
        if form.role.data:
            user.role = form.role.data
        if "is_active" in body:
            user.is_active = form.is_active.data
    current_app.logger.info('User %s updated by %s', user.id, current_user.id)
    return jsonify({"success": True, "data": user.to_dict()})
