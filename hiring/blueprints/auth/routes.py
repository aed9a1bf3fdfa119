from flask import current_app, jsonify
from flask_login import login_user, logout_user, login_required, current_user

from . import bp
from .forms import LoginForm
from ...extensions import db
from ...models.user import User
from ...utils.forms import validated


@bp.post("/login")
def login():
    form = validated(LoginForm)
    email = form.email.data.strip().lower()
    user = db.session.execute(db.select(User).filter_by(email=email)).scalar_one_or_none()
    if user is None or not user.is_active or not user.check_password(form.password.data):
        current_app.logger.warning('Failed login for %s', email)
        return jsonify({"success": False, "error": "unauthorized", "message": "Invalid credentials"}), 401
    login_user(user)
    return jsonify({"success": True, "data": user.to_dict()})


@bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"success": True})


@bp.get("/me")
@login_required
def me():
    return jsonify({"success": True, "data": current_user.to_dict()})
