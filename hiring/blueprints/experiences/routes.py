from flask import current_app, jsonify, request
from flask_login import current_user
from sqlalchemy import func

from . import bp
from .forms import ExperienceForm
from ...errors import Conflict, NotFound
from ...extensions import db
from ...models.experience import Experience, candidate_experiences, talent_experiences
from ...pipeline.stores import transaction
from ...utils.decorators import permission_required
from ...utils.forms import validated, json_body


def _get(experience_id):
    experience = db.session.get(Experience, experience_id)
    if experience is None:
        raise NotFound("Experience not found", experience_id=experience_id)
    return experience


def _name_taken(name, exclude_id=None):
    stmt = db.select(Experience.id).filter(func.lower(Experience.name) == name.lower())
    if exclude_id is not None:
        stmt = stmt.filter(Experience.id != exclude_id)
    return db.session.execute(stmt).first() is not None


@bp.get("")
def list_experiences():
    """Public: the application forms need the active list."""
    query = db.select(Experience)
    active = request.args.get("active")
    if active in ("true", "false"):
        query = query.filter(Experience.active.is_(active == "true"))
    search = request.args.get("search")
    if search:
        query = query.filter(Experience.name.ilike(f"%{search}%"))
    items = db.session.execute(query.order_by(Experience.name)).scalars().all()
    return jsonify({"success": True, "data": [e.to_dict() for e in items], "total": len(items)})


@bp.post("")
@permission_required("experiences.manage")
def create_experience():
    form = validated(ExperienceForm)
    name = form.name.data.strip()
    if _name_taken(name):
        raise Conflict("Experience with this name already exists", name=name)
    active = form.active.data if "active" in json_body() else True
    experience = Experience(name=name, active=active)
    with transaction("create_experience"):
        db.session.add(experience)
    current_app.logger.info('Experience %r created by %s', name, current_user.id)
    return jsonify({"success": True, "data": experience.to_dict()}), 201


@bp.put("/<int:experience_id>")
@permission_required("experiences.manage")
def update_experience(experience_id):
    experience = _get(experience_id)
    form = validated(ExperienceForm)
    name = form.name.data.strip()
    if _name_taken(name, exclude_id=experience.id):
        raise Conflict("Experience with this name already exists", name=name)
    with transaction("update_experience"):
        experience.name = name
        if "active" in json_body():
            experience.active = form.active.data
    return jsonify({"success": True, "data": experience.to_dict()})


@bp.patch("/<int:experience_id>/toggle")
@permission_required("experiences.manage")
def toggle_experience(experience_id):
    experience = _get(experience_id)
    with transaction("toggle_experience"):
        experience.active = not experience.active
    current_app.logger.info('Experience %s active=%s by %s', experience.id, experience.active, current_user.id)
    return jsonify({"success": True, "data": experience.to_dict()})


@bp.delete("/<int:experience_id>")
@permission_required("experiences.manage")
def delete_experience(experience_id):
    experience = _get(experience_id)
    in_use = db.session.execute(
        db.select(candidate_experiences.c.candidate_id).filter_by(experience_id=experience.id).limit(1)
    ).first() or db.session.execute(
        db.select(talent_experiences.c.talent_id).filter_by(experience_id=experience.id).limit(1)
    ).first()
    if in_use:
        raise Conflict("Experience is in use; deactivate it instead", experience_id=experience.id)
    with transaction("delete_experience"):
        db.session.delete(experience)
    current_app.logger.info('Experience %s deleted by %s', experience_id, current_user.id)
    return jsonify({"success": True, "message": "Experience deleted"})
