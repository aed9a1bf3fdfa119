from flask import current_app, jsonify, request
from flask_login import current_user
from sqlalchemy import or_

from . import bp
from ...errors import InvalidInput, NotFound
from ...extensions import db
from ...models.talent import Talent
from ...pipeline import identity
from ...pipeline.stores import ExperienceCatalog, StaffDirectory, paginate, transaction
from ...pipeline.validation import clean_applicant, clean_profile_edit
from ...utils.decorators import permission_required
from ...utils.forms import json_body, page_args


def _talent_id_exists(code):
    return db.session.execute(db.select(Talent.id).filter_by(talent_pool_id=code)).first() is not None


def _get(talent_id):
    talent = db.session.get(Talent, talent_id)
    if talent is None:
        raise NotFound("Talent not found", talent_id=talent_id)
    return talent


def _truthy(value):
    return value is True or str(value).lower() == "true"


def _check_reference(user_id):
    if user_id is None:
        return
    try:
        StaffDirectory().get(user_id)
    except NotFound:
        raise InvalidInput("Invalid reference user", field="reference_id") from None


@bp.post("/submit")
def submit():
    """Public talent-pool entry, not tied to any job or pipeline status."""
    data = json_body()
    fields = clean_applicant(data, data.get("cv_file_path"))
    experiences = ExperienceCatalog().active(fields.pop("core_experience"))
    _check_reference(fields["reference_id"])
    talent = Talent(
        current_employment_status=_truthy(data.get("current_employment_status", True)),
        current_company_name=(data.get("current_company_name") or None),
        write_about_yourself=(data.get("write_about_yourself") or ""),
        **fields,
    )
    talent.core_experience = experiences
    with transaction("submit_talent"):
        talent.talent_pool_id = identity.allocate(identity.TALENT_POOL, _talent_id_exists)
        db.session.add(talent)
    current_app.logger.info('Talent %s submitted', talent.talent_pool_id)
    return jsonify({
        "success": True,
        "message": "Talent profile submitted successfully",
        "data": {"talent_pool_id": talent.talent_pool_id},
    }), 201


@bp.get("/public/<talent_pool_id>")
def public_talent(talent_pool_id):
    talent = db.session.execute(
        db.select(Talent).filter_by(talent_pool_id=talent_pool_id, is_active=True)
    ).scalar_one_or_none()
    if talent is None:
        raise NotFound("Talent not found or inactive", talent_pool_id=talent_pool_id)
    return jsonify({"success": True, "data": talent.to_dict()})


@bp.get("")
@permission_required("talents.manage")
def list_talents():
    page, limit = page_args()
    query = db.select(Talent)
    search = request.args.get("search")
    if search:
        like = f"%{search}%"
        query = query.filter(or_(
            Talent.name.ilike(like),
            Talent.email.ilike(like),
            Talent.talent_pool_id.ilike(like),
            Talent.current_company_name.ilike(like),
        ))
    for flag in ("is_active", "current_employment_status"):
        value = request.args.get(flag)
        if value in ("true", "false"):
            query = query.filter(getattr(Talent, flag).is_(value == "true"))
    pagination = db.paginate(query.order_by(Talent.submission_date.desc()), page=page, per_page=limit, error_out=False)
    return jsonify({
        "success": True,
        "data": [t.to_dict() for t in pagination.items],
        "pagination": paginate(page, limit, pagination.total or 0),
    })


@bp.get("/<int:talent_id>")
@permission_required("talents.manage")
def get_talent(talent_id):
    return jsonify({"success": True, "data": _get(talent_id).to_dict()})


@bp.patch("/<int:talent_id>/toggle")
@permission_required("talents.manage")
def toggle_talent(talent_id):
    talent = _get(talent_id)
    with transaction("toggle_talent"):
        talent.is_active = not talent.is_active
    return jsonify({"success": True, "data": talent.to_dict()})


@bp.put("/<int:talent_id>")
@permission_required("talents.manage")
def update_talent(talent_id):
    talent = _get(talent_id)
    data = json_body()
    fields = clean_profile_edit(data)
    experiences = None
    if "core_experience" in fields:
        experiences = ExperienceCatalog().active(fields.pop("core_experience"))
    _check_reference(fields.get("reference_id"))
    if "cv_file_path" in data:
        cv = data["cv_file_path"]
        if not isinstance(cv, str) or not cv.strip():
            raise InvalidInput("CV file is required", field="cv_file_path")
        fields["cv_file_path"] = cv.strip()
    for flag in ("current_employment_status", "is_active"):
        if flag in data:
            fields[flag] = _truthy(data[flag])
    if "current_company_name" in data:
        fields["current_company_name"] = data["current_company_name"] or None
    if "write_about_yourself" in data:
        fields["write_about_yourself"] = data["write_about_yourself"] or ""
    for key in ("current_company_name", "write_about_yourself"):
        if fields.get(key) is not None and not isinstance(fields[key], str):
            raise InvalidInput(f"{key} must be a string", field=key)

    with transaction("update_talent"):
        for key, value in fields.items():
            setattr(talent, key, value)
        if experiences is not None:
            talent.core_experience = experiences
    current_app.logger.info('Talent %s updated by %s', talent.talent_pool_id, current_user.id)
    return jsonify({"success": True, "message": "Talent updated successfully", "data": talent.to_dict()})


@bp.delete("/<int:talent_id>")
@permission_required("talents.manage")
def delete_talent(talent_id):
    talent = _get(talent_id)
    code = talent.talent_pool_id
    with transaction("delete_talent"):
        db.session.delete(talent)
    current_app.logger.info('Talent %s deleted by %s', code, current_user.id)
    return jsonify({"success": True, "message": "Talent deleted successfully"})
