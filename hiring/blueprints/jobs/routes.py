from flask import current_app, jsonify, request
from flask_login import current_user
from sqlalchemy import or_

from . import bp
from .forms import JobForm
from ...errors import Conflict, NotFound
from ...extensions import db
from ...models.job import Job
from ...pipeline import identity
from ...pipeline.stores import paginate, transaction
from ...utils.decorators import permission_required
from ...utils.forms import validated, page_args


def _job_id_exists(code):
    return db.session.execute(db.select(Job.id).filter_by(job_id=code)).first() is not None


def _get_job(job_pk):
    job = db.session.get(Job, job_pk)
    if job is None:
        raise NotFound("Job not found", job_id=job_pk)
    return job


@bp.get("/public")
def public_jobs():
    jobs = db.session.execute(
        db.select(Job).filter_by(is_active=True).order_by(Job.created_at.desc())
    ).scalars().all()
    return jsonify({"success": True, "data": [j.to_dict() for j in jobs]})


@bp.get("/public/<job_id>")
def public_job(job_id):
    job = db.session.execute(db.select(Job).filter_by(job_id=job_id, is_active=True)).scalar_one_or_none()
    if job is None:
        raise NotFound("Job not found or inactive", job_id=job_id)
    return jsonify({"success": True, "data": job.to_dict()})


@bp.get("")
@permission_required("jobs.manage")
def list_jobs():
    page, limit = page_args()
    query = db.select(Job)
    search = request.args.get("search")
    if search:
        like = f"%{search}%"
        query = query.filter(or_(Job.title.ilike(like), Job.designation.ilike(like), Job.job_id.ilike(like)))
    active = request.args.get("is_active")
    if active in ("true", "false"):
        query = query.filter(Job.is_active.is_(active == "true"))
    pagination = db.paginate(query.order_by(Job.created_at.desc()), page=page, per_page=limit, error_out=False)
    return jsonify({
        "success": True,
        "data": [j.to_dict() for j in pagination.items],
        "pagination": paginate(page, limit, pagination.total or 0),
    })


@bp.get("/<int:job_pk>")
@permission_required("jobs.manage")
def get_job(job_pk):
    job = _get_job(job_pk)
    data = job.to_dict()
    data["candidate_count"] = job.candidates.count()
    return jsonify({"success": True, "data": data})


@bp.post("")
@permission_required("jobs.manage")
def create_job():
    form = validated(JobForm)
    job = Job(created_by_id=current_user.id)
    form.populate_obj(job)
    if "is_active" not in (request.get_json(silent=True) or {}):
        job.is_active = True
    with transaction("create_job"):
        job.job_id = identity.allocate(identity.JOB, _job_id_exists)
        db.session.add(job)
    current_app.logger.info('Job %s created by %s', job.job_id, current_user.id)
    return jsonify({"success": True, "data": job.to_dict()}), 201


@bp.put("/<int:job_pk>")
@permission_required("jobs.manage")
def update_job(job_pk):
    job = _get_job(job_pk)
    form = validated(JobForm)
    body = request.get_json(silent=True) or {}
    with transaction("update_job"):
        active = job.is_active
        form.populate_obj(job)
        if "is_active" not in body:
            job.is_active = active
    current_app.logger.info('Job %s updated by %s', job.job_id, current_user.id)
    return jsonify({"success": True, "data": job.to_dict()})


@bp.patch("/<int:job_pk>/toggle")
@permission_required("jobs.manage")
def toggle_job(job_pk):
    job = _get_job(job_pk)
    with transaction("toggle_job"):
        job.is_active = not job.is_active
    current_app.logger.info('Job %s is_active=%s by %s', job.job_id, job.is_active, current_user.id)
    return jsonify({"success": True, "data": job.to_dict()})


@bp.delete("/<int:job_pk>")
@permission_required("jobs.manage")
def delete_job(job_pk):
    job = _get_job(job_pk)
    if job.candidates.count():
        raise Conflict("Job has applications; deactivate it instead", job_id=job.job_id)
    code = job.job_id
    with transaction("delete_job"):
        db.session.delete(job)
    current_app.logger.info('Job %s deleted by %s', code, current_user.id)
    return jsonify({"success": True, "message": "Job deleted successfully"})
