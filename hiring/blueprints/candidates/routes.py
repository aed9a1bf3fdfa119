from flask import jsonify, request
from flask_login import current_user

from . import bp
from .forms import EvaluationForm, StatusForm, FinalSelectionForm
from ...errors import InvalidInput
from ...extensions import db
from ...models.status_change import StatusChange
from ... import pipeline
from ...utils.decorators import permission_required
from ...utils.forms import validated, json_body, page_args


# public: applicants

@bp.post("/apply/<job_id>")
def apply(job_id):
    data = json_body()
    candidate = pipeline.get_engine().intake(job_id, data, data.get("cv_file_path"))
    return jsonify({
        "success": True,
        "message": "Application submitted successfully",
        "data": {
            "application_id": candidate.application_id,
            "name": candidate.name,
            "email": candidate.email,
            "status": candidate.status,
        },
    }), 201


@bp.get("/application/<application_id>")
def application_status(application_id):
    candidate = pipeline.get_engine().get_by_application_id(application_id)
    return jsonify({
        "success": True,
        "data": {
            "application_id": candidate.application_id,
            "name": candidate.name,
            "job": {"job_id": candidate.job.job_id, "title": candidate.job.title},
            "status": candidate.status,
            "task_submission": candidate.to_dict()["task_submission"],
            "interview_scheduled_date": (candidate.interview_scheduled_date.isoformat()
                                         if candidate.interview_scheduled_date else None),
        },
    })


@bp.post("/application/<application_id>/submit-task")
def submit_task(application_id):
    candidate = pipeline.get_engine().submit_task(application_id, json_body().get("links"))
    return jsonify({
        "success": True,
        "message": "Task submitted successfully",
        "data": {"application_id": candidate.application_id, "status": candidate.status},
    })


# staff

@bp.get("")
@permission_required("candidates.read")
def list_candidates():
    page, limit = page_args()
    items, pagination = pipeline.get_engine().list_candidates(
        search=request.args.get("search"),
        status=request.args.get("status"),
        job_code=request.args.get("job_id"),
        page=page,
        limit=limit,
    )
    return jsonify({"success": True, "data": [c.to_dict() for c in items], "pagination": pagination})


@bp.get("/<int:candidate_id>")
@permission_required("candidates.read")
def get_candidate(candidate_id):
    candidate = pipeline.get_engine().get_candidate(candidate_id)
    return jsonify({"success": True, "data": candidate.to_dict(include_interviews=True)})


@bp.put("/<int:candidate_id>")
@permission_required("candidates.edit")
def update_candidate(candidate_id):
    candidate = pipeline.get_engine().update_candidate(candidate_id, json_body(), current_user.id)
    return jsonify({"success": True, "message": "Candidate updated successfully", "data": candidate.to_dict()})


@bp.get("/<int:candidate_id>/history")
@permission_required("candidates.read")
def candidate_history(candidate_id):
    rows = db.session.execute(
        db.select(StatusChange).filter_by(candidate_id=candidate_id).order_by(StatusChange.id)
    ).scalars().all()
    return jsonify({"success": True, "data": [r.to_dict() for r in rows]})


@bp.post("/<int:candidate_id>/evaluate")
@permission_required("candidates.evaluate")
def evaluate(candidate_id):
    form = validated(EvaluationForm)
    candidate = pipeline.get_engine().evaluate(candidate_id, json_body().get("score"), form.comments.data, current_user.id)
    return jsonify({"success": True, "message": "Evaluation submitted", "data": candidate.to_dict()})


@bp.patch("/<int:candidate_id>/status")
@permission_required("candidates.override_status")
def update_status(candidate_id):
    form = validated(StatusForm)
    candidate = pipeline.get_engine().set_status(candidate_id, form.status.data, current_user.id, note=form.note.data)
    return jsonify({"success": True, "data": candidate.to_dict()})


@bp.post("/<int:candidate_id>/final-selection")
@permission_required("candidates.final_selection")
def final_selection(candidate_id):
    if "selected" not in json_body():
        raise InvalidInput("selected is required", field="selected")
    form = validated(FinalSelectionForm)
    candidate = pipeline.get_engine().finalize_selection(
        candidate_id, bool(form.selected.data), form.offer_letter_path.data or None, current_user.id
    )
    return jsonify({"success": True, "data": candidate.to_dict()})


@bp.delete("/<int:candidate_id>")
@permission_required("candidates.delete")
def delete_candidate(candidate_id):
    pipeline.get_engine().delete_candidate(candidate_id, current_user.id)
    return jsonify({"success": True, "message": "Candidate deleted"})
