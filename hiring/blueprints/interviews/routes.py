from flask import jsonify, request
from flask_login import current_user

from . import bp
from .forms import ScheduleForm, RescheduleForm, CancelForm, CompleteForm
from ... import pipeline
from ...utils.decorators import permission_required
from ...utils.forms import validated, json_body, page_args, parse_datetime


@bp.post("/schedule")
@permission_required("interviews.manage")
def schedule():
    form = validated(ScheduleForm)
    interview = pipeline.get_coordinator().schedule(
        form.candidate_id.data,
        parse_datetime(form.scheduled_date.data, "scheduled_date"),
        form.interviewer_id.data,
        current_user.id,
        interview_type=form.interview_type.data,
        location=form.location.data,
        meeting_link=form.meeting_link.data or None,
        duration=json_body().get("duration"),
        notes=form.notes.data,
    )
    return jsonify({"success": True, "message": "Interview scheduled successfully", "data": interview.to_dict()}), 201


@bp.get("")
@permission_required("interviews.manage")
def list_interviews():
    page, limit = page_args()
    items, pagination = pipeline.get_coordinator().list(
        status=request.args.get("status"),
        result=request.args.get("result"),
        interviewer_id=request.args.get("interviewer_id", type=int),
        page=page,
        limit=limit,
    )
    return jsonify({"success": True, "data": [i.to_dict() for i in items], "pagination": pagination})


@bp.get("/upcoming")
@permission_required("interviews.manage")
def upcoming():
    limit = min(request.args.get("limit", default=10, type=int) or 10, 100)
    items = pipeline.get_coordinator().upcoming(limit=limit)
    return jsonify({"success": True, "data": [i.to_dict() for i in items]})


@bp.get("/candidate/<int:candidate_id>")
@permission_required("candidates.read")
def by_candidate(candidate_id):
    items = pipeline.get_coordinator().for_candidate(candidate_id)
    return jsonify({"success": True, "data": [i.to_dict() for i in items]})


@bp.get("/<int:interview_id>")
@permission_required("interviews.manage")
def get_interview(interview_id):
    return jsonify({"success": True, "data": pipeline.get_coordinator().get(interview_id).to_dict()})


@bp.put("/<int:interview_id>/reschedule")
@permission_required("interviews.manage")
def reschedule(interview_id):
    form = validated(RescheduleForm)
    interview = pipeline.get_coordinator().reschedule(
        interview_id, parse_datetime(form.scheduled_date.data, "scheduled_date"), current_user.id, notes=form.notes.data
    )
    return jsonify({"success": True, "message": "Interview rescheduled", "data": interview.to_dict()})


@bp.put("/<int:interview_id>/cancel")
@permission_required("interviews.manage")
def cancel(interview_id):
    form = validated(CancelForm)
    interview = pipeline.get_coordinator().cancel(interview_id, form.reason.data or None, current_user.id)
    return jsonify({"success": True, "message": "Interview cancelled", "data": interview.to_dict()})


@bp.put("/<int:interview_id>/complete")
@permission_required("interviews.manage")
def complete(interview_id):
    form = validated(CompleteForm)
    interview = pipeline.get_coordinator().complete(
        interview_id, form.result.data, feedback=form.feedback.data,
        score=json_body().get("score"), actor_id=current_user.id,
    )
    return jsonify({"success": True, "message": "Interview completed", "data": interview.to_dict()})
