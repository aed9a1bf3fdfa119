import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from hiring.statuses import CandidateStatus, Role
from hiring.utils.decorators import can_perform


@pytest.mark.parametrize("role,operation,allowed", [
    (Role.EVALUATOR, "candidates.evaluate", True),
    (Role.EVALUATOR, "interviews.manage", False),
    (Role.HR, "interviews.manage", True),
    (Role.HR, "candidates.final_selection", False),
    (Role.MD, "candidates.final_selection", True),
    (Role.MD, "candidates.delete", False),
    (Role.SUPER_ADMIN, "candidates.delete", True),
    (None, "candidates.read", False),
])
def test_can_perform(role, operation, allowed):
    assert can_perform(role.value if role else None, operation) is allowed


def test_public_apply_and_track(client, make_job, applicant, notifier):
    job = make_job()
    resp = client.post(f"/candidates/apply/{job.job_id}", json=dict(applicant(), cv_file_path="cvs/a.pdf"))
    assert resp.status_code == 201
    application_id = resp.get_json()["data"]["application_id"]

    resp = client.get(f"/candidates/application/{application_id}")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "Applied"

    resp = client.post(f"/candidates/application/{application_id}/submit-task",
                       json={"links": ["https://github.com/ada/task"]})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "Task Submitted"


def test_error_kinds_map_to_http_status(client, make_job, applicant):
    job = make_job()
    body = dict(applicant(), cv_file_path="cvs/a.pdf")

    resp = client.post("/candidates/apply/NOPE0000", json=body)
    assert resp.status_code == 404
    assert resp.get_json() == {
        "success": False, "error": "not_found", "message": "Job not found or inactive",
        "details": {"job_id": "NOPE0000"},
    }

    assert client.post(f"/candidates/apply/{job.job_id}", json=body).status_code == 201
    resp = client.post(f"/candidates/apply/{job.job_id}", json=body)
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "conflict"

    resp = client.post(f"/candidates/apply/{job.job_id}", json=dict(body, email="bad"))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_input"

    resp = client.get("/candidates/application/APP-0-MISSING")
    assert resp.status_code == 404


@pytest.mark.parametrize("overrides", [
    {"name": 12345},
    {"phone": 8801712345678},
    {"name": ["Ada"]},
])
def test_apply_with_wrongly_typed_fields_is_400(client, make_job, applicant, overrides):
    job = make_job()
    resp = client.post(f"/candidates/apply/{job.job_id}", json=dict(applicant(**overrides), cv_file_path="cvs/a.pdf"))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_input"


def test_submit_task_with_list_link_type_is_400(client, applied):
    candidate = applied()
    resp = client.post(f"/candidates/application/{candidate.application_id}/submit-task",
                       json={"links": [{"url": "https://github.com/a/b", "type": ["github"]}]})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_input"


def test_evaluate_accepts_whole_number_float(client, login, make_user, applied, engine):
    candidate = applied()
    engine.submit_task(candidate.application_id, ["https://github.com/ada/task"])
    login(make_user(Role.EVALUATOR))
    resp = client.post(f"/candidates/{candidate.id}/evaluate", json={"score": 85.0})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["evaluation"]["score"] == 85


def test_invalid_state_is_409(client, applied):
    candidate = applied()
    client.post(f"/candidates/application/{candidate.application_id}/submit-task",
                json={"links": ["https://github.com/ada/task"]})
    resp = client.post(f"/candidates/application/{candidate.application_id}/submit-task",
                       json={"links": ["https://github.com/ada/task"]})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "invalid_state"


def test_staff_routes_require_login(client, applied):
    candidate = applied()
    resp = client.get(f"/candidates/{candidate.id}")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthorized"


def test_login_rejects_bad_password(client, make_user):
    user = make_user(Role.HR)
    resp = client.post("/auth/login", json={"email": user.email, "password": "wrong-password"})
    assert resp.status_code == 401


def test_evaluator_can_evaluate_but_not_finalize(client, login, make_user, applied, engine):
    candidate = applied()
    engine.submit_task(candidate.application_id, ["https://github.com/ada/task"])
    login(make_user(Role.EVALUATOR))

    resp = client.post(f"/candidates/{candidate.id}/evaluate", json={"score": 60, "comments": "ok"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == CandidateStatus.INTERVIEW_ELIGIBLE.value

    resp = client.post(f"/candidates/{candidate.id}/final-selection", json={"selected": True})
    assert resp.status_code == 403


def test_evaluate_rejects_fractional_score(client, login, make_user, applied, engine):
    candidate = applied()
    engine.submit_task(candidate.application_id, ["https://github.com/ada/task"])
    login(make_user(Role.EVALUATOR))
    resp = client.post(f"/candidates/{candidate.id}/evaluate", json={"score": 60.5})
    assert resp.status_code == 400


def test_md_override_and_final_selection(client, login, make_user, applied, notifier):
    candidate = applied()
    login(make_user(Role.MD))

    resp = client.patch(f"/candidates/{candidate.id}/status", json={"status": "Shortlisted", "note": "referral"})
    assert resp.status_code == 200
    resp = client.patch(f"/candidates/{candidate.id}/status", json={"status": "Hired"})
    assert resp.status_code == 400

    resp = client.post(f"/candidates/{candidate.id}/final-selection", json={"selected": False})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "Rejected"
    assert notifier.events[-1] == "Rejected"

    resp = client.get(f"/candidates/{candidate.id}/history")
    assert [h["to_status"] for h in resp.get_json()["data"]] == ["Applied", "Shortlisted", "Rejected"]


def test_interview_routes(client, login, make_user, eligible):
    candidate = eligible()
    hr = make_user(Role.HR)
    login(hr)

    resp = client.post("/interviews/schedule", json={
        "candidate_id": candidate.id,
        "interviewer_id": hr.id,
        "scheduled_date": "2030-03-01T09:30:00Z",
        "location": "Online",
        "meeting_link": "https://meet.example.com/x",
        "duration": 30,
    })
    assert resp.status_code == 201, resp.get_json()
    interview = resp.get_json()["data"]
    assert interview["scheduled_date"] == "2030-03-01T09:30:00"

    resp = client.post("/interviews/schedule", json={
        "candidate_id": candidate.id, "interviewer_id": hr.id, "scheduled_date": "2030-03-02T09:30:00",
    })
    assert resp.status_code == 409

    resp = client.put(f"/interviews/{interview['id']}/reschedule", json={"scheduled_date": "2030-03-05T10:00:00"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "Rescheduled"

    resp = client.put(f"/interviews/{interview['id']}/complete", json={"result": "Great"})
    assert resp.status_code == 400

    resp = client.put(f"/interviews/{interview['id']}/complete", json={"result": "No Show"})
    assert resp.status_code == 200

    resp = client.put(f"/interviews/{interview['id']}/cancel", json={"reason": "late"})
    assert resp.status_code == 409

    resp = client.get(f"/interviews/candidate/{candidate.id}")
    assert len(resp.get_json()["data"]) == 1
    resp = client.get(f"/candidates/{candidate.id}")
    assert resp.get_json()["data"]["status"] == "Rejected"


def test_evaluator_cannot_schedule(client, login, make_user, eligible):
    candidate = eligible()
    evaluator = make_user(Role.EVALUATOR)
    login(evaluator)
    resp = client.post("/interviews/schedule", json={
        "candidate_id": candidate.id, "interviewer_id": evaluator.id, "scheduled_date": "2030-03-01T09:30:00",
    })
    assert resp.status_code == 403


def test_jobs_crud_and_public_listing(client, login, make_user):
    login(make_user(Role.HR))
    resp = client.post("/jobs", json={
        "title": "Platform Engineer",
        "designation": "Senior Engineer",
        "salary_range": "80k-100k",
        "job_description": "Own the platform.",
    })
    assert resp.status_code == 201, resp.get_json()
    job = resp.get_json()["data"]
    assert len(job["job_id"]) == 8
    assert job["is_active"] is True

    assert client.get(f"/jobs/public/{job['job_id']}").status_code == 200
    resp = client.patch(f"/jobs/{job['id']}/toggle")
    assert resp.get_json()["data"]["is_active"] is False
    assert client.get(f"/jobs/public/{job['job_id']}").status_code == 404
    assert client.get("/jobs/public").get_json()["data"] == []


def test_super_admin_manages_users(client, login, make_user):
    admin = make_user(Role.SUPER_ADMIN)
    login(admin)
    resp = client.post("/users", json={
        "name": "New Evaluator", "email": "new.eval@example.com", "password": "password123", "role": "Evaluator",
    })
    assert resp.status_code == 201
    user_id = resp.get_json()["data"]["id"]

    resp = client.post("/users", json={
        "name": "Dup", "email": "NEW.EVAL@example.com", "password": "password123", "role": "HR",
    })
    assert resp.status_code == 409

    resp = client.patch(f"/users/{user_id}", json={"role": "HR", "is_active": False})
    assert resp.get_json()["data"] == {
        "id": user_id, "name": "New Evaluator", "email": "new.eval@example.com", "role": "HR", "is_active": False,
    }

    resp = client.patch(f"/users/{admin.id}", json={"is_active": False})
    assert resp.status_code == 400


def test_hr_cannot_manage_users(client, login, make_user):
    login(make_user(Role.HR))
    assert client.get("/users").status_code == 403


def test_experiences_and_talent_pool(client, login, make_user):
    login(make_user(Role.HR))
    resp = client.post("/experiences", json={"name": "Python"})
    assert resp.status_code == 201
    python_id = resp.get_json()["data"]["id"]
    assert client.post("/experiences", json={"name": "python"}).status_code == 409

    client.post("/auth/logout")
    resp = client.get("/experiences?active=true")
    assert [e["name"] for e in resp.get_json()["data"]] == ["Python"]

    resp = client.post("/talents/submit", json={
        "name": "Linus",
        "email": "linus@example.com",
        "phone": "+15550001111",
        "cv_file_path": "cvs/linus.pdf",
        "years_of_experience": 10,
        "expected_salary": 120000,
        "notice_period_in_months": 2,
        "current_employment_status": "false",
        "core_experience": [python_id],
    })
    assert resp.status_code == 201, resp.get_json()
    assert len(resp.get_json()["data"]["talent_pool_id"]) == 8

    login(make_user(Role.HR))
    resp = client.get("/talents?current_employment_status=false")
    talents = resp.get_json()["data"]
    assert [t["name"] for t in talents] == ["Linus"]
    assert talents[0]["core_experience"][0]["name"] == "Python"

    resp = client.delete(f"/experiences/{python_id}")
    assert resp.status_code == 409


def test_candidate_edit_route(client, login, make_user, applied):
    candidate = applied()
    login(make_user(Role.EVALUATOR))

    resp = client.put(f"/candidates/{candidate.id}", json={"name": "Ada King", "notice_period_in_months": 2})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["name"] == "Ada King"
    assert data["notice_period_in_months"] == 2
    assert data["status"] == "Applied"

    resp = client.put(f"/candidates/{candidate.id}", json={"status": "Selected"})
    assert resp.status_code == 400
    assert client.get(f"/candidates/{candidate.id}").get_json()["data"]["status"] == "Applied"


def test_job_delete_refuses_jobs_with_applications(client, login, make_user, make_job, applied):
    login(make_user(Role.HR))
    empty = make_job()
    busy = make_job()
    applied(job=busy)

    assert client.delete(f"/jobs/{empty.id}").status_code == 200
    assert client.get(f"/jobs/{empty.id}").status_code == 404

    resp = client.delete(f"/jobs/{busy.id}")
    assert resp.status_code == 409
    assert client.get(f"/jobs/{busy.id}").status_code == 200


def test_experience_toggle(client, login, make_user, make_experience):
    experience = make_experience("Go")
    login(make_user(Role.HR))
    resp = client.patch(f"/experiences/{experience.id}/toggle")
    assert resp.get_json()["data"]["active"] is False
    resp = client.patch(f"/experiences/{experience.id}/toggle")
    assert resp.get_json()["data"]["active"] is True


def test_talent_lookup_update_and_delete(client, login, make_user, make_experience):
    go = make_experience("Go")
    resp = client.post("/talents/submit", json={
        "name": "Grace",
        "email": "grace@example.com",
        "phone": "+15550002222",
        "cv_file_path": "cvs/grace.pdf",
        "years_of_experience": 12,
        "expected_salary": 150000,
        "notice_period_in_months": 3,
    })
    assert resp.status_code == 201, resp.get_json()
    pool_id = resp.get_json()["data"]["talent_pool_id"]

    resp = client.get(f"/talents/public/{pool_id}")
    assert resp.status_code == 200
    talent_id = resp.get_json()["data"]["id"]
    assert client.get("/talents/public/NOPE0000").status_code == 404

    login(make_user(Role.HR))
    resp = client.put(f"/talents/{talent_id}", json={
        "current_company_name": "Navy",
        "current_employment_status": "false",
        "core_experience": [go.id],
    })
    assert resp.status_code == 200, resp.get_json()
    data = resp.get_json()["data"]
    assert data["current_company_name"] == "Navy"
    assert data["current_employment_status"] is False
    assert [e["name"] for e in data["core_experience"]] == ["Go"]

    assert client.put(f"/talents/{talent_id}", json={"phone": 15550002222}).status_code == 400

    resp = client.patch(f"/talents/{talent_id}/toggle")
    assert resp.get_json()["data"]["is_active"] is False
    client.post("/auth/logout")
    assert client.get(f"/talents/public/{pool_id}").status_code == 404

    login(make_user(Role.HR))
    assert client.delete(f"/talents/{talent_id}").status_code == 200
    assert client.get(f"/talents/{talent_id}").status_code == 404
