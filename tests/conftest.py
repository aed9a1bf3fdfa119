import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from hiring import create_app
from hiring.errors import DeliveryError
from hiring.extensions import db
from hiring.models.experience import Experience
from hiring.models.job import Job
from hiring.models.user import User
from hiring.pipeline.notifications import NotificationPort
from hiring.statuses import Role


class RecordingNotifier(NotificationPort):
    def __init__(self):
        self.sent = []
        self.fail = False

    def notify(self, event, email, name, payload):
        if self.fail:
            raise DeliveryError("provider unavailable")
        self.sent.append((event, email, payload))

    @property
    def events(self):
        return [e.value for e, _, _ in self.sent]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(notifier):
    app = create_app("config.TestConfig", notifier=notifier)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def engine(app):
    return app.extensions["hiring.engine"]


@pytest.fixture
def coordinator(app):
    return app.extensions["hiring.interviews"]


@pytest.fixture
def client(app):
    return app.test_client()


_counter = {"n": 0}


def _next():
    _counter["n"] += 1
    return _counter["n"]


@pytest.fixture
def make_user(app):
    def make(role=Role.HR, password="password123", **kw):
        n = _next()
        user = User(name=kw.pop("name", f"Staff {n}"), email=kw.pop("email", f"staff{n}@example.com"),
                    role=Role(role).value, **kw)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user
    return make


@pytest.fixture
def make_job(app):
    def make(**kw):
        n = _next()
        job = Job(
            job_id=kw.pop("job_id", f"JOB{n:05d}"),
            title=kw.pop("title", "Backend Engineer"),
            designation=kw.pop("designation", "Software Engineer"),
            salary_range=kw.pop("salary_range", "50k-70k"),
            job_description=kw.pop("job_description", "Build services."),
            is_active=kw.pop("is_active", True),
            **kw,
        )
        db.session.add(job)
        db.session.commit()
        return job
    return make


@pytest.fixture
def make_experience(app):
    def make(name=None, active=True):
        experience = Experience(name=name or f"Skill {_next()}", active=active)
        db.session.add(experience)
        db.session.commit()
        return experience
    return make


@pytest.fixture
def applicant():
    def build(**overrides):
        n = _next()
        data = {
            "name": "Ada Lovelace",
            "email": f"ada{n}@example.com",
            "phone": "+8801712345678",
            "years_of_experience": 3,
            "expected_salary": 60000,
            "notice_period_in_months": 1,
        }
        data.update(overrides)
        return data
    return build


@pytest.fixture
def applied(engine, make_job, applicant):
    """A fresh candidate in Applied status."""
    def make(job=None, **overrides):
        job = job or make_job()
        return engine.intake(job.job_id, applicant(**overrides), "cvs/ada.pdf")
    return make


@pytest.fixture
def eligible(engine, applied, make_user):
    """A candidate that passed evaluation (Interview Eligible)."""
    def make(**overrides):
        candidate = applied(**overrides)
        engine.submit_task(candidate.application_id, ["https://github.com/ada/task"])
        evaluator = make_user(Role.EVALUATOR)
        return engine.evaluate(candidate.id, 80, "solid", evaluator.id)
    return make


@pytest.fixture
def login(client):
    def do(user, password="password123"):
        resp = client.post("/auth/login", json={"email": user.email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp
    return do
