from flask import current_app

from .engine import PipelineEngine
from .interviews import InterviewCoordinator
from .notifications import default_notifier


def init_pipeline(app, notifier=None):
    notifier = notifier or default_notifier(app)
    app.extensions["hiring.engine"] = PipelineEngine(notifier=notifier)
    app.extensions["hiring.interviews"] = InterviewCoordinator(notifier=notifier)


def get_engine():
    return current_app.extensions["hiring.engine"]


def get_coordinator():
    return current_app.extensions["hiring.interviews"]
