import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hiring.extensions import db
from hiring.models.user import User


def test_seed_admin_creates_once(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed-admin", "--email", "Root@Example.com", "--password", "s3cret-pass"])
    assert result.exit_code == 0, result.output
    assert "created root@example.com" in result.output

    user = db.session.execute(db.select(User).filter_by(email="root@example.com")).scalar_one()
    assert user.role == "Super Admin"
    assert user.check_password("s3cret-pass")

    result = runner.invoke(args=["seed-admin", "--email", "root@example.com", "--password", "other"])
    assert "already exists" in result.output
    assert db.session.execute(db.select(db.func.count()).select_from(User)).scalar() == 1


def test_seed_admin_requires_password(app):
    app.config["SEED_ADMIN_PASSWORD"] = None
    result = app.test_cli_runner().invoke(args=["seed-admin"])
    assert result.exit_code != 0
