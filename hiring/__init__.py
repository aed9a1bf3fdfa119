import click
from flask import Flask, jsonify

from .errors import PipelineError, HTTP_STATUS
from .extensions import db, migrate, login_manager, rq


def create_app(config_object="config.Config", notifier=None):
    """Application factory.

    ``notifier`` overrides the candidate notification port; tests pass a
    recording fake so no mail or Redis is needed.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    rq.init_app(app)

    from . import models  # noqa: F401  register tables on db.metadata

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        user = db.session.get(User, int(user_id))
        return user if user is not None and user.is_active else None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"success": False, "error": "unauthorized", "message": "Login required"}), 401

    from .pipeline import init_pipeline
    init_pipeline(app, notifier=notifier)

    from .blueprints.auth import bp as auth_bp
    from .blueprints.users import bp as users_bp
    from .blueprints.jobs import bp as jobs_bp
    from .blueprints.candidates import bp as candidates_bp
    from .blueprints.interviews import bp as interviews_bp
    from .blueprints.experiences import bp as experiences_bp
    from .blueprints.talents import bp as talents_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(jobs_bp, url_prefix="/jobs")
    app.register_blueprint(candidates_bp, url_prefix="/candidates")
    app.register_blueprint(interviews_bp, url_prefix="/interviews")
    app.register_blueprint(experiences_bp, url_prefix="/experiences")
    app.register_blueprint(talents_bp, url_prefix="/talents")

    @app.errorhandler(PipelineError)
    def handle_pipeline_error(e):
        return jsonify(e.to_dict()), HTTP_STATUS.get(e.kind, 500)

    @app.errorhandler(401)
    def unauthenticated(e):
        return unauthorized()

    @app.errorhandler(403)
    def forbidden(e):
        return jsonify({"success": False, "error": "forbidden", "message": "Access denied"}), 403

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"success": False, "error": "not_found", "message": "Resource not found"}), 404

    @app.get("/health")
    def health():
        return jsonify({"success": True, "status": "ok"})

    @app.cli.command("seed-admin")
    @click.option("--email", default=None, help="defaults to SEED_ADMIN_EMAIL")
    @click.option("--password", default=None, help="defaults to SEED_ADMIN_PASSWORD")
    @click.option("--name", default="Super Admin")
    def seed_admin(email, password, name):
        """Create the first Super Admin account if it does not exist."""
        from .models.user import User
        from .statuses import Role
        email = (email or app.config.get("SEED_ADMIN_EMAIL") or "").strip().lower()
        password = password or app.config.get("SEED_ADMIN_PASSWORD")
        if not email or not password:
            raise click.UsageError("email and password are required")
        if db.session.execute(db.select(User).filter_by(email=email)).scalar_one_or_none():
            click.echo(f"{email} already exists")
            return
        user = User(name=name, email=email, role=Role.SUPER_ADMIN.value)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        app.logger.info('Seeded super admin %s', email)
        click.echo(f"created {email}")

    return app
