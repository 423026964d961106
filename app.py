# app.py - application factory
from flask import Flask, render_template, request, redirect, url_for, flash
from flask_migrate import Migrate
from flask_wtf import CSRFProtect
from flask_session import Session
from flask_wtf.csrf import CSRFError, generate_csrf
from dotenv import load_dotenv
from config import Config
from models import db, Snapshot
from sqlalchemy import text, inspect
import logging
import os

# Import blueprints
from routes.main_routes import main_bp
from routes.game_routes import game_bp
from routes.score_routes import score_bp


def create_app(test_config: dict | None = None):
    # Load environment variables from .env when running via flask/gunicorn
    load_dotenv()
    app = Flask(__name__, static_folder="static", template_folder="templates",
                instance_path=Config.INSTANCE_PATH)
    app.config.from_object(Config)

    # Allow overriding config for testing
    if test_config:
        app.config.update(test_config)
        # Disable CSRF in tests to simplify form posting
        if app.config.get('TESTING'):
            app.config['WTF_CSRF_ENABLED'] = False

    # SQLite in-memory (used by tests) doesn't support certain pool options; prune them
    uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if uri.startswith('sqlite') and (':memory:' in uri):
        engine_opts = dict(app.config.get('SQLALCHEMY_ENGINE_OPTIONS', {}))
        for k in ('pool_timeout', 'pool_recycle'):
            engine_opts.pop(k, None)
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = engine_opts

    # Initialize extensions
    db.init_app(app)
    Migrate(app, db)
    CSRFProtect(app)
    Session(app)

    # Migration / schema safety:
    #  - For local SQLite: auto-create tables if missing.
    #  - For Postgres/other: if tables missing, attempt alembic upgrade once.
    with app.app_context():
        inspector = inspect(db.engine)
        has_snapshot = inspector.has_table(Snapshot.__tablename__)

        if uri.startswith('sqlite'):
            if not has_snapshot:
                db.create_all()
                app.logger.info("sqlite_schema_created uri=%s", uri)
        elif not has_snapshot:
            from flask_migrate import upgrade
            app.logger.info("migration_check missing tables; running alembic upgrade")
            try:
                upgrade()
            except Exception as e:
                # Fail fast so 500 errors don't occur mid-request later
                raise RuntimeError(f"Database schema incomplete and automatic migration failed: {e}")
            if not inspect(db.engine).has_table(Snapshot.__tablename__):
                raise RuntimeError("Migration upgrade ran but the snapshot table is still missing.")

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(game_bp)
    app.register_blueprint(score_bp)

    # Inject csrf_token() helper for templates without FlaskForm
    @app.context_processor
    def inject_csrf_token():
        return dict(csrf_token=generate_csrf)

    # Error handlers
    @app.errorhandler(404)
    def not_found(e):
        return render_template("404.html"), 404

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.exception("Unhandled server error")
        return render_template("500.html"), 500

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        flash('Your session expired or the form is invalid. Please try again.', 'error')
        return redirect(request.referrer or url_for('main.index'))

    # Health check endpoint for uptime monitoring
    @app.route('/healthz', methods=['GET'])
    def healthz():
        status = {"status": "ok", "db": False}
        try:
            db.session.execute(text("SELECT 1"))
            status["db"] = True
        except Exception as e:
            app.logger.warning("healthz db ping failed: %s", str(e))
        # Set HEALTHZ_STRICT=1 to return 503 when db is unreachable
        strict = os.environ.get("HEALTHZ_STRICT", "0") == "1"
        code = 200 if (status["db"] or not strict) else 503
        return status, code

    # Basic security headers
    @app.after_request
    def set_security_headers(resp):
        resp.headers.setdefault('X-Frame-Options', 'DENY')
        resp.headers.setdefault('X-Content-Type-Options', 'nosniff')
        resp.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
        resp.headers.setdefault('Content-Security-Policy', "default-src 'self'; style-src 'self' https://cdn.jsdelivr.net 'unsafe-inline'; script-src 'self' https://cdn.jsdelivr.net; img-src 'self' data:;")
        return resp

    # Respect X-Forwarded-Proto for HTTPS redirects behind a proxy
    @app.before_request
    def _detect_proxy_scheme():
        xf_proto = request.headers.get('X-Forwarded-Proto')
        if xf_proto:
            request.environ['wsgi.url_scheme'] = xf_proto

    # Basic logging configuration with LOG_LEVEL override
    log_level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, log_level_name, logging.INFO)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s %(message)s')
    app.logger.info("startup log_level=%s db_url_scheme=%s", log_level_name, app.config['SQLALCHEMY_DATABASE_URI'].split(':')[0])

    return app

"""Application factory only module.

Gunicorn / production: use `gunicorn wsgi:app` (see wsgi.py).
Local dev: `flask --app wsgi run`.
Tests: import create_app and instantiate explicitly; no server starts on import.
"""
