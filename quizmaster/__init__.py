from flask import Flask, g, jsonify, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from quizmaster.config import config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()


def create_app(overrides: dict | None = None) -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    wires the session-token loader and registers blueprints.
    """
    # Re-initialize config to ensure latest .env values are loaded
    from quizmaster.config import Config
    global config
    config = Config()
    config.validate()

    app = Flask(__name__)
    app.config.update(config.to_flask_config())
    if overrides:
        app.config.update(overrides)

    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("mysql"):
        # Connection pooling and network timeouts for the MySQL store
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
            "connect_args": {
                "connect_timeout": 5,
                "read_timeout": 10,
                "write_timeout": 10,
                "charset": "utf8mb4",
            },
        }

    # Response compression settings
    app.config["COMPRESS_MIMETYPES"] = ["application/json"]
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    # Identity comes from the signed token cookie only, never from the Flask session
    login_manager.session_protection = None
    compress.init_app(app)

    from quizmaster.errors import register_error_handlers
    register_error_handlers(app)

    from quizmaster.security import init_security
    init_security(app)

    _init_session_loader(app)

    @app.route("/health")
    def health():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            current_app.logger.exception("Health check: store unreachable")
            return jsonify({"status": "unavailable"}), 503
        return jsonify({"status": "ok"}), 200

    # Register blueprints
    from quizmaster.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix=app.config["API_PREFIX"] or None)

    from quizmaster.quiz import quiz_bp
    app.register_blueprint(quiz_bp, url_prefix=app.config["API_PREFIX"] or None)

    from quizmaster.admin import admin_bp
    app.register_blueprint(admin_bp, url_prefix=f"{app.config['API_PREFIX']}/admin")

    from quizmaster.cli import register_cli
    register_cli(app)

    # Fail fast: never serve traffic without a reachable store
    with app.app_context():
        from quizmaster.auth.models import User  # noqa: F401
        from quizmaster.quiz.models import Quiz, Result  # noqa: F401
        try:
            db.session.execute(text("SELECT 1"))
            db.create_all()
        except SQLAlchemyError as exc:
            app.logger.critical(f"Store unreachable at startup: {exc}")
            raise RuntimeError("Cannot start without a reachable store") from exc

    app.logger.info("QuizMaster application created")
    return app


def _init_session_loader(app: Flask) -> None:
    """Resolve current_user from the session-token cookie on every request."""
    from quizmaster.auth.tokens import clear_session_cookie, verify_token
    from quizmaster.errors import Unauthorized
    from quizmaster.security import SecurityLogger

    @login_manager.request_loader
    def load_principal(request):
        token = request.cookies.get(current_app.config["SESSION_TOKEN_COOKIE"])
        if not token:
            g.auth_error = "Unauthorized: No token provided"
            return None
        try:
            return verify_token(token)
        except Unauthorized as exc:
            g.auth_error = exc.message
            # The client must re-authenticate; drop the stale artifact
            g.discard_session_cookie = True
            SecurityLogger.log_invalid_token(exc.message)
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthorized(g.get("auth_error", "Unauthorized: No token provided"))

    @app.after_request
    def discard_invalid_token(response):
        if g.get("discard_session_cookie"):
            clear_session_cookie(response)
        return response
