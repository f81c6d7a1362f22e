"""Account registration, credential checks and the profile view."""
from flask import current_app
from sqlalchemy.exc import IntegrityError

from quizmaster import db
from quizmaster.auth.models import User
from quizmaster.auth.utils import (
    hash_password,
    is_valid_email,
    normalize_email,
    validate_password,
    validate_username,
    verify_password,
)
from quizmaster.errors import (
    DuplicateResource,
    Forbidden,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from quizmaster.security import SecurityLogger

VALID_ROLES = ("user", "admin")


class AuthService:
    """Service class for the credential store."""

    @staticmethod
    def register_user(username, email, password, role=None) -> User:
        """
        Create a new account.

        Args:
            username: Unique display name
            email: Unique e-mail address (stored lower-cased)
            password: Plaintext password; only its bcrypt hash is stored
            role: Optional 'user' or 'admin'; 'admin' needs ALLOW_ADMIN_REGISTRATION

        Returns:
            The persisted User
        """
        username = username.strip() if isinstance(username, str) else ""
        email = normalize_email(email)
        password = password if isinstance(password, str) else ""

        if not username or not email or not password:
            raise ValidationError("Username, email and password are required")

        ok, error = validate_username(username)
        if not ok:
            raise ValidationError(error)

        if not is_valid_email(email):
            raise ValidationError("Please provide a valid email address")

        ok, error = validate_password(password)
        if not ok:
            raise ValidationError(error)

        role = role or "user"
        if role not in VALID_ROLES:
            raise ValidationError('Invalid role provided. Must be "user" or "admin".')
        if role == "admin" and not current_app.config["ALLOW_ADMIN_REGISTRATION"]:
            raise Forbidden("Forbidden: Admin accounts cannot be self-registered")

        if User.query.filter_by(email=email).first():
            raise DuplicateResource("User with this email already exists")
        if User.query.filter_by(username=username).first():
            raise DuplicateResource("User with this username already exists")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration with the same username/email
            db.session.rollback()
            raise DuplicateResource("User with this email or username already exists")

        current_app.logger.info(f"Registered user {user.id} ({user.email}) as {user.role}")
        return user

    @staticmethod
    def authenticate(email, password) -> User:
        """
        Check credentials.

        Unknown e-mail raises NotFound and a wrong password raises
        InvalidCredentials, unless UNIFY_LOGIN_ERRORS is set, in which case
        both raise InvalidCredentials with the same message.
        """
        email = normalize_email(email)
        password = password if isinstance(password, str) else ""
        if not email or not password:
            raise ValidationError("Email and password are required")

        unify = current_app.config["UNIFY_LOGIN_ERRORS"]
        user = User.query.filter_by(email=email).first()
        if not user:
            SecurityLogger.log_failed_login(email, "Unknown email")
            if unify:
                raise InvalidCredentials("Invalid email or password")
            raise NotFound("User not found")

        if not verify_password(password, user.password_hash):
            SecurityLogger.log_failed_login(email, "Wrong password")
            raise InvalidCredentials("Invalid email or password" if unify else "Invalid credentials")

        SecurityLogger.log_successful_login(user.id, user.email)
        return user

    @staticmethod
    def get_profile(user_id: int) -> dict:
        """The user (without password) and their results, newest first."""
        from quizmaster.quiz.models import Result

        user = db.session.get(User, user_id)
        if not user:
            raise NotFound("User not found")

        results = (
            user.results
            .options(db.joinedload(Result.quiz))
            .order_by(Result.created_at.desc(), Result.id.desc())
            .all()
        )
        results_data = [result.to_dict() for result in results]
        return {
            "user": user.to_dict(),
            "results": results_data,
            "totalScore": sum(r.score for r in results),
            "totalPossible": sum(r.total for r in results),
        }
