"""User management performed by admins."""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from quizmaster import db
from quizmaster.auth.models import User
from quizmaster.auth.service import VALID_ROLES
from quizmaster.errors import Forbidden, NotFound, ValidationError
from quizmaster.security import SecurityLogger


class UserAdminService:
    """Service class for admin operations on accounts."""

    @staticmethod
    def list_users() -> list[User]:
        return User.query.order_by(User.created_at.desc(), User.id.desc()).all()

    @staticmethod
    def _get_other_user(acting_admin_id: int, target_id: int, action: str) -> User:
        # An admin may never act on their own account through these operations
        if acting_admin_id == target_id:
            SecurityLogger.log_self_modification_blocked(acting_admin_id, action)
            raise Forbidden(f"Forbidden: Cannot {action} via this endpoint.")
        user = db.session.get(User, target_id)
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    def _warn_if_last_admin(user: User) -> None:
        if user.role != "admin":
            return
        remaining = User.query.filter(User.role == "admin", User.id != user.id).count()
        if remaining == 0:
            current_app.logger.warning(
                f"User {user.id} was the last admin; no admin accounts remain"
            )

    @staticmethod
    def change_role(acting_admin_id: int, target_id: int, role) -> User:
        user = UserAdminService._get_other_user(acting_admin_id, target_id, "change your own role")
        if role not in VALID_ROLES:
            raise ValidationError('Invalid role provided. Must be "user" or "admin".')

        old_role = user.role
        if old_role == "admin" and role != "admin":
            UserAdminService._warn_if_last_admin(user)
        user.role = role
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(f"Error while updating role of user {target_id}")
            raise
        SecurityLogger.log_role_change(acting_admin_id, user.id, old_role, role)
        return user

    @staticmethod
    def delete_user(acting_admin_id: int, target_id: int) -> int:
        """
        Delete an account and all of its results in one transaction.

        Quizzes the user authored are kept with their author reference cleared.
        Returns the number of results removed.
        """
        user = UserAdminService._get_other_user(acting_admin_id, target_id, "delete your own account")
        UserAdminService._warn_if_last_admin(user)
        removed_results = user.results.count()
        db.session.delete(user)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(f"Error while deleting user {target_id}")
            raise
        SecurityLogger.log_user_deleted(acting_admin_id, target_id)
        return removed_results
