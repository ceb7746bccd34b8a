import hmac

from flask import current_app
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity

import const
from cafe.errors.exceptions import AuthError, ValidationError
from cafe.extensions import db
from cafe.lib.logger import logger
from cafe.models.user import User


class AuthService:

    @staticmethod
    def register(name, email, password, mobile=""):
        email = (email or "").strip().lower()
        if User.query.filter_by(email=email).first():
            raise ValidationError("Email already exists")
        user = User(name=name, email=email, mobile=mobile)
        user.set_password(password)
        user.save()
        logger.info(f"Registered user {user.id}")
        return user

    @staticmethod
    def login(email, password):
        user = User.query.filter_by(email=(email or "").strip().lower()).first()
        if not user or not user.check_password(password):
            raise AuthError("Invalid email or password")
        return user

    @staticmethod
    def login_admin(username, password):
        expected_user = current_app.config["ADMIN_USERNAME"]
        expected_password = current_app.config["ADMIN_PASSWORD"]
        user_ok = hmac.compare_digest(str(username or ""), expected_user)
        password_ok = hmac.compare_digest(str(password or ""), expected_password)
        if not (user_ok and password_ok):
            logger.warning(f"Failed admin login for '{username}'")
            raise AuthError("Invalid admin credentials")
        return AuthService.generate_admin_token()

    @staticmethod
    def generate_token(user):
        return create_access_token(
            identity=str(user.id), additional_claims={"is_admin": False}
        )

    @staticmethod
    def generate_admin_token():
        return create_access_token(
            identity=const.ADMIN_IDENTITY,
            additional_claims={"is_admin": True},
            expires_delta=current_app.config["JWT_ADMIN_TOKEN_EXPIRES"],
        )

    @staticmethod
    def is_admin():
        return bool(get_jwt().get("is_admin", False))

    @staticmethod
    def get_current_identity():
        """The logged-in ``User``; ``None`` for the admin token."""
        if AuthService.is_admin():
            return None
        subject = get_jwt_identity()
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            return None
        return db.session.get(User, user_id)

    @staticmethod
    def require_user():
        user = AuthService.get_current_identity()
        if not user:
            raise AuthError("User not found")
        return user
