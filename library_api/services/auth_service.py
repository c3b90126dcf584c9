from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token

from library_api.models.user import User, ROLES
from library_api.repositories.user_repo import UserRepo, TokenBlocklistRepo
from library_api.utils.errors import AuthenticationError, NotFoundError, ValidationError


class AuthService:
    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "email": user.email},
        )

    @staticmethod
    def register(name: str, email: str, password: str, role: str = "member",
                 phone_number=None, address=None) -> User:
        if role not in ROLES:
            raise ValidationError({"role": ["The selected role is invalid."]})
        if UserRepo.get_by_email(email):
            raise ValidationError({"email": ["The email has already been taken."]})

        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            phone_number=phone_number,
            address=address,
            role=role,
        )
        UserRepo.create(user)
        current_app.logger.info(f"[AuthService] registered user={user.id} role={role}")
        return user

    @staticmethod
    def login(email: str, password: str):
        user = UserRepo.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            raise AuthenticationError("Invalid credentials")
        return AuthService.issue_token(user), user

    @staticmethod
    def logout(jti: str):
        TokenBlocklistRepo.revoke(jti)

    @staticmethod
    def get_user(user_id: int) -> User:
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def list_users():
        return UserRepo.list_query()

    @staticmethod
    def update_role(user_id: int, role: str) -> User:
        user = AuthService.get_user(user_id)
        if role not in ROLES:
            raise ValidationError({"role": ["The selected role is invalid."]})
        old_role = user.role
        user.role = role
        UserRepo.update()
        current_app.logger.info(f"[AuthService] user={user_id} role {old_role} -> {role}")
        return user
