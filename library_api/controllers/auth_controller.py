from flask import Blueprint, request
from flask_jwt_extended import get_jwt

from library_api.services.auth_service import AuthService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import user_dict
from library_api.utils.validators import validate_register, validate_login, validate_role

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


@auth_bp.post("/register")
def register():
    data = validate_register(request.get_json(silent=True))
    user = AuthService.register(
        name=data["name"],
        email=data["email"],
        password=data["password"],
        phone_number=data.get("phone_number"),
        address=data.get("address"),
        role="member",  # never taken from the request
    )
    token = AuthService.issue_token(user)
    return ok({"user": user_dict(user), "token": token}, "User registered successfully", 201)


@auth_bp.post("/login")
def login():
    data = validate_login(request.get_json(silent=True))
    token, user = AuthService.login(data["email"], data["password"])
    return ok({"user": user_dict(user), "token": token}, "Login successful")


@auth_bp.post("/logout")
@role_required()
def logout(ctx):
    AuthService.logout(get_jwt()["jti"])
    return ok(message="Successfully logged out")


@auth_bp.get("/profile")
@role_required()
def profile(ctx):
    return ok(user_dict(AuthService.get_user(ctx.user_id)))


@auth_bp.get("/users")
@role_required("admin")
def list_users(ctx):
    return ok(paginate(AuthService.list_users(), user_dict))


@auth_bp.get("/users/<int:user_id>")
@role_required("admin")
def get_user(ctx, user_id: int):
    return ok(user_dict(AuthService.get_user(user_id)))


@auth_bp.put("/users/<int:user_id>/role")
@role_required("admin")
def update_user_role(ctx, user_id: int):
    AuthService.get_user(user_id)
    data = validate_role(request.get_json(silent=True))
    user = AuthService.update_role(user_id, data["role"])
    return ok(user_dict(user), "User role updated successfully")
