from datetime import datetime
from library_api.extensions import db

ROLES = ("admin", "librarian", "member")


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    phone_number = db.Column(db.String(20), nullable=True)
    address = db.Column(db.Text, nullable=True)

    role = db.Column(db.String(20), nullable=False, default="member")  # admin/librarian/member

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)


class TokenBlocklist(db.Model):
    __tablename__ = "token_blocklist"

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(64), nullable=False, unique=True, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
