from library_api.models.user import User, TokenBlocklist
from library_api.extensions import db


class UserRepo:
    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def list_query():
        return User.query.order_by(User.id.asc())

    @staticmethod
    def create(user: User):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def update():
        db.session.commit()


class TokenBlocklistRepo:
    @staticmethod
    def is_revoked(jti: str) -> bool:
        return TokenBlocklist.query.filter_by(jti=jti).first() is not None

    @staticmethod
    def revoke(jti: str):
        db.session.add(TokenBlocklist(jti=jti))
        db.session.commit()
