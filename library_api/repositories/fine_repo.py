from datetime import date

from sqlalchemy import update, false
from sqlalchemy.orm import selectinload

from library_api.models.fine import Fine
from library_api.extensions import db


class FineRepo:
    @staticmethod
    def get(fine_id: int):
        return db.session.get(Fine, fine_id)

    @staticmethod
    def get_with_relations(fine_id: int):
        return (
            Fine.query
            .options(selectinload(Fine.user), selectinload(Fine.borrow))
            .filter(Fine.id == fine_id)
            .first()
        )

    @staticmethod
    def search(user_id=None, is_paid=None, paid_date=None):
        q = Fine.query.options(selectinload(Fine.user), selectinload(Fine.borrow))
        if user_id is not None:
            q = q.filter(Fine.user_id == user_id)
        if is_paid is not None:
            q = q.filter(Fine.is_paid == is_paid)
        if paid_date is not None:
            q = q.filter(Fine.paid_date == paid_date)
        return q.order_by(Fine.id.desc())

    @staticmethod
    def add(fine: Fine):
        db.session.add(fine)
        return fine

    @staticmethod
    def mark_paid(fine_id: int, paid_date: date) -> bool:
        result = db.session.execute(
            update(Fine)
            .where(Fine.id == fine_id, Fine.is_paid == false())
            .values(is_paid=True, paid_date=paid_date)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def commit():
        db.session.commit()
