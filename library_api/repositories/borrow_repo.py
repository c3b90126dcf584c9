from datetime import date

from sqlalchemy import delete, update
from sqlalchemy.orm import selectinload

from library_api.models.borrow import Borrow
from library_api.models.notification_log import NotificationLog
from library_api.extensions import db


class BorrowRepo:
    @staticmethod
    def get(borrow_id: int):
        return db.session.get(Borrow, borrow_id)

    @staticmethod
    def get_with_relations(borrow_id: int):
        return (
            Borrow.query
            .options(selectinload(Borrow.user), selectinload(Borrow.book), selectinload(Borrow.fine))
            .filter(Borrow.id == borrow_id)
            .first()
        )

    @staticmethod
    def search(user_id=None, book_id=None, status=None, from_date=None, to_date=None):
        q = Borrow.query.options(selectinload(Borrow.user), selectinload(Borrow.book))
        if user_id is not None:
            q = q.filter(Borrow.user_id == user_id)
        if book_id is not None:
            q = q.filter(Borrow.book_id == book_id)
        if status:
            q = q.filter(Borrow.status == status)
        if from_date and to_date:
            q = q.filter(Borrow.borrow_date.between(from_date, to_date))
        return q.order_by(Borrow.id.desc())

    @staticmethod
    def has_active_for_book(book_id: int) -> bool:
        return Borrow.query.filter(Borrow.book_id == book_id, Borrow.status == "borrowed").first() is not None

    @staticmethod
    def find_overdue(today: date):
        return (
            Borrow.query
            .options(selectinload(Borrow.user), selectinload(Borrow.book))
            .filter(Borrow.status == "borrowed", Borrow.due_date < today)
            .order_by(Borrow.due_date.asc())
            .all()
        )

    @staticmethod
    def add(borrow: Borrow):
        db.session.add(borrow)
        return borrow

    @staticmethod
    def mark_returned(borrow_id: int, return_date: date, fine_amount) -> bool:
        """borrowed -> returned, once. False if someone else returned it first."""
        result = db.session.execute(
            update(Borrow)
            .where(Borrow.id == borrow_id, Borrow.status == "borrowed")
            .values(status="returned", return_date=return_date, fine_amount=fine_amount)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def delete_if_open(borrow_id: int) -> bool:
        """Delete a borrow only while it is still out. False if it was returned meanwhile."""
        db.session.execute(
            delete(NotificationLog)
            .where(NotificationLog.borrow_id == borrow_id)
            .execution_options(synchronize_session=False)
        )
        result = db.session.execute(
            delete(Borrow)
            .where(Borrow.id == borrow_id, Borrow.status == "borrowed")
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def commit():
        db.session.commit()
