from sqlalchemy.orm import selectinload

from library_api.models.reservation import Reservation, ACTIVE_RESERVATION_STATUSES
from library_api.extensions import db


class ReservationRepo:
    @staticmethod
    def get(reservation_id: int):
        return db.session.get(Reservation, reservation_id)

    @staticmethod
    def get_with_relations(reservation_id: int):
        return (
            Reservation.query
            .options(selectinload(Reservation.user), selectinload(Reservation.book))
            .filter(Reservation.id == reservation_id)
            .first()
        )

    @staticmethod
    def find_active(user_id: int, book_id: int, exclude_id=None):
        q = Reservation.query.filter(
            Reservation.user_id == user_id,
            Reservation.book_id == book_id,
            Reservation.status.in_(ACTIVE_RESERVATION_STATUSES),
        )
        if exclude_id is not None:
            q = q.filter(Reservation.id != exclude_id)
        return q.first()

    @staticmethod
    def search(user_id=None, book_id=None, status=None):
        q = Reservation.query.options(selectinload(Reservation.user), selectinload(Reservation.book))
        if user_id is not None:
            q = q.filter(Reservation.user_id == user_id)
        if book_id is not None:
            q = q.filter(Reservation.book_id == book_id)
        if status:
            q = q.filter(Reservation.status == status)
        return q.order_by(Reservation.id.desc())

    @staticmethod
    def create(reservation: Reservation):
        db.session.add(reservation)
        db.session.commit()
        return reservation

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(reservation: Reservation):
        db.session.delete(reservation)
        db.session.commit()
