from datetime import date

from flask import current_app
from sqlalchemy.exc import IntegrityError

from library_api.extensions import db
from library_api.models.reservation import Reservation, ACTIVE_RESERVATION_STATUSES, RESERVATION_STATUSES
from library_api.repositories.book_repo import BookRepo
from library_api.repositories.reservation_repo import ReservationRepo
from library_api.repositories.user_repo import UserRepo
from library_api.utils.errors import ConflictError, NotFoundError, ValidationError

DUPLICATE_MESSAGE = "User already has an active reservation for this book"


class ReservationService:
    @staticmethod
    def list_reservations(**filters):
        return ReservationRepo.search(**filters)

    @staticmethod
    def get_reservation(reservation_id: int) -> Reservation:
        reservation = ReservationRepo.get_with_relations(reservation_id)
        if not reservation:
            raise NotFoundError("Reservation not found")
        return reservation

    @staticmethod
    def create_reservation(user_id: int, book_id: int, reservation_date: date, expiry_date: date) -> Reservation:
        if expiry_date <= reservation_date:
            raise ValidationError({"expiry_date": ["The expiry_date must be a date after reservation_date."]})

        if not UserRepo.get_by_id(user_id):
            raise NotFoundError("User not found")
        if not BookRepo.get(book_id):
            raise NotFoundError("Book not found")

        if ReservationRepo.find_active(user_id, book_id):
            raise ConflictError(DUPLICATE_MESSAGE)

        try:
            reservation = ReservationRepo.create(Reservation(
                user_id=user_id,
                book_id=book_id,
                reservation_date=reservation_date,
                expiry_date=expiry_date,
                status="pending",
            ))
        except IntegrityError:
            # lost a race against a concurrent reservation for the same pair
            db.session.rollback()
            raise ConflictError(DUPLICATE_MESSAGE)

        current_app.logger.info(
            f"[ReservationService] reservation={reservation.id} user={user_id} book={book_id}"
        )
        return ReservationService.get_reservation(reservation.id)

    @staticmethod
    def update_status(reservation_id: int, new_status: str) -> Reservation:
        reservation = ReservationRepo.get(reservation_id)
        if not reservation:
            raise NotFoundError("Reservation not found")
        if new_status not in RESERVATION_STATUSES:
            raise ValidationError({"status": ["The selected status is invalid."]})

        # no transition rules beyond the enum; only the one-active invariant is enforced
        if new_status in ACTIVE_RESERVATION_STATUSES and ReservationRepo.find_active(
            reservation.user_id, reservation.book_id, exclude_id=reservation.id
        ):
            raise ConflictError(DUPLICATE_MESSAGE)

        old_status = reservation.status
        reservation.status = new_status
        try:
            ReservationRepo.update()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError(DUPLICATE_MESSAGE)

        current_app.logger.info(
            f"[ReservationService] reservation={reservation_id} {old_status} -> {new_status}"
        )
        return ReservationService.get_reservation(reservation_id)

    @staticmethod
    def delete_reservation(reservation_id: int):
        reservation = ReservationRepo.get(reservation_id)
        if not reservation:
            raise NotFoundError("Reservation not found")
        ReservationRepo.delete(reservation)
