from datetime import date

from flask import current_app

from library_api.extensions import db
from library_api.models.borrow import Borrow
from library_api.models.fine import Fine
from library_api.repositories.book_repo import BookRepo
from library_api.repositories.borrow_repo import BorrowRepo
from library_api.repositories.fine_repo import FineRepo
from library_api.repositories.user_repo import UserRepo
from library_api.services.fine_calculator import calculate_fine, days_late
from library_api.utils.errors import ConflictError, NotFoundError, ValidationError
from library_api.utils.validators import validate_return


class BorrowService:
    """Lending workflow. Every public method is one transaction: it commits on
    success, and on error the request's error handler rolls the session back."""

    @staticmethod
    def list_borrows(**filters):
        return BorrowRepo.search(**filters)

    @staticmethod
    def get_borrow(borrow_id: int) -> Borrow:
        borrow = BorrowRepo.get_with_relations(borrow_id)
        if not borrow:
            raise NotFoundError("Borrow record not found")
        return borrow

    @staticmethod
    def borrow_book(user_id: int, book_id: int, borrow_date: date, due_date: date, notes=None) -> Borrow:
        if due_date < borrow_date:
            raise ValidationError({"due_date": ["The due_date must be a date after or equal to borrow_date."]})

        if not UserRepo.get_by_id(user_id):
            raise NotFoundError("User not found")
        if not BookRepo.get(book_id):
            raise NotFoundError("Book not found")

        # decrement first; a concurrent borrow of the last copy loses here
        if not BookRepo.take_copy(book_id):
            raise ConflictError("Book is not available for borrow")

        borrow = BorrowRepo.add(Borrow(
            user_id=user_id,
            book_id=book_id,
            borrow_date=borrow_date,
            due_date=due_date,
            status="borrowed",
            fine_amount=0,
            notes=notes,
        ))
        BorrowRepo.commit()

        current_app.logger.info(
            f"[BorrowService] borrow={borrow.id} user={user_id} book={book_id} due={due_date}"
        )
        return BorrowService.get_borrow(borrow.id)

    @staticmethod
    def return_book(borrow_id: int, return_date, per_day=None) -> Borrow:
        borrow = BorrowRepo.get(borrow_id)
        if not borrow:
            raise NotFoundError("Borrow record not found")
        if borrow.status == "returned":
            raise ConflictError("Book already returned")

        return_date = validate_return({"return_date": return_date})["return_date"]

        if per_day is None:
            per_day = current_app.config["FINE_PER_DAY"]
        late = days_late(borrow.due_date, return_date)
        amount = calculate_fine(borrow.due_date, return_date, per_day)

        if not BorrowRepo.mark_returned(borrow.id, return_date, amount):
            raise ConflictError("Book already returned")

        if amount > 0:
            FineRepo.add(Fine(
                borrow_id=borrow.id,
                user_id=borrow.user_id,
                amount=amount,
                reason=f"Book returned {late} days late",
                is_paid=False,
            ))

        if not BookRepo.give_back_copy(borrow.book_id):
            current_app.logger.warning(
                f"[BorrowService] book={borrow.book_id} already at total_copies, counter not incremented"
            )

        BorrowRepo.commit()

        current_app.logger.info(
            f"[BorrowService] returned borrow={borrow_id} on={return_date} days_late={late} fine={amount}"
        )
        return BorrowService.get_borrow(borrow_id)

    @staticmethod
    def delete_borrow(borrow_id: int):
        borrow = BorrowRepo.get(borrow_id)
        if not borrow:
            raise NotFoundError("Borrow record not found")

        book_id = borrow.book_id
        if BorrowRepo.delete_if_open(borrow_id):
            # an outstanding loan goes back on the shelf
            BookRepo.give_back_copy(book_id)
        else:
            # already returned, possibly by a return that committed after our read
            db.session.refresh(borrow)
            if borrow.fine is not None:
                db.session.delete(borrow.fine)
            db.session.delete(borrow)
        BorrowRepo.commit()

        current_app.logger.info(f"[BorrowService] deleted borrow={borrow_id}")
