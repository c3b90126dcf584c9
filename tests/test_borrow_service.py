import threading
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError

from library_api.extensions import db
from library_api.models import Book, Borrow, Fine
from library_api.services.borrow_service import BorrowService
from library_api.utils.errors import ConflictError, NotFoundError, ValidationError

BORROWED_ON = date(2024, 4, 1)
DUE = date(2024, 4, 15)


def _borrow(user, book, due=DUE):
    return BorrowService.borrow_book(user.id, book.id, BORROWED_ON, due)


def _assert_counter_in_range(book):
    assert 0 <= book.available_copies <= book.total_copies


def test_borrow_takes_one_copy(users, make_book, fresh):
    book = make_book(total=2)
    borrow = _borrow(users["member"], book)

    assert borrow.status == "borrowed"
    assert borrow.fine_amount == 0
    assert fresh(Book, book.id).available_copies == 1


def test_borrow_without_copies_is_refused(users, make_book, fresh):
    book = make_book(total=1, available=0)

    with pytest.raises(ConflictError, match="not available"):
        _borrow(users["member"], book)
    db.session.rollback()

    assert fresh(Book, book.id).available_copies == 0
    assert Borrow.query.count() == 0


def test_last_copy_goes_to_one_borrower(users, make_book, fresh):
    book = make_book(total=1)
    _borrow(users["member"], book)

    with pytest.raises(ConflictError):
        _borrow(users["librarian"], book)
    db.session.rollback()

    assert fresh(Book, book.id).available_copies == 0
    assert Borrow.query.count() == 1


def test_borrow_checks_the_row_not_the_loaded_object(app, users, make_book, fresh):
    book = make_book(total=1)
    assert book.available_copies == 1

    # another connection takes the copy behind this session's back
    with db.engine.begin() as conn:
        conn.execute(update(Book).where(Book.id == book.id).values(available_copies=0))

    with pytest.raises(ConflictError):
        _borrow(users["member"], book)
    db.session.rollback()
    assert fresh(Book, book.id).available_copies == 0


def test_borrow_unknown_user_or_book(users, make_book):
    book = make_book()
    with pytest.raises(NotFoundError, match="User not found"):
        BorrowService.borrow_book(9999, book.id, BORROWED_ON, DUE)
    with pytest.raises(NotFoundError, match="Book not found"):
        BorrowService.borrow_book(users["member"].id, 9999, BORROWED_ON, DUE)


def test_borrow_due_before_borrow_date(users, make_book):
    book = make_book()
    with pytest.raises(ValidationError):
        BorrowService.borrow_book(users["member"].id, book.id, DUE, BORROWED_ON)


def test_return_on_due_date_has_no_fine(users, make_book, fresh):
    book = make_book(total=1)
    borrow = _borrow(users["member"], book)

    returned = BorrowService.return_book(borrow.id, "2024-04-15")

    assert returned.status == "returned"
    assert returned.return_date == DUE
    assert returned.fine_amount == 0
    assert Fine.query.count() == 0
    assert fresh(Book, book.id).available_copies == 1


def test_late_return_creates_fine(users, make_book):
    book = make_book(total=1)
    borrow = _borrow(users["member"], book)

    returned = BorrowService.return_book(borrow.id, "2024-04-18")

    assert returned.fine_amount == Decimal("3000")
    fines = Fine.query.all()
    assert len(fines) == 1
    assert fines[0].amount == Decimal("3000")
    assert fines[0].is_paid is False
    assert fines[0].user_id == users["member"].id
    assert fines[0].reason == "Book returned 3 days late"


def test_return_twice_is_refused(users, make_book, fresh):
    book = make_book(total=1)
    borrow = _borrow(users["member"], book)
    BorrowService.return_book(borrow.id, "2024-04-20")

    with pytest.raises(ConflictError, match="already returned"):
        BorrowService.return_book(borrow.id, "2024-04-21")
    db.session.rollback()

    assert Fine.query.count() == 1
    assert fresh(Book, book.id).available_copies == 1


def test_return_needs_a_valid_date(users, make_book, fresh):
    borrow = _borrow(users["member"], make_book())

    with pytest.raises(ValidationError):
        BorrowService.return_book(borrow.id, "not-a-date")
    db.session.rollback()
    assert fresh(Borrow, borrow.id).status == "borrowed"


def test_return_unknown_borrow(app):
    with pytest.raises(NotFoundError, match="Borrow record not found"):
        BorrowService.return_book(12345, "2024-04-20")


def test_return_uses_the_given_rate(users, make_book):
    borrow = _borrow(users["member"], make_book())
    returned = BorrowService.return_book(borrow.id, "2024-04-17", per_day=Decimal("500"))
    assert returned.fine_amount == Decimal("1000")


def test_deleting_open_borrow_restores_the_copy(users, make_book, fresh):
    book = make_book(total=1)
    borrow = _borrow(users["member"], book)

    BorrowService.delete_borrow(borrow.id)

    assert Borrow.query.count() == 0
    assert fresh(Book, book.id).available_copies == 1


def test_deleting_returned_borrow_removes_its_fine(users, make_book, fresh):
    book = make_book(total=1)
    borrow = _borrow(users["member"], book)
    BorrowService.return_book(borrow.id, "2024-04-16")

    BorrowService.delete_borrow(borrow.id)

    assert Fine.query.count() == 0
    assert fresh(Book, book.id).available_copies == 1


def test_counter_stays_in_range(users, make_book, fresh):
    book = make_book(total=2)
    first = _borrow(users["member"], book)
    second = _borrow(users["librarian"], book)
    _assert_counter_in_range(fresh(Book, book.id))

    BorrowService.return_book(first.id, "2024-04-10")
    _assert_counter_in_range(fresh(Book, book.id))
    BorrowService.delete_borrow(second.id)
    BorrowService.delete_borrow(first.id)

    book = fresh(Book, book.id)
    _assert_counter_in_range(book)
    assert book.available_copies == 2


def _on_loan(book_id):
    return db.session.scalar(
        select(func.count(Borrow.id)).where(Borrow.book_id == book_id, Borrow.status == "borrowed")
    )


def test_delete_after_a_concurrent_return_restores_nothing(users, make_book, fresh):
    book = make_book(total=2)
    first = _borrow(users["member"], book)
    _borrow(users["librarian"], book)
    assert db.session.get(Borrow, first.id).status == "borrowed"

    # another connection returns the loan after this session has read it
    with db.engine.begin() as conn:
        conn.execute(update(Borrow).where(Borrow.id == first.id).values(status="returned", return_date=DUE))
        conn.execute(update(Book).where(Book.id == book.id).values(available_copies=Book.available_copies + 1))

    BorrowService.delete_borrow(first.id)

    book = fresh(Book, book.id)
    assert Borrow.query.count() == 1
    assert _on_loan(book.id) == 1
    assert book.available_copies == book.total_copies - _on_loan(book.id)


def test_concurrent_borrows_never_oversell(app, users, make_book, fresh):
    book_id = make_book(total=1).id
    borrowers = [users[role].id for role in ("admin", "librarian", "member")]
    barrier = threading.Barrier(len(borrowers))
    outcomes = []

    def attempt(user_id):
        # each thread gets its own app context and therefore its own session
        with app.app_context():
            barrier.wait()
            try:
                BorrowService.borrow_book(user_id, book_id, BORROWED_ON, DUE)
                outcomes.append("borrowed")
            except ConflictError:
                db.session.rollback()
                outcomes.append("conflict")
            except OperationalError:
                # sqlite may refuse the write lock instead of waiting for it
                db.session.rollback()
                outcomes.append("locked")

    threads = [threading.Thread(target=attempt, args=(user_id,)) for user_id in borrowers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(outcomes) == len(borrowers)
    assert outcomes.count("borrowed") <= 1
    book = fresh(Book, book_id)
    assert Borrow.query.count() == outcomes.count("borrowed")
    assert book.available_copies == 1 - outcomes.count("borrowed")
    _assert_counter_in_range(book)
