from datetime import date

import pytest

from library_api.models import Reservation
from library_api.repositories.reservation_repo import ReservationRepo
from library_api.services.reservation_service import ReservationService
from library_api.utils.errors import ConflictError


def test_unique_index_backs_the_active_rule(users, make_book, monkeypatch):
    book = make_book()
    user_id = users["member"].id
    ReservationService.create_reservation(user_id, book.id, date(2024, 5, 1), date(2024, 5, 8))

    # a second request whose lookup ran before the first one committed
    monkeypatch.setattr(ReservationRepo, "find_active", staticmethod(lambda *args, **kwargs: None))

    with pytest.raises(ConflictError, match="active reservation"):
        ReservationService.create_reservation(user_id, book.id, date(2024, 5, 2), date(2024, 5, 9))
    assert Reservation.query.count() == 1


def test_index_ignores_inactive_reservations(users, make_book):
    book = make_book()
    user_id = users["member"].id
    first = ReservationService.create_reservation(user_id, book.id, date(2024, 5, 1), date(2024, 5, 8))
    ReservationService.update_status(first.id, "completed")

    second = ReservationService.create_reservation(user_id, book.id, date(2024, 6, 1), date(2024, 6, 8))
    assert second.status == "pending"
    assert Reservation.query.count() == 2
