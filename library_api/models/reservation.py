from datetime import datetime
from library_api.extensions import db

RESERVATION_STATUSES = ("pending", "approved", "canceled", "completed")
ACTIVE_RESERVATION_STATUSES = ("pending", "approved")


class Reservation(db.Model):
    __tablename__ = "reservations"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    reservation_date = db.Column(db.Date, nullable=False)
    expiry_date = db.Column(db.Date, nullable=False)

    status = db.Column(db.String(20), nullable=False, default="pending")

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref="reservations")
    book = db.relationship("Book", backref=db.backref("reservations", cascade="all, delete-orphan"))


# at most one active reservation per (user, book); only emitted where partial
# indexes exist, other dialects rely on the check in ReservationService
db.Index(
    "uq_reservations_active_user_book",
    Reservation.user_id,
    Reservation.book_id,
    unique=True,
    sqlite_where=Reservation.status.in_(ACTIVE_RESERVATION_STATUSES),
    postgresql_where=Reservation.status.in_(ACTIVE_RESERVATION_STATUSES),
).ddl_if(dialect=("sqlite", "postgresql"))
