from datetime import datetime
from library_api.extensions import db

BORROW_STATUSES = ("borrowed", "returned")


class Borrow(db.Model):
    __tablename__ = "borrows"
    __table_args__ = (
        db.CheckConstraint("due_date >= borrow_date", name="ck_borrows_due_after_borrow"),
        db.CheckConstraint("fine_amount >= 0", name="ck_borrows_fine_amount"),
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    borrow_date = db.Column(db.Date, nullable=False)
    due_date = db.Column(db.Date, nullable=False)
    return_date = db.Column(db.Date, nullable=True)

    status = db.Column(db.String(20), nullable=False, default="borrowed")  # borrowed/returned
    fine_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref="borrows")
    book = db.relationship("Book", backref=db.backref("borrows", cascade="all, delete-orphan"))
