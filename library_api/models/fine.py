from datetime import datetime
from library_api.extensions import db


class Fine(db.Model):
    __tablename__ = "fines"
    __table_args__ = (
        db.CheckConstraint("amount > 0", name="ck_fines_amount"),
    )

    id = db.Column(db.Integer, primary_key=True)

    borrow_id = db.Column(db.Integer, db.ForeignKey("borrows.id"), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    reason = db.Column(db.String(255), nullable=False)

    is_paid = db.Column(db.Boolean, nullable=False, default=False)
    paid_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    borrow = db.relationship(
        "Borrow",
        backref=db.backref("fine", uselist=False, cascade="all, delete-orphan"),
    )
    user = db.relationship("User", backref="fines")
