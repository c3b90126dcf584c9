from datetime import datetime
from library_api.extensions import db

book_author = db.Table(
    "book_author",
    db.Column("book_id", db.Integer, db.ForeignKey("books.id"), primary_key=True),
    db.Column("author_id", db.Integer, db.ForeignKey("authors.id"), primary_key=True),
)

book_category = db.Table(
    "book_category",
    db.Column("book_id", db.Integer, db.ForeignKey("books.id"), primary_key=True),
    db.Column("category_id", db.Integer, db.ForeignKey("categories.id"), primary_key=True),
)


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("total_copies >= 0", name="ck_books_total_copies"),
        db.CheckConstraint(
            "available_copies >= 0 AND available_copies <= total_copies",
            name="ck_books_available_copies",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, index=True)
    isbn = db.Column(db.String(32), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    publication_year = db.Column(db.Integer, nullable=False)

    total_copies = db.Column(db.Integer, nullable=False, default=1)
    # only the borrow/return workflow moves this counter
    available_copies = db.Column(db.Integer, nullable=False, default=1)

    cover_image = db.Column(db.String(500), nullable=True)

    publisher_id = db.Column(db.Integer, db.ForeignKey("publishers.id"), nullable=True, index=True)
    shelf_id = db.Column(db.Integer, db.ForeignKey("shelves.id"), nullable=True, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    authors = db.relationship("Author", secondary=book_author, backref=db.backref("books", lazy="select"))
    categories = db.relationship("Category", secondary=book_category, backref=db.backref("books", lazy="select"))
    publisher = db.relationship("Publisher", backref="books")
    shelf = db.relationship("Shelf", backref="books")
