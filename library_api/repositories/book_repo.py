from sqlalchemy import update, func
from sqlalchemy.orm import selectinload

from library_api.models.book import Book
from library_api.models.author import Author
from library_api.models.category import Category
from library_api.extensions import db
from library_api.repositories.query_helpers import contains_any

BOOK_RELATIONS = (
    selectinload(Book.authors),
    selectinload(Book.categories),
    selectinload(Book.publisher),
    selectinload(Book.shelf),
)


class BookRepo:
    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def get_with_relations(book_id: int):
        return Book.query.options(*BOOK_RELATIONS).filter(Book.id == book_id).first()

    @staticmethod
    def get_by_isbn(isbn: str):
        return Book.query.filter_by(isbn=isbn).first()

    @staticmethod
    def search(search=None, category_id=None, author_id=None, publisher_id=None,
               shelf_id=None, available=False, title=None):
        q = Book.query.options(*BOOK_RELATIONS)
        if search:
            q = q.filter(contains_any([Book.title, Book.isbn, Book.description], search))
        if title:
            q = q.filter(contains_any([Book.title], title))
        if category_id is not None:
            q = q.filter(Book.categories.any(Category.id == category_id))
        if author_id is not None:
            q = q.filter(Book.authors.any(Author.id == author_id))
        if publisher_id is not None:
            q = q.filter(Book.publisher_id == publisher_id)
        if shelf_id is not None:
            q = q.filter(Book.shelf_id == shelf_id)
        if available:
            q = q.filter(Book.available_copies > 0)
        return q.order_by(Book.id.desc())

    @staticmethod
    def count_on_shelf(shelf_id: int) -> int:
        return db.session.scalar(
            db.select(func.count(Book.id)).where(Book.shelf_id == shelf_id)
        )

    @staticmethod
    def clear_publisher(publisher_id: int):
        db.session.execute(
            update(Book)
            .where(Book.publisher_id == publisher_id)
            .values(publisher_id=None)
            .execution_options(synchronize_session=False)
        )

    # --- inventory counter: conditional updates, caller commits ---

    @staticmethod
    def take_copy(book_id: int) -> bool:
        """Atomically take one copy off the shelf. False when none is left."""
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies > 0)
            .values(available_copies=Book.available_copies - 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def give_back_copy(book_id: int) -> bool:
        """Atomically put one copy back, never above total_copies."""
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies < Book.total_copies)
            .values(available_copies=Book.available_copies + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def resize(book_id: int, new_total: int) -> bool:
        """Change total_copies, shifting available_copies by the same delta.
        False when the new total would leave fewer copies than are out."""
        delta = new_total - Book.total_copies
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies + delta >= 0)
            .values(total_copies=new_total, available_copies=Book.available_copies + delta)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
        db.session.commit()
