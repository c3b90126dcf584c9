from flask import current_app

from library_api.models.book import Book
from library_api.repositories.author_repo import AuthorRepo
from library_api.repositories.book_repo import BookRepo
from library_api.repositories.borrow_repo import BorrowRepo
from library_api.repositories.category_repo import CategoryRepo
from library_api.repositories.publisher_repo import PublisherRepo
from library_api.repositories.shelf_repo import ShelfRepo
from library_api.utils.errors import ConflictError, NotFoundError, ValidationError

BOOK_FIELDS = ("title", "isbn", "description", "publication_year", "cover_image", "publisher_id", "shelf_id")


class BookService:
    @staticmethod
    def list_books(**filters):
        return BookRepo.search(**filters)

    @staticmethod
    def get_book(book_id: int) -> Book:
        book = BookRepo.get_with_relations(book_id)
        if not book:
            raise NotFoundError("Book not found")
        return book

    @staticmethod
    def _resolve_references(data: dict, book_id=None):
        """Check uniqueness and foreign keys for the fields present in ``data``.
        Returns the (authors, categories) to attach, None where not given."""
        errors = {}

        isbn = data.get("isbn")
        if isbn:
            existing = BookRepo.get_by_isbn(isbn)
            if existing and existing.id != book_id:
                errors["isbn"] = ["The isbn has already been taken."]

        if data.get("publisher_id") is not None and not PublisherRepo.get(data["publisher_id"]):
            errors["publisher_id"] = ["The selected publisher_id is invalid."]
        if data.get("shelf_id") is not None and not ShelfRepo.get(data["shelf_id"]):
            errors["shelf_id"] = ["The selected shelf_id is invalid."]

        authors = categories = None
        if "author_ids" in data:
            authors = AuthorRepo.get_many(data["author_ids"])
            if len(authors) != len(data["author_ids"]):
                errors["author_ids"] = ["The selected author_ids is invalid."]
        if "category_ids" in data:
            categories = CategoryRepo.get_many(data["category_ids"])
            if len(categories) != len(data["category_ids"]):
                errors["category_ids"] = ["The selected category_ids is invalid."]

        if errors:
            raise ValidationError(errors)
        return authors, categories

    @staticmethod
    def create_book(data: dict) -> Book:
        authors, categories = BookService._resolve_references(data)

        total = data["total_copies"]
        available = data.get("available_copies")
        book = Book(
            **{k: data.get(k) for k in BOOK_FIELDS},
            total_copies=total,
            available_copies=total if available is None else available,
        )
        book.authors = authors
        book.categories = categories
        BookRepo.create(book)

        current_app.logger.info(f"[BookService] created book={book.id} isbn={book.isbn} copies={total}")
        return BookService.get_book(book.id)

    @staticmethod
    def update_book(book_id: int, data: dict) -> Book:
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError("Book not found")

        authors, categories = BookService._resolve_references(data, book_id=book.id)

        if "total_copies" in data and data["total_copies"] != book.total_copies:
            if not BookRepo.resize(book.id, data["total_copies"]):
                raise ValidationError({
                    "total_copies": ["The total_copies may not be lower than the copies currently on loan."]
                })

        for k in BOOK_FIELDS:
            if k in data:
                setattr(book, k, data[k])
        if authors is not None:
            book.authors = authors
        if categories is not None:
            book.categories = categories

        BookRepo.update()
        return BookService.get_book(book.id)

    @staticmethod
    def delete_book(book_id: int):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError("Book not found")
        if BorrowRepo.has_active_for_book(book_id):
            raise ConflictError("Cannot delete a book that is currently borrowed")

        book.authors = []
        book.categories = []
        BookRepo.delete(book)
        current_app.logger.info(f"[BookService] deleted book={book_id}")
