from flask import Blueprint, request

from library_api.services.book_service import BookService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import book_dict
from library_api.utils.validators import validate_book

book_bp = Blueprint("books", __name__, url_prefix="/api")


def _list(**filters):
    books = BookService.list_books(**filters)
    return ok(paginate(books, book_dict))


@book_bp.get("/books")
def list_books():
    return _list(
        search=request.args.get("search"),
        category_id=request.args.get("category_id", type=int),
        author_id=request.args.get("author_id", type=int),
        publisher_id=request.args.get("publisher_id", type=int),
        shelf_id=request.args.get("shelf_id", type=int),
        available=request.args.get("available") == "true",
    )


@book_bp.get("/books/<int:book_id>")
def get_book(book_id: int):
    return ok(book_dict(BookService.get_book(book_id)))


@book_bp.post("/books")
@role_required("admin", "librarian")
def create_book(ctx):
    data = validate_book(request.get_json(silent=True))
    b = BookService.create_book(data)
    return ok(book_dict(b), "Book created successfully", 201)


@book_bp.put("/books/<int:book_id>")
@role_required("admin", "librarian")
def update_book(ctx, book_id: int):
    data = validate_book(request.get_json(silent=True), partial=True)
    b = BookService.update_book(book_id, data)
    return ok(book_dict(b), "Book updated successfully")


@book_bp.delete("/books/<int:book_id>")
@role_required("admin", "librarian")
def delete_book(ctx, book_id: int):
    BookService.delete_book(book_id)
    return ok(message="Book deleted successfully")


@book_bp.get("/books/author/<int:author_id>")
@role_required("admin", "librarian")
def books_by_author(ctx, author_id: int):
    return _list(author_id=author_id)


@book_bp.get("/books/category/<int:category_id>")
@role_required("admin", "librarian")
def books_by_category(ctx, category_id: int):
    return _list(category_id=category_id)


@book_bp.get("/books/name/<string:name>")
@role_required("admin", "librarian")
def books_by_name(ctx, name: str):
    return _list(title=name)
