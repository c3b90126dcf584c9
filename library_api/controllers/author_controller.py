from flask import Blueprint, request

from library_api.services.author_service import AuthorService
from library_api.utils.decorators import role_required
from library_api.utils.errors import NotFoundError, ValidationError
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import author_dict
from library_api.utils.validators import validate_author, parse_date

author_bp = Blueprint("authors", __name__, url_prefix="/api")


@author_bp.get("/authors")
def list_authors():
    authors = AuthorService.list_authors(search=request.args.get("search"))
    return ok(paginate(authors, author_dict))


@author_bp.get("/authors/<int:author_id>")
def get_author(author_id: int):
    return ok(author_dict(AuthorService.get_author(author_id), with_books=True))


@author_bp.post("/authors")
@role_required("admin", "librarian")
def create_author(ctx):
    data = validate_author(request.get_json(silent=True))
    a = AuthorService.create_author(data)
    return ok(author_dict(a), "Author created successfully", 201)


@author_bp.put("/authors/<int:author_id>")
@role_required("admin", "librarian")
def update_author(ctx, author_id: int):
    data = validate_author(request.get_json(silent=True), partial=True)
    a = AuthorService.update_author(author_id, data)
    return ok(author_dict(a), "Author updated successfully")


@author_bp.delete("/authors/<int:author_id>")
@role_required("admin", "librarian")
def delete_author(ctx, author_id: int):
    AuthorService.delete_author(author_id)
    return ok(message="Author deleted successfully")


@author_bp.get("/authors/name/<string:name>")
@role_required("admin", "librarian")
def authors_by_name(ctx, name: str):
    page = paginate(AuthorService.list_authors(name=name), author_dict)
    if not page["data"]:
        raise NotFoundError("Author not found")
    return ok(page)


@author_bp.get("/authors/birth_date/<string:birth_date>")
@role_required("admin", "librarian")
def authors_by_birth_date(ctx, birth_date: str):
    day = parse_date(birth_date)
    if day is None:
        raise ValidationError({"birth_date": ["The birth_date is not a valid date."]})
    page = paginate(AuthorService.list_authors(birth_date=day), author_dict)
    if not page["data"]:
        raise NotFoundError("Author not found")
    return ok(page)
