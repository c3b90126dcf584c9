from flask import Blueprint, request

from library_api.services.shelf_service import ShelfService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import shelf_dict
from library_api.utils.validators import validate_shelf

shelf_bp = Blueprint("shelves", __name__, url_prefix="/api")


@shelf_bp.get("/book-shelves")
@role_required("admin", "librarian")
def list_shelves(ctx):
    shelves = ShelfService.list_shelves(search=request.args.get("search"))
    return ok(paginate(shelves, shelf_dict))


@shelf_bp.get("/book-shelves/<int:shelf_id>")
@role_required("admin", "librarian")
def get_shelf(ctx, shelf_id: int):
    return ok(shelf_dict(ShelfService.get_shelf(shelf_id), with_books=True))


@shelf_bp.post("/book-shelves")
@role_required("admin", "librarian")
def create_shelf(ctx):
    data = validate_shelf(request.get_json(silent=True))
    s = ShelfService.create_shelf(data)
    return ok(shelf_dict(s), "Book shelf created successfully", 201)


@shelf_bp.put("/book-shelves/<int:shelf_id>")
@role_required("admin", "librarian")
def update_shelf(ctx, shelf_id: int):
    data = validate_shelf(request.get_json(silent=True), partial=True)
    s = ShelfService.update_shelf(shelf_id, data)
    return ok(shelf_dict(s), "Book shelf updated successfully")


@shelf_bp.delete("/book-shelves/<int:shelf_id>")
@role_required("admin", "librarian")
def delete_shelf(ctx, shelf_id: int):
    ShelfService.delete_shelf(shelf_id)
    return ok(message="Book shelf deleted successfully")
