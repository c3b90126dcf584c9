from flask import Blueprint, request

from library_api.services.borrow_service import BorrowService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import borrow_dict
from library_api.utils.validators import validate_borrow_create, parse_date

borrow_bp = Blueprint("borrows", __name__, url_prefix="/api")


def _borrow_with_fine(b):
    return borrow_dict(b, with_fine=True)


@borrow_bp.get("/borrows")
@role_required("admin", "librarian")
def list_borrows(ctx):
    borrows = BorrowService.list_borrows(
        user_id=request.args.get("user_id", type=int),
        book_id=request.args.get("book_id", type=int),
        status=request.args.get("status"),
        from_date=parse_date(request.args.get("from_date")),
        to_date=parse_date(request.args.get("to_date")),
    )
    return ok(paginate(borrows, borrow_dict))


@borrow_bp.post("/borrows")
@role_required("admin", "librarian")
def borrow_book(ctx):
    data = validate_borrow_create(request.get_json(silent=True))
    b = BorrowService.borrow_book(
        user_id=data["user_id"],
        book_id=data["book_id"],
        borrow_date=data["borrow_date"],
        due_date=data["due_date"],
        notes=data.get("notes"),
    )
    return ok(borrow_dict(b), "Book borrowed successfully", 201)


@borrow_bp.get("/borrows/<int:borrow_id>")
@role_required("admin", "librarian")
def get_borrow(ctx, borrow_id: int):
    return ok(_borrow_with_fine(BorrowService.get_borrow(borrow_id)))


@borrow_bp.route("/borrows/<int:borrow_id>/return", methods=["POST", "PUT"])
@role_required("admin", "librarian")
def return_book(ctx, borrow_id: int):
    data = request.get_json(silent=True) or {}
    b = BorrowService.return_book(borrow_id, data.get("return_date"))
    return ok(_borrow_with_fine(b), "Book returned successfully")


@borrow_bp.delete("/borrows/<int:borrow_id>")
@role_required("admin", "librarian")
def delete_borrow(ctx, borrow_id: int):
    BorrowService.delete_borrow(borrow_id)
    return ok(message="Borrow record deleted successfully")


@borrow_bp.get("/my-borrows")
@role_required()
def my_borrows(ctx):
    borrows = BorrowService.list_borrows(user_id=ctx.user_id, status=request.args.get("status"))
    return ok(paginate(borrows, _borrow_with_fine))
