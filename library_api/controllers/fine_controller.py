from flask import Blueprint, request

from library_api.services.fine_service import FineService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import fine_dict
from library_api.utils.validators import parse_date

fine_bp = Blueprint("fines", __name__, url_prefix="/api")


def _fine_full(f):
    return fine_dict(f, with_relations=True)


def _is_paid_arg():
    value = request.args.get("is_paid")
    if value is None:
        return None
    return value.lower() in ("true", "1")


@fine_bp.get("/fines")
@role_required("admin", "librarian")
def list_fines(ctx):
    fines = FineService.list_fines(
        user_id=request.args.get("user_id", type=int),
        is_paid=_is_paid_arg(),
        paid_date=parse_date(request.args.get("paid_date")),
    )
    return ok(paginate(fines, _fine_full))


@fine_bp.get("/fines/<int:fine_id>")
@role_required("admin", "librarian")
def get_fine(ctx, fine_id: int):
    return ok(_fine_full(FineService.get_fine(fine_id)))


@fine_bp.post("/fines/<int:fine_id>/pay")
@role_required("admin", "librarian")
def pay_fine(ctx, fine_id: int):
    data = request.get_json(silent=True) or {}
    f = FineService.pay_fine(fine_id, data.get("paid_date"))
    return ok(_fine_full(f), "Fine paid successfully")


@fine_bp.get("/my-fines")
@role_required()
def my_fines(ctx):
    fines = FineService.list_fines(user_id=ctx.user_id, is_paid=_is_paid_arg())
    return ok(paginate(fines, fine_dict))
