from flask import Blueprint, request

from library_api.services.reservation_service import ReservationService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import reservation_dict
from library_api.utils.validators import validate_reservation_create, validate_reservation_status

reservation_bp = Blueprint("reservations", __name__, url_prefix="/api")


@reservation_bp.get("/reservations")
@role_required("admin", "librarian")
def list_reservations(ctx):
    reservations = ReservationService.list_reservations(
        user_id=request.args.get("user_id", type=int),
        book_id=request.args.get("book_id", type=int),
        status=request.args.get("status"),
    )
    return ok(paginate(reservations, reservation_dict))


@reservation_bp.post("/reservations")
@role_required("admin", "librarian")
def create_reservation(ctx):
    data = validate_reservation_create(request.get_json(silent=True))
    r = ReservationService.create_reservation(**data)
    return ok(reservation_dict(r), "Reservation created successfully", 201)


@reservation_bp.get("/reservations/<int:reservation_id>")
@role_required("admin", "librarian")
def get_reservation(ctx, reservation_id: int):
    return ok(reservation_dict(ReservationService.get_reservation(reservation_id)))


@reservation_bp.put("/reservations/<int:reservation_id>/status")
@role_required("admin", "librarian")
def update_reservation_status(ctx, reservation_id: int):
    # existence is checked before the body, as with the other state changes
    ReservationService.get_reservation(reservation_id)
    data = validate_reservation_status(request.get_json(silent=True))
    r = ReservationService.update_status(reservation_id, data["status"])
    return ok(reservation_dict(r), "Reservation status updated successfully")


@reservation_bp.delete("/reservations/<int:reservation_id>")
@role_required("admin", "librarian")
def delete_reservation(ctx, reservation_id: int):
    ReservationService.delete_reservation(reservation_id)
    return ok(message="Reservation deleted successfully")


@reservation_bp.get("/my-reservations")
@role_required()
def my_reservations(ctx):
    reservations = ReservationService.list_reservations(
        user_id=ctx.user_id, status=request.args.get("status")
    )
    return ok(paginate(reservations, reservation_dict))


@reservation_bp.post("/reserve-book")
@role_required()
def reserve_book(ctx):
    data = validate_reservation_create(request.get_json(silent=True), with_user=False)
    r = ReservationService.create_reservation(user_id=ctx.user_id, **data)
    return ok(reservation_dict(r), "Reservation created successfully", 201)
