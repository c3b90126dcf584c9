from flask import Blueprint, request

from library_api.services.publisher_service import PublisherService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import publisher_dict
from library_api.utils.validators import validate_publisher

publisher_bp = Blueprint("publishers", __name__, url_prefix="/api")


@publisher_bp.get("/publishers")
def list_publishers():
    publishers = PublisherService.list_publishers(search=request.args.get("search"))
    return ok(paginate(publishers, publisher_dict))


@publisher_bp.get("/publishers/<int:publisher_id>")
def get_publisher(publisher_id: int):
    return ok(publisher_dict(PublisherService.get_publisher(publisher_id), with_books=True))


@publisher_bp.post("/publishers")
@role_required("admin", "librarian")
def create_publisher(ctx):
    data = validate_publisher(request.get_json(silent=True))
    p = PublisherService.create_publisher(data)
    return ok(publisher_dict(p), "Publisher created successfully", 201)


@publisher_bp.put("/publishers/<int:publisher_id>")
@role_required("admin", "librarian")
def update_publisher(ctx, publisher_id: int):
    data = validate_publisher(request.get_json(silent=True), partial=True)
    p = PublisherService.update_publisher(publisher_id, data)
    return ok(publisher_dict(p), "Publisher updated successfully")


@publisher_bp.delete("/publishers/<int:publisher_id>")
@role_required("admin", "librarian")
def delete_publisher(ctx, publisher_id: int):
    PublisherService.delete_publisher(publisher_id)
    return ok(message="Publisher deleted successfully")
