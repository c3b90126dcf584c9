from flask import Blueprint, request

from library_api.services.category_service import CategoryService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok, paginate
from library_api.utils.serializers import category_dict
from library_api.utils.validators import validate_category

category_bp = Blueprint("categories", __name__, url_prefix="/api")


@category_bp.get("/categories")
def list_categories():
    categories = CategoryService.list_categories(search=request.args.get("search"))
    return ok(paginate(categories, category_dict))


@category_bp.get("/categories/<int:category_id>")
def get_category(category_id: int):
    return ok(category_dict(CategoryService.get_category(category_id), with_books=True))


@category_bp.post("/categories")
@role_required("admin", "librarian")
def create_category(ctx):
    data = validate_category(request.get_json(silent=True))
    c = CategoryService.create_category(data)
    return ok(category_dict(c), "Category created successfully", 201)


@category_bp.put("/categories/<int:category_id>")
@role_required("admin", "librarian")
def update_category(ctx, category_id: int):
    data = validate_category(request.get_json(silent=True), partial=True)
    c = CategoryService.update_category(category_id, data)
    return ok(category_dict(c), "Category updated successfully")


@category_bp.delete("/categories/<int:category_id>")
@role_required("admin", "librarian")
def delete_category(ctx, category_id: int):
    CategoryService.delete_category(category_id)
    return ok(message="Category deleted successfully")
