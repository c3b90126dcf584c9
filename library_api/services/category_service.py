from library_api.models.category import Category
from library_api.repositories.category_repo import CategoryRepo
from library_api.utils.errors import NotFoundError, ValidationError


class CategoryService:
    @staticmethod
    def list_categories(**filters):
        return CategoryRepo.search(**filters)

    @staticmethod
    def get_category(category_id: int) -> Category:
        category = CategoryRepo.get_with_books(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def _check_unique_name(name, category_id=None):
        existing = CategoryRepo.get_by_name(name) if name else None
        if existing and existing.id != category_id:
            raise ValidationError({"name": ["The name has already been taken."]})

    @staticmethod
    def create_category(data: dict) -> Category:
        CategoryService._check_unique_name(data.get("name"))
        return CategoryRepo.create(Category(**data))

    @staticmethod
    def update_category(category_id: int, data: dict) -> Category:
        category = CategoryRepo.get(category_id)
        if not category:
            raise NotFoundError("Category not found")
        CategoryService._check_unique_name(data.get("name"), category.id)
        for k, v in data.items():
            setattr(category, k, v)
        CategoryRepo.update()
        return category

    @staticmethod
    def delete_category(category_id: int):
        category = CategoryRepo.get(category_id)
        if not category:
            raise NotFoundError("Category not found")
        category.books.clear()
        CategoryRepo.delete(category)
