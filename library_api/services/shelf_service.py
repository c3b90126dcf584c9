from library_api.models.shelf import Shelf
from library_api.repositories.book_repo import BookRepo
from library_api.repositories.shelf_repo import ShelfRepo
from library_api.utils.errors import ConflictError, NotFoundError, ValidationError


class ShelfService:
    @staticmethod
    def list_shelves(**filters):
        return ShelfRepo.search(**filters)

    @staticmethod
    def get_shelf(shelf_id: int) -> Shelf:
        shelf = ShelfRepo.get_with_books(shelf_id)
        if not shelf:
            raise NotFoundError("Book shelf not found")
        return shelf

    @staticmethod
    def _check_unique_code(code, shelf_id=None):
        existing = ShelfRepo.get_by_code(code) if code else None
        if existing and existing.id != shelf_id:
            raise ValidationError({"code": ["The code has already been taken."]})

    @staticmethod
    def create_shelf(data: dict) -> Shelf:
        ShelfService._check_unique_code(data.get("code"))
        return ShelfRepo.create(Shelf(**data))

    @staticmethod
    def update_shelf(shelf_id: int, data: dict) -> Shelf:
        shelf = ShelfRepo.get(shelf_id)
        if not shelf:
            raise NotFoundError("Book shelf not found")
        ShelfService._check_unique_code(data.get("code"), shelf.id)
        for k, v in data.items():
            setattr(shelf, k, v)
        ShelfRepo.update()
        return shelf

    @staticmethod
    def delete_shelf(shelf_id: int):
        shelf = ShelfRepo.get(shelf_id)
        if not shelf:
            raise NotFoundError("Book shelf not found")
        if BookRepo.count_on_shelf(shelf.id) > 0:
            raise ConflictError("Cannot delete book shelf with assigned books")
        ShelfRepo.delete(shelf)
