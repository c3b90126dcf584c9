from sqlalchemy.orm import selectinload

from library_api.models.shelf import Shelf
from library_api.extensions import db
from library_api.repositories.query_helpers import contains_any


class ShelfRepo:
    @staticmethod
    def get(shelf_id: int):
        return db.session.get(Shelf, shelf_id)

    @staticmethod
    def get_with_books(shelf_id: int):
        return Shelf.query.options(selectinload(Shelf.books)).filter(Shelf.id == shelf_id).first()

    @staticmethod
    def get_by_code(code: str):
        return Shelf.query.filter_by(code=code).first()

    @staticmethod
    def search(search=None):
        q = Shelf.query
        if search:
            q = q.filter(contains_any([Shelf.code, Shelf.location], search))
        return q.order_by(Shelf.id.desc())

    @staticmethod
    def create(shelf: Shelf):
        db.session.add(shelf)
        db.session.commit()
        return shelf

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(shelf: Shelf):
        db.session.delete(shelf)
        db.session.commit()
