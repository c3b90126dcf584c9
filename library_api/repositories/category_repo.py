from sqlalchemy.orm import selectinload

from library_api.models.category import Category
from library_api.extensions import db
from library_api.repositories.query_helpers import contains_any


class CategoryRepo:
    @staticmethod
    def get(category_id: int):
        return db.session.get(Category, category_id)

    @staticmethod
    def get_with_books(category_id: int):
        return Category.query.options(selectinload(Category.books)).filter(Category.id == category_id).first()

    @staticmethod
    def get_by_name(name: str):
        return Category.query.filter_by(name=name).first()

    @staticmethod
    def get_many(ids):
        return Category.query.filter(Category.id.in_(ids)).all() if ids else []

    @staticmethod
    def search(search=None):
        q = Category.query
        if search:
            q = q.filter(contains_any([Category.name, Category.description], search))
        return q.order_by(Category.id.desc())

    @staticmethod
    def create(category: Category):
        db.session.add(category)
        db.session.commit()
        return category

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(category: Category):
        db.session.delete(category)
        db.session.commit()
