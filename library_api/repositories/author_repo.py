from sqlalchemy.orm import selectinload

from library_api.models.author import Author
from library_api.extensions import db
from library_api.repositories.query_helpers import contains_any


class AuthorRepo:
    @staticmethod
    def get(author_id: int):
        return db.session.get(Author, author_id)

    @staticmethod
    def get_with_books(author_id: int):
        return Author.query.options(selectinload(Author.books)).filter(Author.id == author_id).first()

    @staticmethod
    def get_many(ids):
        return Author.query.filter(Author.id.in_(ids)).all() if ids else []

    @staticmethod
    def search(search=None, name=None, birth_date=None):
        q = Author.query
        if search:
            q = q.filter(contains_any([Author.name, Author.biography], search))
        if name:
            q = q.filter(contains_any([Author.name], name))
        if birth_date is not None:
            q = q.filter(Author.birth_date == birth_date)
        return q.order_by(Author.id.desc())

    @staticmethod
    def create(author: Author):
        db.session.add(author)
        db.session.commit()
        return author

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(author: Author):
        db.session.delete(author)
        db.session.commit()
