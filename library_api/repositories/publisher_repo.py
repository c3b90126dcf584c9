from sqlalchemy.orm import selectinload

from library_api.models.publisher import Publisher
from library_api.extensions import db
from library_api.repositories.query_helpers import contains_any


class PublisherRepo:
    @staticmethod
    def get(publisher_id: int):
        return db.session.get(Publisher, publisher_id)

    @staticmethod
    def get_with_books(publisher_id: int):
        return Publisher.query.options(selectinload(Publisher.books)).filter(Publisher.id == publisher_id).first()

    @staticmethod
    def get_by_name(name: str):
        return Publisher.query.filter_by(name=name).first()

    @staticmethod
    def search(search=None):
        q = Publisher.query
        if search:
            q = q.filter(contains_any([Publisher.name, Publisher.address], search))
        return q.order_by(Publisher.id.desc())

    @staticmethod
    def create(publisher: Publisher):
        db.session.add(publisher)
        db.session.commit()
        return publisher

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(publisher: Publisher):
        db.session.delete(publisher)
        db.session.commit()
