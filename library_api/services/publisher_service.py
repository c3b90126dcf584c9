from library_api.models.publisher import Publisher
from library_api.repositories.book_repo import BookRepo
from library_api.repositories.publisher_repo import PublisherRepo
from library_api.utils.errors import NotFoundError, ValidationError


class PublisherService:
    @staticmethod
    def list_publishers(**filters):
        return PublisherRepo.search(**filters)

    @staticmethod
    def get_publisher(publisher_id: int) -> Publisher:
        publisher = PublisherRepo.get_with_books(publisher_id)
        if not publisher:
            raise NotFoundError("Publisher not found")
        return publisher

    @staticmethod
    def _check_unique_name(name, publisher_id=None):
        existing = PublisherRepo.get_by_name(name) if name else None
        if existing and existing.id != publisher_id:
            raise ValidationError({"name": ["The name has already been taken."]})

    @staticmethod
    def create_publisher(data: dict) -> Publisher:
        PublisherService._check_unique_name(data.get("name"))
        return PublisherRepo.create(Publisher(**data))

    @staticmethod
    def update_publisher(publisher_id: int, data: dict) -> Publisher:
        publisher = PublisherRepo.get(publisher_id)
        if not publisher:
            raise NotFoundError("Publisher not found")
        PublisherService._check_unique_name(data.get("name"), publisher.id)
        for k, v in data.items():
            setattr(publisher, k, v)
        PublisherRepo.update()
        return publisher

    @staticmethod
    def delete_publisher(publisher_id: int):
        publisher = PublisherRepo.get(publisher_id)
        if not publisher:
            raise NotFoundError("Publisher not found")
        BookRepo.clear_publisher(publisher.id)
        PublisherRepo.delete(publisher)
