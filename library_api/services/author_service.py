from library_api.models.author import Author
from library_api.repositories.author_repo import AuthorRepo
from library_api.utils.errors import NotFoundError


class AuthorService:
    @staticmethod
    def list_authors(**filters):
        return AuthorRepo.search(**filters)

    @staticmethod
    def get_author(author_id: int) -> Author:
        author = AuthorRepo.get_with_books(author_id)
        if not author:
            raise NotFoundError("Author not found")
        return author

    @staticmethod
    def create_author(data: dict) -> Author:
        return AuthorRepo.create(Author(**data))

    @staticmethod
    def update_author(author_id: int, data: dict) -> Author:
        author = AuthorRepo.get(author_id)
        if not author:
            raise NotFoundError("Author not found")
        for k, v in data.items():
            setattr(author, k, v)
        AuthorRepo.update()
        return author

    @staticmethod
    def delete_author(author_id: int):
        author = AuthorRepo.get(author_id)
        if not author:
            raise NotFoundError("Author not found")
        # detach from books, the books themselves stay
        author.books.clear()
        AuthorRepo.delete(author)
