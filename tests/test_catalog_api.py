from datetime import date

import pytest

from library_api.extensions import db
from library_api.models import Author, Book, Category, Publisher, Shelf
from library_api.services.borrow_service import BorrowService


@pytest.fixture
def refs(client, auth):
    """One of each catalog record, created through the API."""
    h = auth()
    author = client.post("/api/authors", json={"name": "Frank Herbert", "birth_date": "1920-10-08"}, headers=h)
    category = client.post("/api/categories", json={"name": "Science Fiction"}, headers=h)
    publisher = client.post("/api/publishers", json={"name": "Chilton Books", "email": "info@chilton.example"},
                            headers=h)
    shelf = client.post("/api/book-shelves", json={"code": "SF-01", "location": "Floor 2", "capacity": 40},
                        headers=h)
    return {
        "author": author.get_json()["data"],
        "category": category.get_json()["data"],
        "publisher": publisher.get_json()["data"],
        "shelf": shelf.get_json()["data"],
    }


def _book_body(refs, **overrides):
    body = {
        "title": "Dune",
        "isbn": "9780441013593",
        "publication_year": 1965,
        "total_copies": 3,
        "author_ids": [refs["author"]["id"]],
        "category_ids": [refs["category"]["id"]],
        "publisher_id": refs["publisher"]["id"],
        "shelf_id": refs["shelf"]["id"],
    }
    body.update(overrides)
    return body


def test_book_round_trip_carries_relations(client, auth, refs):
    res = client.post("/api/books", json=_book_body(refs), headers=auth())
    assert res.status_code == 201
    book_id = res.get_json()["data"]["id"]

    res = client.get(f"/api/books/{book_id}")
    assert res.status_code == 200
    book = res.get_json()["data"]
    assert book["available_copies"] == 3
    assert [a["name"] for a in book["authors"]] == ["Frank Herbert"]
    assert [c["name"] for c in book["categories"]] == ["Science Fiction"]
    assert book["publisher"]["name"] == "Chilton Books"
    assert book["shelf"]["code"] == "SF-01"


def test_duplicate_isbn(client, auth, refs):
    client.post("/api/books", json=_book_body(refs), headers=auth())
    res = client.post("/api/books", json=_book_body(refs, title="Dune (reprint)"), headers=auth())

    assert res.status_code == 422
    body = res.get_json()
    assert body["status"] is False
    assert body["errors"]["isbn"] == ["The isbn has already been taken."]


def test_unknown_references(client, auth, refs):
    res = client.post("/api/books", json=_book_body(refs, author_ids=[999], shelf_id=999), headers=auth())
    assert res.status_code == 422
    assert {"author_ids", "shelf_id"} <= set(res.get_json()["errors"])


def test_available_above_total(client, auth, refs):
    res = client.post("/api/books", json=_book_body(refs, total_copies=1, available_copies=2), headers=auth())
    assert res.status_code == 422


def test_catalog_reads_are_public_writes_are_staff(client, auth, refs):
    assert client.get("/api/books").status_code == 200
    assert client.get("/api/authors").status_code == 200
    assert client.post("/api/books", json=_book_body(refs)).status_code == 401
    assert client.post("/api/books", json=_book_body(refs), headers=auth("member")).status_code == 403
    assert client.get("/api/book-shelves", headers=auth("member")).status_code == 403


def test_unknown_book(client):
    res = client.get("/api/books/404")
    assert res.status_code == 404
    assert res.get_json() == {"status": False, "message": "Book not found"}


def test_pagination(client, make_book):
    for _ in range(12):
        make_book()

    first = client.get("/api/books").get_json()["data"]
    assert first["current_page"] == 1
    assert first["per_page"] == 10
    assert first["total"] == 12
    assert first["last_page"] == 2
    assert len(first["data"]) == 10

    second = client.get("/api/books?page=2").get_json()["data"]
    assert len(second["data"]) == 2


def test_search_is_case_insensitive(client, make_book):
    make_book(title="Dune")
    make_book(title="Neuromancer")

    page = client.get("/api/books?search=dUnE").get_json()["data"]
    assert [b["title"] for b in page["data"]] == ["Dune"]


def test_filters(client, auth, make_book):
    wanted = make_book(total=1)
    make_book(total=1, available=0)

    category_id = wanted.categories[0].id
    page = client.get(f"/api/books?category_id={category_id}").get_json()["data"]
    assert [b["id"] for b in page["data"]] == [wanted.id]

    page = client.get("/api/books?available=true").get_json()["data"]
    assert [b["id"] for b in page["data"]] == [wanted.id]

    author_id = wanted.authors[0].id
    page = client.get(f"/api/books/author/{author_id}", headers=auth()).get_json()["data"]
    assert page["total"] == 1


def test_update_total_shifts_available(client, auth, users, make_book, fresh):
    book = make_book(total=2)
    BorrowService.borrow_book(users["member"].id, book.id, date(2024, 4, 1), date(2024, 4, 15))

    res = client.put(f"/api/books/{book.id}", json={"total_copies": 5}, headers=auth())
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert (data["total_copies"], data["available_copies"]) == (5, 4)

    res = client.put(f"/api/books/{book.id}", json={"total_copies": 0}, headers=auth())
    assert res.status_code == 422
    book = fresh(Book, book.id)
    assert (book.total_copies, book.available_copies) == (5, 4)


def test_update_cannot_set_the_counter(client, auth, make_book):
    book = make_book()
    res = client.put(f"/api/books/{book.id}", json={"available_copies": 0}, headers=auth())
    assert res.status_code == 422


def test_update_replaces_authors(client, auth, refs, make_book):
    book = make_book()
    res = client.put(f"/api/books/{book.id}", json={"author_ids": [refs["author"]["id"]]}, headers=auth())
    assert [a["id"] for a in res.get_json()["data"]["authors"]] == [refs["author"]["id"]]


def test_delete_book_with_open_borrow(client, auth, users, make_book):
    book = make_book()
    borrow = BorrowService.borrow_book(users["member"].id, book.id, date(2024, 4, 1), date(2024, 4, 15))

    res = client.delete(f"/api/books/{book.id}", headers=auth())
    assert res.status_code == 400

    BorrowService.return_book(borrow.id, "2024-04-20")
    assert client.delete(f"/api/books/{book.id}", headers=auth()).status_code == 200
    assert client.get(f"/api/books/{book.id}").status_code == 404


def test_delete_author_detaches_books(client, auth, make_book, fresh):
    book = make_book()
    author_id = book.authors[0].id

    assert client.delete(f"/api/authors/{author_id}", headers=auth()).status_code == 200

    assert fresh(Author, author_id) is None
    assert fresh(Book, book.id).authors == []


def test_delete_category_detaches_books(client, auth, make_book, fresh):
    book = make_book()
    category_id = book.categories[0].id

    assert client.delete(f"/api/categories/{category_id}", headers=auth()).status_code == 200
    assert fresh(Category, category_id) is None
    assert fresh(Book, book.id).categories == []


def test_delete_publisher_clears_books(client, auth, make_book, fresh):
    publisher = Publisher(name="Ace")
    db.session.add(publisher)
    db.session.commit()
    book = make_book(publisher=publisher)

    assert client.delete(f"/api/publishers/{publisher.id}", headers=auth()).status_code == 200
    assert fresh(Book, book.id).publisher_id is None


def test_shelf_with_books_cannot_be_deleted(client, auth, make_book, fresh):
    shelf = Shelf(code="A-1", location="Ground floor", capacity=10)
    db.session.add(shelf)
    db.session.commit()
    book = make_book(shelf=shelf)

    res = client.delete(f"/api/book-shelves/{shelf.id}", headers=auth())
    assert res.status_code == 400
    assert res.get_json()["message"] == "Cannot delete book shelf with assigned books"
    assert fresh(Shelf, shelf.id) is not None

    client.put(f"/api/books/{book.id}", json={"shelf_id": None}, headers=auth())
    assert client.delete(f"/api/book-shelves/{shelf.id}", headers=auth()).status_code == 200


def test_unique_names_and_codes(client, auth, refs):
    res = client.post("/api/categories", json={"name": "Science Fiction"}, headers=auth())
    assert res.status_code == 422
    assert "name" in res.get_json()["errors"]

    res = client.post("/api/book-shelves", json={"code": "SF-01", "location": "Annex", "capacity": 5},
                      headers=auth())
    assert res.status_code == 422
    assert "code" in res.get_json()["errors"]


def test_author_lookups(client, auth, refs):
    res = client.get("/api/authors/name/herbert", headers=auth())
    assert res.get_json()["data"]["total"] == 1

    assert client.get("/api/authors/name/tolkien", headers=auth()).status_code == 404
    assert client.get("/api/authors/birth_date/1920-10-08", headers=auth()).status_code == 200
    assert client.get("/api/authors/birth_date/someday", headers=auth()).status_code == 422


def test_author_shows_books(client, refs, auth):
    client.post("/api/books", json=_book_body(refs), headers=auth())
    data = client.get(f"/api/authors/{refs['author']['id']}").get_json()["data"]
    assert [b["title"] for b in data["books"]] == ["Dune"]


def test_search_treats_wildcards_literally(client, make_book):
    make_book(title="snake_case guide")
    make_book(title="Plain title")
    make_book(title="100% Dune")

    page = client.get("/api/books?search=_").get_json()["data"]
    assert [b["title"] for b in page["data"]] == ["snake_case guide"]

    page = client.get("/api/books?search=%25").get_json()["data"]
    assert [b["title"] for b in page["data"]] == ["100% Dune"]


def test_oversized_ids_are_field_errors(client, auth, refs):
    res = client.post("/api/books", json=_book_body(refs, publisher_id=2 ** 70, author_ids=[2 ** 70]),
                      headers=auth())
    assert res.status_code == 422
    assert {"publisher_id", "author_ids"} <= set(res.get_json()["errors"])
