"""Model -> JSON dict helpers shared by the controllers.

Nested relations are one level deep: a book carries its authors, but those
authors do not carry their books again.
"""


def _iso(value):
    return value.isoformat() if value else None


def _money(value):
    return float(value) if value is not None else 0.0


def user_dict(u):
    if u is None:
        return None
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "phone_number": u.phone_number,
        "address": u.address,
        "role": u.role,
        "created_at": _iso(u.created_at),
    }


def author_dict(a, with_books=False):
    data = {
        "id": a.id,
        "name": a.name,
        "biography": a.biography,
        "birth_date": _iso(a.birth_date),
        "created_at": _iso(a.created_at),
    }
    if with_books:
        data["books"] = [book_dict(b, with_relations=False) for b in a.books]
    return data


def category_dict(c, with_books=False):
    data = {
        "id": c.id,
        "name": c.name,
        "description": c.description,
        "created_at": _iso(c.created_at),
    }
    if with_books:
        data["books"] = [book_dict(b, with_relations=False) for b in c.books]
    return data


def publisher_dict(p, with_books=False):
    if p is None:
        return None
    data = {
        "id": p.id,
        "name": p.name,
        "address": p.address,
        "phone": p.phone,
        "email": p.email,
        "created_at": _iso(p.created_at),
    }
    if with_books:
        data["books"] = [book_dict(b, with_relations=False) for b in p.books]
    return data


def shelf_dict(s, with_books=False):
    if s is None:
        return None
    data = {
        "id": s.id,
        "code": s.code,
        "location": s.location,
        "capacity": s.capacity,
        "description": s.description,
        "created_at": _iso(s.created_at),
    }
    if with_books:
        data["books"] = [book_dict(b, with_relations=False) for b in s.books]
    return data


def book_dict(b, with_relations=True):
    if b is None:
        return None
    data = {
        "id": b.id,
        "title": b.title,
        "isbn": b.isbn,
        "description": b.description,
        "publication_year": b.publication_year,
        "total_copies": b.total_copies,
        "available_copies": b.available_copies,
        "cover_image": b.cover_image,
        "publisher_id": b.publisher_id,
        "shelf_id": b.shelf_id,
        "created_at": _iso(b.created_at),
        "updated_at": _iso(b.updated_at),
    }
    if with_relations:
        data["authors"] = [author_dict(a) for a in b.authors]
        data["categories"] = [category_dict(c) for c in b.categories]
        data["publisher"] = publisher_dict(b.publisher)
        data["shelf"] = shelf_dict(b.shelf)
    return data


def fine_dict(f, with_relations=False):
    if f is None:
        return None
    data = {
        "id": f.id,
        "borrow_id": f.borrow_id,
        "user_id": f.user_id,
        "amount": _money(f.amount),
        "reason": f.reason,
        "is_paid": bool(f.is_paid),
        "paid_date": _iso(f.paid_date),
        "created_at": _iso(f.created_at),
    }
    if with_relations:
        data["user"] = user_dict(f.user)
        data["borrow"] = borrow_dict(f.borrow, with_relations=False)
    return data


def borrow_dict(x, with_relations=True, with_fine=False):
    data = {
        "id": x.id,
        "user_id": x.user_id,
        "book_id": x.book_id,
        "borrow_date": _iso(x.borrow_date),
        "due_date": _iso(x.due_date),
        "return_date": _iso(x.return_date),
        "status": x.status,
        "fine_amount": _money(x.fine_amount),
        "notes": x.notes,
        "created_at": _iso(x.created_at),
    }
    if with_relations:
        data["user"] = user_dict(x.user)
        data["book"] = book_dict(x.book, with_relations=False)
    if with_fine:
        data["fine"] = fine_dict(x.fine)
    return data


def reservation_dict(r):
    return {
        "id": r.id,
        "user_id": r.user_id,
        "book_id": r.book_id,
        "reservation_date": _iso(r.reservation_date),
        "expiry_date": _iso(r.expiry_date),
        "status": r.status,
        "created_at": _iso(r.created_at),
        "user": user_dict(r.user),
        "book": book_dict(r.book, with_relations=False),
    }
