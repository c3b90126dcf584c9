"""Per-operation request validation.

Each ``validate_*`` function takes the raw JSON body and returns a dict of
cleaned values, or raises ``ValidationError`` carrying a ``{field: [messages]}``
map. Checks that need the database (uniqueness, foreign keys) live in the
services.
"""
import re
from datetime import date, datetime

from library_api.models.reservation import RESERVATION_STATUSES
from library_api.models.user import ROLES
from library_api.utils.errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
# largest value an Integer column holds on every supported backend
MAX_INT = 2 ** 31 - 1


def parse_date(value):
    """ISO date or datetime -> ``date`` (time part dropped). None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


class Fields:
    """Collects cleaned values and field errors for one request body.

    With ``partial=True`` (updates) absent fields are skipped, but a field that
    is present must still satisfy its rules.
    """

    def __init__(self, data, partial: bool = False):
        self.data = data if isinstance(data, dict) else {}
        self.partial = partial
        self.errors = {}
        self.clean = {}

    def add_error(self, field: str, message: str):
        self.errors.setdefault(field, []).append(message)

    def _take(self, field, required):
        if field not in self.data:
            if required and not self.partial:
                self.add_error(field, f"The {field} field is required.")
            return False, None

        value = self.data[field]
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                self.add_error(field, f"The {field} field is required.")
            else:
                self.clean[field] = None
            return False, None
        return True, value

    def string(self, field, required=False, max_length=None):
        ok, value = self._take(field, required)
        if not ok:
            return
        if not isinstance(value, str):
            self.add_error(field, f"The {field} must be a string.")
            return
        value = value.strip()
        if max_length and len(value) > max_length:
            self.add_error(field, f"The {field} may not be greater than {max_length} characters.")
            return
        self.clean[field] = value

    def integer(self, field, required=False, min_value=None, max_value=MAX_INT):
        ok, value = self._take(field, required)
        if not ok:
            return
        if isinstance(value, bool):
            self.add_error(field, f"The {field} must be an integer.")
            return
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            self.add_error(field, f"The {field} must be an integer.")
            return
        if isinstance(value, float) and value != number:
            self.add_error(field, f"The {field} must be an integer.")
            return
        if min_value is not None and number < min_value:
            self.add_error(field, f"The {field} must be at least {min_value}.")
            return
        if max_value is not None and number > max_value:
            self.add_error(field, f"The {field} may not be greater than {max_value}.")
            return
        self.clean[field] = number

    def date(self, field, required=False):
        ok, value = self._take(field, required)
        if not ok:
            return
        parsed = parse_date(value)
        if parsed is None:
            self.add_error(field, f"The {field} is not a valid date.")
            return
        self.clean[field] = parsed

    def email(self, field, required=False, max_length=255):
        self.string(field, required, max_length)
        value = self.clean.get(field)
        if value and not EMAIL_RE.match(value):
            self.add_error(field, f"The {field} must be a valid email address.")
            del self.clean[field]

    def choice(self, field, choices, required=False):
        ok, value = self._take(field, required)
        if not ok:
            return
        if value not in choices:
            self.add_error(field, f"The selected {field} is invalid.")
            return
        self.clean[field] = value

    def id_list(self, field, required=False):
        if field not in self.data:
            if required and not self.partial:
                self.add_error(field, f"The {field} field is required.")
            return
        value = self.data[field]
        if not isinstance(value, list) or (required and not value):
            self.add_error(field, f"The {field} must be an array with at least 1 item.")
            return
        ids = []
        for item in value:
            text = str(item)
            valid = not isinstance(item, bool) and isinstance(item, (int, str)) and text.isdecimal() and len(text) <= 10
            if not valid or int(item) > MAX_INT:
                self.add_error(field, f"The {field} must only contain ids.")
                return
            ids.append(int(item))
        # keep order, drop duplicates
        self.clean[field] = list(dict.fromkeys(ids))

    def done(self) -> dict:
        if self.errors:
            raise ValidationError(self.errors)
        return self.clean


# -----------------------------
# Catalog
# -----------------------------
def validate_book(data, partial=False):
    f = Fields(data, partial)
    f.string("title", required=True, max_length=255)
    f.string("isbn", required=True, max_length=32)
    f.string("description")
    f.integer("publication_year", required=True, max_value=9999)
    f.integer("total_copies", required=True, min_value=0)
    if partial:
        if "available_copies" in f.data:
            f.add_error("available_copies", "The available_copies field is managed by borrows and returns.")
    else:
        f.integer("available_copies", min_value=0)
    f.string("cover_image", max_length=500)
    f.integer("publisher_id")
    f.integer("shelf_id")
    f.id_list("author_ids", required=True)
    f.id_list("category_ids", required=True)

    total = f.clean.get("total_copies")
    available = f.clean.get("available_copies")
    if total is not None and available is not None and available > total:
        f.add_error("available_copies", "The available_copies must be less than or equal to total_copies.")
    return f.done()


def validate_author(data, partial=False):
    f = Fields(data, partial)
    f.string("name", required=True, max_length=255)
    f.string("biography")
    f.date("birth_date")
    return f.done()


def validate_category(data, partial=False):
    f = Fields(data, partial)
    f.string("name", required=True, max_length=255)
    f.string("description")
    return f.done()


def validate_publisher(data, partial=False):
    f = Fields(data, partial)
    f.string("name", required=True, max_length=255)
    f.string("address")
    f.string("phone", max_length=20)
    f.email("email")
    return f.done()


def validate_shelf(data, partial=False):
    f = Fields(data, partial)
    f.string("code", required=True, max_length=50)
    f.string("location", required=True, max_length=255)
    f.integer("capacity", required=True, min_value=1)
    f.string("description")
    return f.done()


# -----------------------------
# Lending
# -----------------------------
def validate_borrow_create(data):
    f = Fields(data)
    f.integer("user_id", required=True)
    f.integer("book_id", required=True)
    f.date("borrow_date", required=True)
    f.date("due_date", required=True)
    f.string("notes")

    borrow_date, due_date = f.clean.get("borrow_date"), f.clean.get("due_date")
    if borrow_date and due_date and due_date < borrow_date:
        f.add_error("due_date", "The due_date must be a date after or equal to borrow_date.")
    return f.done()


def validate_return(data):
    f = Fields(data)
    f.date("return_date", required=True)
    return f.done()


def validate_reservation_create(data, with_user=True):
    f = Fields(data)
    if with_user:
        f.integer("user_id", required=True)
    f.integer("book_id", required=True)
    f.date("reservation_date", required=True)
    f.date("expiry_date", required=True)

    start, end = f.clean.get("reservation_date"), f.clean.get("expiry_date")
    if start and end and end <= start:
        f.add_error("expiry_date", "The expiry_date must be a date after reservation_date.")
    return f.done()


def validate_reservation_status(data):
    f = Fields(data)
    f.choice("status", RESERVATION_STATUSES, required=True)
    return f.done()


def validate_fine_payment(data):
    f = Fields(data)
    f.date("paid_date", required=True)
    return f.done()


# -----------------------------
# Accounts
# -----------------------------
def validate_register(data):
    f = Fields(data)
    f.string("name", required=True, max_length=255)
    f.email("email", required=True)
    f.string("password", required=True)
    f.string("phone_number", max_length=20)
    f.string("address")

    password = f.clean.get("password")
    if password is not None:
        if len(password) < 8:
            f.add_error("password", "The password must be at least 8 characters.")
        elif f.data.get("password_confirmation") != f.data.get("password"):
            f.add_error("password", "The password confirmation does not match.")
    return f.done()


def validate_login(data):
    f = Fields(data)
    f.email("email", required=True)
    f.string("password", required=True)
    return f.done()


def validate_role(data):
    f = Fields(data)
    f.choice("role", ROLES, required=True)
    return f.done()
