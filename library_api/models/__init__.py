from library_api.models.user import User, TokenBlocklist
from library_api.models.author import Author
from library_api.models.category import Category
from library_api.models.publisher import Publisher
from library_api.models.shelf import Shelf
from library_api.models.book import Book, book_author, book_category
from library_api.models.borrow import Borrow
from library_api.models.fine import Fine
from library_api.models.reservation import Reservation
from library_api.models.notification_log import NotificationLog
