from __future__ import annotations

from datetime import datetime

from flask import current_app
from flask_mail import Message

from library_api.extensions import mail
from library_api.models.notification_log import NotificationLog
from library_api.repositories.notification_repo import NotificationRepo


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            mail.send(Message(subject=subject, recipients=[to_email], body=body))
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[MailService] could not send mail to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def log_notification(borrow_id: int, notif_type: str, to_email: str | None,
                         message: str, success: bool, error: str | None = None) -> NotificationLog:
        return NotificationRepo.log(NotificationLog(
            borrow_id=borrow_id,
            type=notif_type,
            email=to_email,
            message=message,
            success=bool(success),
            error_message=error,
            sent_at=datetime.utcnow(),
        ))

    @staticmethod
    def send_overdue_mail(borrow) -> bool:
        """Overdue reminder for one borrow, logged either way. Caller commits."""
        user, book = borrow.user, borrow.book
        to_email = user.email if user else None
        title = book.title if book else f"Book #{borrow.book_id}"

        subject = "Library: overdue book"
        body = (
            f"Hello {user.name if user else 'reader'},\n\n"
            f"'{title}' was due on {borrow.due_date}.\n"
            f"Late returns are charged per day, please return it as soon as possible.\n"
        )

        if not to_email:
            MailService.log_notification(borrow.id, "overdue", None, "No email address", False, "missing_email")
            return False

        ok, err = MailService.send_email(to_email, subject, body)
        MailService.log_notification(
            borrow.id, "overdue", to_email,
            "Mail sent" if ok else "Mail not sent",
            ok, err,
        )
        return ok
