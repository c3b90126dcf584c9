from __future__ import annotations

from datetime import date

from flask import current_app

from library_api.extensions import db
from library_api.repositories.borrow_repo import BorrowRepo
from library_api.repositories.notification_repo import NotificationRepo
from library_api.services.mail_service import MailService


class NotificationService:
    @staticmethod
    def send_overdue_notices(today: date | None = None) -> dict:
        """One reminder per overdue borrow; borrows already reminded are skipped."""
        today = today or date.today()
        overdue = BorrowRepo.find_overdue(today)

        sent = failed = skipped = 0
        for b in overdue:
            if NotificationRepo.already_sent(b.id, "overdue"):
                skipped += 1
                continue
            if MailService.send_overdue_mail(b):
                sent += 1
            else:
                failed += 1

        db.session.commit()

        current_app.logger.info(
            f"[overdue] overdue={len(overdue)} sent={sent} failed={failed} skipped={skipped}"
        )
        return {"overdue": len(overdue), "sent": sent, "failed": failed, "skipped": skipped}
