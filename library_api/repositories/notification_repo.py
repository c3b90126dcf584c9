from library_api.models.notification_log import NotificationLog
from library_api.extensions import db


class NotificationRepo:
    @staticmethod
    def already_sent(borrow_id: int, notif_type: str = "overdue") -> bool:
        return NotificationLog.query.filter_by(
            borrow_id=borrow_id, type=notif_type, success=True
        ).first() is not None

    @staticmethod
    def log(entry: NotificationLog):
        # caller commits
        db.session.add(entry)
        return entry
