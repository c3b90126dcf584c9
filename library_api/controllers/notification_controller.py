from flask import Blueprint

from library_api.services.notification_service import NotificationService
from library_api.utils.decorators import role_required
from library_api.utils.responses import ok

notif_bp = Blueprint("notifications", __name__, url_prefix="/api")


@notif_bp.post("/notifications/overdue")
@role_required("admin", "librarian")
def send_overdue_notices(ctx):
    summary = NotificationService.send_overdue_notices()
    return ok(summary, "Overdue notices processed")
