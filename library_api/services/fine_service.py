from flask import current_app

from library_api.models.fine import Fine
from library_api.repositories.fine_repo import FineRepo
from library_api.utils.errors import ConflictError, NotFoundError
from library_api.utils.validators import validate_fine_payment


class FineService:
    @staticmethod
    def list_fines(**filters):
        return FineRepo.search(**filters)

    @staticmethod
    def get_fine(fine_id: int) -> Fine:
        fine = FineRepo.get_with_relations(fine_id)
        if not fine:
            raise NotFoundError("Fine not found")
        return fine

    @staticmethod
    def pay_fine(fine_id: int, paid_date) -> Fine:
        fine = FineRepo.get(fine_id)
        if not fine:
            raise NotFoundError("Fine not found")
        if fine.is_paid:
            raise ConflictError("Fine already paid")

        paid_date = validate_fine_payment({"paid_date": paid_date})["paid_date"]

        if not FineRepo.mark_paid(fine_id, paid_date):
            raise ConflictError("Fine already paid")
        FineRepo.commit()

        current_app.logger.info(f"[FineService] fine={fine_id} paid on {paid_date}")
        return FineService.get_fine(fine_id)
