import logging

from fastapi import APIRouter, Depends

from app.application.catalog import Catalog
from app.core.errors import NotFoundError
from app.domain.messages import owner_enquiry_message
from app.domain.schemas import EnquiryIn, EnquiryUpdate
from app.infrastructure.notification_service import NotificationService
from app.interfaces.dependencies import get_catalog, get_notifier

router = APIRouter(prefix="/api/enquiries", tags=["Enquiries"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201)
def create_enquiry(payload: EnquiryIn, catalog: Catalog = Depends(get_catalog),
                   notifier: NotificationService = Depends(get_notifier)):
    enquiry = catalog.enquiries.create(payload.model_dump())
    logger.info(f"📞 New enquiry {enquiry.id} from {enquiry.phone}")
    notifier.notify_owner(owner_enquiry_message(enquiry))
    return {"message": "Enquiry submitted successfully", "enquiry": enquiry.to_dict()}


@router.get("")
def list_enquiries(catalog: Catalog = Depends(get_catalog)):
    return [e.to_dict() for e in catalog.enquiries.list()]


@router.put("/{enquiry_id}")
def update_enquiry(enquiry_id: str, payload: EnquiryUpdate, catalog: Catalog = Depends(get_catalog)):
    enquiry = catalog.enquiries.update(enquiry_id, payload.model_dump(exclude_unset=True))
    if enquiry is None:
        raise NotFoundError("Enquiry not found")
    return enquiry.to_dict()


@router.delete("/{enquiry_id}")
def delete_enquiry(enquiry_id: str, catalog: Catalog = Depends(get_catalog)):
    if not catalog.enquiries.delete(enquiry_id):
        raise NotFoundError("Enquiry not found")
    return {"message": "Enquiry deleted"}
