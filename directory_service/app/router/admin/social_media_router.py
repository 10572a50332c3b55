from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_db
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud import bulk_operations
from ...crud import social_media_crud as crud
from ...schemas.social_media_schemas import (
    SocialMediaBulkActionRequest, SocialMediaBulkToggleRequest, SocialMediaBulkUpdateRequest,
    SocialMediaLinkCreate, SocialMediaLinkUpdate, SocialMediaReorderRequest
)

router = APIRouter(
    prefix="/api/admin/social-media",
    tags=["Admin Social Media"],
    dependencies=[Depends(allow_admin)],
)


def _bulk_result(summary):
    if summary.failure_count == 0:
        return success_response(data=summary, message=summary.message,
                                status_code=AppStatusCode.BULK_OPERATION_COMPLETED)

    # 207 Multi-Status when any item failed
    body = success_response(data=summary, message=summary.message,
                            status_code=AppStatusCode.BULK_OPERATION_PARTIAL)
    return JSONResponse(status_code=status.HTTP_207_MULTI_STATUS,
                        content=jsonable_encoder(body))


@router.get("")
def list_links(db: Session = Depends(get_db)):
    return success_response(data=crud.get_links(db))


@router.post("", status_code=201)
def create_link(link: SocialMediaLinkCreate, db: Session = Depends(get_db)):
    return success_response(data=crud.create_link(db, link),
                            message="Social media link created successfully",
                            status_code=AppStatusCode.CREATED_SUCCESSFULLY)


# ----------------- Bulk -----------------
@router.patch("/bulk")
def bulk_update(request: SocialMediaBulkUpdateRequest, db: Session = Depends(get_db)):
    return _bulk_result(crud.bulk_social_media_update(db, request.updates))


@router.post("/bulk-action")
def bulk_action(request: SocialMediaBulkActionRequest, db: Session = Depends(get_db)):
    return _bulk_result(crud.bulk_social_media_action(db, request.link_ids, request.action))


@router.post("/bulk-toggle")
def bulk_toggle(request: SocialMediaBulkToggleRequest, db: Session = Depends(get_db)):
    result = crud.bulk_social_media_toggle(db, request.link_ids, request.is_active)
    verb = "activated" if request.is_active else "deactivated"
    return _bulk_result(bulk_operations.summary_response(result, "social media link(s)", verb))


@router.put("/reorder")
def reorder(request: SocialMediaReorderRequest, db: Session = Depends(get_db)):
    return success_response(data=crud.reorder_links(db, request.items),
                            message="Social media links reordered",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


# ----------------- Single link -----------------
@router.put("/{link_id}")
def update_link(link_id: int, link: SocialMediaLinkUpdate, db: Session = Depends(get_db)):
    return success_response(data=crud.update_link(db, link_id, link),
                            message="Social media link updated successfully",
                            status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{link_id}")
def delete_link(link_id: int, db: Session = Depends(get_db)):
    return success_response(data=crud.delete_link(db, link_id),
                            message="Social media link deleted successfully",
                            status_code=AppStatusCode.DELETED_SUCCESSFULLY)
