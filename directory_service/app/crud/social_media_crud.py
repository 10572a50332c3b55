import logging
from typing import List, Optional

from fastapi import status
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import SocialMediaAction
from ..models.social_media_links import SocialMediaLink
from ..schemas.bulk_operations_schemas import BulkOperationResult, BulkSummaryResponse
from ..schemas.social_media_schemas import (
    SocialMediaBulkUpdateItem, SocialMediaLinkCreate, SocialMediaLinkOut,
    SocialMediaLinkUpdate, SocialMediaReorderItem
)
from . import bulk_operations

logger = logging.getLogger(__name__)


def get_links(db: Session, active_only: bool = False) -> List[SocialMediaLinkOut]:
    query = db.query(SocialMediaLink)
    if active_only:
        query = query.filter(SocialMediaLink.is_active == True)
    links = query.order_by(SocialMediaLink.sort_order.asc(), SocialMediaLink.id.asc()).all()
    return [SocialMediaLinkOut.model_validate(link) for link in links]


def get_link_or_404(db: Session, link_id: int) -> SocialMediaLink:
    link = db.query(SocialMediaLink).filter(SocialMediaLink.id == link_id).first()
    if not link:
        return error_response(
            message="Social media link not found",
            status_code=str(AppStatusCode.NOT_FOUND),
            http_status=status.HTTP_404_NOT_FOUND
        )
    return link


def _ensure_platform_free(db: Session, platform: str, link_id: Optional[int] = None):
    query = db.query(SocialMediaLink.id).filter(SocialMediaLink.platform == platform)
    if link_id is not None:
        query = query.filter(SocialMediaLink.id != link_id)
    if query.first():
        return error_response(
            message=f"A link for platform '{platform}' already exists",
            status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )


def create_link(db: Session, link: SocialMediaLinkCreate) -> SocialMediaLinkOut:
    _ensure_platform_free(db, link.platform)

    data = link.model_dump()
    if data.get("sort_order") is None:
        data.pop("sort_order", None)
    if data.get("is_active") is None:
        data["is_active"] = True

    db_link = SocialMediaLink(**data)
    db.add(db_link)
    db.commit()
    db.refresh(db_link)
    logger.info("Created social media link %s (%s)", db_link.id, db_link.platform)
    return SocialMediaLinkOut.model_validate(db_link)


def _apply_update(db: Session, link_id: int, update_data: dict) -> SocialMediaLink:
    db_link = get_link_or_404(db, link_id)

    # required columns cannot be cleared
    for key in ("platform", "url", "display_name", "icon_class", "sort_order", "is_active"):
        if key in update_data and update_data[key] is None:
            update_data.pop(key)

    if "platform" in update_data:
        _ensure_platform_free(db, update_data["platform"], link_id)

    for key, value in update_data.items():
        setattr(db_link, key, value)
    db.flush()
    return db_link


def update_link(db: Session, link_id: int, link: SocialMediaLinkUpdate) -> SocialMediaLinkOut:
    db_link = _apply_update(db, link_id, link.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(db_link)
    return SocialMediaLinkOut.model_validate(db_link)


def delete_link(db: Session, link_id: int):
    db_link = get_link_or_404(db, link_id)
    db.delete(db_link)
    db.commit()
    logger.info("Deleted social media link %s", link_id)
    return {"id": link_id}


def reorder_links(db: Session, items: List[SocialMediaReorderItem]) -> List[SocialMediaLinkOut]:
    """Reorder is all-or-nothing: an unknown id aborts the whole call."""
    if not items:
        return error_response(
            message="items array cannot be empty",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    for item in items:
        db_link = get_link_or_404(db, item.id)
        db_link.sort_order = item.sort_order
    db.commit()
    return get_links(db)


def _parse_action(action: Optional[str]) -> SocialMediaAction:
    valid = [a.value for a in SocialMediaAction]
    if not action or action.lower() not in valid:
        return error_response(
            message=f"Invalid action. Must be one of: {', '.join(valid)}",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )
    return SocialMediaAction(action.lower())


def bulk_social_media_action(db: Session, link_ids, action: Optional[str]) -> BulkSummaryResponse:
    ids = bulk_operations.validate_bulk_ids(link_ids, "linkIds")
    parsed = _parse_action(action)

    if parsed == SocialMediaAction.DELETE:
        def op(session: Session, link_id):
            session.delete(get_link_or_404(session, link_id))
            session.flush()
        verb = "deleted"
    else:
        is_active = parsed == SocialMediaAction.ACTIVATE

        def op(session: Session, link_id):
            get_link_or_404(session, link_id).is_active = is_active
            session.flush()
        verb = "activated" if is_active else "deactivated"

    result = bulk_operations.apply_batch(db, ids, op, "Link")
    return bulk_operations.summary_response(result, "social media link(s)", verb)


def bulk_social_media_toggle(db: Session, link_ids, is_active: bool) -> BulkOperationResult:
    ids = bulk_operations.validate_bulk_ids(link_ids, "linkIds")

    def op(session: Session, link_id):
        get_link_or_404(session, link_id).is_active = is_active
        session.flush()

    return bulk_operations.apply_batch(db, ids, op, "Link")


def bulk_social_media_update(db: Session, updates: List[SocialMediaBulkUpdateItem]) -> BulkSummaryResponse:
    ids = bulk_operations.validate_bulk_ids([u.id for u in updates], "updates")
    by_id = {u.id: u.model_dump(exclude_unset=True, exclude={"id"}) for u in updates}

    def op(session: Session, link_id):
        _apply_update(session, link_id, dict(by_id[link_id]))

    result = bulk_operations.apply_batch(db, ids, op, "Link")
    return bulk_operations.summary_response(result, "social media link(s)", "updated")
