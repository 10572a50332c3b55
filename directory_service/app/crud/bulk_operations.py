"""
Generic batch-apply primitive shared by the business and social-media bulk
endpoints.

Every id runs in its own transaction: a failing item is rolled back and
recorded in ``errors`` while the remaining ids are still processed, so
``success_count + failure_count == total_requested`` holds for every call.
"""
import logging
from typing import Any, Callable, List, Sequence

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.helpers.json_response_helper import error_message, error_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas.bulk_operations_schemas import BulkOperationResult, BulkSummaryResponse

logger = logging.getLogger(__name__)

BulkItemOperation = Callable[[Session, Any], Any]


def validate_bulk_ids(ids: Any, field_name: str) -> List[Any]:
    """Reject the whole call before any per-item work."""
    if ids is None:
        return error_response(
            message=f"{field_name} field is required",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    if not isinstance(ids, list):
        return error_response(
            message=f"{field_name} must be an array",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    if len(ids) == 0:
        return error_response(
            message=f"{field_name} array cannot be empty",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    if len(ids) > settings.BULK_MAX_ITEMS:
        return error_response(
            message=f"Cannot process more than {settings.BULK_MAX_ITEMS} items at once",
            status_code=str(AppStatusCode.VALIDATION_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    for item_id in ids:
        if isinstance(item_id, bool) or not isinstance(item_id, (str, int)) or item_id == "":
            return error_response(
                message=f"{field_name} contains an invalid id: {item_id!r}",
                status_code=str(AppStatusCode.VALIDATION_ERROR),
                http_status=status.HTTP_400_BAD_REQUEST
            )

    return ids


def apply_batch(db: Session, ids: Sequence[Any], op: BulkItemOperation, label: str) -> BulkOperationResult:
    result = BulkOperationResult(total_requested=len(ids))

    for item_id in ids:
        try:
            op(db, item_id)
            db.commit()
            result.success_count += 1
        except HTTPException as e:
            db.rollback()
            result.failure_count += 1
            result.errors.append(f"{label} {item_id}: {error_message(e)}")
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Bulk %s operation failed for %s", label, item_id)
            result.failure_count += 1
            result.errors.append(f"{label} {item_id}: Database operation failed")

    logger.info(
        "Bulk %s operation finished: %s succeeded, %s failed, %s requested",
        label, result.success_count, result.failure_count, result.total_requested)
    return result


def completion_status(result: BulkOperationResult) -> str:
    if result.failure_count == 0:
        return "complete"
    if result.success_count == 0:
        return "failed"
    return "partial"


def summarize(result: BulkOperationResult, noun: str, verb: str) -> str:
    """verb is past tense, e.g. 'deleted'."""
    if result.failure_count == 0:
        return f"Successfully {verb} all {result.success_count} {noun}"
    if result.success_count == 0:
        return f"Failed to process any {noun}. {result.failure_count} error(s) occurred"
    return (
        f"Partially successful: {result.success_count} of {result.total_requested} "
        f"{noun} {verb}. {result.failure_count} error(s) occurred"
    )


def summary_response(result: BulkOperationResult, noun: str, verb: str) -> BulkSummaryResponse:
    return BulkSummaryResponse(
        message=summarize(result, noun, verb),
        status=completion_status(result),
        success_count=result.success_count,
        failure_count=result.failure_count,
        total_requested=result.total_requested,
        errors=result.errors,
    )
