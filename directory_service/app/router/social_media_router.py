from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_db
from shared.helpers.json_response_helper import success_response
from ..crud import social_media_crud as crud

router = APIRouter(prefix="/api/social-media", tags=["Social Media"])


@router.get("")
def active_links(db: Session = Depends(get_db)):
    return success_response(data=crud.get_links(db, active_only=True))
