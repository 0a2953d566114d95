from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
import logging

from skillpulse import crud
from skillpulse.database import get_db
from skillpulse.exceptions import NotFoundError
from skillpulse.schemas import SettingValue, SettingResponse

router = APIRouter(prefix="/settings", tags=["settings"])
logger = logging.getLogger(__name__)

@router.get("/{key}", response_model=SettingResponse)
async def get_setting(key: str = Path(..., min_length=1, max_length=100), db: Session = Depends(get_db)):
    """Get a stored setting value"""
    setting = crud.get_setting(db, key)
    if not setting:
        raise NotFoundError(f"Setting '{key}'")
    return setting

@router.put("/{key}", response_model=SettingResponse)
async def put_setting(
    payload: SettingValue,
    key: str = Path(..., min_length=1, max_length=100),
    db: Session = Depends(get_db)
):
    """Store any JSON value under a key, replacing the previous one"""
    return crud.set_setting(db, key, payload.value)
