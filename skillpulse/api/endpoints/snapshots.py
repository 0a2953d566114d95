from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
import logging

from skillpulse import crud
from skillpulse.database import get_db
from skillpulse.exceptions import NotFoundError
from skillpulse.schemas import WeeklySnapshotCreate, WeeklySnapshotUpdate, WeeklySnapshotResponse

router = APIRouter(prefix="/snapshots", tags=["snapshots"])
logger = logging.getLogger(__name__)

@router.get("", response_model=List[WeeklySnapshotResponse])
async def get_snapshots(db: Session = Depends(get_db)):
    """Get all snapshots, newest week first"""
    return crud.get_snapshots(db)

@router.get("/current", response_model=WeeklySnapshotResponse)
async def get_current_snapshot(db: Session = Depends(get_db)):
    """Get the snapshot flagged as current"""
    snapshot = crud.get_current_snapshot(db)
    if not snapshot:
        raise NotFoundError("Current snapshot")
    return snapshot

@router.get("/previous", response_model=WeeklySnapshotResponse)
async def get_previous_snapshot(db: Session = Depends(get_db)):
    """Get the latest snapshot before the current one"""
    snapshot = crud.get_previous_snapshot(db)
    if not snapshot:
        raise NotFoundError("Previous snapshot")
    return snapshot

@router.get("/{snapshot_id}", response_model=WeeklySnapshotResponse)
async def get_snapshot(snapshot_id: int, db: Session = Depends(get_db)):
    """Get snapshot by ID"""
    snapshot = crud.get_snapshot(db, snapshot_id)
    if not snapshot:
        raise NotFoundError("Snapshot", snapshot_id)
    return snapshot

@router.post("", response_model=WeeklySnapshotResponse, status_code=status.HTTP_201_CREATED)
async def create_snapshot(
    snapshot_data: WeeklySnapshotCreate,
    set_current: bool = Query(False, description="Mark the new snapshot as the current week"),
    db: Session = Depends(get_db)
):
    """Create new snapshot, optionally replacing the current one"""
    return crud.create_snapshot(db, snapshot_data, set_current=set_current)

@router.patch("/{snapshot_id}", response_model=WeeklySnapshotResponse)
async def update_snapshot(
    snapshot_id: int,
    snapshot_update: WeeklySnapshotUpdate,
    db: Session = Depends(get_db)
):
    """Update snapshot; flagging it current unflags the others"""
    update_data = snapshot_update.model_dump(exclude_unset=True, exclude_none=True)
    snapshot = crud.update_snapshot(db, snapshot_id, update_data)
    if not snapshot:
        raise NotFoundError("Snapshot", snapshot_id)
    return snapshot

@router.delete("/{snapshot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_snapshot(snapshot_id: int, db: Session = Depends(get_db)):
    """Delete snapshot and all of its assessments"""
    if not crud.delete_snapshot(db, snapshot_id):
        raise NotFoundError("Snapshot", snapshot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
