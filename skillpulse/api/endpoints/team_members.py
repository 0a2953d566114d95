from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from skillpulse import crud
from skillpulse.database import get_db
from skillpulse.exceptions import NotFoundError
from skillpulse.schemas import TeamMemberCreate, TeamMemberUpdate, TeamMemberResponse

router = APIRouter(prefix="/team-members", tags=["team-members"])
logger = logging.getLogger(__name__)

@router.get("", response_model=List[TeamMemberResponse])
async def get_team_members(db: Session = Depends(get_db)):
    """Get all team members"""
    return crud.get_team_members(db)

@router.get("/{member_id}", response_model=TeamMemberResponse)
async def get_team_member(member_id: int, db: Session = Depends(get_db)):
    """Get team member by ID"""
    member = crud.get_team_member(db, member_id)
    if not member:
        raise NotFoundError("Team member", member_id)
    return member

@router.post("", response_model=TeamMemberResponse, status_code=status.HTTP_201_CREATED)
async def create_team_member(member_data: TeamMemberCreate, db: Session = Depends(get_db)):
    """Create new team member; initials are derived from the name when omitted"""
    return crud.create_team_member(db, member_data)

@router.patch("/{member_id}", response_model=TeamMemberResponse)
async def update_team_member(
    member_id: int,
    member_update: TeamMemberUpdate,
    db: Session = Depends(get_db)
):
    """Update team member"""
    update_data = member_update.model_dump(exclude_unset=True, exclude_none=True)
    member = crud.update_team_member(db, member_id, update_data)
    if not member:
        raise NotFoundError("Team member", member_id)
    return member

@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team_member(member_id: int, db: Session = Depends(get_db)):
    """Delete team member and all of their assessments"""
    if not crud.delete_team_member(db, member_id):
        raise NotFoundError("Team member", member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
