from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
import logging

from skillpulse import crud
from skillpulse.database import get_db
from skillpulse.exceptions import NotFoundError
from skillpulse.schemas import SkillAssessmentCreate, SkillAssessmentUpdate, SkillAssessmentResponse

router = APIRouter(prefix="/assessments", tags=["assessments"])
logger = logging.getLogger(__name__)

@router.get("", response_model=List[SkillAssessmentResponse])
async def get_assessments(
    snapshot_id: Optional[int] = Query(None, description="Filter by snapshot"),
    team_member_id: Optional[int] = Query(None, description="Filter by team member"),
    skill_id: Optional[int] = Query(None, description="Filter by skill"),
    db: Session = Depends(get_db)
):
    """Get assessments with optional filters"""
    return crud.get_skill_assessments(
        db,
        snapshot_id=snapshot_id,
        team_member_id=team_member_id,
        skill_id=skill_id
    )

@router.get("/{assessment_id}", response_model=SkillAssessmentResponse)
async def get_assessment(assessment_id: int, db: Session = Depends(get_db)):
    """Get assessment by ID"""
    assessment = crud.get_skill_assessment(db, assessment_id)
    if not assessment:
        raise NotFoundError("Assessment", assessment_id)
    return assessment

@router.post("", response_model=SkillAssessmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assessment(assessment_data: SkillAssessmentCreate, db: Session = Depends(get_db)):
    """
    Record a level for a team member, skill and snapshot

    Posting the same member, skill and snapshot again replaces the level.
    """
    return crud.create_skill_assessment(db, assessment_data)

@router.patch("/{assessment_id}", response_model=SkillAssessmentResponse)
async def update_assessment(
    assessment_id: int,
    assessment_update: SkillAssessmentUpdate,
    db: Session = Depends(get_db)
):
    """Update assessment"""
    update_data = assessment_update.model_dump(exclude_unset=True, exclude_none=True)
    assessment = crud.update_skill_assessment(db, assessment_id, update_data)
    if not assessment:
        raise NotFoundError("Assessment", assessment_id)
    return assessment

@router.delete("/{assessment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assessment(assessment_id: int, db: Session = Depends(get_db)):
    """Delete assessment"""
    if not crud.delete_skill_assessment(db, assessment_id):
        raise NotFoundError("Assessment", assessment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
