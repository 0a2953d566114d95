from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from skillpulse import crud
from skillpulse.database import get_db
from skillpulse.exceptions import NotFoundError
from skillpulse.models import SkillLevel
from skillpulse.schemas import SkillCreate, SkillUpdate, SkillResponse, SkillLevelOption

router = APIRouter(tags=["skills"])
logger = logging.getLogger(__name__)

@router.get("/skill-levels", response_model=List[SkillLevelOption])
async def get_skill_levels():
    """Selectable skill levels with their display names"""
    return [{"value": level.value, "label": level.label} for level in SkillLevel]

@router.get("/skills", response_model=List[SkillResponse])
async def get_skills(db: Session = Depends(get_db)):
    """Get all skills"""
    return crud.get_skills(db)

@router.get("/skills/{skill_id}", response_model=SkillResponse)
async def get_skill(skill_id: int, db: Session = Depends(get_db)):
    """Get skill by ID"""
    skill = crud.get_skill(db, skill_id)
    if not skill:
        raise NotFoundError("Skill", skill_id)
    return skill

@router.post("/skills", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def create_skill(skill_data: SkillCreate, db: Session = Depends(get_db)):
    """Create new skill; names are unique"""
    return crud.create_skill(db, skill_data)

@router.patch("/skills/{skill_id}", response_model=SkillResponse)
async def update_skill(
    skill_id: int,
    skill_update: SkillUpdate,
    db: Session = Depends(get_db)
):
    """Update skill"""
    update_data = skill_update.model_dump(exclude_unset=True, exclude_none=True)
    skill = crud.update_skill(db, skill_id, update_data)
    if not skill:
        raise NotFoundError("Skill", skill_id)
    return skill

@router.delete("/skills/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_skill(skill_id: int, db: Session = Depends(get_db)):
    """Delete skill and all of its assessments"""
    if not crud.delete_skill(db, skill_id):
        raise NotFoundError("Skill", skill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
