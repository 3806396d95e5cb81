from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import require_admin
from app.db.session import get_db
from app.schemas.common import MessageResponse
from app.schemas.quiz import OptionUpdate, QuestionCreate, QuestionUpdate
from app.services import catalog

router = APIRouter(dependencies=[Depends(require_admin)])

# option routes first so "options" is never parsed as a question id

@router.put("/options/{option_id}", response_model=MessageResponse)
async def update_option(option_id: int, data: OptionUpdate, db: AsyncSession = Depends(get_db)):
    await catalog.update_option(db, option_id, data)
    return {"message": "Option updated successfully"}


@router.delete("/options/{option_id}", response_model=MessageResponse)
async def delete_option(option_id: int, db: AsyncSession = Depends(get_db)):
    await catalog.delete_option(db, option_id)
    return {"message": "Option deleted successfully"}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(data: QuestionCreate, db: AsyncSession = Depends(get_db)):
    """Create a question with its translations and options in one transaction."""
    question_id = await catalog.create_question(db, data)
    return {"success": True, "message": "Question created successfully", "data": {"id": question_id}}


@router.get("/{question_id}")
async def get_question(question_id: int, db: AsyncSession = Depends(get_db)):
    return {"success": True, "data": await catalog.get_question(db, question_id)}


@router.put("/{question_id}", response_model=MessageResponse)
async def update_question(question_id: int, data: QuestionUpdate, db: AsyncSession = Depends(get_db)):
    await catalog.update_question(db, question_id, data)
    return {"message": "Question updated successfully"}


@router.delete("/{question_id}", response_model=MessageResponse)
async def delete_question(question_id: int, db: AsyncSession = Depends(get_db)):
    await catalog.delete_question(db, question_id)
    return {"message": "Question deleted successfully"}
