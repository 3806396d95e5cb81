from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import require_admin
from app.db.session import get_db
from app.models.user import User
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.quiz import QuizCreate, QuizListItem, QuizUpdate
from app.services import catalog

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=ApiResponse[List[QuizListItem]])
async def list_quizzes(db: AsyncSession = Depends(get_db)):
    return {"data": await catalog.list_quizzes(db)}


@router.get("/{quiz_id}")
async def get_quiz(quiz_id: int, db: AsyncSession = Depends(get_db)):
    """Quiz with all questions, translations and options."""
    return {"success": True, "data": await catalog.get_quiz_tree(db, quiz_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_quiz(
    data: QuizCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    quiz = await catalog.create_quiz(db, data, current_user.id)
    return {"success": True, "message": "Quiz created successfully", "data": {"id": quiz.id}}


@router.put("/{quiz_id}", response_model=MessageResponse)
async def update_quiz(quiz_id: int, data: QuizUpdate, db: AsyncSession = Depends(get_db)):
    await catalog.update_quiz(db, quiz_id, data)
    return {"message": "Quiz updated successfully"}


@router.delete("/{quiz_id}", response_model=MessageResponse)
async def delete_quiz(quiz_id: int, db: AsyncSession = Depends(get_db)):
    await catalog.delete_quiz(db, quiz_id)
    return {"message": "Quiz deleted successfully"}
