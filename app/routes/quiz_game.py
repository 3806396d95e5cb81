import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InternalError
from app.core.security import require_admin
from app.db.session import get_db
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.quiz_game import (
    AddFriendRequest,
    AnswerResult,
    CreateSessionRequest,
    FriendAnswers,
    FriendsList,
    FriendsScores,
    SaveAnswerRequest,
    SessionCreated,
    SessionListItem,
    SessionWithQuestions,
)
from app.services import quiz_game

logger = logging.getLogger(__name__)

router = APIRouter()


async def _storage_failure(db: AsyncSession, message: str) -> InternalError:
    logger.exception(message)
    await db.rollback()
    return InternalError(message)


@router.post("/create-session", response_model=ApiResponse[SessionCreated])
async def create_session(data: CreateSessionRequest, db: AsyncSession = Depends(get_db)):
    """Start a shareable quiz session for a host."""
    try:
        created = await quiz_game.create_session(db, data.quiz_id, data.user_name, data.language_code)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to create quiz session")
    return {"data": created, "message": "Quiz session created successfully"}


@router.get("/session/{unique_id}", response_model=ApiResponse[SessionWithQuestions])
async def get_session(unique_id: str, db: AsyncSession = Depends(get_db)):
    try:
        session = await quiz_game.get_session(db, unique_id)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to fetch quiz session")
    return {"data": session}


@router.delete("/session/{unique_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def deactivate_session(unique_id: str, db: AsyncSession = Depends(get_db)):
    try:
        await quiz_game.deactivate_session(db, unique_id)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to deactivate quiz session")
    return {"message": "Quiz session deactivated successfully"}


@router.post("/add-friend", response_model=MessageResponse)
async def add_friend(data: AddFriendRequest, db: AsyncSession = Depends(get_db)):
    try:
        await quiz_game.add_friend(db, data.unique_id, data.friend_name)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to add friend")
    return {"message": "Friend added successfully"}


@router.post("/save-answer", response_model=ApiResponse[AnswerResult])
async def save_answer(data: SaveAnswerRequest, db: AsyncSession = Depends(get_db)):
    try:
        is_correct = await quiz_game.save_answer(
            db, data.unique_id, data.friend_name, data.question_id, data.selected_option_id
        )
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to save answer")
    return {"data": {"is_correct": is_correct}, "message": "Answer saved successfully"}


@router.get("/friends-scores/{unique_id}", response_model=ApiResponse[FriendsScores])
async def get_friends_scores(unique_id: str, db: AsyncSession = Depends(get_db)):
    try:
        scores = await quiz_game.get_friends_scores(db, unique_id)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to fetch friends scores")
    return {"data": scores}


@router.get("/view-answers/{unique_id}/{friend_name}", response_model=ApiResponse[FriendAnswers])
async def view_friend_answers(unique_id: str, friend_name: str, db: AsyncSession = Depends(get_db)):
    try:
        answers = await quiz_game.get_friend_answers(db, unique_id, friend_name)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to fetch friend answers")
    return {"data": answers}


@router.get("/sessions", response_model=ApiResponse[List[SessionListItem]], dependencies=[Depends(require_admin)])
async def list_sessions(db: AsyncSession = Depends(get_db)):
    try:
        sessions = await quiz_game.list_sessions(db)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to fetch sessions")
    return {"data": sessions}


@router.get("/friends/{unique_id}", response_model=ApiResponse[FriendsList])
async def list_friends(unique_id: str, db: AsyncSession = Depends(get_db)):
    try:
        friends = await quiz_game.list_friends(db, unique_id)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to fetch friends")
    return {"data": friends}


@router.delete("/friends/{unique_id}/{friend_name}", response_model=MessageResponse)
async def remove_friend(unique_id: str, friend_name: str, db: AsyncSession = Depends(get_db)):
    try:
        await quiz_game.remove_friend(db, unique_id, friend_name)
    except SQLAlchemyError:
        raise await _storage_failure(db, "Failed to remove friend")
    return {"message": "Friend removed successfully"}
