from sqlalchemy import func, select

from app.models.content import ContentItem, Page
from app.models.language import Language
from app.models.quiz import Option, Question, Quiz
from app.models.user import User
from app.services.seed import seed_database


async def _count(db, column):
    return await db.scalar(select(func.count(column)))


async def test_seed_fills_empty_tables_once(db):
    await seed_database(db)
    await seed_database(db)

    assert await _count(db, User.id) == 1
    # base languages already exist, so the language group is skipped
    assert await _count(db, Language.id) == 3
    assert await _count(db, Page.id) == 5
    assert await _count(db, Quiz.id) == 1
    assert await _count(db, Question.id) == 2
    assert await _count(db, Option.id) == 8

    quiz = await db.scalar(select(Quiz))
    admin = await db.scalar(select(User))
    assert quiz.title == "General Knowledge Quiz"
    assert quiz.created_by == admin.id
    # ur translations are skipped: only en and hi of the seeded content apply
    assert await _count(db, ContentItem.id) == 8


async def test_seed_without_sample_data_only_creates_admin(db):
    await seed_database(db, sample_data=False)

    admin = await db.scalar(select(User))
    assert admin.role == "admin"
    assert await _count(db, Page.id) == 0
