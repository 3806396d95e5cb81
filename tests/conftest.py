import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.core.security import get_password_hash, issue_token
from app.db.base_class import Base
from app.db.session import build_engine, build_sessionmaker, get_db
from app.main import app
from app.models.language import Language
from app.models.quiz import Option, OptionContent, Question, QuestionContent, Quiz
from app.models.user import User

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine():
    engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = build_sessionmaker(engine)
    async with session_factory() as session:
        session.add_all([
            Language(code="en", name="English", native_name="English", is_default=True),
            Language(code="es", name="Spanish", native_name="Español"),
            Language(code="hi", name="Hindi", native_name="हिन्दी"),
        ])
        await session.commit()

    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine):
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
async def client(engine):
    session_factory = build_sessionmaker(engine)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_user(db):
    user = User(
        username="admin",
        email="admin@example.com",
        password=get_password_hash("admin123"),
        role="admin",
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def admin_headers(db, admin_user):
    token = await issue_token(db, admin_user)
    await db.commit()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def quiz(db):
    """An active quiz with two questions in en and es.

    Question 1 has one correct option, question 2 has two, question 3 is
    inactive and never shown to players.
    """
    quiz = Quiz(title="Capitals", description="World capitals")
    first = Question(question_type="text", order_index=1)
    first.contents = [
        QuestionContent(language_code="en", question_text="Capital of France?", explanation="Paris it is."),
        QuestionContent(language_code="es", question_text="¿Capital de Francia?"),
    ]
    for order, (correct, en, es) in enumerate([(True, "Paris", "París"), (False, "Rome", "Roma")], start=1):
        option = Option(order_index=order, is_correct=correct)
        option.contents = [
            OptionContent(language_code="en", option_text=en),
            OptionContent(language_code="es", option_text=es),
        ]
        first.options.append(option)

    second = Question(question_type="text", order_index=2)
    second.contents = [QuestionContent(language_code="en", question_text="Pick a prime")]
    for order, (correct, text) in enumerate([(True, "2"), (True, "3"), (False, "4")], start=1):
        option = Option(order_index=order, is_correct=correct)
        option.contents = [OptionContent(language_code="en", option_text=text)]
        second.options.append(option)

    hidden = Question(question_type="text", order_index=3, is_active=False)
    hidden.contents = [QuestionContent(language_code="en", question_text="Hidden")]

    quiz.questions.extend([first, second, hidden])
    db.add(quiz)
    await db.commit()
    return quiz
