import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import taskdeck.core.database
taskdeck.core.database.engine = test_engine
taskdeck.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer app (qui utilisera notre engine SQLite)
from taskdeck.core.database import Base, get_db
from taskdeck.core.security import create_access_token
from taskdeck.main import app
from taskdeck.models.user import User


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)

# Override la dépendance
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


def make_user(email: str, password: str = "password123", name: str = "Test User") -> User:
    """Crée un user directement en base et le retourne (détaché)"""
    db = TestingSessionLocal()
    user = User(email=email, name=name)
    user.set_password(password)
    db.add(user)
    db.commit()
    db.refresh(user)
    db.expunge(user)
    db.close()
    return user


def auth_headers(user: User) -> dict:
    token = create_access_token(user.id, user.email, name=user.name, image=user.image)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user():
    return make_user("owner@example.com", name="Owner")


@pytest.fixture
def other_user():
    return make_user("intruder@example.com", name="Intruder")


@pytest.fixture
def headers(user):
    return auth_headers(user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture
def kiritimati_tz(monkeypatch):
    """Fuseau du serveur forcé à UTC+14, loin de UTC"""
    import time
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset indisponible sur cette plateforme")
    monkeypatch.setenv("TZ", "Pacific/Kiritimati")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
