"""
Configuration for pytest tests.
"""

import os
import shutil
import tempfile

# Settings are read when app.config is imported, so the environment is set first
TEST_DATA_DIR = tempfile.mkdtemp(prefix="absorbey_test_")
os.environ["DATA_DIR"] = TEST_DATA_DIR
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DATA_DIR}/test.db"
os.environ["ANTHROPIC_API_KEY"] = "test_api_key"
os.environ["ENVIRONMENT"] = "development"
os.environ["FIREBASE_SERVICE_ACCOUNT_PATH"] = ""
os.environ["FIREBASE_SERVICE_ACCOUNT_JSON"] = ""
os.environ.pop("REDIS_URL", None)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import Base, init_db
from app.utils.caching import clear_memory_cache


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Remove the temporary data directory after the run."""
    yield
    shutil.rmtree(TEST_DATA_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def clear_cache():
    """Metadata and transcripts are cached by video ID; start every test empty."""
    clear_memory_cache()
    yield
    clear_memory_cache()


@pytest.fixture
def db_session():
    """An in-memory database session with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="session")
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://youtu.be/V3TUEeB0kW0?si=-InVol0JhtWji-6R"


@pytest.fixture(scope="session")
def test_video_id():
    return "V3TUEeB0kW0"


@pytest.fixture
def sample_summary():
    return (
        "1. Neural networks learn by adjusting weights through backpropagation.\n"
        "2. Gradient descent moves the weights in the direction that lowers the loss.\n"
        "3. Overfitting happens when a model memorizes the training data.\n"
        "Short line\n"
        "4. Regularization and dropout are common ways to reduce overfitting."
    )
