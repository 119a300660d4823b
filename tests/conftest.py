"""Shared fixtures: in-memory databases and sample preference records."""

import pytest
from sqlalchemy.orm import sessionmaker

from dishnamer.database import create_db_engine, init_db
from dishnamer.preferences import PreferenceRecord


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory database with tables."""
    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def broken_session_factory():
    """Session factory whose database has no tables, so every query fails."""
    engine = create_db_engine("sqlite:///:memory:")
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def learned_record():
    """A record after a few acceptances."""
    return PreferenceRecord(
        selected_names=["The Spicy Garden Feast", "Spicy Garden Bowl", "Spicy Feast"],
        keywords={"spicy": 3, "garden": 2, "feast": 2, "bowl": 1},
        tone_preferences={"playful": 2, "elegant": 1},
    )
