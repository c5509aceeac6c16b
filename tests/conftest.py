"""Shared fixtures for findmyquote tests."""

import json

import pytest

from findmyquote.models import ResultItem


DOCS = [
    {"title": "The Empire Strikes Back", "year": 1980, "phrase": "No, I am your father."},
    {"title": "Robot Chicken: Star Wars", "year": 2007, "phrase": "I am your father, Luke."},
    {"title": "Spaceballs", "year": 1987, "phrase": "I am your father's brother's nephew's cousin's former roommate."},
]


@pytest.fixture
def docs():
    return [dict(d) for d in DOCS]


@pytest.fixture
def payload(docs):
    return json.dumps({"total": len(docs), "docs": docs})


@pytest.fixture
def items():
    return [ResultItem(quote=d["phrase"], title=d["title"], year=d["year"]) for d in DOCS]


@pytest.fixture
def state_dir(tmp_path, monkeypatch):
    """Point the persistent state directory at a temp directory."""
    import findmyquote.config as config
    monkeypatch.setattr(config, "STATE_DIR", tmp_path)
    monkeypatch.setattr(config, "PERSISTENT_ENV", tmp_path / ".env")
    return tmp_path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("QUODB_API_URL", "API_TIMEOUT", "FINDMYQUOTE_PAGE_SIZE"):
        monkeypatch.delenv(var, raising=False)
