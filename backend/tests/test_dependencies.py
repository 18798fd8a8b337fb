import pytest
from fastapi import HTTPException

import jobready.dependencies as deps


class _Creds:
    def __init__(self, token: str):
        self.credentials = token


class _User:
    def __init__(self, user_id=1):
        self.id = user_id


def test_get_current_user_missing_credentials():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=None)
    assert ex.value.status_code == 401
    assert ex.value.detail == "No token provided"


def test_get_current_user_invalid_token(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=_Creds("bad"))
    assert ex.value.status_code == 401
    assert ex.value.detail == "Invalid or expired token"


def test_get_current_user_user_not_found(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: 1)
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=_Creds("tok"))
    assert ex.value.status_code == 401
    assert ex.value.detail == "Invalid token"


def test_get_current_user_success(monkeypatch):
    user = _User(user_id=1)
    monkeypatch.setattr(deps, "decode_access_token", lambda token: 1)
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: user)
    assert deps.get_current_user(db=object(), credentials=_Creds("tok")) is user


def test_get_optional_user_anonymous():
    assert deps.get_optional_user(db=object(), credentials=None) is None


def test_get_optional_user_rejects_bad_token(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_optional_user(db=object(), credentials=_Creds("bad"))
    assert ex.value.status_code == 401


def test_get_optional_user_success(monkeypatch):
    user = _User(user_id=3)
    monkeypatch.setattr(deps, "decode_access_token", lambda token: 3)
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: user)
    assert deps.get_optional_user(db=object(), credentials=_Creds("tok")) is user
