"""
Unit tests for User domain model.
"""

import pytest
from anvaya_client.domain.user import User, UserRole


def test_user_creation():
    """Test basic user creation."""
    user = User(user_id="1", email="a@b.com", name="Asha", role=UserRole.DOCTOR)

    assert user.user_id == "1"
    assert user.role == UserRole.DOCTOR
    assert user.known_role == UserRole.DOCTOR


def test_user_from_backend_profile():
    """Test deserializing the backend profile shape."""
    user = User.from_dict({"id": 7, "email": "p@b.com", "name": "Ravi", "role": "PATIENT"})

    assert user.user_id == "7"
    assert user.email == "p@b.com"
    assert user.role == UserRole.PATIENT


def test_user_from_mongo_style_id():
    """Test _id is accepted as the identifier."""
    user = User.from_dict({"_id": "abc", "email": "x@y.z", "name": "X", "role": "ADMIN"})

    assert user.user_id == "abc"
    assert user.role == UserRole.ADMIN


def test_user_role_case_insensitive():
    """Test lowercase role strings are recognised."""
    user = User.from_dict({"id": "1", "role": "doctor"})

    assert user.role == UserRole.DOCTOR


def test_unknown_role_kept_verbatim():
    """Test an unrecognised role is kept as a string, not defaulted."""
    user = User.from_dict({"id": "1", "email": "n@b.com", "name": "N", "role": "NURSE"})

    assert user.role == "NURSE"
    assert user.known_role is None


def test_missing_role():
    """Test a profile without a role has no known role."""
    user = User.from_dict({"id": "1"})

    assert user.known_role is None


def test_missing_id_raises():
    """Test a profile without an identifier is rejected."""
    with pytest.raises(KeyError):
        User.from_dict({"email": "a@b.com", "role": "DOCTOR"})


def test_user_serialization():
    """Test to_dict produces the backend shape."""
    user = User(user_id="1", email="a@b.com", name="Asha", role=UserRole.ADMIN)

    data = user.to_dict()
    assert data == {"id": "1", "email": "a@b.com", "name": "Asha", "role": "ADMIN"}

    restored = User.from_dict(data)
    assert restored == user


def test_role_parse():
    """Test UserRole.parse for every kind of input."""
    assert UserRole.parse("ADMIN") == UserRole.ADMIN
    assert UserRole.parse(" patient ") == UserRole.PATIENT
    assert UserRole.parse(UserRole.DOCTOR) == UserRole.DOCTOR
    assert UserRole.parse("SUPERUSER") is None
    assert UserRole.parse(None) is None
    assert UserRole.parse(3) is None
