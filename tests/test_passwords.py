import string

import pytest

from app.core.security import get_password_hash, verify_password
from app.services.credential_store import CredentialStore
from app.services.passwords import (
    EmailPrefixPasswordPolicy,
    SecurePasswordPolicy,
    derive_password_from_email,
    generate_secure_password,
    validate_password_strength,
)


def test_derive_password_from_email():
    password = derive_password_from_email("john@example.com")
    assert password.startswith("john")
    assert len(password) == len("john") + 4
    assert 1000 <= int(password[4:]) <= 9999


def test_secure_password_has_every_class():
    for _ in range(20):
        password = generate_secure_password(12)
        assert len(password) == 12
        assert any(c in string.ascii_uppercase for c in password)
        assert any(c in string.ascii_lowercase for c in password)
        assert any(c in string.digits for c in password)
        assert any(not c.isalnum() for c in password)
        assert not set(password) & set("0O1lI")


def test_secure_password_too_short():
    with pytest.raises(ValueError):
        generate_secure_password(3)


def test_validate_password_strength():
    assert validate_password_strength("GoodPassw0rd") == []
    errors = validate_password_strength("short")
    assert "Password must be at least 8 characters long" in errors
    assert "Password must contain at least one uppercase letter" in errors
    assert "Password must contain at least one number" in errors


def test_policies():
    assert EmailPrefixPasswordPolicy().generate("amy@x.com").startswith("amy")
    assert len(SecurePasswordPolicy(16).generate("amy@x.com")) == 16


def test_hash_roundtrip():
    hashed = get_password_hash("jane4821")
    assert hashed != "jane4821"
    assert verify_password("jane4821", hashed)
    assert not verify_password("jane4822", hashed)


def test_store_generates_secure_staff_password():
    password = CredentialStore(None).generate_staff_password()
    assert len(password) == 12
    assert validate_password_strength(password) == []
