import jwt
import pytest

from shared.core.config import settings
from shared.core.security import (
    decrypt_data,
    encrypt_data,
    hash_secret,
    verify_secret,
)
from shared.utils.auth import (
    ROLE_USER,
    create_jwt_token,
    hash_password,
    verify_jwt_token,
    verify_password,
)
from shared.utils.otp_and_tokens import issue_otp
from shared.utils.timezone_utils import utc_now


def test_encrypt_decrypt_cycle():
    """Test that data can be encrypted and then decrypted back to original."""
    original_data = "sensitive information 123!@#"

    # Encrypt the data
    encrypted = encrypt_data(original_data)

    # Verify encrypted data is different from original
    assert encrypted != original_data

    # Decrypt the data
    decrypted = decrypt_data(encrypted)

    # Verify decrypted data matches original
    assert decrypted == original_data


def test_empty_string_handling():
    """Test that empty strings are handled properly."""
    # Empty string encryption should return empty string
    assert encrypt_data("") == ""

    # Empty string decryption should return empty string
    assert decrypt_data("") == ""


def test_invalid_token_handling():
    """Test that invalid tokens raise appropriate errors."""
    # Create some valid encrypted data
    valid_encrypted = encrypt_data("test data")

    # Tamper with the encrypted data
    tampered_data = valid_encrypted[:-5] + "XXXXX"

    # Attempt to decrypt should raise ValueError
    with pytest.raises(ValueError):
        decrypt_data(tampered_data)


def test_secret_hash_is_scoped_to_owner():
    hashed = hash_secret("123456", "someone@example.com")

    assert hashed != "123456"
    assert verify_secret("123456", "Someone@Example.com ", hashed)
    assert not verify_secret("123456", "other@example.com", hashed)
    assert not verify_secret("654321", "someone@example.com", hashed)


def test_issued_otp_is_numeric_and_hashed():
    issued = issue_otp("someone@example.com", length=6, expires_in_minutes=10)

    assert len(issued.plain) == 6
    assert issued.plain.isdigit()
    assert issued.hashed == hash_secret(issued.plain, "someone@example.com")
    assert issued.expires_at > utc_now()


def test_password_hash_round_trip():
    hashed = hash_password("Password123!")

    assert hashed != "Password123!"
    assert verify_password("Password123!", hashed)
    assert not verify_password("password123!", hashed)


def test_jwt_round_trip_keeps_identity_claims():
    token = create_jwt_token({"uid": "user-1", "role": ROLE_USER})

    payload = verify_jwt_token(token)

    assert payload["uid"] == "user-1"
    assert payload["role"] == ROLE_USER
    assert payload["iss"] == settings.JWT_ISSUER


def test_jwt_requires_identity_claims():
    with pytest.raises(ValueError):
        create_jwt_token({"uid": "user-1"})


def test_jwt_signed_with_another_key_is_rejected():
    forged = jwt.encode(
        {
            "uid": "admin-1",
            "role": "admin",
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
        },
        "not-the-server-secret-key-at-all-000",
        algorithm="HS256",
    )

    with pytest.raises(ValueError):
        verify_jwt_token(forged)


def test_jwt_for_another_audience_is_rejected():
    token = jwt.encode(
        {
            "uid": "user-1",
            "role": ROLE_USER,
            "iss": settings.JWT_ISSUER,
            "aud": "some-other-service",
        },
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(ValueError):
        verify_jwt_token(token)


def test_expired_jwt_is_rejected():
    token = create_jwt_token({"uid": "user-1", "role": ROLE_USER}, expires_in=-10)

    with pytest.raises(ValueError):
        verify_jwt_token(token)
