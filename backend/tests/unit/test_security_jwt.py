"""Test JWT token utilities."""

import uuid
from datetime import timedelta

from jose import jwt

from src.tsaap.config import get_settings
from src.tsaap.security.jwt import (
    create_access_token,
    decode_access_token,
    get_user_id_from_token,
)


class TestJWTSecurity:
    """Test JWT token creation and validation."""

    def test_round_trip(self):
        user_id = uuid.uuid4()
        token = create_access_token({"sub": str(user_id)})

        payload = decode_access_token(token)
        assert payload["sub"] == str(user_id)
        assert payload["type"] == "access"
        assert get_user_id_from_token(token) == user_id

    def test_expired_token(self):
        token = create_access_token({"sub": str(uuid.uuid4())}, expires_delta=timedelta(seconds=-1))

        assert decode_access_token(token) is None

    def test_garbage_token(self):
        assert decode_access_token("not.a.token") is None
        assert get_user_id_from_token("not.a.token") is None

    def test_wrong_token_type(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "type": "refresh"},
            settings.secret_key,
            algorithm=settings.algorithm,
        )
        assert decode_access_token(token) is None

    def test_subject_must_be_a_uuid(self):
        assert get_user_id_from_token(create_access_token({"sub": "mary"})) is None
        assert get_user_id_from_token(create_access_token({"role": "x"})) is None
