"""Test password hashing utilities."""

from src.tsaap.security.password import hash_password, needs_update, verify_password


class TestPasswordSecurity:
    """Test password hashing and verification."""

    def test_hash_password(self):
        hashed = hash_password("mysecretpassword")

        assert hashed != "mysecretpassword"
        assert hashed.startswith("$pbkdf2-sha256$")

    def test_hash_is_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_verify_password(self):
        hashed = hash_password("mysecretpassword")

        assert verify_password("mysecretpassword", hashed) is True
        assert verify_password("wrongpassword", hashed) is False

    def test_current_hash_needs_no_update(self):
        assert needs_update(hash_password("fresh")) is False
