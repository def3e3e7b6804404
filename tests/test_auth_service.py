"""Unit tests for soundshare.services.auth_service: registration conflicts and login."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import IntegrityError, OperationalError

from _support import make_session_factory
from soundshare.core.errors import AuthError, ConflictError, InternalError, ValidationError
from soundshare.core.config import settings
from soundshare.core.security import decode_access_token, verify_password
from soundshare.models import User
from soundshare.services.auth_service import _dummy_hash, authenticate_user, register_user


class TestRegisterUser(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_stores_hash_not_password(self) -> None:
        user = register_user(self.db, "alice", "pw1")
        self.assertEqual(user.username, "alice")
        self.assertNotEqual(user.password_hash, "pw1")
        self.assertTrue(verify_password("pw1", user.password_hash))

    def test_duplicate_is_conflict_and_single_row(self) -> None:
        register_user(self.db, "alice", "pw1")
        with self.assertRaises(ConflictError):
            register_user(self.db, "alice", "other")
        self.assertEqual(self.db.query(User).filter(User.username == "alice").count(), 1)

    def test_username_is_stripped(self) -> None:
        register_user(self.db, "  bob ", "pw1")
        with self.assertRaises(ConflictError):
            register_user(self.db, "bob", "pw1")

    def test_missing_fields(self) -> None:
        for username, password in [(None, "pw"), ("", "pw"), ("  ", "pw"), ("a", None), ("a", "")]:
            with self.assertRaises(ValidationError):
                register_user(self.db, username, password)
        self.assertEqual(self.db.query(User).count(), 0)


class TestRegisterUserStoreFailures(unittest.TestCase):
    """Only unique violations map to ConflictError; other failures are InternalError."""

    def test_not_null_violation_is_internal(self) -> None:
        db = MagicMock()
        db.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed: users.password_hash")
        )
        with self.assertRaises(InternalError):
            register_user(db, "alice", "pw1")
        db.rollback.assert_called_once()

    def test_operational_error_is_internal(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))
        with self.assertRaises(InternalError):
            register_user(db, "alice", "pw1")
        db.rollback.assert_called_once()


class TestAuthenticateUser(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.user = register_user(self.db, "alice", "pw1")

    def tearDown(self) -> None:
        self.db.close()

    def test_correct_password_returns_verifiable_token(self) -> None:
        token = authenticate_user(self.db, "alice", "pw1")
        payload = decode_access_token(token)
        self.assertEqual(payload["id"], self.user.id)
        self.assertEqual(payload["username"], "alice")

    def test_wrong_password_and_unknown_user_look_the_same(self) -> None:
        with self.assertRaises(AuthError) as wrong:
            authenticate_user(self.db, "alice", "wrongpw")
        with self.assertRaises(AuthError) as unknown:
            authenticate_user(self.db, "mallory", "pw1")
        self.assertEqual(wrong.exception.message, unknown.exception.message)
        self.assertEqual(wrong.exception.status_code, 401)

    def test_unknown_user_still_runs_bcrypt(self) -> None:
        with patch(
            "soundshare.services.auth_service.verify_password", wraps=verify_password
        ) as verify:
            with self.assertRaises(AuthError):
                authenticate_user(self.db, "mallory", "pw1")
        verify.assert_called_once_with("pw1", _dummy_hash())

    def test_unknown_user_hash_uses_configured_cost(self) -> None:
        self.assertTrue(_dummy_hash().startswith(f"$2b${settings.BCRYPT_ROUNDS:02d}$"))

    def test_missing_credentials_rejected(self) -> None:
        with self.assertRaises(AuthError):
            authenticate_user(self.db, None, None)


if __name__ == "__main__":
    unittest.main()
