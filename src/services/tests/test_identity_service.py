"""Unit tests for identity_service module."""

import unittest
from dataclasses import fields
from datetime import date
from unittest.mock import MagicMock
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from services.identity_service import IdentityService
from adapter.fake.user_repository import FakeUserRepository
from adapter.security.bcrypt_hasher import BcryptPasswordHasher
from adapter.security.jwt_token_service import JWTTokenService
from domain.model.errors import (
    DomainError,
    DuplicateEmailError,
    HashingFailure,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidFirstNameError,
    InvalidLastNameError,
    PasswordHashError,
    RepositoryError,
    TokenGenerationError,
    TokenSigningFailure,
    UserAlreadyExistsError,
    UserCreationError,
    UserNotFoundError,
)
from domain.model.user import UserProfile


REGISTRATION = dict(
    email='john@example.com',
    password='Password123',
    first_name='John',
    last_name='Doe',
    phone='1234567890',
    birthday=date(1990, 1, 15),
)


class IdentityServiceTestCase(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures."""
        self.repo = FakeUserRepository()
        self.hasher = BcryptPasswordHasher(rounds=4)
        self.tokens = JWTTokenService('test-secret')
        self.service = IdentityService(self.repo, self.hasher, self.tokens)


class TestRegister(IdentityServiceTestCase):

    def test_register_returns_profile_without_hash(self):
        profile = self.service.register(**REGISTRATION)

        self.assertIsInstance(profile, UserProfile)
        self.assertNotIn('password_hash', {f.name for f in fields(profile)})
        self.assertEqual(profile.id, 1)
        self.assertEqual(profile.email, 'john@example.com')
        self.assertEqual(profile.phone, '1234567890')
        self.assertEqual(profile.birthday, date(1990, 1, 15))

    def test_register_stores_hash_not_plaintext(self):
        self.service.register(**REGISTRATION)

        stored = self.repo.get_by_email('john@example.com')
        self.assertNotEqual(stored.password_hash, 'Password123')
        self.assertTrue(self.hasher.verify(stored.password_hash, 'Password123'))

    def test_register_then_login_succeeds(self):
        registered = self.service.register(**REGISTRATION)

        token, profile = self.service.login('john@example.com', 'Password123')

        self.assertEqual(profile, registered)
        claims = self.tokens.validate(token)
        self.assertEqual(claims.user_id, registered.id)
        self.assertEqual(claims.email, 'john@example.com')

    def test_register_duplicate_email_fails_and_keeps_first_record(self):
        self.service.register(**REGISTRATION)
        before = self.repo.get_by_email('john@example.com')

        with self.assertRaises(UserAlreadyExistsError):
            self.service.register(**{**REGISTRATION, 'first_name': 'Other', 'password': 'Other123'})

        self.assertEqual(self.repo.get_by_email('john@example.com'), before)
        self.assertEqual(len(self.repo.store), 1)

    def test_register_race_on_insert_reports_already_exists(self):
        """Store-level uniqueness conflict maps to the same code as the pre-check."""
        repo = MagicMock()
        repo.exists.return_value = False
        repo.create.side_effect = DuplicateEmailError('john@example.com')
        service = IdentityService(repo, self.hasher, self.tokens)

        with self.assertRaises(UserAlreadyExistsError):
            service.register(**REGISTRATION)

    def test_register_store_failure_is_creation_error(self):
        repo = MagicMock()
        repo.exists.return_value = False
        repo.create.side_effect = RepositoryError('down')
        service = IdentityService(repo, self.hasher, self.tokens)

        with self.assertRaises(UserCreationError) as ctx:
            service.register(**REGISTRATION)
        self.assertEqual(ctx.exception.code, 'USER_CREATION_ERROR')

    def test_register_hash_failure(self):
        hasher = MagicMock()
        hasher.hash.side_effect = HashingFailure('no entropy')
        service = IdentityService(self.repo, hasher, self.tokens)

        with self.assertRaises(PasswordHashError):
            service.register(**REGISTRATION)
        self.assertEqual(self.repo.store, {})

    def test_register_validates_required_fields(self):
        cases = [
            ('email', '', InvalidEmailError),
            ('first_name', '', InvalidFirstNameError),
            ('last_name', '', InvalidLastNameError),
        ]
        for field, value, error in cases:
            with self.subTest(field=field):
                with self.assertRaises(error):
                    self.service.register(**{**REGISTRATION, field: value})
        self.assertEqual(self.repo.store, {})

    def test_register_does_not_strip_stored_hash(self):
        self.service.register(**REGISTRATION)
        self.assertTrue(self.repo.get_by_id(1).password_hash)


class TestLogin(IdentityServiceTestCase):

    def setUp(self):
        super().setUp()
        self.service.register(**REGISTRATION)

    def test_login_returns_token_and_profile(self):
        token, profile = self.service.login('john@example.com', 'Password123')

        self.assertTrue(token)
        self.assertIsInstance(profile, UserProfile)
        self.assertEqual(profile.first_name, 'John')

    def test_wrong_password_and_unknown_email_are_indistinguishable(self):
        with self.assertRaises(InvalidCredentialsError) as wrong_password:
            self.service.login('john@example.com', 'WrongPassword1')
        with self.assertRaises(InvalidCredentialsError) as unknown_email:
            self.service.login('nobody@example.com', 'Password123')

        self.assertIs(type(wrong_password.exception), type(unknown_email.exception))
        self.assertEqual(wrong_password.exception.code, unknown_email.exception.code)
        self.assertEqual(wrong_password.exception.message, unknown_email.exception.message)

    def test_login_email_is_case_sensitive(self):
        with self.assertRaises(InvalidCredentialsError):
            self.service.login('John@Example.com', 'Password123')

    def test_unknown_email_still_runs_password_check(self):
        hasher = MagicMock()
        hasher.hash.return_value = 'placeholder-digest'
        hasher.verify.return_value = False
        service = IdentityService(self.repo, hasher, self.tokens)

        with self.assertRaises(InvalidCredentialsError):
            service.login('nobody@example.com', 'Password123')
        with self.assertRaises(InvalidCredentialsError):
            service.login('someone@example.com', 'Password456')

        hasher.hash.assert_called_once()
        self.assertEqual(hasher.verify.call_count, 2)
        hasher.verify.assert_called_with('placeholder-digest', 'Password456')

    def test_passphrase_over_72_bytes(self):
        passphrase = 'x' * 80
        self.service.register(**{**REGISTRATION, 'email': 'long@example.com', 'password': passphrase})

        token, profile = self.service.login('long@example.com', passphrase)

        self.assertTrue(token)
        self.assertEqual(profile.email, 'long@example.com')
        with self.assertRaises(InvalidCredentialsError):
            self.service.login('long@example.com', 'x' * 72)

    def test_token_failure(self):
        tokens = MagicMock()
        tokens.issue.side_effect = TokenSigningFailure('bad key')
        service = IdentityService(self.repo, self.hasher, tokens)

        with self.assertRaises(TokenGenerationError):
            service.login('john@example.com', 'Password123')

    def test_store_failure_is_not_masked(self):
        """Opaque store failures propagate untranslated for a generic 500."""
        repo = MagicMock()
        repo.get_by_email.side_effect = RepositoryError('down')
        service = IdentityService(repo, self.hasher, self.tokens)

        with self.assertRaises(RepositoryError):
            service.login('john@example.com', 'Password123')


class TestProfile(IdentityServiceTestCase):

    def test_get_user_profile(self):
        registered = self.service.register(**REGISTRATION)

        self.assertEqual(self.service.get_user_profile(registered.id), registered)
        self.assertEqual(self.service.get_user_by_id(registered.id), registered)

    def test_get_user_profile_not_found(self):
        with self.assertRaises(UserNotFoundError):
            self.service.get_user_profile(42)


class TestUpdateUser(IdentityServiceTestCase):

    def setUp(self):
        super().setUp()
        self.registered = self.service.register(**REGISTRATION)

    def test_partial_update_touches_only_given_fields(self):
        updated = self.service.update_user(self.registered.id, first_name='Jane')

        self.assertEqual(updated.first_name, 'Jane')
        self.assertEqual(updated.last_name, 'Doe')
        self.assertEqual(updated.phone, '1234567890')
        self.assertEqual(updated.birthday, date(1990, 1, 15))
        self.assertEqual(updated.email, self.registered.email)
        self.assertEqual(updated.created_at, self.registered.created_at)
        self.assertGreaterEqual(updated.updated_at, self.registered.updated_at)

    def test_update_persists(self):
        self.service.update_user(self.registered.id, first_name='Jane')
        stored = self.repo.get_by_id(self.registered.id)

        self.assertEqual(stored.full_name, 'Jane Doe')
        self.assertEqual(stored.phone, '1234567890')
        self.assertTrue(self.hasher.verify(stored.password_hash, 'Password123'))

    def test_empty_strings_leave_fields_unchanged(self):
        updated = self.service.update_user(
            self.registered.id, first_name='', last_name='', phone='', birthday=None,
        )

        self.assertEqual(updated.first_name, 'John')
        self.assertEqual(updated.last_name, 'Doe')
        self.assertEqual(updated.phone, '1234567890')

    def test_update_all_fields(self):
        updated = self.service.update_user(
            self.registered.id,
            first_name='Jane',
            last_name='Roe',
            phone='0987654321',
            birthday=date(1985, 6, 1),
        )

        self.assertEqual((updated.first_name, updated.last_name), ('Jane', 'Roe'))
        self.assertEqual(updated.phone, '0987654321')
        self.assertEqual(updated.birthday, date(1985, 6, 1))

    def test_update_not_found(self):
        with self.assertRaises(UserNotFoundError):
            self.service.update_user(999, first_name='Jane')

    def test_update_store_failure_uses_creation_error_code(self):
        repo = MagicMock()
        repo.get_by_id.return_value = self.repo.get_by_id(self.registered.id)
        repo.update.side_effect = RepositoryError('down')
        service = IdentityService(repo, self.hasher, self.tokens)

        with self.assertRaises(UserCreationError) as ctx:
            service.update_user(self.registered.id, first_name='Jane')
        self.assertEqual(ctx.exception.code, 'USER_CREATION_ERROR')
        self.assertEqual(ctx.exception.message, 'Failed to update user')

    def test_update_vanished_record_is_creation_error(self):
        repo = MagicMock()
        repo.get_by_id.return_value = self.repo.get_by_id(self.registered.id)
        repo.update.return_value = False
        service = IdentityService(repo, self.hasher, self.tokens)

        with self.assertRaises(UserCreationError):
            service.update_user(self.registered.id, phone='555')


class TestErrorCatalog(unittest.TestCase):
    """Stable codes callers branch on."""

    def test_codes(self):
        expected = {
            UserNotFoundError: 'USER_NOT_FOUND',
            UserAlreadyExistsError: 'USER_ALREADY_EXISTS',
            InvalidCredentialsError: 'INVALID_CREDENTIALS',
            PasswordHashError: 'PASSWORD_HASH_ERROR',
            UserCreationError: 'USER_CREATION_ERROR',
            TokenGenerationError: 'TOKEN_GENERATION_ERROR',
        }
        for error_class, code in expected.items():
            with self.subTest(error=error_class.__name__):
                error = error_class()
                self.assertIsInstance(error, DomainError)
                self.assertEqual(error.code, code)
                self.assertEqual(str(error), error.message)


if __name__ == '__main__':
    unittest.main()
