"""Identity service: registration, login and profile business logic.

Pure business logic with no HTTP, database or crypto-library dependencies:
everything goes through the UserRepository, PasswordHasher and TokenService
ports. Raises domain errors that route handlers map to HTTP status codes.
Nothing here logs, retries or swallows a failure.
"""

from dataclasses import replace
from datetime import date, datetime, timezone

from domain.model.errors import (
    DuplicateEmailError,
    HashingFailure,
    InvalidCredentialsError,
    PasswordHashError,
    RepositoryError,
    TokenGenerationError,
    TokenSigningFailure,
    UserAlreadyExistsError,
    UserCreationError,
    UserNotFoundError,
)
from domain.model.user import User, UserProfile
from port.password_hasher import PasswordHasher
from port.token_service import TokenService
from port.user_repository import UserRepository


class IdentityService:

    def __init__(
        self,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.token_service = token_service
        self._unknown_user_digest: str | None = None

    def _dummy_digest(self) -> str:
        """Digest verified against when the email is unknown. Built once, at the hasher's cost."""
        if self._unknown_user_digest is None:
            self._unknown_user_digest = self.password_hasher.hash("unknown-user-placeholder")
        return self._unknown_user_digest

    def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str = '',
        birthday: date | None = None,
    ) -> UserProfile:
        """Register a new user.

        Returns the created user without its password hash.

        Raises:
            UserAlreadyExistsError: email already registered, including when a
                concurrent registration wins the race to the insert
            PasswordHashError: password could not be hashed
            ValidationError: email, first name or last name is empty
            UserCreationError: the store failed to persist the user
        """
        if self.user_repo.exists(email):
            raise UserAlreadyExistsError()

        try:
            password_hash = self.password_hasher.hash(password)
        except HashingFailure as e:
            raise PasswordHashError() from e

        user = User.new(email, password_hash, first_name, last_name, phone, birthday)

        try:
            user_id = self.user_repo.create(user)
        except DuplicateEmailError as e:
            raise UserAlreadyExistsError() from e
        except RepositoryError as e:
            raise UserCreationError() from e

        return replace(user, id=user_id).profile()

    def login(self, email: str, password: str) -> tuple[str, UserProfile]:
        """Authenticate by email and password and issue a token.

        Unknown email and wrong password raise the same error so the caller
        cannot probe for accounts.

        Raises:
            InvalidCredentialsError
            TokenGenerationError
        """
        user = self.user_repo.get_by_email(email)
        if user is None:
            # same hashing work as a wrong password
            self.password_hasher.verify(self._dummy_digest(), password)
            raise InvalidCredentialsError()
        if not self.password_hasher.verify(user.password_hash, password):
            raise InvalidCredentialsError()

        try:
            token = self.token_service.issue(user.id, user.email)
        except TokenSigningFailure as e:
            raise TokenGenerationError() from e

        return token, user.profile()

    def get_user_by_id(self, user_id: int) -> UserProfile:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user.profile()

    def get_user_profile(self, user_id: int) -> UserProfile:
        """Profile of the authenticated user."""
        return self.get_user_by_id(user_id)

    def update_user(
        self,
        user_id: int,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
        birthday: date | None = None,
    ) -> UserProfile:
        """Partially update a user.

        Empty or None arguments leave the field unchanged. ``updated_at`` is
        re-stamped on every call.

        Raises:
            UserNotFoundError
            ValidationError: resulting record lacks a required field
            UserCreationError: the store failed to persist the change
        """
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        changes = {
            name: value
            for name, value in (
                ('first_name', first_name),
                ('last_name', last_name),
                ('phone', phone),
                ('birthday', birthday),
            )
            if value
        }
        updated = replace(user, **changes, updated_at=datetime.now(timezone.utc))
        updated.validate_for_update()

        try:
            saved = self.user_repo.update(updated)
        except RepositoryError as e:
            raise UserCreationError("Failed to update user") from e
        if not saved:
            raise UserCreationError("Failed to update user")

        return updated.profile()
