from dataclasses import dataclass, fields
from datetime import date, datetime, timezone

from domain.model.errors import InvalidEmailError, InvalidFirstNameError, InvalidLastNameError


@dataclass(frozen=True)
class UserProfile:
    """Redacted view of a user. The only user shape that leaves the core."""
    id: int | None
    email: str
    first_name: str
    last_name: str
    phone: str
    birthday: date | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class User:
    """Domain model representing a stored user record.

    Instances are immutable; updates go through ``dataclasses.replace``.
    """
    id: int | None
    email: str
    password_hash: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime
    phone: str = ''
    birthday: date | None = None

    @classmethod
    def new(
        cls,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        phone: str = '',
        birthday: date | None = None,
    ) -> 'User':
        """Build a not-yet-persisted user, enforcing the required fields.

        Raises:
            InvalidEmailError, InvalidFirstNameError, InvalidLastNameError
        """
        _check_required(email, first_name, last_name)
        now = datetime.now(timezone.utc)
        return cls(
            id=None,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            phone=phone or '',
            birthday=birthday,
            created_at=now,
            updated_at=now,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def validate_for_update(self) -> None:
        _check_required(self.email, self.first_name, self.last_name)

    def profile(self) -> UserProfile:
        return UserProfile(**{
            f.name: getattr(self, f.name) for f in fields(UserProfile)
        })


@dataclass(frozen=True)
class TokenClaims:
    """Identity decoded from a validated token."""
    user_id: int
    email: str


def _check_required(email: str, first_name: str, last_name: str) -> None:
    if not email:
        raise InvalidEmailError()
    if not first_name:
        raise InvalidFirstNameError()
    if not last_name:
        raise InvalidLastNameError()
