from dataclasses import dataclass, field
from datetime import datetime

from domain.model.errors import ValidationError

# Attributes a client may change after signup. Identifier and creation time
# are immutable; the secret only changes through its hash.
PROFILE_FIELDS = frozenset({
    'name',
    'username',
    'email',
    'phone_number',
    'profile_pic',
    'user_type',
})
UPDATABLE_FIELDS = PROFILE_FIELDS | {'password_hash'}


@dataclass(frozen=True)
class NewUser:
    """Inbound signup shape. Carries the plaintext password."""
    name: str = ''
    username: str = ''
    email: str = ''
    phone_number: str = ''
    profile_pic: str = ''
    password: str = field(default='', repr=False)
    user_type: str = ''


@dataclass
class User:
    """Domain model representing a stored identity."""
    id: str
    created_at: datetime
    password_hash: str = field(repr=False)
    name: str = ''
    username: str = ''
    email: str = ''
    phone_number: str = ''
    profile_pic: str = ''
    user_type: str = ''

    def to_public(self) -> 'PublicUser':
        return PublicUser(
            id=self.id,
            name=self.name,
            username=self.username,
            email=self.email,
            phone_number=self.phone_number,
            profile_pic=self.profile_pic,
            user_type=self.user_type,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class PublicUser:
    """Outbound shape: the identity without its password hash."""
    id: str
    created_at: datetime
    name: str = ''
    username: str = ''
    email: str = ''
    phone_number: str = ''
    profile_pic: str = ''
    user_type: str = ''


def check_update_fields(fields: dict, allowed: frozenset = UPDATABLE_FIELDS) -> None:
    """Reject partial updates naming fields outside ``allowed``."""
    unknown = sorted(set(fields) - allowed)
    if unknown:
        raise ValidationError(f"Unknown or immutable fields: {', '.join(unknown)}")
