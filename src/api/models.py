"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from domain.model.user import NewUser, User


class SignUpRequest(BaseModel):
    """Request model for user signup."""
    name: str = ''
    username: str = ''
    email: Optional[EmailStr] = None
    phone_number: str = Field('', validation_alias=AliasChoices('phone_number', 'phonenumber'))
    profile_pic: str = Field('', validation_alias=AliasChoices('profile_pic', 'profilepic'))
    password: str = Field(..., min_length=8, max_length=72, description="Plaintext password")
    user_type: str = Field('', validation_alias=AliasChoices('user_type', 'usertype'))

    def to_domain(self) -> NewUser:
        return NewUser(
            name=self.name,
            username=self.username,
            email=self.email or '',
            phone_number=self.phone_number,
            profile_pic=self.profile_pic,
            password=self.password,
            user_type=self.user_type,
        )


class LoginRequest(BaseModel):
    """Request model for password login."""
    identifier: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices('identifier', 'email', 'phone_number', 'phonenumber'),
        description="Email address or phone number",
    )
    password: str


class OtpLoginRequest(BaseModel):
    """Request model for phone OTP login."""
    phone_number: str = Field(..., min_length=1, validation_alias=AliasChoices('phone_number', 'phonenumber'))
    code: str = Field(..., min_length=1, description="One-time passcode delivered to the phone")


class TokenResponse(BaseModel):
    """Response model for authentication."""
    token: str


class UserResponse(BaseModel):
    """Externally visible user. Never carries the password hash."""
    id: str = Field(..., description="User ID (MongoDB _id)")
    name: str = ''
    username: str = ''
    email: str = ''
    phone_number: str = ''
    profile_pic: str = ''
    user_type: str = ''
    created_at: datetime = Field(..., description="Account creation timestamp")

    @classmethod
    def from_domain(cls, user: User) -> 'UserResponse':
        public = user.to_public()
        return cls(
            id=public.id,
            name=public.name,
            username=public.username,
            email=public.email,
            phone_number=public.phone_number,
            profile_pic=public.profile_pic,
            user_type=public.user_type,
            created_at=public.created_at,
        )


class UserUpdateRequest(BaseModel):
    """Partial update. Omitted fields keep their stored values."""
    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = None
    username: Optional[str] = None
    # An empty string clears the stored email
    email: Optional[Union[EmailStr, Literal['']]] = None
    phone_number: Optional[str] = None
    profile_pic: Optional[str] = None
    user_type: Optional[str] = None
    password: Optional[str] = Field(None, min_length=8, max_length=72)

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)
