"""Pydantic models for user records stored in Supabase."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserFields(BaseModel):
    """Mutable user fields, replaced as a whole on every Clerk update."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str = Field(min_length=1, description="Unique, non-null username")
    first_name: str = Field("", description="User's first name")
    last_name: str = Field("", description="User's last name")
    photo: str = Field("", description="Avatar URL")


class UserUpdate(UserFields):
    """Full-replacement field set for `user.updated` events."""

    pass


class UserCreate(UserFields):
    """User record candidate built from a `user.created` event."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "clerkId": "user_2abcDEF",
                "email": "ada@example.com",
                "username": "user_k3v9x0qa",
                "firstName": "Ada",
                "lastName": "",
                "photo": "",
            }
        }
    )

    clerk_id: str = Field(description="Clerk user ID, the immutable join key")
    email: str = Field(min_length=1, description="Primary email address")
