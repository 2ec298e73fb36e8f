"""
Schemas for the demo users API.

XML bodies map through ``fastapi_xml.codec``: the class name is the root
element, fields are child elements unless declared with ``attr()``.
No business logic belongs here.
"""

from pydantic import BaseModel, Field

from fastapi_xml.codec import attr

EMAIL_MAX_LEN = 254


class CreateUser(BaseModel):
    """Request body for user creation.

    Attributes:
        email: Login e-mail address.
        password: Plain password. Never echoed back.
    """

    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN)
    password: str


class User(BaseModel):
    """A stored user as returned to clients."""

    id: int = attr()
    email: str
