"""
Users router for the demo service.

Consumes and produces XML through the adapter. Users live in an
in-memory store attached to ``app.state``.
"""

import logging
from dataclasses import dataclass, field

from fastapi import APIRouter, Depends, HTTPException, Request

from fastapi_xml.demo.schemas import CreateUser, User
from fastapi_xml.extract import Xml, xml_body
from fastapi_xml.routing import XmlRoute

logger = logging.getLogger(__name__)

HTTP_201 = 201
HTTP_404 = 404

router = APIRouter(route_class=XmlRoute, tags=["users"])


@dataclass
class UserStore:
    """In-memory user storage. One instance per application."""

    users: dict[int, User] = field(default_factory=dict)
    next_id: int = 1

    def add(self, email: str) -> User:
        user = User(id=self.next_id, email=email)
        self.users[user.id] = user
        self.next_id += 1
        return user

    def get(self, user_id: int) -> User | None:
        return self.users.get(user_id)


def get_user_store(request: Request) -> UserStore:
    """Return the store attached to the running application."""
    return request.app.state.user_store


@router.post(
    "/users",
    status_code=HTTP_201,
    summary="Create a user from an XML body",
)
async def create_user(
    payload: Xml[CreateUser] = Depends(xml_body(CreateUser)),
    store: UserStore = Depends(get_user_store),
) -> Xml[User]:
    """Store a new user and return it without the password."""
    user = store.add(payload.email)
    logger.info("Created user %d", user.id)
    return Xml(user)


@router.get("/users/{user_id}", summary="Fetch a user as XML")
def get_user(user_id: int, store: UserStore = Depends(get_user_store)) -> Xml[User]:
    """Return a stored user, or 404."""
    user = store.get(user_id)
    if user is None:
        raise HTTPException(status_code=HTTP_404, detail="User not found")
    return Xml(user)
