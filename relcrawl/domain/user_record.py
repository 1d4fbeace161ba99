from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import NamedTuple

HOME_PAGE_PREFIX = "https://www.pixiv.net/users/"


class RelationUser(NamedTuple):
    """One user object as returned by the relation list API."""
    user_id: str
    user_name: str = ""
    user_comment: str = ""
    profile_image_url: str = ""

    @classmethod
    def from_payload(cls, data: dict) -> "RelationUser":
        return cls(
            user_id=str(data["userId"]),
            user_name=data.get("userName") or "",
            user_comment=data.get("userComment") or "",
            profile_image_url=data.get("profileImageUrl") or "",
        )


@dataclass(frozen=True)
class UserRecord:
    """Exported CSV row. Field order is the CSV column order."""

    userId: str
    userName: str
    homePage: str
    userComment: str
    profileImageUrl: str

    @classmethod
    def from_user(cls, user: RelationUser) -> "UserRecord":
        return cls(
            userId=user.user_id,
            userName=user.user_name,
            homePage=HOME_PAGE_PREFIX + user.user_id,
            userComment=user.user_comment,
            profileImageUrl=user.profile_image_url,
        )

    @classmethod
    def header(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def as_row(self) -> list[str]:
        return list(astuple(self))
