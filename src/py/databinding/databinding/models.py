from dataclasses import dataclass
from typing import Mapping, Union

from .errors import DecodeError, FetchError

_STRING_FIELDS = ("name", "email", "phone")


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    phone: str

    @classmethod
    def from_dict(cls, record: object) -> "User":
        """
        Build a user from one decoded JSON object.

        Unknown keys are ignored. Raises DecodeError when a field is missing
        or has the wrong JSON type.
        """
        if not isinstance(record, Mapping):
            raise DecodeError(f"Expected a user object, got {type(record).__name__}")

        user_id = record.get("id")
        # bool is an int subclass but never a valid id
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise DecodeError(f"User field 'id' must be an integer, got {user_id!r}")

        for field in _STRING_FIELDS:
            if not isinstance(record.get(field), str):
                raise DecodeError(
                    f"User {user_id} field {field!r} must be a string, "
                    f"got {record.get(field)!r}"
                )

        return cls(
            id=user_id,
            name=record["name"],
            email=record["email"],
            phone=record["phone"],
        )


Users = tuple[User, ...]


# Resource state


@dataclass(frozen=True)
class NotStarted:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Loaded:
    users: Users


@dataclass(frozen=True)
class Failed:
    error: FetchError


ResourceState = Union[NotStarted, Loading, Loaded, Failed]


# Events emitted by a resource container, in per-fetch order:
# LoadingChanged(True), then UsersUpdated or FetchFailed, then LoadingChanged(False)


@dataclass(frozen=True)
class LoadingChanged:
    is_loading: bool


@dataclass(frozen=True)
class UsersUpdated:
    users: Users


@dataclass(frozen=True)
class FetchFailed:
    error: FetchError


ResourceEvent = Union[LoadingChanged, UsersUpdated, FetchFailed]
