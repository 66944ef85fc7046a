# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class SourceRepository:
    name: str
    clone_url: str
    description: str = ''
    private: bool = False


@dataclass(frozen=True)
class DestinationRepository:
    id: int
    name: str
    description: str = ''
    mirror: bool = False


@dataclass(frozen=True)
class DestinationUser:
    # 0 if the account could not be resolved
    id: int = 0


@dataclass(frozen=True)
class MirrorRequest:
    name: str
    description: str
    clone_addr: str
    repo_name: str
    uid: int
    mirror: bool = True
    private: bool = True
    # Only set when the source repository requires credentials
    auth_username: str = ''
    auth_password: str = ''

    def as_json(self) -> dict:
        return {
            'auth_username': self.auth_username,
            'auth_password': self.auth_password,
            'name': self.name,
            'description': self.description,
            'clone_addr': self.clone_addr,
            'mirror': self.mirror,
            'private': self.private,
            'repo_name': self.repo_name,
            'uid': self.uid,
        }


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a read against one of the hosts.

    A failed read still carries a usable (empty) value, so callers can
    decide whether to continue with it or give up.
    """
    value: T
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> 'Result[T]':
        return cls(value)

    @classmethod
    def failure(cls, error: str, default: T) -> 'Result[T]':
        return cls(default, error)


@dataclass
class Report:
    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def record(self, name: str, success: bool):
        (self.succeeded if success else self.failed).append(name)

    def __str__(self) -> str:
        return f"{len(self.succeeded)} succeeded, {len(self.failed)} failed"
