"""
wikimasters.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.

    `subject` is the identity provider's user id and doubles as the primary key
    of the local `users` row. `email` and `name` come from optional token claims
    and are mirrored into that row on every write.
    """

    subject: str
    roles: frozenset[str]
    email: str | None = None
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles
