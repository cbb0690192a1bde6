"""Account roles of the platform."""

from dataclasses import dataclass

ROLE_YOUTH = "youth"
ROLE_EMPLOYER = "employer"
ROLE_ADMIN = "admin"
ROLE_VERIFIER = "verifier"

# (display name, alias) pairs seeded into every database.
DEFAULT_ROLES: tuple[tuple[str, str], ...] = (
    ("Youth", ROLE_YOUTH),
    ("Employer", ROLE_EMPLOYER),
    ("Administrator", ROLE_ADMIN),
    ("Verifier", ROLE_VERIFIER),
)

SELF_REGISTRATION_ROLES = frozenset({ROLE_YOUTH, ROLE_EMPLOYER})


def normalize_role_alias(alias: str) -> str:
    return alias.strip().lower()


@dataclass(frozen=True)
class Role:
    """Role assigned to an account. Only youth accounts own a profile."""

    id: int
    name: str
    alias: str

    @property
    def can_self_register(self) -> bool:
        return self.alias in SELF_REGISTRATION_ROLES

    def matches(self, alias: str) -> bool:
        return self.alias == normalize_role_alias(alias)


__all__ = [
    "DEFAULT_ROLES",
    "ROLE_ADMIN",
    "ROLE_EMPLOYER",
    "ROLE_VERIFIER",
    "ROLE_YOUTH",
    "Role",
    "SELF_REGISTRATION_ROLES",
    "normalize_role_alias",
]
