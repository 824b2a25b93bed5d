"""Role hierarchy ordering."""

from __future__ import annotations

from collections.abc import Iterable

from rampart.models.role import Role


def _seniority_key(role: Role) -> tuple[bool, int, str]:
    # Equal ranks fall back to role id, ascending.
    ranked, position = role.rank
    return (not ranked, -position, role.id)


def calculate_role_hierarchy(roles: Iterable[Role]) -> list[Role]:
    """Return roles sorted most senior first.

    Higher position means more senior. Roles without a position rank below
    every positioned role. Ties are broken by role id in ascending order so
    the result never depends on input order.
    """
    return sorted(roles, key=_seniority_key)


def get_highest_role(roles: Iterable[Role]) -> Role | None:
    """Return the most senior role, or None when there are no roles."""
    return min(roles, key=_seniority_key, default=None)
