"""Tests for the role-management guard."""

from __future__ import annotations

from rampart.core.guard import can_manage_overrides, can_manage_role, manageable_roles


class TestCanManageRole:
    """Test role management gate and rank comparison."""

    def test_owner_manages_anything(self, make_role) -> None:
        target = make_role("top", 1000, administrator=True)
        assert can_manage_role([], target, True)

    def test_no_roles(self, make_role) -> None:
        assert not can_manage_role([], make_role("target", -100))

    def test_without_manage_roles(self, make_role) -> None:
        actor = [make_role("member", 10, read_messages=True, manage_channels=True)]
        assert not can_manage_role(actor, make_role("target", 1))

    def test_manage_roles_below_rank(self, make_role) -> None:
        actor = [make_role("mod", 10, manage_roles=True)]
        assert can_manage_role(actor, make_role("target", 5))

    def test_manage_roles_above_rank(self, make_role) -> None:
        actor = [make_role("mod", 10, manage_roles=True)]
        assert not can_manage_role(actor, make_role("target", 15))

    def test_equal_rank_never_qualifies(self, make_role) -> None:
        mod = make_role("mod", 10, manage_roles=True)
        assert not can_manage_role([mod], make_role("peer", 10))
        assert not can_manage_role([mod], mod)

    def test_administrator_below_rank(self, make_role) -> None:
        actor = [make_role("admin", 10, administrator=True)]
        assert can_manage_role(actor, make_role("target", 5))

    def test_administrator_blocked_above_rank(self, make_role) -> None:
        actor = [make_role("admin", 10, administrator=True)]
        assert not can_manage_role(actor, make_role("plain", 15))
        assert not can_manage_role(actor, make_role("other-admin", 15, administrator=True))

    def test_administrator_can_manage_lower_admin_role(self, make_role) -> None:
        actor = [make_role("admin", 10, administrator=True)]
        assert can_manage_role(actor, make_role("junior-admin", 5, administrator=True))

    def test_rank_comes_from_highest_role_not_gate_role(self, make_role) -> None:
        actor = [make_role("helper", 1, manage_roles=True), make_role("veteran", 20)]
        assert can_manage_role(actor, make_role("target", 15))
        assert not can_manage_role(actor, make_role("target", 20))

    def test_unranked_target_is_below_everyone(self, make_role) -> None:
        actor = [make_role("mod", -50, manage_roles=True)]
        assert can_manage_role(actor, make_role("target", None))

    def test_unranked_actor_cannot_manage_unranked_target(self, make_role) -> None:
        actor = [make_role("mod", None, manage_roles=True)]
        assert not can_manage_role(actor, make_role("target", None))

    def test_unranked_actor_cannot_manage_far_negative_target(self, make_role) -> None:
        actor = [make_role("mod", None, manage_roles=True)]
        assert not can_manage_role(actor, make_role("target", -(2**40)))
        assert not can_manage_role(actor, make_role("target", -(2**31) - 1))

    def test_far_negative_actor_manages_unranked_target(self, make_role) -> None:
        actor = [make_role("mod", -(2**40), manage_roles=True)]
        assert can_manage_role(actor, make_role("target", None))


class TestManageableRoles:
    """Test filtering roles an actor may manage."""

    def test_filters_and_orders(self, make_role) -> None:
        roles = [make_role("low", 1), make_role("top", 30), make_role("mid", 5), make_role("mod", 10)]
        actor = [roles[3].model_copy(update={"manage_roles": True})]
        assert [r.id for r in manageable_roles(actor, roles)] == ["mid", "low"]

    def test_owner_manages_all(self, make_role) -> None:
        roles = [make_role("low", 1), make_role("top", 30)]
        assert [r.id for r in manageable_roles([], roles, True)] == ["top", "low"]

    def test_nothing_without_permission(self, make_role) -> None:
        roles = [make_role("low", 1)]
        assert manageable_roles([make_role("member", 99)], roles) == []


class TestCanManageOverrides:
    """Test who may edit channel overrides."""

    def test_manage_channels(self, make_role) -> None:
        assert can_manage_overrides([make_role("r", 1, manage_channels=True)])

    def test_manage_roles(self, make_role) -> None:
        assert can_manage_overrides([make_role("r", 1, manage_roles=True)])

    def test_administrator(self, make_role) -> None:
        assert can_manage_overrides([make_role("r", 1, administrator=True)])

    def test_owner(self) -> None:
        assert can_manage_overrides([], True)

    def test_regular_member(self, make_role) -> None:
        assert not can_manage_overrides([make_role("r", 1, read_messages=True, manage_messages=True)])
