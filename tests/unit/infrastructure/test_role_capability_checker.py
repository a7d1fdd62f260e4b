"""Unit tests for the role capability matrix."""

import pytest

from src.application.ports.capability_checker import Actor, ActorRole, CaseAction
from src.infrastructure.adapters.auth.role_capability_checker import (
    ADMIN_ONLY_ACTIONS,
    RoleCapabilityChecker,
)


@pytest.fixture
def checker() -> RoleCapabilityChecker:
    return RoleCapabilityChecker()


class TestRoleCapabilityChecker:
    @pytest.mark.parametrize("action", list(CaseAction))
    def test_admin_may_do_everything(
        self, checker: RoleCapabilityChecker, action: CaseAction
    ) -> None:
        assert checker.has_capability(Actor("admin-1", ActorRole.ADMIN), action)

    @pytest.mark.parametrize("action", list(CaseAction))
    def test_external_may_do_nothing(
        self, checker: RoleCapabilityChecker, action: CaseAction
    ) -> None:
        assert not checker.has_capability(Actor("ext-1", ActorRole.EXTERNAL), action)

    @pytest.mark.parametrize("action", list(CaseAction))
    def test_employee_lacks_only_admin_actions(
        self, checker: RoleCapabilityChecker, action: CaseAction
    ) -> None:
        allowed = checker.has_capability(Actor("emp-1", ActorRole.EMPLOYEE), action)

        assert allowed is (action not in ADMIN_ONLY_ACTIONS)

    def test_session_revert_is_admin_only(self) -> None:
        assert CaseAction.REVERT_SESSION in ADMIN_ONLY_ACTIONS

    def test_custom_matrix(self) -> None:
        checker = RoleCapabilityChecker(
            {ActorRole.EXTERNAL: frozenset({CaseAction.CONFIRM_NOTIFICATION_ATTEMPT})}
        )
        external = Actor("ext-1", ActorRole.EXTERNAL)

        assert checker.has_capability(external, CaseAction.CONFIRM_NOTIFICATION_ATTEMPT)
        assert not checker.has_capability(Actor("admin-1", ActorRole.ADMIN), CaseAction.CONVERT_PROTOCOL)
