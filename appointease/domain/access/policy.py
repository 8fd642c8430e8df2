"""
Authorization policy engine

A single pure decision function for every protected action:

    authorize(principal, action, resource) -> Decision

The engine never raises and never writes. It reads the principal's own
provider through the ownership resolver and compares it with the foreign keys
of the resource snapshot. Callers convert a denial into the matching typed
error with ``Decision.raise_for_denial()``.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ...errors import Forbidden, Unauthenticated
from ...models import AppointmentStatus, UserRole

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    # Appointments
    LIST_APPOINTMENTS = "appointment:list"
    VIEW_APPOINTMENT = "appointment:view"
    CREATE_APPOINTMENT = "appointment:create"
    CANCEL_APPOINTMENT = "appointment:cancel"
    CONFIRM_APPOINTMENT = "appointment:confirm"
    COMPLETE_APPOINTMENT = "appointment:complete"
    REOPEN_APPOINTMENT = "appointment:reopen"  # request back to Pending
    # Services
    CREATE_SERVICE = "service:create"
    UPDATE_SERVICE = "service:update"
    DELETE_SERVICE = "service:delete"
    # Employees
    CREATE_EMPLOYEE = "employee:create"
    UPDATE_EMPLOYEE = "employee:update"
    DELETE_EMPLOYEE = "employee:delete"
    # Providers
    CREATE_PROVIDER = "provider:create"
    UPDATE_PROVIDER = "provider:update"
    UPDATE_PROVIDER_PRIVILEGED = "provider:update-privileged"
    VERIFY_PROVIDER = "provider:verify"
    # Users
    VIEW_USER = "user:view"
    UPDATE_USER = "user:update"
    TOGGLE_USER_ACTIVE = "user:toggle-active"


class DenyReason(str, enum.Enum):
    UNAUTHENTICATED = "Unauthenticated"
    FORBIDDEN = "Forbidden"


# No role other than Admin may perform these, whatever the resource
ADMIN_ONLY_ACTIONS = frozenset(
    {
        Action.CREATE_PROVIDER,
        Action.UPDATE_PROVIDER_PRIVILEGED,
        Action.VERIFY_PROVIDER,
        Action.TOGGLE_USER_ACTIVE,
    }
)

# Actions a Provider may take only on records carrying their own provider id
PROVIDER_SCOPED_ACTIONS = frozenset(
    {
        Action.VIEW_APPOINTMENT,
        Action.CREATE_APPOINTMENT,
        Action.CANCEL_APPOINTMENT,
        Action.CONFIRM_APPOINTMENT,
        Action.COMPLETE_APPOINTMENT,
        Action.REOPEN_APPOINTMENT,
        Action.CREATE_SERVICE,
        Action.UPDATE_SERVICE,
        Action.DELETE_SERVICE,
        Action.CREATE_EMPLOYEE,
        Action.UPDATE_EMPLOYEE,
        Action.DELETE_EMPLOYEE,
    }
)

# Statuses from which a customer may cancel. Canceled is included because
# re-canceling is an idempotent no-op.
CUSTOMER_CANCELABLE = frozenset(
    {AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELED}
)

# Which action a requested appointment status belongs to
STATUS_ACTIONS = {
    AppointmentStatus.PENDING: Action.REOPEN_APPOINTMENT,
    AppointmentStatus.CONFIRMED: Action.CONFIRM_APPOINTMENT,
    AppointmentStatus.CANCELED: Action.CANCEL_APPOINTMENT,
    AppointmentStatus.COMPLETED: Action.COMPLETE_APPOINTMENT,
}

DENIAL_MESSAGES = {
    Action.LIST_APPOINTMENTS: "No provider profile is linked to this account",
    Action.VIEW_APPOINTMENT: "You can only view your own appointments",
    Action.CREATE_APPOINTMENT: "You can only book appointments for yourself or your own business",
    Action.CANCEL_APPOINTMENT: "You can only cancel your own pending or confirmed appointments",
    Action.CONFIRM_APPOINTMENT: "Only the provider or an administrator can confirm appointments",
    Action.COMPLETE_APPOINTMENT: "Only the provider or an administrator can complete appointments",
    Action.REOPEN_APPOINTMENT: "Only the provider or an administrator can change this appointment",
    Action.CREATE_SERVICE: "You can only add services for your own business",
    Action.UPDATE_SERVICE: "You can only update your own services",
    Action.DELETE_SERVICE: "You can only delete your own services",
    Action.CREATE_EMPLOYEE: "You can only add employees to your own business",
    Action.UPDATE_EMPLOYEE: "You can only update your own employees",
    Action.DELETE_EMPLOYEE: "You can only remove your own employees",
    Action.CREATE_PROVIDER: "Only administrators can create provider profiles",
    Action.UPDATE_PROVIDER: "You can only update your own provider info",
    Action.UPDATE_PROVIDER_PRIVILEGED: "Only administrators can change these provider fields",
    Action.VERIFY_PROVIDER: "Only administrators can verify providers",
    Action.VIEW_USER: "You can only view your own profile",
    Action.UPDATE_USER: "You can only update your own profile",
    Action.TOGGLE_USER_ACTIVE: "Only administrators can activate or deactivate accounts",
}


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, reduced to what authorization needs"""

    user_id: int
    role: UserRole


@dataclass(frozen=True)
class ResourceSnapshot:
    """
    The fields of a target record that authorization looks at.

    Built from a loaded entity with ``ResourceSnapshot.of(entity)`` or directly
    from a create request, before anything is persisted.
    """

    kind: str
    id: Optional[int] = None
    provider_id: Optional[int] = None
    customer_id: Optional[int] = None
    user_id: Optional[int] = None
    status: Optional[AppointmentStatus] = None

    @classmethod
    def of(cls, entity: Any) -> "ResourceSnapshot":
        return cls(
            kind=type(entity).__name__,
            id=getattr(entity, "id", None),
            provider_id=getattr(entity, "provider_id", None),
            customer_id=getattr(entity, "customer_id", None),
            user_id=getattr(entity, "user_id", None),
            status=getattr(entity, "status", None),
        )


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None
    message: Optional[str] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: DenyReason, message: Optional[str] = None) -> "Decision":
        return cls(False, reason, message)

    def __bool__(self) -> bool:
        return self.allowed

    def raise_for_denial(self) -> None:
        """Raise the typed error matching this denial; no-op when allowed"""
        if self.allowed:
            return
        if self.reason == DenyReason.UNAUTHENTICATED:
            raise Unauthenticated(self.message)
        raise Forbidden(self.message)


class ProviderLookup(Protocol):
    def resolve_provider_for_user(self, user_id: int) -> Any: ...


def action_for_status(status: AppointmentStatus) -> Action:
    return STATUS_ACTIONS[AppointmentStatus(status)]


def require_role(principal: Optional[Principal], *roles: UserRole) -> Decision:
    """Plain role guard for handlers that only care about the caller's role"""
    if principal is None:
        return Decision.deny(DenyReason.UNAUTHENTICATED, "Not authenticated")
    if roles and principal.role not in roles:
        return Decision.deny(DenyReason.FORBIDDEN, "Access denied")
    return Decision.allow()


class PolicyEngine:
    """Role based access control over appointments, services, employees, providers and users"""

    def __init__(self, resolver: ProviderLookup):
        self.resolver = resolver

    def authorize(
        self,
        principal: Optional[Principal],
        action: Action,
        resource: Optional[ResourceSnapshot] = None,
    ) -> Decision:
        if principal is None:
            return Decision.deny(DenyReason.UNAUTHENTICATED, "Not authenticated")

        role = UserRole(principal.role)

        if action in ADMIN_ONLY_ACTIONS:
            decision = Decision.allow() if role == UserRole.ADMIN else self._forbid(action)
        elif role == UserRole.ADMIN:
            decision = Decision.allow()
        elif role == UserRole.CUSTOMER:
            decision = self._authorize_customer(principal, action, resource)
        elif role == UserRole.PROVIDER:
            decision = self._authorize_provider(principal, action, resource)
        else:
            decision = self._forbid(action)

        if not decision:
            logger.warning(
                f"🚫 Denied {action.value} for user {principal.user_id} ({role.value}): {decision.message}"
            )
        return decision

    def _authorize_customer(
        self, principal: Principal, action: Action, resource: Optional[ResourceSnapshot]
    ) -> Decision:
        if action == Action.LIST_APPOINTMENTS:
            return Decision.allow()

        if action in (Action.VIEW_USER, Action.UPDATE_USER):
            return self._allow_if(resource is not None and resource.id == principal.user_id, action)

        owns_appointment = resource is not None and resource.customer_id == principal.user_id

        if action in (Action.VIEW_APPOINTMENT, Action.CREATE_APPOINTMENT):
            return self._allow_if(owns_appointment, action)

        if action == Action.CANCEL_APPOINTMENT:
            return self._allow_if(
                owns_appointment and resource.status in CUSTOMER_CANCELABLE, action
            )

        return self._forbid(action)

    def _authorize_provider(
        self, principal: Principal, action: Action, resource: Optional[ResourceSnapshot]
    ) -> Decision:
        if action in (Action.VIEW_USER, Action.UPDATE_USER):
            return self._allow_if(resource is not None and resource.id == principal.user_id, action)

        if action not in PROVIDER_SCOPED_ACTIONS and action not in (
            Action.LIST_APPOINTMENTS,
            Action.UPDATE_PROVIDER,
        ):
            return self._forbid(action)

        own_provider = self.resolver.resolve_provider_for_user(principal.user_id)
        if own_provider is None:
            # No provider record means no "own" resources at all
            return Decision.deny(
                DenyReason.FORBIDDEN, "No provider profile is linked to this account"
            )

        if action == Action.LIST_APPOINTMENTS:
            return Decision.allow()

        if action == Action.UPDATE_PROVIDER:
            return self._allow_if(resource is not None and resource.id == own_provider.id, action)

        return self._allow_if(
            resource is not None and resource.provider_id == own_provider.id, action
        )

    @staticmethod
    def _allow_if(condition: bool, action: Action) -> Decision:
        return Decision.allow() if condition else PolicyEngine._forbid(action)

    @staticmethod
    def _forbid(action: Action) -> Decision:
        return Decision.deny(DenyReason.FORBIDDEN, DENIAL_MESSAGES.get(action, "Access denied"))
