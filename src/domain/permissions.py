"""
Role/Permission Model

Two vocabularies live here:

- Analytics role classes. Free-text role labels (job titles such as
  "Finance Manager") resolve to a RoleClass through an ordered precedence
  table; each class carries a static set of analytics/view grants.
- Portal permission keys. Stored Role records carry keys drawn from the closed
  vocabulary of their portal; review and licensing actions are authorized
  against these keys, scoped by organization type.

Everything in this module is a pure function over static tables.
"""

from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from src.domain.entities.enums import OrganizationType, PortalType


class RoleClass(str, Enum):
    """Canonical analytics role class"""

    super_admin = "super_admin"
    admin = "admin"
    finance_manager = "finance_manager"
    finance = "finance"
    regional_manager = "regional_manager"
    vendor_manager = "vendor_manager"
    hr_manager = "hr_manager"
    support_staff = "support_staff"
    customer_service = "customer_service"


class AnalyticsPermission(str, Enum):
    """Read-style analytics permissions"""

    view_all_metrics = "view_all_metrics"
    view_financial_metrics = "view_financial_metrics"
    view_revenue_expenses = "view_revenue_expenses"
    view_operating_expenses = "view_operating_expenses"
    view_customer_metrics = "view_customer_metrics"
    view_vendor_metrics = "view_vendor_metrics"
    view_product_performance = "view_product_performance"
    view_regional_performance = "view_regional_performance"
    view_organization_types = "view_organization_types"
    view_license_status = "view_license_status"
    view_notifications = "view_notifications"
    export_reports = "export_reports"
    drill_down_details = "drill_down_details"


# Grant that implies every analytics permission (and nothing else)
VIEW_ALL = AnalyticsPermission.view_all_metrics.value

ANALYTICS_PERMISSIONS: Tuple[str, ...] = tuple(p.value for p in AnalyticsPermission)

_FULL_ANALYTICS = frozenset(ANALYTICS_PERMISSIONS)

ROLE_PERMISSIONS: Dict[RoleClass, FrozenSet[str]] = {
    RoleClass.super_admin: _FULL_ANALYTICS,
    RoleClass.admin: _FULL_ANALYTICS,
    RoleClass.finance_manager: frozenset(
        {
            "view_financial_metrics",
            "view_revenue_expenses",
            "view_operating_expenses",
            "view_product_performance",
            "view_notifications",
            "export_reports",
            "drill_down_details",
        }
    ),
    RoleClass.finance: frozenset(
        {
            "view_financial_metrics",
            "view_revenue_expenses",
            "view_operating_expenses",
            "view_notifications",
            "export_reports",
        }
    ),
    RoleClass.regional_manager: frozenset(
        {
            "view_customer_metrics",
            "view_regional_performance",
            "view_product_performance",
            "view_notifications",
            "drill_down_details",
        }
    ),
    RoleClass.vendor_manager: frozenset(
        {
            "view_vendor_metrics",
            "view_product_performance",
            "view_regional_performance",
            "view_notifications",
            "drill_down_details",
        }
    ),
    RoleClass.hr_manager: frozenset({"view_customer_metrics", "view_notifications"}),
    RoleClass.support_staff: frozenset(
        {"view_customer_metrics", "view_vendor_metrics", "view_notifications"}
    ),
    RoleClass.customer_service: frozenset(
        {"view_customer_metrics", "view_notifications"}
    ),
}

# Least-privileged class; target of every label nothing else matches
FALLBACK_ROLE = RoleClass.customer_service


def _contains(*parts: str) -> Callable[[str], bool]:
    return lambda label: all(part in label for part in parts)


# Evaluated top to bottom, first match wins. The order is part of the
# contract: "super" before "admin", "finance"+"manager" before "finance".
ROLE_PRECEDENCE: List[Tuple[Callable[[str], bool], RoleClass]] = [
    (_contains("super"), RoleClass.super_admin),
    (_contains("admin"), RoleClass.admin),
    (_contains("finance", "manager"), RoleClass.finance_manager),
    (_contains("finance"), RoleClass.finance),
    (_contains("regional", "manager"), RoleClass.regional_manager),
    (_contains("vendor", "manager"), RoleClass.vendor_manager),
    (_contains("hr", "manager"), RoleClass.hr_manager),
    (_contains("support"), RoleClass.support_staff),
    (_contains("customer", "service"), RoleClass.customer_service),
]


def normalize_label(raw_label: Optional[str]) -> str:
    """Lowercase, trim and join whitespace runs with underscores."""
    if not raw_label:
        return ""
    return "_".join(raw_label.strip().lower().split())


def resolve_role(raw_label: Optional[str]) -> RoleClass:
    """
    Resolve a free-text role label to its canonical class.

    Never raises: empty or unrecognized labels resolve to FALLBACK_ROLE.
    """
    label = normalize_label(raw_label)
    if not label:
        return FALLBACK_ROLE
    for matches, role_class in ROLE_PRECEDENCE:
        if matches(label):
            return role_class
    return FALLBACK_ROLE


def grants_permission(grants: Iterable[str], permission: str) -> bool:
    """
    True if the permission is granted directly, or view_all_metrics is held
    and the permission is one of the analytics permissions. Write-style keys
    are never implied.
    """
    grants = frozenset(grants)
    if permission in grants:
        return True
    return VIEW_ALL in grants and permission in _FULL_ANALYTICS


def has_permission(role: RoleClass, permission: str) -> bool:
    return grants_permission(ROLE_PERMISSIONS.get(role, frozenset()), permission)


def has_any_permission(role: RoleClass, permissions: Iterable[str]) -> bool:
    return any(has_permission(role, p) for p in permissions)


def has_all_permissions(role: RoleClass, permissions: Iterable[str]) -> bool:
    return all(has_permission(role, p) for p in permissions)


def granted_permissions(role: RoleClass) -> List[str]:
    """Effective analytics permissions of a role, in vocabulary order."""
    return [p for p in ANALYTICS_PERMISSIONS if has_permission(role, p)]


# ============================================================================
# Portal permission vocabulary
# ============================================================================

PORTAL_PERMISSIONS: Dict[PortalType, FrozenSet[str]] = {
    PortalType.tech: frozenset(
        {
            "techUsersCreate",
            "techUsersUpdate",
            "techUsersDelete",
            "techUsersView",
            "organizationsCreate",
            "organizationsUpdate",
            "organizationsDelete",
            "organizationsView",
            "licensesView",
            "licensesIssue",
            "licensesRevoke",
            "onboardingView",
            "onboardingManage",
            "rolesView",
            "rolesCreate",
            "rolesUpdate",
            "rolesDelete",
            "assignRolesView",
            "assignRolesAssign",
            "assignRolesUpdate",
            "assignRolesRemove",
        }
    ),
    PortalType.admin: frozenset(
        {
            "adminUsersCreate",
            "adminUsersUpdate",
            "adminUsersDisable",
            "adminUsersView",
            "customerOrgsManage",
            "vendorOrgsManage",
            "licenseView",
            "licensesView",
            "licensesIssue",
            "licensesRevoke",
            "onboardingView",
            "onboardingManage",
            "systemSettingsManage",
            "securityPoliciesManage",
            "auditLogsView",
            "adminRfqView",
            "adminRfqManage",
        }
    ),
    PortalType.customer: frozenset(
        {
            "rfqView",
            "rfqManage",
            "vesselsView",
            "vesselsManage",
            "crewView",
            "crewManage",
            "financeView",
            "financeManage",
            "customerBillingView",
            "customerBillingManage",
            "documentsView",
            "documentsUpload",
            "claimView",
            "claimManage",
        }
    ),
    PortalType.vendor: frozenset(
        {
            "catalogueView",
            "catalogueManage",
            "inventoryView",
            "inventoryManage",
            "quotationView",
            "quotationManage",
            "vendorBillingView",
            "vendorBillingManage",
            "vendorDocumentsView",
            "vendorDocumentsUpload",
            "vendorClaimView",
            "vendorClaimRespond",
            "vendorSupportView",
            "vendorSupportRespond",
            "shipmentView",
            "shipmentUpdate",
            "vendorUsersCreate",
        }
    ),
}


class ReviewAction(str, Enum):
    """Directory, onboarding and licensing actions guarded server-side"""

    view = "view"
    invite = "invite"
    approve = "approve"
    reject = "reject"
    issue = "issue"
    view_licenses = "view_licenses"
    license_status = "license_status"


# Any one of the listed keys grants the action ("licenseView" is an alias)
REVIEW_ACTIONS: Dict[ReviewAction, FrozenSet[str]] = {
    ReviewAction.view: frozenset({"onboardingView", "onboardingManage"}),
    ReviewAction.invite: frozenset({"onboardingManage"}),
    ReviewAction.approve: frozenset({"licensesIssue"}),
    ReviewAction.reject: frozenset({"onboardingManage"}),
    ReviewAction.issue: frozenset({"licensesIssue"}),
    ReviewAction.view_licenses: frozenset({"licensesView", "licenseView"}),
    ReviewAction.license_status: frozenset({"licensesRevoke"}),
}

# Organization-management key that scopes an action to an organization type.
# Portals missing from this table cannot review at all.
ORGANIZATION_SCOPE: Dict[PortalType, Dict[OrganizationType, str]] = {
    PortalType.admin: {
        OrganizationType.customer: "customerOrgsManage",
        OrganizationType.vendor: "vendorOrgsManage",
    },
    PortalType.tech: {
        OrganizationType.customer: "organizationsUpdate",
        OrganizationType.vendor: "organizationsUpdate",
    },
}


def unknown_permissions(portal: PortalType, keys: Iterable[str]) -> List[str]:
    """Keys outside the portal's vocabulary, in input order."""
    vocabulary = PORTAL_PERMISSIONS.get(portal, frozenset())
    return [key for key in keys if key not in vocabulary]


def can_perform(
    portal: PortalType,
    permissions: Iterable[str],
    action: ReviewAction,
    organization_type: Optional[OrganizationType] = None,
) -> bool:
    """
    Server-side guard for review and licensing actions.

    The actor needs one of the action's keys and, when an organization type
    is given, the organization-management key of its portal for that type.
    """
    scope = ORGANIZATION_SCOPE.get(portal)
    if scope is None:
        return False
    granted = frozenset(permissions)
    if not granted & REVIEW_ACTIONS[action]:
        return False
    if organization_type is None:
        return True
    return scope[organization_type] in granted
