import logging

from rest_framework.permissions import BasePermission

from core.models import Company

logger = logging.getLogger("security.authorization")

COMPANY_CAPABILITY_MATRIX = {
    "buyer.documents.manage": {Company.Type.BUYER},
    "seller.documents.manage": {Company.Type.SELLER},
    "dashboard.view": {Company.Type.BUYER, Company.Type.SELLER},
    "company.manage": {Company.Type.BUYER, Company.Type.SELLER},
    "audit.view": {Company.Type.BUYER, Company.Type.SELLER},
}

NO_COMPANY_MESSAGE = "Authenticated user must belong to a company."


def get_user_company_type(user):
    if not user or not user.is_authenticated:
        return None
    company = getattr(user, "company", None)
    if company is None:
        return None
    return company.type


def user_has_capability(user, capability):
    allowed_types = COMPANY_CAPABILITY_MATRIX.get(capability)
    if not allowed_types:
        return False
    return get_user_company_type(user) in allowed_types


def denial_message(capability):
    allowed_types = COMPANY_CAPABILITY_MATRIX.get(capability) or set()
    if len(allowed_types) == 1:
        label = next(iter(allowed_types)).label.lower()
        return f"Forbidden: Only {label} companies can access this resource."
    return NO_COMPANY_MESSAGE


class CompanyCapabilityPermission(BasePermission):
    """Validates the caller's company type against the capability of the current action and logs denials."""

    message = "You do not have permission to perform this action."

    def has_permission(self, request, view):
        capability_map = getattr(view, "permission_action_map", {})
        action_key = getattr(view, "action", None) or request.method.lower()
        capability = capability_map.get(action_key, getattr(view, "default_capability", None))
        if capability is None:
            return True

        company_type = get_user_company_type(request.user)
        allowed = user_has_capability(request.user, capability)
        if not allowed:
            self.message = NO_COMPANY_MESSAGE if company_type is None else denial_message(capability)
            logger.warning(
                "permission_denied capability=%s user=%s company_type=%s method=%s path=%s view=%s action=%s",
                capability,
                getattr(request.user, "username", "anonymous"),
                company_type,
                request.method,
                request.path,
                view.__class__.__name__,
                action_key,
            )
        return allowed
