"""
Role-based access control - allow-lists of UserProfile roles
"""
from rest_framework import permissions

from .models import UserProfile


class HasRole(permissions.BasePermission):
    """Base allow-list permission; subclasses set allowed_roles"""
    allowed_roles = ()
    message = 'Insufficient permissions'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return request.user.role in self.allowed_roles


class IsSystemAdmin(HasRole):
    """Only system administrators"""
    allowed_roles = (UserProfile.ROLE_SYSTEM_ADMIN,)


class IsAdminOrFacilitator(HasRole):
    """System administrators and facilitators"""
    allowed_roles = (UserProfile.ROLE_SYSTEM_ADMIN, UserProfile.ROLE_FACILITATOR)


class IsOrganizationManager(HasRole):
    """Admins, facilitators and client admins"""
    allowed_roles = (
        UserProfile.ROLE_SYSTEM_ADMIN,
        UserProfile.ROLE_FACILITATOR,
        UserProfile.ROLE_CLIENT_ADMIN,
    )


class IsAdminOrFacilitatorOrReadOnly(permissions.BasePermission):
    """Any authenticated user can read, admins and facilitators can write"""
    message = 'Insufficient permissions'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return request.user.role in IsAdminOrFacilitator.allowed_roles


def can_access_organization(user, organization_id):
    """Admins and facilitators reach every organization, everyone else only their own."""
    if user.sees_all_organizations:
        return True
    return organization_id is not None and user.organization_id == organization_id
