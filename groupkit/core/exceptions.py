class GroupKitException(Exception):
    """Base exception for groupkit"""

    pass


class UnauthorizedException(GroupKitException):
    """Raised when JWT validation fails"""

    pass


class NotFoundException(GroupKitException):
    """Raised when resource not found"""

    pass


class GroupNotFoundException(NotFoundException):
    """Raised when the requested group does not exist"""

    def __init__(self, group_id: int):
        super().__init__(f"Group {group_id} not found")
        self.group_id = group_id


class ForbiddenException(GroupKitException):
    """Raised when user lacks the permission for an action"""

    pass


class UserNotMemberException(ForbiddenException):
    """
    Raised when the caller has no membership in the group at all.

    Distinct from a member who simply holds no elevated roles.
    """

    def __init__(self, group_id: int):
        super().__init__(f"You are not a member of group {group_id}")
        self.group_id = group_id


class ValidationException(GroupKitException):
    """Raised for business logic validation errors"""

    pass


class InvariantViolation(GroupKitException):
    """Raised when a value is constructed in a state the domain forbids"""

    pass
