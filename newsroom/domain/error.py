"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule."""

    def __init__(self, resource: str, field: str, value: str):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} {field} already in use: {value}")


class NotAuthenticatedError(DomainError):
    """Raised when an action requires a signed-in user."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when a user lacks the permission for an action."""

    def __init__(self, resource: str, resource_id: str, user_id: str, action: str = "edit"):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        self.action = action
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
