class PainelException(Exception):
    """Base exception for the Painel API"""

    pass


class MissingCredentialException(PainelException):
    """Raised when no bearer token is present on the request"""

    pass


class UnauthorizedException(PainelException):
    """Raised when JWT validation fails (bad signature or malformed payload)"""

    pass


class ExpiredTokenException(UnauthorizedException):
    """Raised when a JWT is past its expiry"""

    pass


class NotFoundException(PainelException):
    """Raised when resource not found"""

    pass


class ForbiddenException(PainelException):
    """Raised when user tries to access another company's data"""

    pass


class ValidationException(PainelException):
    """Raised for business logic validation errors"""

    pass


class TenantRequiredException(ValidationException):
    """Raised when an admin omits empresa_id on an operation that needs one"""

    pass
