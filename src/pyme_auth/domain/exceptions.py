"""Domain errors raised by repositories and use cases.

Controllers translate these into HTTP responses; nothing below the
controller layer knows about HTTP.
"""


class AuthServiceError(Exception):
    """Base class for every error raised by the service."""


class ConflictError(AuthServiceError):
    """A unique key already exists."""


class DuplicateEmailError(ConflictError):
    def __init__(self, email: str | None = None):
        self.email = email
        super().__init__("Email already registered")


class DanglingReferenceError(AuthServiceError):
    """A foreign reference (e.g. business_id) does not resolve."""


class NotFoundError(AuthServiceError):
    pass


class InvalidCredentialsError(AuthServiceError):
    # mesma mensagem para email inexistente e senha errada (anti-enumeração)
    MESSAGE = "Credenciais Inválidas"

    def __init__(self):
        super().__init__(self.MESSAGE)


class StorageFault(AuthServiceError):
    """The underlying store failed; the unit of work was rolled back."""


class AuditLogImmutableError(AuthServiceError):
    pass
