"""
Domain exceptions raised by the lifecycle services.

Every error has a machine-readable `code` and a human-readable message that
names the offending entity (id or unit number). The API layer maps them to
HTTP responses in app.main; services never translate them to HTTPException.

    DomainError
    +-- NotFoundError          404  referenced entity does not exist
    +-- ConflictError          409  unit not available, duplicate email, ...
    +-- AuthorizationError     403  ownership mismatch
    +-- DomainValidationError  422  request violates a structural rule
        +-- StructureError     422  floor/unit layout cannot be generated
"""


class DomainError(Exception):
    code = "DOMAIN_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "detail": self.message, "code": self.code}


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    status_code = 404


class ConflictError(DomainError):
    code = "CONFLICT"
    status_code = 409


class AuthorizationError(DomainError):
    code = "FORBIDDEN"
    status_code = 403


class DomainValidationError(DomainError):
    code = "VALIDATION_ERROR"
    status_code = 422


class StructureError(DomainValidationError):
    code = "INVALID_STRUCTURE"
