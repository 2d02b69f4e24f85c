"""Exceptions raised by the control server."""


class ControlError(Exception):
    """Base class for all control-server errors."""

    message = "control error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NamespaceExistsError(ControlError):
    message = "Namespace already exists"


class NamespaceNotFoundError(ControlError):
    message = "Namespace not found"


class NamespaceNotEmptyError(ControlError):
    message = "Namespace not empty: node(s) found"


class PreAuthKeyNotFoundError(ControlError):
    message = "AuthKey not found"


class PreAuthKeyExpiredError(ControlError):
    message = "AuthKey expired"


class PreAuthKeyUsedError(ControlError):
    message = "AuthKey has already been used"


class NamespaceMismatchError(ControlError):
    message = "namespace mismatch"


class RouteNotAvailableError(ControlError):
    message = "route is not available"


class SameNamespaceError(ControlError):
    message = "Destination namespace same as origin"


class MachineAlreadySharedError(ControlError):
    message = "Node already shared to this namespace"


class MachineNotSharedError(ControlError):
    message = "Machine not shared to this namespace"


class DecryptionError(ControlError):
    message = "cannot decrypt response"


class IPAllocationError(ControlError):
    message = "could not find any suitable IP"