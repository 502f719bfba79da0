"""Exceptions raised by the portal's domain modules.

Routes catch ``PortalError`` and flash the message back to the user.
"""


class PortalError(Exception):
    pass


class ValidationError(PortalError):
    pass


class NotFoundError(PortalError):
    pass


class AuthError(PortalError):
    pass


class StoreError(PortalError):
    pass
