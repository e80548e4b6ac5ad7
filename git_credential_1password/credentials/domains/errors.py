"""Exceptions raised by the credential helper."""
from typing import Optional


class CredentialHelperError(Exception):
    """Base class for every fatal helper error."""
    pass


class MalformedInputError(CredentialHelperError):
    """A protocol line on stdin had no ``=`` separator."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Invalid input: {line!r}")


class MissingFieldError(CredentialHelperError):
    """A field required by the requested action was absent or empty."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"{field_name} is missing in the input")


class StoreInvocationError(CredentialHelperError):
    """The ``op`` command could not be run or exited non-zero."""

    def __init__(self, verb: str, returncode: Optional[int], output: str, reason: str = ""):
        self.verb = verb
        self.returncode = returncode
        self.output = output
        if returncode is None:
            message = f"op item {verb} could not be run: {reason}"
        else:
            message = f"op item {verb} failed with exit status {returncode}"
        if output.strip():
            message = f"{message}\n{output.rstrip()}"
        super().__init__(message)


class ResponseDecodeError(CredentialHelperError):
    """``op`` output could not be decoded into item fields."""

    def __init__(self, reason: str, raw_output: str):
        self.reason = reason
        self.raw_output = raw_output
        super().__init__(f"Failed to decode op output: {reason}\n{raw_output.rstrip()}")


class IncompleteCredentialError(CredentialHelperError):
    """The item was found but lacks a username or password."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(
            f"username or password is empty for item '{item_id}', is the item named correctly?"
        )


class UnknownActionError(CredentialHelperError):
    """The requested action is not one of get, store or erase."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"It doesn't look like anything to me. (Unknown argument: {action})")
