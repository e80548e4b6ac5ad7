"""Reader and writer for the git credential helper protocol.

Git sends ``key=value`` lines on stdin, terminated by a blank line or end
of stream, and reads the same format back on stdout.
Reference: https://git-scm.com/docs/git-credential#IOFMT
"""
import logging
from typing import Dict, TextIO

from .errors import MalformedInputError
from .models import CredentialRequest

logger = logging.getLogger(__name__)


def read_lines(stream: TextIO) -> Dict[str, str]:
    """
    Read ``key=value`` pairs until a blank line or end of stream.

    Args:
        stream: Text stream to read from, usually ``sys.stdin``

    Returns:
        Mapping of trimmed keys to trimmed values; a repeated key keeps
        its last value

    Raises:
        MalformedInputError: If a non-blank line has no ``=`` separator
    """
    inputs: Dict[str, str] = {}

    for line in stream:
        if not line.strip():
            break

        key, sep, value = line.partition("=")
        if not sep:
            raise MalformedInputError(line.rstrip("\r\n"))

        inputs[key.strip()] = value.strip()

    logger.debug(f"Read protocol keys: {', '.join(sorted(inputs)) or '(none)'}")
    return inputs


def read_request(stream: TextIO) -> CredentialRequest:
    """Parse one protocol message from ``stream`` into a request."""
    return CredentialRequest(read_lines(stream))


def write_credential(stream: TextIO, username: str, password: str) -> None:
    """Write the two-line response git expects from a ``get`` action."""
    stream.write(f"username={username}\n")
    stream.write(f"password={password}\n")
    stream.flush()
