"""Workflow for the get, store and erase credential helper actions."""
import logging
import sys
from typing import Optional, TextIO

from ..domains.errors import (
    CredentialHelperError,
    IncompleteCredentialError,
    MissingFieldError,
    UnknownActionError,
)
from ..domains.models import CredentialRequest, HelperConfig
from ..domains.naming import item_name
from ..domains.op_client import OnePasswordClient
from ..domains.protocol import read_request, write_credential

logger = logging.getLogger(__name__)

ACTIONS = ("get", "store", "erase")


def _require(request: CredentialRequest, *names: str) -> None:
    for name in names:
        if not request.get(name):
            raise MissingFieldError(name)


def get_credential(
    request: CredentialRequest,
    client: OnePasswordClient,
    prefix: str = "",
    output: Optional[TextIO] = None,
) -> None:
    """
    Look up the item for the requested host and print its credential.

    Args:
        request: Parsed protocol fields
        client: 1Password client
        prefix: Item name prefix
        output: Stream for the response (defaults to stdout)

    Raises:
        MissingFieldError: If host is absent
        StoreInvocationError: If op get fails
        ResponseDecodeError: If op output is not valid item JSON
        IncompleteCredentialError: If username or password is empty
    """
    _require(request, "host")
    item_id = item_name(request.host, prefix)

    item = client.fetch(item_id)
    username = item.get_field("username")
    password = item.get_field("password")
    if not username or not password:
        raise IncompleteCredentialError(item_id)

    write_credential(output or sys.stdout, username, password)


def store_credential(request: CredentialRequest, client: OnePasswordClient, prefix: str = "") -> None:
    """
    Create the item for the requested host, or update it if it exists.

    Any fetch failure, including a transient one, is read as "item does
    not exist" and leads to a create attempt.

    Raises:
        MissingFieldError: If host, username or password is absent
        StoreInvocationError: If op create or op edit fails
    """
    _require(request, "host", "username", "password")
    item_id = item_name(request.host, prefix)
    url = request.url()

    try:
        client.fetch(item_id)
    except CredentialHelperError as e:
        logger.debug(f"Treating item '{item_id}' as absent: {e}")
        client.create(item_id, url, request.username, request.password)
    else:
        client.update(item_id, url, request.username, request.password)


def erase_credential(request: CredentialRequest, client: OnePasswordClient, prefix: str = "") -> None:
    """
    Delete the item for the requested host.

    The delete outcome is discarded; an item that is already gone is not
    an error for git.

    Raises:
        MissingFieldError: If host is absent
    """
    _require(request, "host")
    item_id = item_name(request.host, prefix)

    try:
        client.delete(item_id)
    except CredentialHelperError as e:
        logger.debug(f"Ignoring delete failure for '{item_id}': {e}")


def run_action(
    action: str,
    config: HelperConfig,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    client: Optional[OnePasswordClient] = None,
) -> None:
    """
    Read one request from stdin and run a single helper action.

    Args:
        action: One of get, store, erase
        config: Resolved helper configuration
        stdin: Input stream (defaults to sys.stdin)
        stdout: Output stream for get (defaults to sys.stdout)
        client: 1Password client (built from config if not provided)

    Raises:
        UnknownActionError: If action is not supported
        CredentialHelperError: For any fatal error of the action
    """
    if action not in ACTIONS:
        raise UnknownActionError(action)

    client = client or OnePasswordClient(config)
    request = read_request(stdin or sys.stdin)

    if action == "get":
        get_credential(request, client, config.prefix, output=stdout)
    elif action == "store":
        store_credential(request, client, config.prefix)
    else:
        erase_credential(request, client, config.prefix)
