"""1Password CLI (``op``) client wrapper.

Every call to the external secret store goes through this module. Item
fields are passed to ``op`` as assignment arguments (``username=...``).
Reference: https://developer.1password.com/docs/cli/reference/management-commands/item
"""
import json
import logging
import subprocess
from typing import List, Optional

from .errors import ResponseDecodeError, StoreInvocationError
from .models import HelperConfig, SecretItem

logger = logging.getLogger(__name__)

# Only these fields are requested so unrelated item data never leaves op
REQUESTED_FIELDS = ("username", "password")
LOGIN_CATEGORY = "Login"


class OnePasswordClient:
    """Runs ``op item`` subcommands with the configured account and vault."""

    def __init__(self, config: Optional[HelperConfig] = None):
        self.config = config or HelperConfig()

    def build_command(self, verb: str, *args: str) -> List[str]:
        """
        Build the argument list for an ``op item <verb>`` invocation.

        Args:
            verb: ``op item`` subcommand (get, create, edit, delete)
            *args: Operation specific arguments

        Returns:
            Full command line, selectors first, then operation arguments
        """
        return [self.config.op_path, "item", verb, *self.config.selector_args(), *args]

    def _run(self, verb: str, *args: str) -> subprocess.CompletedProcess:
        """
        Run ``op item <verb>`` and return the completed process.

        Raises:
            StoreInvocationError: If op cannot be started or exits non-zero
        """
        command = self.build_command(verb, *args)
        logger.debug(f"Running op item {verb} ({len(args)} argument(s))")

        try:
            # op writes UTF-8; undecodable bytes must not escape as UnicodeDecodeError
            result = subprocess.run(
                command, capture_output=True, encoding="utf-8", errors="replace", check=False
            )
        except OSError as e:
            raise StoreInvocationError(verb, None, "", reason=str(e)) from e

        if result.returncode != 0:
            output = (result.stdout or "") + (result.stderr or "")
            raise StoreInvocationError(verb, result.returncode, output)

        return result

    def fetch(self, item_id: str) -> SecretItem:
        """
        Fetch the username and password fields of an item.

        Args:
            item_id: Item title or ID

        Returns:
            Decoded item fields

        Raises:
            StoreInvocationError: If op fails, including when the item does not exist
            ResponseDecodeError: If op output is not the expected JSON
        """
        result = self._run(
            "get", "--format", "json", "--fields", ",".join(REQUESTED_FIELDS), item_id
        )
        raw = result.stdout or ""

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ResponseDecodeError(str(e), raw) from e

        try:
            return SecretItem.from_json(data)
        except TypeError as e:
            raise ResponseDecodeError(str(e), raw) from e

    def create(self, item_id: str, url: str, username: str, password: str) -> None:
        """Create a new Login item titled ``item_id``."""
        self._run(
            "create",
            f"--category={LOGIN_CATEGORY}",
            f"--title={item_id}",
            f"--url={url}",
            f"username={username}",
            f"password={password}",
        )
        logger.debug(f"Created item '{item_id}'")

    def update(self, item_id: str, url: str, username: str, password: str) -> None:
        """Edit the URL and credential fields of an existing item."""
        self._run(
            "edit",
            item_id,
            f"--url={url}",
            f"username={username}",
            f"password={password}",
        )
        logger.debug(f"Updated item '{item_id}'")

    def delete(self, item_id: str) -> None:
        """Delete an item. Raises StoreInvocationError on failure."""
        self._run("delete", item_id)
        logger.debug(f"Deleted item '{item_id}'")
