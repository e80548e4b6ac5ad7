"""Input validation for CLI arguments."""
import argparse
import sys

from git_credential_1password.credentials.workflows.credential_operations import ACTIONS


def validate_action(action: str, parser: argparse.ArgumentParser) -> None:
    """
    Validate the action argument passed by git.

    Args:
        action: Action name, or None if missing
        parser: Parser used to print usage text

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not action:
        print("Error: Missing action", file=sys.stderr)
        parser.print_help(file=sys.stderr)
        sys.exit(2)

    if action not in ACTIONS:
        print(f"Error: Unknown action '{action}'", file=sys.stderr)
        print(f"\nSupported actions: {', '.join(ACTIONS)}\n", file=sys.stderr)
        parser.print_help(file=sys.stderr)
        sys.exit(2)
