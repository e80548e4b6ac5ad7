"""CLI entrypoint for git-credential-1password.

Git runs the helper as ``git credential-1password [<options>] <action>``
and exchanges credentials on stdin/stdout.
Reference: https://git-scm.com/docs/gitcredentials
"""
import sys
import argparse
import logging
from importlib import metadata

from git_credential_1password.credentials.domains.config_loader import resolve_config
from git_credential_1password.credentials.domains.errors import CredentialHelperError
from git_credential_1password.credentials.workflows.credential_operations import run_action

from .validators import validate_action

VERSION = "0.1.0"
DIST_NAME = "git-credential-1password"

# Configure logging to stderr; stdout is reserved for the git protocol
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def get_version() -> str:
    """Version of the installed distribution, or the built-in one."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return VERSION


def cmd_version(args=None):
    """Print version information to stderr."""
    print(f"git-credential-1password {get_version()}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git credential-1password",
        usage="git credential-1password [<options>] <action>",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="Git credential helper backed by the 1Password CLI (op)",
        epilog="""
Actions:
  get            Generate credential [called by Git]
  store          Store credential [called by Git]
  erase          Erase credential [called by Git]

Exit codes:
  0 - Success
  1 - Runtime error (malformed input, op failure, incomplete item, etc.)
  2 - Usage error (missing or unknown action)

Environment variables:
  OP_ACCOUNT, OP_VAULT                 - Default account and vault
  GIT_CREDENTIAL_1PASSWORD_PREFIX      - Default item name prefix
  GIT_CREDENTIAL_1PASSWORD_OP_PATH     - Path to the op executable
  GIT_CREDENTIAL_1PASSWORD_CONFIG      - Path to the YAML config file

See also https://github.com/ethrgeist/git-credential-1password
        """
    )
    parser.add_argument("action", nargs="?", help="Helper action: get, store or erase")
    parser.add_argument("--account", help="1Password account")
    parser.add_argument("--vault", help="1Password vault")
    parser.add_argument("--prefix", help="1Password item name prefix")
    parser.add_argument(
        "--config",
        help="YAML config file (default: ~/.config/git-credential-1password/config.yml)"
    )
    parser.add_argument("--op-path", help="Path to the op executable (default: op)")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log op invocations and decisions to stderr"
    )
    parser.add_argument("--version", action="store_true", help="Print version")
    return parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (malformed input, op failures, incomplete items, etc.)
        2 - Usage errors (missing or unknown action)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        cmd_version(args)
        sys.exit(0)

    validate_action(args.action, parser)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = resolve_config(
            account=args.account,
            vault=args.vault,
            prefix=args.prefix,
            op_path=args.op_path,
            config_path=args.config,
        )
        logger.debug(
            f"Using account={config.account or '-'} vault={config.vault or '-'} "
            f"prefix={config.prefix!r} op={config.op_path}"
        )
        run_action(args.action, config)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except CredentialHelperError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
