# Main Entry Point - Safe Wallet
#
# One-shot commands over the wallet core:
#   init       create a new wallet file
#   tree       print the group/entry tree
#   search     find entries by title, field name or field value
#   templates  list the entry templates
#   generate   print a random password
#
# The master password is read with getpass, or from SAFE_WALLET_PASSWORD.

import argparse
import getpass
import sys
from typing import List, Optional

from . import __version__, config
from .wallet import (
    ENTRY_TEMPLATES,
    PathInfo,
    WalletError,
    WalletService,
    wallet_exists,
)
from .wallet.encryption import generate_password

MASK = "******"


def _read_password(prompt: str) -> str:
    env = config.get_env("SAFE_WALLET_PASSWORD")
    if env:
        return env
    return getpass.getpass(prompt)


def _open_service(wallet_path: str) -> WalletService:
    if not wallet_exists(wallet_path):
        raise FileNotFoundError(f"Wallet file does not exist: {wallet_path}")
    service = WalletService(wallet_path, _read_password("Enter your wallet password: "))
    service.load()
    return service


def cmd_init(args) -> int:
    if wallet_exists(args.wallet):
        print(f"Refusing to overwrite existing file: {args.wallet}", file=sys.stderr)
        return 1

    password = _read_password("Create a password for your new wallet: ")
    if not password:
        print("Password cannot be empty", file=sys.stderr)
        return 1
    if not config.get_env("SAFE_WALLET_PASSWORD"):
        if getpass.getpass("Confirm password: ") != password:
            print("Passwords do not match", file=sys.stderr)
            return 1

    WalletService(args.wallet, password).create_new()
    print(f"Wallet created at {args.wallet}")
    return 0


def cmd_tree(args) -> int:
    service = _open_service(args.wallet)
    lines: List[str] = []

    def visit(info: PathInfo) -> bool:
        indent = "  " * info.depth
        if info.is_entry:
            lines.append(f"{indent}  - {info.entry.title} ({info.entry.id})")
        else:
            lines.append(f"{indent}[{info.group.name}] ({info.group.id})")
        return True

    service.traverse_forward(visit)
    print("\n".join(lines) if lines else "(empty wallet)")
    return 0


def cmd_search(args) -> int:
    service = _open_service(args.wallet)
    found = service.search_entries(args.term)
    if not found:
        print(f"No entries found matching '{args.term}'")
        return 0

    print(f"Found {len(found)} entry/entries:")
    for i, info in enumerate(found, 1):
        print(f"  {i}. {info.entry.title} (ID: {info.entry.id})")
        for entry_field in info.entry.fields:
            value = MASK if entry_field.is_secret else entry_field.value
            print(f"     {entry_field.name}: {value}")
        print(f"     Path: {list(info.path.group_ids)}")
    return 0


def cmd_templates(args) -> int:
    for i, template in enumerate(ENTRY_TEMPLATES, 1):
        names = ", ".join(name for name, _ in template.fields)
        print(f"  {i}. {template.name}: {names}")
    return 0


def cmd_generate(args) -> int:
    print(generate_password(args.length))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safe-wallet",
        description="Safe Wallet - local encrypted password wallet",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Safe Wallet v{__version__}"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_wallet_arg(sp: argparse.ArgumentParser):
        sp.add_argument(
            "--wallet",
            default=str(config.WALLET_PATH),
            help=f"Wallet file (default: {config.WALLET_PATH})"
        )

    sp = sub.add_parser("init", help="Create a new wallet")
    add_wallet_arg(sp)
    sp.set_defaults(func=cmd_init)

    sp = sub.add_parser("tree", help="Print the group/entry tree")
    add_wallet_arg(sp)
    sp.set_defaults(func=cmd_tree)

    sp = sub.add_parser("search", help="Search entries")
    sp.add_argument("term")
    add_wallet_arg(sp)
    sp.set_defaults(func=cmd_search)

    sp = sub.add_parser("templates", help="List entry templates")
    sp.set_defaults(func=cmd_templates)

    sp = sub.add_parser("generate", help="Generate a random password")
    sp.add_argument("--length", type=int, default=20)
    sp.set_defaults(func=cmd_generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for Safe Wallet."""
    config.setup_logging()
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (WalletError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
