#!/usr/bin/env python3
"""Drive the user-management core against a live service from the shell.

Examples::

    python scripts/users_console.py list
    python scripts/users_console.py create --name "Jane Doe" --email jane@example.com \
        --phone 555-0100 --street "1 Main St" --city Boston
    python scripts/users_console.py edit 1 address.city=Boston
    python scripts/users_console.py delete 1

The base URL comes from ``USERS_BASE_URL`` (default: JSONPlaceholder).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyuserdesk import ScreenState, UserManager, UsersClient, UsersConfig  # noqa: E402


class _PrintRenderer:
    def __init__(self) -> None:
        self._last_notification: object = None

    def render(self, state: ScreenState) -> None:
        notification = state.notification
        if notification is not None and notification is not self._last_notification:
            detail = f" ({notification.detail})" if notification.detail else ""
            print(f"[{notification.severity}] {notification.message}{detail}")
        self._last_notification = notification
        if state.issues:
            for issue in state.issues:
                print(f"  invalid: {issue.message}")


def _print_records(manager: UserManager) -> None:
    for record in manager.store.records:
        print(f"{record.id:>4}  {record.name:<28} {record.email:<32} {record.phone}")


def _parse_assignments(items: list[str]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for item in items:
        path, sep, value = item.partition("=")
        if not sep:
            raise SystemExit(f"expected field=value, got {item!r}")
        pairs.append((path, value))
    return pairs


async def _run(args: argparse.Namespace) -> int:
    config = UsersConfig.from_env()
    async with UsersClient(config) as client:
        manager = UserManager(client, config=config, renderer=_PrintRenderer())
        if not await manager.load():
            return 1

        if args.command == "list":
            _print_records(manager)
            return 0

        if args.command == "delete":
            return 0 if await manager.delete(args.id) else 1

        if args.command == "create":
            manager.open_create()
            for path, value in (
                ("name", args.name),
                ("email", args.email),
                ("phone", args.phone),
                ("website", args.website),
                ("address.street", args.street),
                ("address.city", args.city),
                ("company.name", args.company),
            ):
                manager.change_field(path, value)
            if args.username:
                manager.set_username(args.username)
        else:
            if not manager.open_edit(args.id):
                print(f"user {args.id} not found", file=sys.stderr)
                return 1
            for path, value in _parse_assignments(args.fields):
                if path == "username":
                    manager.set_username(value)
                elif not manager.change_field(path, value):
                    print(f"rejected: {path}", file=sys.stderr)
                    return 2

        ok = await manager.submit()
        if ok and args.json:
            print(json.dumps([r.model_dump(mode="json") for r in manager.store.records], indent=2))
        return 0 if ok else 1


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--json", action="store_true", help="dump the collection after a change")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list")

    create = sub.add_parser("create")
    create.add_argument("--name", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--phone", required=True)
    create.add_argument("--street", required=True)
    create.add_argument("--city", required=True)
    create.add_argument("--company", default="")
    create.add_argument("--website", default="")
    create.add_argument("--username", default="")

    edit = sub.add_parser("edit")
    edit.add_argument("id", type=int)
    edit.add_argument("fields", nargs="*", help="field=value, e.g. address.city=Boston")

    delete = sub.add_parser("delete")
    delete.add_argument("id", type=int)

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
