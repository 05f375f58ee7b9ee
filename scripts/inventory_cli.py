#!/usr/bin/env python3
"""
Command-line access to the inventory backend.

Reads configuration from INVENTORY_* environment variables (or .env), runs one
operation and prints the result as JSON. Successful borrow/return calls also
send the admin alert e-mail when Brevo is configured.
"""

import argparse
import asyncio
import dataclasses
import json
import sys
import os
from typing import Any, List, Optional

from pydantic import ValidationError as SettingsError

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from shared.config import get_config  # noqa: E402
from shared.errors import AccessLayerException, ValidationError  # noqa: E402
from shared.logging import clear_context, set_request_id, set_user_context  # noqa: E402
from service_inventory.app.main import create_email_notifier, create_inventory_service  # noqa: E402


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    if hasattr(value, "model_dump"):
        return value.model_dump()
    if dataclasses.is_dataclass(value):
        return dataclasses.asdict(value)
    return value


async def run(args: argparse.Namespace) -> int:
    """Execute the selected command and print its result."""
    config = get_config(**({"backend_url": args.backend_url} if args.backend_url else {}))
    service = create_inventory_service(config)

    if args.command == "cases":
        result = await service.list_cases()
    elif args.command == "components":
        result = await service.list_components(args.case)
    elif args.command == "holdings":
        set_user_context(args.user)
        result = await service.get_user_holdings(args.user)
    elif args.command == "stock":
        result = await service.get_live_stock()
    elif args.command == "borrow":
        set_user_context(args.user)
        result = await service.borrow(args.user, args.case, args.component, args.quantity)
        if result.success:
            await create_email_notifier(config).send_borrow_alert(
                args.user, args.component, args.quantity, case_name=args.case
            )
    else:
        set_user_context(args.user)
        result = await service.return_item(args.user, args.component, args.quantity)
        if result.success:
            await create_email_notifier(config).send_return_alert(args.user, args.component, args.quantity)

    print(json.dumps(_to_jsonable(result), indent=2))
    if args.command in ("borrow", "return") and not result.success:
        return 1
    return 0


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Query and update the makerspace inventory.")
    parser.add_argument("--backend-url", default=None, help="Backend URL (defaults to INVENTORY_BACKEND_URL)")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("cases", help="List case names")

    components = commands.add_parser("components", help="List components in a case")
    components.add_argument("case", help="Case name")

    holdings = commands.add_parser("holdings", help="Show what a user has borrowed")
    holdings.add_argument("user", help="User ID")

    commands.add_parser("stock", help="Show live stock")

    borrow = commands.add_parser("borrow", help="Borrow components")
    borrow.add_argument("user", help="User ID")
    borrow.add_argument("case", help="Case name")
    borrow.add_argument("component", help="Component name")
    borrow.add_argument("quantity", type=int, help="Number of units")

    give_back = commands.add_parser("return", help="Return components")
    give_back.add_argument("user", help="User ID")
    give_back.add_argument("component", help="Component name")
    give_back.add_argument("quantity", type=int, help="Number of units")

    return parser.parse_args(argv)


def _report(exc: AccessLayerException, request_id: Optional[str]) -> None:
    print(json.dumps(exc.to_response(request_id).model_dump(), indent=2), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    request_id = set_request_id()
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130
    except SettingsError as exc:
        print(f"[inventory] invalid configuration: {exc}", file=sys.stderr)
        return 2
    except ValidationError as exc:
        _report(exc, request_id)
        return 2
    except AccessLayerException as exc:
        _report(exc, request_id)
        return 1
    finally:
        clear_context()


if __name__ == "__main__":
    raise SystemExit(main())
