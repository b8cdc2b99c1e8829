# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""DevSecTools CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..client import DevSecToolsClient
from ..config import ClientSettings, Endpoint, load_client_settings
from ..log import setup_logging
from ..models import Operation, ScanRequest, is_error

_OPERATIONS = [op.value for op in Operation]


def _parse_batch_item(raw: str) -> ScanRequest:
    operation, sep, url = raw.partition(":")
    if not sep or not url or operation.strip("/") not in _OPERATIONS:
        raise argparse.ArgumentTypeError(f"expected OPERATION:URL with OPERATION in {', '.join(_OPERATIONS)}, got {raw!r}")
    return ScanRequest(operation=Operation(operation.strip("/")), url=url)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="DevSecTools API client (domain, HTTP and TLS lookups)")
    parser.add_argument("operation", choices=[*_OPERATIONS, "batch"], help="Lookup to run, or 'batch' for several at once")
    parser.add_argument(
        "targets",
        nargs="+",
        help="Target URL/hostname; for 'batch', OPERATION:URL items (e.g. tls:example.com)",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--base-url", help="API base URL (default: production)")
    target.add_argument("--localdev", action="store_true", help=f"Use the local development API ({Endpoint.LOCALDEV})")
    parser.add_argument("--timeout", type=int, help="Per-request timeout in seconds (0 disables it)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed API deployments)",
    )
    parser.add_argument("--log-level", help="Logging level (default: DEVSECTOOLS_LOG_LEVEL or WARNING)")
    return parser


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(label: str, result: Any) -> None:
    print(f"[{label}]")
    if not isinstance(result, dict):
        print(f"  {json.dumps(result)}")
        return
    if is_error(result):
        print(f"  error: {result['error']}")
        return
    for key in sorted(result):
        value = result[key]
        rendered = value if isinstance(value, str) else json.dumps(value, sort_keys=True)
        print(f"  {key}: {rendered}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ClientSettings = load_client_settings()
    if args.localdev:
        settings.base_url = Endpoint.LOCALDEV
    elif args.base_url:
        settings.base_url = args.base_url
    if args.timeout is not None:
        settings.timeout_seconds = args.timeout
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    if args.operation == "batch":
        try:
            requests = [_parse_batch_item(raw) for raw in args.targets]
        except argparse.ArgumentTypeError as exc:
            parser.error(str(exc))
    else:
        requests = [ScanRequest(operation=Operation(args.operation), url=url) for url in args.targets]

    with DevSecToolsClient(settings=settings) as client:
        if len(requests) == 1:
            results = [client.request(requests[0].operation, requests[0].url)]
        else:
            results = client.batch(requests)

    labels = [f"{req.path.lstrip('/')} {req.url}" for req in requests]
    if args.json:
        _print_json(results[0] if len(results) == 1 else [{"request": label, "result": result} for label, result in zip(labels, results)])
    else:
        for label, result in zip(labels, results):
            _pretty_print(label, result)

    return 1 if any(is_error(result) for result in results) else 0


if __name__ == "__main__":
    raise SystemExit(main())
