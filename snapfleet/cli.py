"""Command line entry point."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from snapfleet.config import settings
from snapfleet.errors import SnapfleetError
from snapfleet.jobs import RemoteBrowserTarget, ResultPoller, gather_results
from snapfleet.models import JobInputs, SnapResult
from snapfleet.remote import RequestTransport
from snapfleet.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def load_json(path: str) -> dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise SnapfleetError(f"{path} must contain a JSON object")
    return data


def load_targets(config: dict[str, Any], only: str | None = None) -> dict[str, RemoteBrowserTarget]:
    """
    Build targets from a config file's ``targets`` section.

    Each entry needs a ``browser`` and a ``viewport``; the rest is passed on
    to the target.
    """
    targets = config.get("targets") or {}
    if only is not None:
        if only not in targets:
            raise SnapfleetError(f'Unknown target "{only}"')
        targets = {only: targets[only]}
    if not targets:
        raise SnapfleetError("No targets configured")

    built = {}
    for name, target_config in targets.items():
        options = dict(target_config)
        browser = options.pop("browser", None)
        if not browser:
            raise SnapfleetError(f'Target "{name}" has no browser')
        built[name] = RemoteBrowserTarget(browser, options)
    return built


def build_transport(config: dict[str, Any]) -> RequestTransport:
    return RequestTransport(
        endpoint=config.get("endpoint") or settings.endpoint,
        api_key=config.get("apiKey") or settings.api_key,
        api_secret=config.get("apiSecret") or settings.api_secret,
    )


def dump_results(results: list[str] | list[SnapResult]) -> list[Any]:
    return [r.to_dict() if isinstance(r, SnapResult) else r for r in results]


async def run_command(args: argparse.Namespace) -> dict[str, list[Any]]:
    """Execute every configured target against the given inputs."""
    config = load_json(args.config)
    bundle = load_json(args.inputs)
    targets = load_targets(config, args.only)

    async with build_transport(config) as transport:
        names = list(targets)
        outcomes = await asyncio.gather(
            *(
                targets[name].execute(
                    JobInputs.from_bundle(
                        target_name=name,
                        global_css=bundle.get("globalCSS"),
                        assets_package=bundle.get("assetsPackage"),
                        static_package=bundle.get("staticPackage"),
                        pages=bundle.get("pages"),
                        snap_payloads=bundle.get("snapPayloads"),
                        async_results=args.async_results,
                    ),
                    transport=transport,
                )
                for name in names
            )
        )
    return {name: dump_results(outcome) for name, outcome in zip(names, outcomes)}


async def wait_command(args: argparse.Namespace) -> list[Any]:
    """Wait for request ids returned by an async run."""
    config = load_json(args.config) if args.config else {}

    async with build_transport(config) as transport:
        poller = ResultPoller(transport, timeout=args.timeout, cancel_event=transport.cancel_event)
        results = await gather_results(
            [asyncio.create_task(poller.wait_for(request_id)) for request_id in args.request_ids]
        )
    return dump_results(results)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapfleet",
        description="Render snapshots on a remote browser service",
    )
    parser.add_argument("--log-level", default=None, help="Override SNAPFLEET_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Submit a workload to every target")
    run.add_argument("-c", "--config", required=True, help="Path to the targets config (JSON)")
    run.add_argument("-i", "--inputs", required=True, help="Path to the prepared inputs (JSON)")
    run.add_argument("-o", "--only", default=None, help="Limit the run to one target")
    run.add_argument(
        "--async",
        dest="async_results",
        action="store_true",
        help="Print request ids instead of waiting for results",
    )

    wait = subparsers.add_parser("wait", help="Wait for request ids from an async run")
    wait.add_argument("request_ids", nargs="+", help="Request ids to wait for")
    wait.add_argument("-c", "--config", default=None, help="Path to the targets config (JSON)")
    wait.add_argument("--timeout", type=float, default=None, help="Give up after N seconds")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    command = run_command if args.command == "run" else wait_command
    try:
        output = asyncio.run(command(args))
    except (SnapfleetError, ValidationError, OSError, ValueError) as e:
        logger.error("Command failed", command=args.command, error=str(e))
        return 1

    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
