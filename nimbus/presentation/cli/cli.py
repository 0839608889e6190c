"""
CLI Module

Architectural Intent:
- Command-line interface for browsing GCE and Neutron collections
- Delegates to resource APIs and use cases via the composition root
- Supports --verbose/--debug flags for log level control

Output is one line per item (tab separated), or one JSON object per line
with --json. Listings stream: each page is printed as it arrives.
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
import traceback
from enum import Enum
from typing import Any, AsyncIterator, Callable, Optional

from nimbus.composition_root import NimbusContainer, create_container
from nimbus.domain.errors import AuthorizationError, CloudApiError, TransportError
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.infrastructure.config import NimbusConfig, load_config
from nimbus.infrastructure.logging import configure_logging, parse_level


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def to_json_line(item: Any) -> str:
    return json.dumps(dataclasses.asdict(item), default=_json_default, sort_keys=True)


def instance_line(instance) -> str:
    return "\t".join([
        instance.name,
        instance.zone_name or "-",
        instance.status.value,
        instance.machine_type_name or "-",
        instance.internal_ip or "-",
    ])


def image_line(image) -> str:
    return "\t".join([
        image.name,
        image.family or "-",
        image.status or "-",
        f"{image.disk_size_gb}GB" if image.disk_size_gb is not None else "-",
    ])


def network_line(network) -> str:
    return "\t".join([
        network.id,
        network.name or "-",
        network.status.value,
        ",".join(network.subnets) or "-",
    ])


def router_line(router) -> str:
    gateway = router.external_gateway_info
    return "\t".join([
        router.id,
        router.name or "-",
        router.status.value,
        gateway.network_id if gateway and gateway.network_id else "-",
    ])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nimbus",
        description="nimbus: paginated listings over GCE and OpenStack Neutron",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to config file (default: nimbus.json)"
    )
    parser.add_argument(
        "--max-results", type=int, default=None, help="Page size requested from the API"
    )
    parser.add_argument("--filter", default=None, help="Provider filter expression")
    parser.add_argument(
        "--json", action="store_true", help="Print one JSON object per line"
    )
    parser.add_argument(
        "--log-json", action="store_true", help="Write log records to stderr as JSON"
    )

    providers = parser.add_subparsers(dest="provider", help="Cloud provider")

    gce_parser = providers.add_parser("gce", help="Google Compute Engine")
    gce_commands = gce_parser.add_subparsers(dest="command", help="Collection")
    instances_parser = gce_commands.add_parser("instances", help="List instances")
    instances_parser.add_argument(
        "--zones", "-z", default=None,
        help="Comma-separated zones (default: configured zones, else all zones)",
    )
    instances_parser.add_argument(
        "--summary", action="store_true", help="Print counts per zone and status"
    )
    instances_parser.add_argument(
        "--concurrent", action="store_true", help="List zones concurrently"
    )
    images_parser = gce_commands.add_parser("images", help="List images")
    images_parser.add_argument(
        "--project", "-p", default=None,
        help="Image project (e.g. debian-cloud); default: configured project",
    )

    neutron_parser = providers.add_parser("neutron", help="OpenStack Neutron")
    neutron_commands = neutron_parser.add_subparsers(dest="command", help="Collection")
    neutron_commands.add_parser("networks", help="List networks")
    neutron_commands.add_parser("routers", help="List routers")

    return parser


async def _print_items(
    items: AsyncIterator[Any], line: Callable[[Any], str], as_json: bool
) -> int:
    count = 0
    async for item in items:
        print(to_json_line(item) if as_json else line(item))
        count += 1
    return count


def _list_options(args: argparse.Namespace, config: NimbusConfig) -> ListOptions:
    return ListOptions(
        max_results=args.max_results or config.default_page_size,
        filter=args.filter,
    )


def _zones(args: argparse.Namespace, config: NimbusConfig) -> list[str]:
    if args.zones:
        return [z.strip() for z in args.zones.split(",") if z.strip()]
    return list(config.gce.zones)


async def _run_gce(
    args: argparse.Namespace, container: NimbusContainer, options: ListOptions
) -> int:
    if args.command == "images":
        return await _print_items(
            container.images.list(options, project=args.project).items(),
            image_line,
            args.json,
        )

    zones = _zones(args, container.config)
    if args.summary:
        inventory = await container.inventory_instances.execute(
            zones, options, concurrent=args.concurrent
        )
        for zone, count in inventory.by_zone.items():
            print(f"{zone}\t{count}")
        for status, count in sorted(inventory.by_status.items(), key=lambda s: s[0].value):
            print(f"{status.value}\t{count}")
        print(f"total\t{inventory.total}")
        return inventory.total
    if not zones:
        items = container.aggregated.instances(options).items()
    else:
        items = container.instances.list_in_zones(zones, options)
    return await _print_items(items, instance_line, args.json)


async def _run_neutron(
    args: argparse.Namespace, container: NimbusContainer, options: ListOptions
) -> int:
    if args.command == "routers":
        return await _print_items(
            container.routers.list(options).items(), router_line, args.json
        )
    return await _print_items(
        container.networks.list(options).items(), network_line, args.json
    )


async def async_main(
    argv: Optional[list[str]] = None,
    container_factory: Callable[[NimbusConfig], NimbusContainer] = create_container,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_results is not None and args.max_results < 1:
        parser.error("--max-results must be a positive integer")

    config = load_config(args.config)

    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = parse_level(config.log_level)
    configure_logging(level=level, json_format=args.log_json or config.log_json)

    verbose = args.verbose or args.debug

    if args.provider is None or args.command is None:
        parser.print_help()
        return 2

    if args.provider == "gce" and args.command == "instances":
        if args.summary and not _zones(args, config):
            parser.error("--summary needs --zones or configured gce.zones")

    container = container_factory(config)
    await container.initialize()
    options = _list_options(args, config)

    try:
        if args.provider == "gce":
            if not config.gce.project:
                print("[-] No GCE project configured (gce.project / NIMBUS_GCE_PROJECT)")
                return 1
            count = await _run_gce(args, container, options)
        else:
            if not config.neutron.endpoint:
                print("[-] No Neutron endpoint configured (neutron.endpoint / NIMBUS_NEUTRON_ENDPOINT)")
                return 1
            count = await _run_neutron(args, container, options)
    except AuthorizationError as e:
        print(f"[-] Not authorized: {e}")
        return 1
    except TransportError as e:
        print(f"[-] Connection error: {e}")
        if verbose:
            traceback.print_exc()
        return 1
    except CloudApiError as e:
        print(f"[-] Listing Failed: {e}")
        if verbose:
            traceback.print_exc()
        return 1
    finally:
        await container.shutdown()

    if verbose:
        print(f"[*] {count} item(s)", file=sys.stderr)
    return 0


def main():
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
