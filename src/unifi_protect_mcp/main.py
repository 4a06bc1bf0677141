#!/usr/bin/env python3
"""
UniFi Protect MCP Server

Exposes UniFi Protect and UniFi Network operations as MCP tools over stdio
or streamable HTTP.
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from typing import List, Optional

from .clients import NetworkClient, ProtectClient
from .config import TRANSPORTS, config, load_dotenv, parse_http_addr
from .errors import ConfigurationError
from .logging_setup import setup_logging
from .server import SERVER_NAME, create_mcp_server
from .tools import build_registry
from .transport import StdioTransport, StreamableHTTPTransport

logger = logging.getLogger('unifi_protect_mcp')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=SERVER_NAME, description='UniFi Protect / Network MCP server')
    parser.add_argument('--transport', choices=TRANSPORTS, help='Agent transport (env MCP_TRANSPORT, default stdio)')
    parser.add_argument('--http-addr', help='HTTP listen address host:port (env MCP_HTTP_ADDR, default :8000)')
    parser.add_argument('--log-level', help='Logging level (env LOG_LEVEL, default INFO)')
    parser.add_argument('--list-tools', action='store_true', help='Print the tool catalog as JSON and exit')
    return parser


def _install_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops
            pass


async def serve(transport, clients) -> None:
    """Run ``transport`` until it finishes or a termination signal arrives."""
    stop = asyncio.Event()
    _install_signal_handlers(stop)

    transport_task = asyncio.create_task(transport.run(), name=f'{transport.name}-transport')
    stop_task = asyncio.create_task(stop.wait(), name='shutdown-signal')
    try:
        await asyncio.wait({transport_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        if stop.is_set():
            logger.info("Shutdown signal received")
        for task in (transport_task, stop_task):
            if not task.done():
                task.cancel()
        await asyncio.gather(transport_task, stop_task, return_exceptions=True)
        if transport_task.done() and not transport_task.cancelled() and transport_task.exception():
            logger.error(f"Transport {transport.name} failed: {transport_task.exception()}")
    finally:
        for client in clients:
            await client.close()
        logger.info("UniFi Protect MCP Server stopped")


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(SERVER_NAME, args.log_level or config.log_level,
                  json_format=config.log_json, log_file=config.log_file)

    try:
        client_config = config.client_config(require_api_key=not args.list_tools)
        transport_name = (args.transport or config.transport).lower()
        if transport_name not in TRANSPORTS:
            raise ConfigurationError(f"Unsupported MCP_TRANSPORT {transport_name!r} (expected one of {TRANSPORTS})")
        host, port = parse_http_addr(args.http_addr or config.http_addr)
    except ConfigurationError as exc:
        logger.error(f"Configuration error: {exc.message}")
        return 1

    protect_client = ProtectClient(client_config)
    network_client = NetworkClient(client_config)
    registry = build_registry(protect_client, network_client)

    if args.list_tools:
        catalog = [descriptor.to_dict() for descriptor in registry.list()]
        print(json.dumps(catalog, indent=2))
        return 0

    logger.info(f"Starting UniFi Protect MCP Server ({transport_name}) against {client_config.base_url}")
    if client_config.skip_tls_verify:
        logger.warning("TLS certificate verification is disabled (UNIFI_SKIP_SSL_VERIFY=true)")

    server = create_mcp_server(registry)
    if transport_name == 'http':
        transport = StreamableHTTPTransport(server, registry, host, port,
                                            log_level=(args.log_level or config.log_level))
    else:
        transport = StdioTransport(server)

    asyncio.run(serve(transport, (protect_client, network_client)))
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == '__main__':
    run()
