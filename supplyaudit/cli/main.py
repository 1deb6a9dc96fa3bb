# MIT License
# Copyright (c) 2025 Hashborn

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional

from prometheus_client import start_http_server

from ..ledger.core.summary import compose
from ..ledger.observability.metrics import LoggingProgressObserver, metrics_registry, update_metrics
from ..ledger.reporting.subscan import get_latest_block, get_token_info
from ..ledger.snapshot.accessor import open_snapshot
from ..protocol.config.params import NETWORKS, NetworkConfig, default_network_id, get_network
from ..protocol.types.balances import SummaryResult
from ..protocol.types.common import SupplyAuditError
from ..protocol.types.reporting import TokenDetail

logger = logging.getLogger(__name__)

def get_endpoint(args, config: NetworkConfig) -> str:
    return args.endpoint or os.environ.get("SUPPLYAUDIT_ENDPOINT", config.endpoint)

def format_amount(raw: int, decimals: int) -> str:
    """Exact decimal rendering of a raw integer amount."""
    whole, frac = divmod(raw, 10**decimals)
    if not frac:
        return str(whole)
    return f"{whole}.{str(frac).rjust(decimals, '0').rstrip('0')}"

async def run_audit(config: NetworkConfig, endpoint: str, block_hash: str, page_size: int) -> SummaryResult:
    async with open_snapshot(endpoint, block_hash) as snapshot:
        summary = await compose(
            snapshot,
            page_size=page_size,
            observer=LoggingProgressObserver(),
            progress_interval=config.progress_interval,
            bits=config.balance_bits,
        )
    update_metrics(summary)
    return summary

def print_report(token: TokenDetail, summary: SummaryResult, config: NetworkConfig, human: bool = False):
    def show(raw) -> str:
        if not human:
            return str(raw)
        return f"{raw} ({format_amount(int(raw), config.decimals)} {config.token_symbol})"

    print(f"Subscan total issuance: {show(token.total_issuance)}")
    print(f"Subscan free balance: {show(token.free_balance)}")
    print(f"Subscan available balance: {show(token.available_balance)}")
    print(f"Subscan locked balance: {show(token.locked_balance)}")
    print(f"Subscan reserved balance: {show(token.reserved_balance)}")
    print("-------------------------------")
    print(f"Total issuance: {show(summary.total)}")
    print(f"Locked up: {show(summary.locked_up)}")
    print(f"Circulating: {show(summary.circulating)}")
    print(f"Unbonding: {show(summary.unbonding)}")
    print(f"Reserved: {show(summary.reserved)}")

def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number

def cmd_run(args):
    config = get_network(args.network)
    endpoint = get_endpoint(args, config)
    page_size = args.page_size or config.page_size

    if args.block_hash:
        block_hash = args.block_hash
        logger.info(f"Using pinned block {block_hash}")
    else:
        # Subscan's view and the bound snapshot may drift by a few blocks
        block_hash = get_latest_block(config).hash

    token = get_token_info(config)
    summary = asyncio.run(run_audit(config, endpoint, block_hash, page_size))
    print_report(token, summary, config, human=args.human)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="supplyaudit",
        description="Compute token supply statistics at one block and compare them with Subscan",
    )
    parser.add_argument("--network", default=default_network_id(), choices=sorted(NETWORKS),
                        help="Network preset (default: %(default)s, or SUPPLYAUDIT_NETWORK)")
    parser.add_argument("--endpoint", help="Node websocket URL (default: preset or SUPPLYAUDIT_ENDPOINT)")
    parser.add_argument("--block-hash", help="Pin the snapshot to this block instead of Subscan's latest")
    parser.add_argument("--page-size", type=positive_int, help="Accounts per page request (default: preset)")
    parser.add_argument("--human", action="store_true", help="Also show amounts in whole tokens")
    parser.add_argument("--metrics-port", type=int, help="Expose Prometheus metrics on this port")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser

def main(argv: Optional[list] = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s [%(levelname)s] %(message)s'
    )

    if args.metrics_port:
        start_http_server(args.metrics_port, registry=metrics_registry)
        logger.info(f"Metrics available on :{args.metrics_port}/metrics")

    try:
        cmd_run(args)
    except SupplyAuditError as e:
        logger.error(f"Audit failed: {type(e).__name__}: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Audit failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
