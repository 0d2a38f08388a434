#!/usr/bin/env python3
"""
UTxO provider - connectivity check

Queries Blockfrost with the configured project and prints what it finds.

Usage:
    python main.py ADDRESS
    python main.py --unit UNIT
    python main.py --out-ref TX_HASH#INDEX [--out-ref ...]
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List

from config import settings
from utxo_provider import OutRef, Token
from utxo_provider.errors import DomainError, FetchError
from utxo_provider.fetching import BlockfrostProvider, describe_utxo

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_out_ref(text: str) -> OutRef:
    tx_hash, _, index = text.partition("#")
    return OutRef(tx_hash, int(index or 0))


def print_utxos(utxos) -> None:
    print(f"Found {len(utxos)} UTxOs")
    print("-" * 60)
    for utxo in utxos:
        print(f"{utxo.out_ref}")
        for unit, quantity in utxo.assets.items():
            print(f"   {Token.from_unit(unit)}: {quantity:,}")
        if utxo.datum:
            print(f"   Inline datum: {utxo.datum[:32]}...")
        elif utxo.datum_hash:
            print(f"   Datum hash: {utxo.datum_hash}")
        if utxo.script_ref:
            print(f"   Reference script: {utxo.script_ref.kind.value}")


async def run(args: argparse.Namespace) -> bool:
    if not settings.blockfrost_project_id:
        print("❌ Set blockfrost_project_id in config/settings.py")
        return False

    print(f"Blockfrost URL: {settings.blockfrost_url}")
    print()

    async with BlockfrostProvider(
        url=settings.blockfrost_url,
        project_id=settings.blockfrost_project_id,
        max_concurrent_requests=settings.max_concurrent_requests,
        timeout=settings.request_timeout,
    ) as provider:
        try:
            if args.unit:
                utxo = await provider.get_utxo_by_unit(args.unit)
                print(json.dumps(describe_utxo(utxo), indent=2))
            elif args.out_ref:
                out_refs: List[OutRef] = [parse_out_ref(r) for r in args.out_ref]
                print_utxos(await provider.get_utxos_by_out_ref(out_refs))
            else:
                print_utxos(await provider.get_utxos(args.address))
            return True
        except DomainError as e:
            print(f"❌ {e}")
            return False
        except FetchError as e:
            print(f"❌ Fetch failed, try again: {e}")
            logger.debug("Fetch failed", exc_info=True)
            return False


async def main():
    """Main entry point"""
    parser = argparse.ArgumentParser()
    parser.add_argument("address", nargs="?", help="Bech32 address to query")
    parser.add_argument("--unit", help="Unit (policy id + asset name) held by a single UTxO")
    parser.add_argument("--out-ref", action="append", help="TX_HASH#INDEX, repeatable")
    args = parser.parse_args()
    if not (args.address or args.unit or args.out_ref):
        parser.error("give an address, --unit or --out-ref")

    success = await run(args)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
