import argparse
import asyncio
import os

from . import __version__
from .config import ConfigError, load_config
from .delegates import Delegates
from .env import load_env
from .logger import get_logger
from .models import Delegate
from .transactions import TransactionError, Web3TransactionSender


def build_delegates(args: argparse.Namespace, sender=None) -> Delegates:
    try:
        config = load_config(
            delegation_type=args.delegation_type,
            delegation_contract=args.contract,
            delegation_api=args.api,
            space=getattr(args, "space", None),
        )
    except ConfigError as e:
        raise SystemExit(str(e))
    return Delegates(config, sender=sender)


def print_delegate(delegate: Delegate) -> None:
    print(f"ID: {delegate.id}")
    print(f"  Delegated votes: {delegate.delegated_votes:,.2f} ({delegate.votes_percentage:.2f}%)")
    print(
        f"  Token holders represented: {delegate.token_holders_represented_amount}"
        f" ({delegate.delegators_percentage:.2f}%)"
    )


async def run_list(delegates: Delegates, order_by: str, pages: int) -> None:
    await delegates.fetch_delegates(order_by)
    for _ in range(pages - 1):
        if not delegates.state.has_more_delegates:
            break
        await delegates.fetch_more_delegates(order_by)


def cmd_list(args: argparse.Namespace) -> None:
    delegates = build_delegates(args)
    asyncio.run(run_list(delegates, args.order_by, args.pages))
    state = delegates.state
    if state.has_delegates_load_failed:
        print("[warn] Some delegate pages failed to load.")
    if not state.delegates:
        print("No delegates found.")
        return
    print(f"Found {len(state.delegates)} delegates:\n")
    for delegate in state.delegates:
        print_delegate(delegate)
    if state.has_more_delegates:
        print("\nMore delegates available (use --pages).")


def cmd_show(args: argparse.Namespace) -> None:
    delegates = build_delegates(args)
    asyncio.run(delegates.fetch_delegate(args.identifier))
    state = delegates.state
    if state.delegate is None:
        if state.resolved_address is None:
            raise SystemExit(f"Could not resolve: {args.identifier}")
        raise SystemExit(f"Could not load delegate: {state.resolved_address}")
    print_delegate(state.delegate)


def cmd_balance(args: argparse.Namespace) -> None:
    delegates = build_delegates(args)
    try:
        balance = asyncio.run(delegates.fetch_delegate_balance(args.address))
    except ValueError as e:
        raise SystemExit(str(e))
    print(f"Balance: {balance:,.4f}")


def cmd_stats(args: argparse.Namespace) -> None:
    delegates = build_delegates(args)
    if not (args.space or delegates.config.space):
        raise SystemExit("SNAPSHOT_SPACE not set. Set env var or pass --space.")
    stats = asyncio.run(delegates.fetch_delegate_votes_and_proposals(args.addresses, args.space))
    if not stats:
        print("No activity data returned.")
        return
    for address, bucket in stats.items():
        print(f"{address}: votes={len(bucket.votes)} proposals={len(bucket.proposals)}")
        for proposal in bucket.proposals:
            print(f"  - {proposal.title}")


def cmd_delegate(args: argparse.Namespace) -> None:
    rpc_url = args.rpc_url or os.getenv("RPC_URL")
    from_address = args.from_address or os.getenv("DELEGATOR_ADDRESS")
    private_key = os.getenv("DELEGATOR_PRIVATE_KEY")
    if not rpc_url:
        raise SystemExit("RPC_URL not set. Set env var or pass --rpc-url.")
    if not from_address and not private_key:
        raise SystemExit("DELEGATOR_ADDRESS not set. Set env var, pass --from, or set DELEGATOR_PRIVATE_KEY.")
    try:
        sender = Web3TransactionSender(rpc_url=rpc_url, from_address=from_address, private_key=private_key)
        delegates = build_delegates(args, sender=sender)
        tx_hash = asyncio.run(delegates.set_delegate(args.address))
    except TransactionError as e:
        raise SystemExit(str(e))
    print(f"Transaction: {tx_hash}")


def main():
    load_env()
    parser = argparse.ArgumentParser(prog="delegatehub", description="Browse delegates and delegate voting power")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--delegation-type", help="Delegation scheme (or set DELEGATION_TYPE)")
    parser.add_argument("--contract", help="Delegation token contract (or set DELEGATION_CONTRACT)")
    parser.add_argument("--api", help="Delegation subgraph URL (or set DELEGATION_API)")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"), help="Log level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command")
    lst = subparsers.add_parser("list", help="List delegates page by page")
    lst.add_argument("--order-by", default="delegatedVotes", help="Ordering field (default: delegatedVotes)")
    lst.add_argument("--pages", type=int, default=1, help="Number of pages to load (default: 1)")
    lst.set_defaults(func=cmd_list)

    shw = subparsers.add_parser("show", help="Show a single delegate by address or ENS name")
    shw.add_argument("identifier", help="Address or ENS name")
    shw.set_defaults(func=cmd_show)

    bal = subparsers.add_parser("balance", help="Show the token balance of an address")
    bal.add_argument("address", help="Account address")
    bal.set_defaults(func=cmd_balance)

    sts = subparsers.add_parser("stats", help="Count votes and proposals per delegate in a space")
    sts.add_argument("addresses", nargs="+", help="Delegate addresses")
    sts.add_argument("--space", help="Snapshot space (or set SNAPSHOT_SPACE)")
    sts.set_defaults(func=cmd_stats)

    dlg = subparsers.add_parser("delegate", help="Delegate voting power to an address")
    dlg.add_argument("address", help="Delegatee address")
    dlg.add_argument("--rpc-url", help="Ethereum RPC endpoint (or set RPC_URL)")
    dlg.add_argument("--from", dest="from_address", help="Delegator account unlocked on the node (or set DELEGATOR_ADDRESS; DELEGATOR_PRIVATE_KEY signs locally instead)")
    dlg.set_defaults(func=cmd_delegate)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    get_logger(level=args.log_level)

    if hasattr(args, "func"):
        args.func(args)
        get_logger().log_metrics_summary()
        return

    parser.print_help()


if __name__ == "__main__":
    main()
