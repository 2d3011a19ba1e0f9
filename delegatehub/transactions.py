"""
Transaction submission.

Failures here are the one error class that always reaches the caller:
nothing in this module catches and converts them.
"""

import asyncio
from typing import Any, List, Optional, Protocol

import requests
from eth_account import Account
from web3 import Web3
from web3.exceptions import Web3Exception

from .logger import StructuredLogger, get_logger
from .strategies import ContractMethod


class TransactionError(Exception):
    """Raised when a transaction cannot be built or is rejected."""
    pass


class TransactionSender(Protocol):
    async def send_transaction(
        self, contract: str, method: ContractMethod, args: List[Any]
    ) -> str:
        ...


def _checksum_args(args: List[Any]) -> List[Any]:
    return [Web3.to_checksum_address(a) if isinstance(a, str) and Web3.is_address(a) else a for a in args]


class Web3TransactionSender:
    """Submit contract calls through a web3 provider.

    With ``private_key`` the transaction is signed locally and sent raw;
    otherwise the node signs for ``from_address`` (``eth_sendTransaction``).
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        from_address: Optional[str] = None,
        private_key: Optional[str] = None,
        web3: Optional[Web3] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        if web3 is None and not rpc_url:
            raise TransactionError("An RPC URL is required to send transactions")
        self.web3 = web3 or Web3(Web3.HTTPProvider(rpc_url))
        self.private_key = private_key
        if private_key:
            try:
                from_address = Account.from_key(private_key).address
            except ValueError as e:
                raise TransactionError("Invalid delegator private key") from e
        if not from_address or not Web3.is_address(from_address):
            raise TransactionError(f"Invalid sender address: {from_address}")
        self.from_address = Web3.to_checksum_address(from_address)
        self.logger = logger or get_logger()

    def _send(self, contract: str, method: ContractMethod, args: List[Any]) -> str:
        if not Web3.is_address(contract):
            raise TransactionError(f"Invalid contract address: {contract}")
        token = self.web3.eth.contract(address=Web3.to_checksum_address(contract), abi=method.abi)

        self.logger.record_query_attempt("rpc")
        try:
            call = getattr(token.functions, method.action)(*_checksum_args(args))
            if self.private_key:
                tx = call.build_transaction(
                    {
                        "from": self.from_address,
                        "nonce": self.web3.eth.get_transaction_count(self.from_address),
                    }
                )
                signed = Account.sign_transaction(tx, self.private_key)
                raw_tx = getattr(signed, "raw_transaction", None) or signed.rawTransaction
                tx_hash = self.web3.eth.send_raw_transaction(raw_tx)
            else:
                tx_hash = call.transact({"from": self.from_address})
        except (Web3Exception, ValueError, requests.exceptions.RequestException) as e:
            self.logger.record_query_failure("rpc", type(e).__name__)
            self.logger.error(
                "Transaction submission failed", contract=contract, action=method.action, error=str(e)
            )
            raise TransactionError(f"Transaction submission failed: {e}") from e

        self.logger.record_query_success("rpc")
        tx_hex = Web3.to_hex(tx_hash)
        self.logger.info("Transaction sent", contract=contract, action=method.action, tx=tx_hex)
        return tx_hex

    async def send_transaction(
        self, contract: str, method: ContractMethod, args: List[Any]
    ) -> str:
        return await asyncio.to_thread(self._send, contract, method, args)
