# src/eth_explorer/utils/parsing.py
import re
from typing import Iterable, List, Optional

from web3 import Web3

from ..exceptions import InvalidBlockNumber, InvalidInputError

LATEST = "latest"
# block numbers are uint64 on the wire
MAX_BLOCK_NUMBER = 2 ** 64

_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def parse_block_number(token: str) -> Optional[int]:
    """Parse a block number token.

    Returns None for 'latest' (the node resolves the chain head), otherwise
    the block number from a decimal or 0x-prefixed hexadecimal numeral
    below 2**64.
    """
    token = (token or "").strip()
    if token == LATEST:
        return None

    if _DECIMAL_RE.match(token):
        number = int(token, 10)
    elif token.startswith("0x") and _HEX_RE.match(token[2:]):
        number = int(token[2:], 16)
    else:
        raise InvalidBlockNumber(f"invalid block number: {token!r}")

    if number >= MAX_BLOCK_NUMBER:
        raise InvalidBlockNumber(f"block number out of range: {token!r}")
    return number


def parse_optional_block(token: Optional[str]) -> Optional[int]:
    """Like parse_block_number, but an absent token also means 'latest'."""
    if token is None or token == "":
        return None
    return parse_block_number(token)


def validate_address(address: str) -> str:
    """Return the EIP-55 checksummed form of a hex address."""
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidInputError(f"invalid address: {address!r}")
    return Web3.to_checksum_address(address)


def validate_tx_hash(tx_hash: str) -> str:
    if not isinstance(tx_hash, str) or not _HASH_RE.match(tx_hash):
        raise InvalidInputError(f"invalid transaction hash: {tx_hash!r}")
    return tx_hash.lower()


def parse_topics(values: Iterable[str]) -> List[Optional[str]]:
    """Flatten repeated and comma separated topic values.

    Each position is a 32-byte hex word; an empty position matches any topic.
    """
    topics: List[Optional[str]] = []
    for value in values:
        for item in value.split(","):
            item = item.strip()
            if not item:
                topics.append(None)
            elif _HASH_RE.match(item):
                topics.append(item.lower())
            else:
                raise InvalidInputError(f"invalid topic: {item!r}")

    # Trailing wildcards add nothing to the filter
    while topics and topics[-1] is None:
        topics.pop()
    return topics
