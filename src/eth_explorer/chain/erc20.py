# src/eth_explorer/chain/erc20.py
"""Minimal ERC-20 ABI encoding for the two calls the explorer makes."""

from web3 import Web3

WORD_SIZE = 32

# keccak256("balanceOf(address)")[:4]
BALANCE_OF_SELECTOR = bytes.fromhex("70a08231")

TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256)"
TRANSFER_EVENT_TOPIC = Web3.to_hex(Web3.keccak(text=TRANSFER_EVENT_SIGNATURE))


def pad_address(address: str) -> bytes:
    """Left-pad a 20-byte address to a 32-byte ABI word."""
    raw = bytes.fromhex(address[2:] if address.startswith("0x") else address)
    if len(raw) != 20:
        raise ValueError(f"Address must be 20 bytes, got {len(raw)}")
    return raw.rjust(WORD_SIZE, b"\x00")


def address_topic(address: str) -> str:
    """Hex topic matching an indexed address parameter."""
    return Web3.to_hex(pad_address(address))


def topic_to_address(topic) -> str:
    """Checksummed address held in the low 20 bytes of an indexed topic."""
    raw = topic if isinstance(topic, (bytes, bytearray)) else bytes.fromhex(_strip_0x(topic))
    return Web3.to_checksum_address(raw[-20:])


def encode_balance_of(owner: str) -> bytes:
    return BALANCE_OF_SELECTOR + pad_address(owner)


def decode_uint256(data) -> int:
    """Decode a big-endian unsigned word (or an empty result, which is 0)."""
    if isinstance(data, str):
        data = bytes.fromhex(_strip_0x(data))
    return int.from_bytes(bytes(data), "big")


def _strip_0x(value: str) -> str:
    return value[2:] if value.startswith("0x") else value
