# src/eth_explorer/utils/__init__.py
from .logger import get_logger, parse_level
from .units import wei_to_ether, wei_to_gwei, format_units
from .parsing import parse_block_number, validate_address, validate_tx_hash

__all__ = [
    'get_logger', 'parse_level',
    'wei_to_ether', 'wei_to_gwei', 'format_units',
    'parse_block_number', 'validate_address', 'validate_tx_hash',
]
