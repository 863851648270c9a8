"""REST façade over an Ethereum JSON-RPC node and the Etherscan API."""

__version__ = "0.1.0"
