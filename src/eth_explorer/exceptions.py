# src/eth_explorer/exceptions.py
from typing import Optional


class ExplorerError(Exception):
    """Base exception class for explorer API errors"""
    status_code = 500
    label = "Internal server error"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ConfigurationError(ExplorerError):
    """Raised when the service is missing required configuration"""
    label = "Configuration error"


class InvalidInputError(ExplorerError):
    """Raised when a caller supplies a malformed address, hash or block number"""
    status_code = 400
    label = "Invalid input"


class InvalidBlockNumber(InvalidInputError):
    """Raised when a block number token is neither decimal, 0x-hex nor 'latest'"""
    pass


class NotFoundError(ExplorerError):
    """Raised when the node has no such block or transaction"""
    status_code = 404
    label = "Not found"


class UpstreamError(ExplorerError):
    """Base exception class for failures reported by the node or Etherscan"""
    pass


class UpstreamUnavailableError(UpstreamError):
    """Raised when the node or Etherscan cannot be reached or answers garbage"""
    status_code = 502
    label = "Upstream unavailable"


class UpstreamRejectedError(UpstreamError):
    """Raised when Etherscan answers with a non-success status"""
    status_code = 400
    label = "Upstream rejected request"
