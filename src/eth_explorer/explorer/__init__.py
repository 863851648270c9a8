from .api import ExplorerAPI
from .etherscan import EtherscanClient

__all__ = ['ExplorerAPI', 'EtherscanClient']
