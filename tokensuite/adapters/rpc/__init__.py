from .abi import ERC777_OPERATOR_ABI
from .chain import Web3ChainAdapter
from .token import Web3TokenAdapter

__all__ = ["ERC777_OPERATOR_ABI", "Web3ChainAdapter", "Web3TokenAdapter"]
