"""
Utilities Package
Network configuration, RPC connection, gas pricing and logging
"""

from .gas_calculator import GasCalculator
from .network_config import NetworkConfig, load_network_config
from .rpc_manager import RPCManager
from .logging_config import setup_logging

__all__ = [
    'GasCalculator',
    'NetworkConfig',
    'load_network_config',
    'RPCManager',
    'setup_logging'
]
