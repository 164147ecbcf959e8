"""
Blockchain Interaction Package
Handles artifact loading, contract deployment and confirmation
"""

from .errors import DeploymentError
from .artifacts import ArtifactLoader
from .contract_factory import ContractFactory, DeployedContract
from .deployer import ContractDeployer, Web3ContractDeployer

__all__ = [
    'DeploymentError',
    'ArtifactLoader',
    'ContractFactory',
    'DeployedContract',
    'ContractDeployer',
    'Web3ContractDeployer'
]
