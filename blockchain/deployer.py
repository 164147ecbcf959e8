"""
Contract Deployer
Deploys a named contract and returns its on-chain address
"""

from abc import ABC, abstractmethod
from typing import Optional
from web3 import Web3
from loguru import logger

from .artifacts import ArtifactLoader
from .contract_factory import ContractFactory


class ContractDeployer(ABC):
    """
    Deploys a contract by name

    Implementations own network access, signing and confirmation; callers
    only see the resulting address.
    """

    network_name = "Core Blockchain"

    @abstractmethod
    async def deploy(self, name: str) -> str:
        """
        Deploy contract `name` and wait for confirmation

        Returns:
            Deployed contract address
        """


class Web3ContractDeployer(ContractDeployer):
    """
    ContractDeployer backed by web3.py and Hardhat artifacts
    """

    def __init__(
        self,
        w3: Web3,
        account,
        network,
        artifact_loader: Optional[ArtifactLoader] = None
    ):
        """
        Initialize Web3 Contract Deployer

        Args:
            w3: Connected Web3 instance
            account: eth_account LocalAccount used for signing
            network: NetworkConfig of the target chain
            artifact_loader: Artifact loader (default: ./artifacts)
        """
        self.w3 = w3
        self.account = account
        self.network = network
        self.network_name = network.name
        self.artifact_loader = artifact_loader or ArtifactLoader()

    def get_contract_factory(self, name: str) -> ContractFactory:
        """
        Get a factory for a compiled contract

        Args:
            name: Contract name

        Returns:
            ContractFactory
        """
        artifact = self.artifact_loader.load(name)
        artifact.setdefault('contractName', name)
        return ContractFactory(self.w3, self.account, artifact, self.network)

    async def deploy(self, name: str, *constructor_args) -> str:
        """
        Deploy a contract and wait for confirmation

        Args:
            name: Contract name
            *constructor_args: Constructor arguments

        Returns:
            Deployed contract address
        """
        factory = self.get_contract_factory(name)
        handle = await factory.deploy(*constructor_args)

        await handle.deployed()

        logger.debug(f"{name} confirmed in block {handle.receipt.get('blockNumber')}")
        return handle.address
