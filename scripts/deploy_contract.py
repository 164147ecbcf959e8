"""
Smart Contract Deployment Script
Deploys RealEstateX contract to Core Blockchain
"""

import os
import sys
import asyncio
from typing import Optional
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from blockchain import ContractDeployer, DeploymentError, Web3ContractDeployer
from utils import RPCManager, load_network_config, setup_logging

load_dotenv()

CONTRACT_NAME = "RealEstateX"


def build_deployer(network: Optional[str] = None) -> ContractDeployer:
    """
    Build a deployer from config/network_config.json and .env

    Args:
        network: Network key (None = DEPLOY_NETWORK or config default)
    """
    private_key = os.getenv('PRIVATE_KEY')
    if not private_key:
        raise DeploymentError("PRIVATE_KEY must be set")

    network_config = load_network_config(network)
    w3 = RPCManager(network_config).get_web3()
    account = Account.from_key(private_key)

    return Web3ContractDeployer(w3, account, network_config)


async def main(deployer: Optional[ContractDeployer] = None) -> str:
    """Deploy RealEstateX and print its address"""
    if deployer is None:
        deployer = build_deployer()

    address = await deployer.deploy(CONTRACT_NAME)

    print(f"{CONTRACT_NAME} deployed to {deployer.network_name} at address: {address}")
    return address


def run(deployer: Optional[ContractDeployer] = None) -> int:
    """
    Run the deployment

    Returns:
        Process exit code (0 on success, 1 on any error)
    """
    try:
        asyncio.run(main(deployer))
        return 0
    except Exception as e:
        logger.opt(exception=e).debug("Deployment failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    setup_logging(os.getenv('LOG_LEVEL', 'INFO'), os.getenv('LOG_FILE'))
    sys.exit(run())
