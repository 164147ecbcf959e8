"""
Contract Factory
Builds, signs and submits contract-creation transactions
"""

import asyncio
import functools
from typing import Dict, Optional
from web3 import Web3
from web3.exceptions import TimeExhausted
from loguru import logger

from utils.gas_calculator import GasCalculator
from .errors import DeploymentError


class DeployedContract:
    """
    Handle to a submitted deployment

    The address is only known once the creation transaction is confirmed,
    so `address` raises until `deployed()` has completed.
    """

    def __init__(self, w3: Web3, name: str, abi: list, tx_hash, timeout: int = 300):
        self.w3 = w3
        self.name = name
        self.abi = abi
        self.tx_hash = tx_hash
        self.timeout = timeout
        self.receipt: Optional[Dict] = None

    @property
    def address(self) -> str:
        if self.receipt is None:
            raise DeploymentError(
                f"{self.name} address unavailable: deployment not confirmed yet"
            )
        return self.receipt['contractAddress']

    @property
    def contract(self):
        """web3 Contract bound to the deployed address"""
        return self.w3.eth.contract(address=self.address, abi=self.abi)

    async def deployed(self, timeout: Optional[int] = None) -> 'DeployedContract':
        """
        Wait for the deployment transaction to be mined

        Args:
            timeout: Seconds to wait (None = network confirmation_timeout)

        Returns:
            self, with receipt and address populated
        """
        if self.receipt is not None:
            return self

        timeout = timeout if timeout is not None else self.timeout
        tx_hex = Web3.to_hex(self.tx_hash)

        logger.info(f"Waiting for confirmation of {tx_hex}...")

        # wait_for_transaction_receipt polls synchronously
        loop = asyncio.get_running_loop()
        try:
            receipt = await loop.run_in_executor(
                None,
                functools.partial(
                    self.w3.eth.wait_for_transaction_receipt,
                    self.tx_hash,
                    timeout=timeout
                )
            )
        except TimeExhausted as e:
            raise DeploymentError(
                f"{self.name} deployment not confirmed after {timeout}s: {tx_hex}"
            ) from e

        if receipt['status'] != 1:
            raise DeploymentError(f"{self.name} deployment reverted: {tx_hex}")

        if not receipt.get('contractAddress'):
            raise DeploymentError(f"No contract address in receipt for {tx_hex}")

        self.receipt = receipt

        logger.success(f"{self.name} deployed at {receipt['contractAddress']}")
        logger.info(f"Gas used: {receipt['gasUsed']}")

        return self


class ContractFactory:
    """
    Deploys instances of a single compiled contract
    """

    def __init__(
        self,
        w3: Web3,
        account,
        artifact: Dict,
        network,
        gas_calculator: Optional[GasCalculator] = None
    ):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            account: eth_account LocalAccount used for signing
            artifact: Compiled artifact with 'abi' and 'bytecode'
            network: NetworkConfig of the target chain
            gas_calculator: Gas calculator (default built from network gas settings)
        """
        self.w3 = w3
        self.account = account
        self.network = network
        self.name = artifact.get('contractName', 'contract')
        self.abi = artifact['abi']
        self.bytecode = artifact['bytecode']
        self.gas_calculator = gas_calculator or GasCalculator(w3, network.gas_settings)

    async def deploy(self, *constructor_args) -> DeployedContract:
        """
        Submit the contract-creation transaction

        Args:
            *constructor_args: Constructor arguments

        Returns:
            DeployedContract handle (await .deployed() for the address)
        """
        sender = self.account.address
        logger.info(f"Deploying {self.name} from: {sender}")

        contract = self.w3.eth.contract(abi=self.abi, bytecode=self.bytecode)
        constructor = contract.constructor(*constructor_args)

        gas_limit = self.gas_calculator.estimate_deployment_gas(constructor, sender)
        gas_price = self.gas_calculator.get_gas_price()

        logger.info(f"Gas limit: {gas_limit}")
        logger.info(f"Gas price: {Web3.from_wei(gas_price, 'gwei')} gwei")

        self._check_balance(sender, gas_limit, gas_price)

        nonce = self.w3.eth.get_transaction_count(sender, 'pending')

        transaction = constructor.build_transaction({
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': self.network.chain_id
        })

        signed_tx = self.account.sign_transaction(transaction)
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")

        return DeployedContract(
            self.w3,
            self.name,
            self.abi,
            tx_hash,
            timeout=self.network.confirmation_timeout
        )

    def _check_balance(self, sender: str, gas_limit: int, gas_price: int):
        """Fail before signing if the deployer cannot cover the gas"""
        balance = self.w3.eth.get_balance(sender)
        cost = GasCalculator.deployment_cost(gas_limit, gas_price)

        logger.info(f"Account balance: {Web3.from_wei(balance, 'ether')} {self.network.currency}")
        logger.info(f"Estimated deployment cost: {cost} {self.network.currency}")

        if balance < gas_limit * gas_price:
            raise DeploymentError(
                f"Insufficient funds for deployment: balance "
                f"{Web3.from_wei(balance, 'ether')} {self.network.currency}, "
                f"need up to {cost} {self.network.currency}"
            )
