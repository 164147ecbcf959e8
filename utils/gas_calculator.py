"""
Gas Calculator
Gas limit and gas price selection for contract deployment
"""

from decimal import Decimal
from typing import Dict, Optional
from web3 import Web3
from loguru import logger


DEFAULT_DEPLOY_GAS_LIMIT = 3000000
DEFAULT_GAS_BUFFER = 1.2


class GasCalculator:
    """
    Calculates gas limit and gas price for deployment transactions
    """
    
    def __init__(self, w3: Web3, gas_settings: Optional[Dict] = None):
        """
        Initialize Gas Calculator
        
        Args:
            w3: Web3 instance
            gas_settings: 'gas_settings' block of the network config
        """
        self.w3 = w3
        gas_settings = gas_settings or {}
        
        self.gas_buffer = gas_settings.get('gas_limit_buffer', DEFAULT_GAS_BUFFER)
        self.default_gas_limit = gas_settings.get(
            'default_deploy_gas_limit', DEFAULT_DEPLOY_GAS_LIMIT
        )
        self.max_gas_price_gwei = gas_settings.get('max_gas_price_gwei')
    
    def estimate_deployment_gas(self, constructor, sender: str) -> int:
        """
        Estimate gas for a contract constructor call
        
        Args:
            constructor: web3 ContractConstructor
            sender: Deployer address
            
        Returns:
            Gas limit (estimate plus buffer)
        """
        try:
            gas_estimate = constructor.estimate_gas({'from': sender})
            return int(gas_estimate * self.gas_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.default_gas_limit
    
    def get_gas_price(self) -> int:
        """
        Current network gas price, capped at max_gas_price_gwei
        
        Returns:
            Gas price in wei
        """
        gas_price = self.w3.eth.gas_price
        
        if self.max_gas_price_gwei is not None:
            max_gas_price = Web3.to_wei(self.max_gas_price_gwei, 'gwei')
            if gas_price > max_gas_price:
                logger.warning(
                    f"Network gas price {Web3.from_wei(gas_price, 'gwei')} gwei "
                    f"above cap, using {self.max_gas_price_gwei} gwei"
                )
                gas_price = max_gas_price
        
        return int(gas_price)
    
    @staticmethod
    def deployment_cost(gas_limit: int, gas_price: int) -> Decimal:
        """Maximum deployment cost in ether units"""
        return Web3.from_wei(gas_limit * gas_price, 'ether')
