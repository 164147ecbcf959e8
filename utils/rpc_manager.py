"""
RPC Manager
Connects to the target network, falling back through configured RPC URLs
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from blockchain.errors import DeploymentError


class RPCManager:
    """
    Ordered RPC fallback for a single network
    
    URLs are tried in priority order: the env override (if set), then the
    public endpoints listed in config/network_config.json. Endpoints that are
    unreachable or serve a different chain id are skipped.
    """
    
    def __init__(self, network):
        """
        Initialize RPC Manager
        
        Args:
            network: NetworkConfig for the target chain
        """
        self.network = network
        self.w3: Optional[Web3] = None
        self.active_url: Optional[str] = None
        self.failures: Dict[str, str] = {}
    
    def get_web3(self) -> Web3:
        """
        Get a connected Web3 instance
        
        Returns:
            Web3 instance for the first reachable RPC URL
        """
        if self.w3 is not None:
            return self.w3
        
        for url in self.network.rpc_urls:
            try:
                w3 = Web3(Web3.HTTPProvider(url))
                
                if not w3.is_connected():
                    logger.warning(f"Failed to connect to {url}")
                    self.failures[url] = 'not connected'
                    continue
                
                chain_id = w3.eth.chain_id
                
            except Exception as e:
                logger.warning(f"Error creating Web3 for {url}: {e}")
                self.failures[url] = str(e)
                continue
            
            # Never deploy to a node serving a different chain
            if chain_id != self.network.chain_id:
                logger.warning(
                    f"{url} reports chain id {chain_id}, "
                    f"expected {self.network.chain_id} for {self.network.name}"
                )
                self.failures[url] = f'wrong chain id {chain_id}'
                continue
            
            self.w3 = w3
            self.active_url = url
            logger.success(f"Connected to {self.network.name} via {url}")
            return w3
        
        details = "; ".join(f"{url}: {reason}" for url, reason in self.failures.items())
        raise DeploymentError(
            f"Failed to connect to {self.network.name}: no usable RPC endpoint "
            f"({details})"
        )
