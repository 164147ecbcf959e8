"""
Network Configuration
Loads target network settings from config/network_config.json and .env
"""

import os
import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from loguru import logger
from dotenv import load_dotenv

from blockchain.errors import DeploymentError

load_dotenv()

DEFAULT_CONFIG_PATH = os.path.join('config', 'network_config.json')


@dataclass
class NetworkConfig:
    """Settings for one deployment target"""
    key: str
    name: str
    chain_id: int
    rpc_urls: List[str]
    currency: str = 'ETH'
    confirmation_timeout: int = 300
    gas_settings: Dict = field(default_factory=dict)


def load_network_config(
    network: Optional[str] = None,
    config_path: str = DEFAULT_CONFIG_PATH
) -> NetworkConfig:
    """
    Load configuration for a network
    
    Args:
        network: Network key (None = DEPLOY_NETWORK env var, then file default)
        config_path: Path to network config JSON
        
    Returns:
        NetworkConfig
    """
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError as e:
        raise DeploymentError(f"Network config not found: {config_path}") from e
    
    network = network or os.getenv('DEPLOY_NETWORK') or config.get('default_network')
    networks = config.get('networks', {})
    
    if network not in networks:
        raise DeploymentError(
            f"Unknown network '{network}' (available: {', '.join(sorted(networks))})"
        )
    
    net_config = networks[network]
    
    # Env override first, then public fallbacks
    rpc_urls = []
    env_url = os.getenv(net_config.get('rpc_url_env', ''))
    if env_url:
        rpc_urls.append(env_url)
    rpc_urls.extend(
        url for url in net_config.get('fallback_rpc_urls', []) if url not in rpc_urls
    )
    
    if not rpc_urls:
        raise DeploymentError(f"No RPC URL configured for network '{network}'")
    
    logger.info(f"Target network: {net_config['name']} (chain id {net_config['chain_id']})")
    
    return NetworkConfig(
        key=network,
        name=net_config['name'],
        chain_id=int(net_config['chain_id']),
        rpc_urls=rpc_urls,
        currency=net_config.get('currency', 'ETH'),
        confirmation_timeout=int(net_config.get('confirmation_timeout', 300)),
        gas_settings=net_config.get('gas_settings', {})
    )
