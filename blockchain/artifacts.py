"""
Artifact Loader
Resolves contract names to compiled Hardhat artifacts (ABI + bytecode)
"""

import os
import json
from typing import Dict, Optional
from loguru import logger

from .errors import DeploymentError


class ArtifactLoader:
    """
    Loads compiled contract artifacts produced by `npx hardhat compile`

    Hardhat writes one JSON file per contract under
    artifacts/contracts/<Name>.sol/<Name>.json
    """

    def __init__(self, artifacts_dir: Optional[str] = None):
        """
        Initialize Artifact Loader

        Args:
            artifacts_dir: Root of the Hardhat artifacts tree
        """
        self.artifacts_dir = artifacts_dir or os.getenv('ARTIFACTS_DIR', 'artifacts')
        self._cache: Dict[str, Dict] = {}

    def artifact_path(self, name: str) -> str:
        """Canonical Hardhat path for a contract artifact"""
        return os.path.join(self.artifacts_dir, 'contracts', f'{name}.sol', f'{name}.json')

    def load(self, name: str) -> Dict:
        """
        Load a contract artifact by name

        Args:
            name: Contract name (e.g. "RealEstateX")

        Returns:
            Artifact dict with 'abi' and 'bytecode'
        """
        if name in self._cache:
            return self._cache[name]

        path = self._find_artifact(name)

        try:
            with open(path, 'r') as f:
                artifact = json.load(f)
        except json.JSONDecodeError as e:
            raise DeploymentError(f"Invalid artifact JSON for {name}: {path} ({e})") from e

        self._validate(name, artifact)

        logger.debug(f"Loaded artifact for {name} from {path}")
        self._cache[name] = artifact
        return artifact

    def _find_artifact(self, name: str) -> str:
        """Locate the artifact file, falling back to a search of the tree"""
        path = self.artifact_path(name)
        if os.path.exists(path):
            return path

        # Contracts declared in a differently named source file
        target = f'{name}.json'
        for root, _dirs, files in os.walk(self.artifacts_dir):
            if target in files:
                return os.path.join(root, target)

        logger.info("Run 'npx hardhat compile' first")
        raise DeploymentError(f"Contract artifact not found: {path}")

    @staticmethod
    def _validate(name: str, artifact: Dict):
        if not isinstance(artifact, dict):
            raise DeploymentError(
                f"Artifact for {name} is not a JSON object ({type(artifact).__name__})"
            )

        for key in ('abi', 'bytecode'):
            if key not in artifact:
                raise DeploymentError(f"Artifact for {name} is missing '{key}'")

        bytecode = artifact['bytecode']
        if not bytecode or bytecode in ('0x', '0x0'):
            raise DeploymentError(
                f"{name} has no bytecode (abstract contract or interface?)"
            )
