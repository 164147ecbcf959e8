"""
Contract Deployment Wrapper
Runs scripts/deploy_contract.py
"""

import os
import subprocess
import sys

REPO_ROOT = os.path.dirname(os.path.abspath(__file__))


def main() -> int:
    print("=" * 70, file=sys.stderr)
    print("RealEstateX Contract Deployment", file=sys.stderr)
    print("=" * 70, file=sys.stderr)
    print(file=sys.stderr)
    
    # Run as a module so the repo's packages resolve from the repo root
    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy_contract"],
        cwd=REPO_ROOT
    )
    
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
