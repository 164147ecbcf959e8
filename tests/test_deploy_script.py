"""
Deployment Script Tests
Exit codes, output streams and ordering of scripts/deploy_contract.py
"""

import os
import sys
import subprocess
import pytest
from unittest.mock import Mock, patch

import deploy
from blockchain import ContractDeployer, DeploymentError
from scripts import deploy_contract
from scripts.deploy_contract import CONTRACT_NAME, main, run


ADDRESS = "0xABC0000000000000000000000000000000000123"
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def env_without_key():
    """Process environment with no deployer key and no PYTHONPATH help"""
    env = {k: v for k, v in os.environ.items() if k not in ('PRIVATE_KEY', 'PYTHONPATH')}
    return env


class FakeDeployer(ContractDeployer):
    """Records deploy calls instead of touching a network"""

    def __init__(self, address=ADDRESS, error=None, on_deploy=None):
        self.address = address
        self.error = error
        self.on_deploy = on_deploy
        self.calls = []

    async def deploy(self, name: str) -> str:
        self.calls.append(name)
        if self.on_deploy:
            self.on_deploy()
        if self.error:
            raise self.error
        return self.address


class TestDeploymentProcedure:
    """Test the deployment entry point"""

    def test_success_prints_address(self, capsys):
        """Successful deployment prints the address and exits 0"""
        deployer = FakeDeployer()

        exit_code = run(deployer)

        captured = capsys.readouterr()
        assert exit_code == 0
        assert ADDRESS in captured.out
        assert captured.out.strip() == (
            f"RealEstateX deployed to Core Blockchain at address: {ADDRESS}"
        )

    def test_failure_writes_stderr(self, capsys):
        """Failed deployment writes the error to stderr and exits 1"""
        deployer = FakeDeployer(error=DeploymentError("transaction reverted"))

        exit_code = run(deployer)

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "transaction reverted" in captured.err
        assert captured.out == ""

    def test_collaborator_error_exits_1(self, capsys):
        """Errors that are not DeploymentError are handled the same way"""
        deployer = FakeDeployer(error=ConnectionError("network unreachable"))

        assert run(deployer) == 1
        assert "network unreachable" in capsys.readouterr().err

    def test_single_deploy_on_success(self):
        """Exactly one deployment per run"""
        deployer = FakeDeployer()

        run(deployer)

        assert deployer.calls == [CONTRACT_NAME]

    def test_no_retry_on_failure(self):
        """Failures are terminal: no second attempt"""
        deployer = FakeDeployer(error=DeploymentError("insufficient funds"))

        run(deployer)

        assert deployer.calls == [CONTRACT_NAME]

    def test_no_output_before_confirmation(self, capsys):
        """Nothing is printed while deployment is still pending"""
        seen = {}

        def check_output():
            seen['pending'] = capsys.readouterr().out

        deployer = FakeDeployer(on_deploy=check_output)

        run(deployer)

        assert seen['pending'] == ""
        assert ADDRESS in capsys.readouterr().out

    def test_network_name_in_message(self, capsys):
        """The message names the deployer's network"""
        deployer = FakeDeployer()
        deployer.network_name = "Hardhat Local"

        run(deployer)

        assert "deployed to Hardhat Local at address" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_main_returns_address(self):
        """main() returns the deployed address"""
        address = await main(FakeDeployer())

        assert address == ADDRESS

    def test_missing_private_key(self, monkeypatch, capsys):
        """Without PRIVATE_KEY no deployer is built and the run fails"""
        monkeypatch.delenv('PRIVATE_KEY', raising=False)

        assert run() == 1
        assert "PRIVATE_KEY" in capsys.readouterr().err

    def test_build_deployer_from_environment(self, monkeypatch):
        """build_deployer wires config, RPC connection and account"""
        monkeypatch.setenv('PRIVATE_KEY', '0x' + '11' * 32)
        network = Mock()
        network.name = "Core Blockchain"

        with patch.object(deploy_contract, 'load_network_config', return_value=network) as load, \
                patch.object(deploy_contract, 'RPCManager') as rpc_manager:
            deployer = deploy_contract.build_deployer('core_testnet')

        load.assert_called_once_with('core_testnet')
        assert deployer.w3 is rpc_manager.return_value.get_web3.return_value
        assert deployer.network_name == "Core Blockchain"
        assert deployer.account.address.startswith('0x')


class TestDeployWrapper:
    """Test the root deploy.py wrapper"""

    def test_propagates_exit_code(self, capsys):
        """Wrapper exits with the deployment script's return code"""
        with patch('deploy.subprocess.run', return_value=Mock(returncode=1)) as mock_run:
            assert deploy.main() == 1

        args = mock_run.call_args[0][0]
        assert args[1:] == ["-m", "scripts.deploy_contract"]
        assert mock_run.call_args[1]['cwd'] == REPO_ROOT

        # Banner must not reach stdout
        assert capsys.readouterr().out == ""

    def test_wrapper_process_exit_code(self, env_without_key, tmp_path):
        """`python deploy.py` reaches the deployment code and exits 1 without a key"""
        result = subprocess.run(
            [sys.executable, os.path.join(REPO_ROOT, "deploy.py")],
            cwd=str(tmp_path),
            env=env_without_key,
            capture_output=True,
            text=True,
            timeout=120
        )

        assert result.returncode == 1
        assert "Error: PRIVATE_KEY must be set" in result.stderr
        assert "ModuleNotFoundError" not in result.stderr
        assert result.stdout == ""


class TestDeployScriptProcess:
    """Run scripts/deploy_contract.py as a real process"""

    def test_module_exit_code(self, env_without_key):
        """The script's __main__ block exits with run()'s value"""
        result = subprocess.run(
            [sys.executable, "-m", "scripts.deploy_contract"],
            cwd=REPO_ROOT,
            env=env_without_key,
            capture_output=True,
            text=True,
            timeout=120
        )

        assert result.returncode == 1
        assert "PRIVATE_KEY" in result.stderr
        assert result.stdout == ""


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
