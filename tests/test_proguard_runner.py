import allure
from click.testing import CliRunner

from proguard_runner import __version__
from proguard_runner.main import proguard_runner

pytestmark = [
    allure.epic("ProGuard Runner"),
    allure.feature("CLI"),
]


def test_version():
    assert __version__


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(proguard_runner, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
