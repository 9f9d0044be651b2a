# tests/test_cli.py
import yaml
from typer.testing import CliRunner

from wle_report import __version__
from wle_report.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_missing_config_exits_2(tmp_path):
    result = runner.invoke(app, ["run", "--config", str(tmp_path / "nope.yml")])

    assert result.exit_code == 2


def test_missing_training_file_exits_2(app_config, tmp_path):
    config_file = tmp_path / "cfg.yml"
    config_file.write_text(yaml.safe_dump(app_config.model_dump()))

    result = runner.invoke(
        app,
        [
            "run",
            "-c", str(config_file),
            "--training-file", str(tmp_path / "missing.csv"),
        ],
    )

    assert result.exit_code == 2


def test_run_writes_report(app_config, tmp_path):
    config_file = tmp_path / "cfg.yml"
    config_file.write_text(yaml.safe_dump(app_config.model_dump()))

    result = runner.invoke(app, ["run", "-c", str(config_file), "--run-id", "cli"])

    assert result.exit_code == 0, result.stdout
    assert "best model" in result.stdout
    assert (tmp_path / "output" / "cli" / "report.txt").exists()
    assert (tmp_path / "output" / "cli" / "answers").is_dir()
