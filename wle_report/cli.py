#!filepath: wle_report/cli.py
from typing import Optional

import typer
from rich import print
from rich.markup import escape

from wle_report import __version__
from wle_report.config.app_config import AppConfig
from wle_report.utils.errors import UserInputError
from wle_report.utils.logger import Logging

app = typer.Typer(help="Weight Lifting Exercise classification report CLI")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
        config: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config path"),
        run_id: Optional[str] = typer.Option(None, "--run-id", help="output sub-directory name"),
        training_file: Optional[str] = typer.Option(None, "--training-file"),
        testing_file: Optional[str] = typer.Option(None, "--testing-file"),
):
    """
    运行完整报告：load → filter → PCA → train (lda / rf / gbm) → evaluate → predict
    """
    from wle_report.workflows.offline_report import build_report_pipeline

    try:
        cfg = AppConfig.load(config)
    except FileNotFoundError as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=2)

    overrides = {
        k: v for k, v in (("training_file", training_file), ("testing_file", testing_file))
        if v is not None
    }
    if overrides:
        cfg.data = cfg.data.model_copy(update=overrides)

    Logging.from_config(cfg.log)

    pipeline = build_report_pipeline(cfg)

    print(f"[green]Running report pipeline run_id={run_id or '(auto)'}[/green]")
    try:
        ctx = pipeline.run(run_id)
    except UserInputError as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=2)

    print(f"[blue]best model: {ctx.best_model}[/blue]")
    for name, path in ctx.report_files.items():
        print(f"  {name:<12} {path}")


if __name__ == "__main__":
    app()

# python -m wle_report.cli run --run-id demo
