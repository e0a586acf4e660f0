"""Command-line entry point."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from podpilot import __version__
from podpilot.models.state.config_manager import (
    ConfigLoadError,
    ConfigManager,
    ConfigSaveError,
)


def configure_logging(*, debug: bool = False, log_file: Path | None = None) -> None:
    """Send logs to a file; the terminal belongs to the TUI.

    Without a log file, records are discarded.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    if log_file is None:
        root.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """A decorator to configure logging in all commands the same way."""
    @click.option("-d", "--debug", is_flag=True)
    @click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path))
    @functools.wraps(fn)
    def wrapper(debug: bool, log_file: Path | None, *args: Any, **kwargs: Any) -> Any:
        configure_logging(debug=debug, log_file=log_file)
        return fn(*args, **kwargs)

    return wrapper


@click.command(name="podpilot", context_settings={"auto_envvar_prefix": "PODPILOT"})
@click.version_option(__version__, prog_name="podpilot")
@logging_options
@click.option("--context", type=str, help="Kubeconfig context to use.")
@click.option("-n", "--namespace", type=str, help="Namespace to list pods from.")
@click.option("--kubectl", "kubectl_path", type=str, help="Path to the kubectl binary.")
@click.option("--refresh-interval", type=click.FloatRange(min=1), help="Seconds between refreshes.")
@click.option("--auto-refresh/--no-auto-refresh", default=None)
@click.option("--save", is_flag=True, help="Persist the given options as new defaults.")
def main(
    context: str | None,
    namespace: str | None,
    kubectl_path: str | None,
    refresh_interval: float | None,
    auto_refresh: bool | None,
    save: bool,
) -> None:
    """Browse and delete pods of a Kubernetes cluster."""
    try:
        settings = ConfigManager.load()
    except ConfigLoadError as exc:
        raise click.ClickException(str(exc)) from exc

    overrides = {
        "context": context,
        "namespace": namespace,
        "kubectl_path": kubectl_path,
        "refresh_interval": refresh_interval,
        "auto_refresh": auto_refresh,
    }
    for field, value in overrides.items():
        if value is not None:
            setattr(settings, field, value)

    if save:
        try:
            path = ConfigManager.save(settings)
        except ConfigSaveError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Saved settings to {path}")

    # Imported late so ``--help`` does not pay for Textual.
    from podpilot.app import PodPilotApp

    PodPilotApp(settings).run()
