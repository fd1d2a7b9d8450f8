from __future__ import annotations
import logging
from typing import Any, Optional, Tuple

import typer

from cryptokat import Dispatcher, FaultPolicy, Outcome, RunContext, RunReport, registry
from cryptokat.config import HarnessConfig, load_config, load_provider
from cryptokat.errors import RunInterruptedError
from cryptokat.interfaces import TransformFlags

app = typer.Typer(add_completion=False, help="Known-answer conformance tests for crypto transforms")

EXIT_INTERRUPTED = 130
EXIT_USAGE = 2


def _config() -> HarnessConfig:
    try:
        return load_config()
    except ValueError as exc:
        typer.echo(f"configuration error: {exc}", err=True)
        raise typer.Exit(code=EXIT_USAGE)


def _setup_logging(config: HarnessConfig, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build(
    config: HarnessConfig,
    provider_path: Optional[str],
    inject: Optional[str],
    use_async: Optional[bool],
) -> Tuple[RunContext, int]:
    try:
        provider = load_provider(provider_path or config.provider)
    except (ImportError, RuntimeError) as exc:
        typer.echo(f"cannot load provider: {exc}", err=True)
        raise typer.Exit(code=EXIT_USAGE)
    try:
        faults = config.faults if inject is None else FaultPolicy.parse(inject)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_USAGE)
    if use_async is None:
        use_async = config.use_async
    flags = int(TransformFlags.ASYNC) if use_async else 0
    return RunContext(provider=provider, faults=faults), flags


def _close(provider: Any) -> None:
    close = getattr(provider, "close", None)
    if callable(close):
        close()


def _echo(report: RunReport) -> None:
    alg = report.algorithm or report.driver
    outcome = report.outcome
    if outcome is Outcome.NO_TEST:
        typer.echo(f"No test for {alg} ({report.driver})")
        return
    for err in report.errors:
        typer.echo(f"  {err}", err=True)
    verdict = "passed" if outcome is Outcome.PASSED else "NOT passed"
    typer.echo(f"self-tests for {report.driver} ({alg}) {verdict}")


@app.command()
def list_algos():
    """List registry entries with their category and vector count."""
    for entry in registry:
        typer.echo(f"- {entry.name} [{entry.category}] {entry.vector_count} vectors")


@app.command()
def run(
    driver: str = typer.Argument(..., help="Driver (transform) name to allocate."),
    algorithm: Optional[str] = typer.Argument(None, help="Generic algorithm name."),
    use_async: Optional[bool] = typer.Option(
        None, "--async/--sync", help="Ask the provider for deferred completion."
    ),
    inject: Optional[str] = typer.Option(
        None, "--inject", help="Fault selection, e.g. 'sha1,cbc-aes-pyca:128'."
    ),
    provider: Optional[str] = typer.Option(
        None, "--provider", help="Provider module path or .py file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run the suites registered for DRIVER and ALGORITHM."""
    config = _config()
    _setup_logging(config, verbose)
    ctx, flags = _build(config, provider, inject, use_async)
    try:
        report = Dispatcher(ctx).run_test(driver, algorithm, flags)
    except (RunInterruptedError, KeyboardInterrupt):
        ctx.bridge.cancel()
        typer.echo("interrupted", err=True)
        raise typer.Exit(code=EXIT_INTERRUPTED)
    finally:
        _close(ctx.provider)
    _echo(report)
    raise typer.Exit(code=report.outcome.exit_code)


@app.command("run-all")
def run_all(
    use_async: Optional[bool] = typer.Option(
        None, "--async/--sync", help="Ask the provider for deferred completion."
    ),
    inject: Optional[str] = typer.Option(
        None, "--inject", help="Fault selection, e.g. 'sha1,cbc-aes-pyca:128'."
    ),
    provider: Optional[str] = typer.Option(
        None, "--provider", help="Provider module path or .py file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Self-test every registry entry."""
    config = _config()
    _setup_logging(config, verbose)
    ctx, flags = _build(config, provider, inject, use_async)
    try:
        reports = Dispatcher(ctx).run_all(flags)
    except (RunInterruptedError, KeyboardInterrupt):
        ctx.bridge.cancel()
        typer.echo("interrupted", err=True)
        raise typer.Exit(code=EXIT_INTERRUPTED)
    finally:
        _close(ctx.provider)
    failed = 0
    for report in reports:
        _echo(report)
        failed += report.outcome is Outcome.FAILED
    typer.echo(f"{len(reports)} entries: {len(reports) - failed} passed, {failed} failed")
    raise typer.Exit(code=1 if failed else 0)


def app_main():
    app()

if __name__ == "__main__":
    app_main()
