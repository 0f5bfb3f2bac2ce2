"""Click entry point.

Global options configure the cluster connection, output format and log
level; they override the KUBECLEANUP_* environment. ``list`` (alias
``ls``) runs the validators and prints the report to stdout.
"""

from __future__ import annotations

import asyncio

import click

from kubecleanup import __version__
from kubecleanup.app import FatalError, run
from kubecleanup.config import OUTPUT_FORMATS, load_config
from kubecleanup.engine import Check
from kubecleanup.models.config import KubeCleanupConfig
from kubecleanup.observability.logging import get_logger, setup_logging
from kubecleanup.report import assemble, render

EXIT_FATAL = 1
EXIT_VIOLATIONS = 2


@click.group(context_settings={"help_option_names": ["-h", "--help", "-?"]})
@click.option("--kubeconfig", type=click.Path(dir_okay=False), default=None, help="Absolute path to the kubeconfig file.")
@click.option("--context", "kube_context", default=None, help="Kubeconfig context to use.")
@click.option("--in-cluster", is_flag=True, default=False, help="Use the pod's service account instead of a kubeconfig.")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), default=None, help="Output format.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Log level for the JSON logs written to stderr.",
)
@click.version_option(version=__version__, prog_name="kube-cleanup")
@click.pass_context
def cli(
    ctx: click.Context,
    kubeconfig: str | None,
    kube_context: str | None,
    in_cluster: bool,
    output: str | None,
    log_level: str | None,
) -> None:
    """Kubernetes garbage collector: report resources with broken dependencies."""
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    if kubeconfig is not None:
        config.cluster.kubeconfig_path = kubeconfig
    if kube_context is not None:
        config.cluster.context = kube_context
    if in_cluster:
        config.cluster.in_cluster = True
    if output is not None:
        config.report.output = output
    if log_level is not None:
        config.log.level = log_level

    setup_logging(config.log.level)
    ctx.obj["config"] = config


@cli.command("list")
@click.option("-n", "--namespace", default=None, help="Only validate this namespace.")
@click.option(
    "--check",
    "checks",
    multiple=True,
    type=click.Choice([c.value for c in Check]),
    help="Validation pass to run (repeatable). Defaults to all.",
)
@click.option("--last-only", is_flag=True, help="Report only the last finding per resource.")
@click.option("--metrics-file", type=click.Path(dir_okay=False), default=None, help="Write Prometheus textfile metrics here.")
@click.option("--fail-on-violations", is_flag=True, help="Exit with status 2 when anything is reported.")
@click.pass_context
def list_orphans(
    ctx: click.Context,
    namespace: str | None,
    checks: tuple[str, ...],
    last_only: bool,
    metrics_file: str | None,
    fail_on_violations: bool,
) -> None:
    """List orphans."""
    config: KubeCleanupConfig = ctx.obj["config"]
    if last_only:
        config.report.retain_all = False
    if metrics_file is not None:
        config.metrics.textfile_path = metrics_file

    selected = [Check(c) for c in checks] or list(Check)
    try:
        inventory = asyncio.run(run(config, selected, namespace=namespace, accessor=ctx.obj.get("accessor")))
    except FatalError as exc:
        get_logger("cli").error("validation aborted", stage=exc.stage, error=str(exc.cause))
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(EXIT_FATAL)

    reports = assemble(inventory, retain_all=config.report.retain_all)
    click.echo(render(reports, config.report.output))
    if fail_on_violations and inventory:
        ctx.exit(EXIT_VIOLATIONS)


cli.add_command(list_orphans, name="ls")
