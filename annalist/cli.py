"""
Command-line interface for annalist.

This module provides a subcommand-based CLI using Typer.
"""

import importlib
import sys
from pathlib import Path
from typing import Any, List, Optional

import typer
import yaml

from annalist.annotations.resolver import AnnotationResolver
from annalist.core.config import Config
from annalist.core.logging import setup_logger
from annalist.core.steps import ClearHistoryStep, GenerateReportStep

app = typer.Typer(
    name="annalist",
    help="Test metadata and aggregate story reports - generate reports, clear history, inspect tests",
    add_completion=False,
)


def get_config(
    verbosity: Optional[int] = None,
    dry_run: bool = False,
    plan: bool = False,
    project_root: Optional[Path] = None,
    **kwargs
) -> Config:
    """Create and configure Config object."""
    init_kwargs = {"dry_run": dry_run, "plan": plan}
    if project_root:
        init_kwargs["project_root"] = project_root
    for key, value in kwargs.items():
        if key in Config.__dataclass_fields__ and value is not None:
            init_kwargs[key] = value
    config = Config(**init_kwargs)
    if verbosity is not None:
        if not 0 <= verbosity <= 3:
            raise ValueError(f"verbosity must be between 0 and 3, got {verbosity}")
        config.verbosity = verbosity
    return config


def print_plan(step) -> None:
    plan_item = step.plan()
    typer.echo(f"1. {plan_item.name}: {'will run' if plan_item.will_run else 'skipped'} ({plan_item.reason})")
    if plan_item.outputs:
        outputs = ", ".join(f"{k}={v}" for k, v in plan_item.outputs.items() if v)
        if outputs:
            typer.echo(f"   outputs: {outputs}")


def run_step_exit(step, config: Config, failure_prefix: str) -> None:
    """Run a step, echo result, and exit with appropriate code."""
    setup_logger(verbosity=config.verbosity)
    if config.plan:
        print_plan(step)
        sys.exit(0)
    result = step.execute()
    if result.success:
        typer.echo(f"✓ {result.message}")
        sys.exit(0)
    if result.skipped:
        typer.echo(f"⊘ {result.message}")
        sys.exit(0)
    typer.echo(f"✗ {failure_prefix}: {result.message}", err=True)
    sys.exit(1)


@app.command()
def report(
    source_dir: Optional[Path] = typer.Option(None, "--source-dir", help="Directory of recorded story outcomes"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Site directory; the report goes to <output-dir>/annalist"),
    project_id: Optional[str] = typer.Option(None, "--project-id", help="Override the project identifier"),
    issue_tracker_url: Optional[str] = typer.Option(None, "--issue-tracker-url", help="Issue URL pattern, e.g. https://jira/browse/{0}"),
    history_dir: Optional[Path] = typer.Option(None, "--history-dir", help="Directory holding report history"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done"),
    plan: bool = typer.Option(False, "--plan", help="Print execution plan and exit"),
    project_root: Optional[Path] = typer.Option(None, "--project-root", help="Project root directory"),
):
    """Generate the aggregate HTML report from recorded story outcomes."""
    config = get_config(
        verbosity=verbosity, dry_run=dry_run, plan=plan, project_root=project_root,
        source_dir=source_dir, output_dir=output_dir, project_id=project_id,
        issue_tracker_url=issue_tracker_url, history_dir=history_dir,
    )
    run_step_exit(GenerateReportStep(config), config, failure_prefix="Report generation failed")


@app.command()
def clean(
    project_id: Optional[str] = typer.Option(None, "--project-id", help="Override the project identifier"),
    history_dir: Optional[Path] = typer.Option(None, "--history-dir", help="Directory holding report history"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done"),
    plan: bool = typer.Option(False, "--plan", help="Print execution plan and exit"),
    project_root: Optional[Path] = typer.Option(None, "--project-root", help="Project root directory"),
):
    """Delete the report history of this project."""
    config = get_config(
        verbosity=verbosity, dry_run=dry_run, plan=plan, project_root=project_root,
        project_id=project_id, history_dir=history_dir,
    )
    run_step_exit(ClearHistoryStep(config), config, failure_prefix="Clearing history failed")


def load_test_type(target: str) -> Any:
    """Import ``package.module`` or ``package.module:Class.Nested``."""
    module_name, _, attribute_path = target.partition(":")
    obj = importlib.import_module(module_name)
    for attribute in filter(None, attribute_path.split(".")):
        obj = getattr(obj, attribute)
    return obj


def describe_method(resolver: AnnotationResolver, method_name: str) -> dict:
    return {
        "method": method_name,
        "title": resolver.annotated_title_for_method(method_name),
        "pending": resolver.is_pending(method_name),
        "ignored": resolver.is_ignored(method_name),
        "issues": list(resolver.issues_for_method(method_name)),
        "tags": [str(tag) for tag in resolver.tags_for_method(method_name)],
    }


@app.command()
def inspect(
    methods: List[str] = typer.Argument(..., help="Test method or scenario names"),
    test_type: Optional[str] = typer.Option(None, "--type", "-t", help="Test type as module or module:Class (omit for name-only resolution)"),
):
    """Print the metadata resolved for test methods."""
    resolved_type = None
    if test_type:
        try:
            resolved_type = load_test_type(test_type)
        except (ImportError, AttributeError) as e:
            typer.echo(f"✗ Cannot load test type {test_type}: {e}", err=True)
            sys.exit(1)

    resolver = AnnotationResolver.for_type(resolved_type)
    described = [describe_method(resolver, method) for method in methods]
    typer.echo(yaml.safe_dump(described, default_flow_style=False, sort_keys=False), nl=False)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
