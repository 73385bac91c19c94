#!/usr/bin/env python3
"""
CLI for the state machine compiler.

Usage:
    smc compile serverless.yml                     # Print the compiled template
    smc compile serverless.yml -t template.json -o out.json
    smc lint serverless.yml                        # Lint every definition
    smc config                                     # Show effective settings
"""
import json
import sys
import traceback
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Load .env before importing compiler modules
load_dotenv()

from state_machine_compiler import compile_state_machines  # noqa: E402
from state_machine_compiler.errors import StateMachineCompilerError  # noqa: E402
from state_machine_compiler.lint import lint_definition  # noqa: E402
from state_machine_compiler.service import (  # noqa: E402
    build_context,
    load_service_document,
    load_template,
)

console = Console()
err_console = Console(stderr=True)

# Global verbose flag
VERBOSE = False


def _fail(error: Exception) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", highlight=False)
    if VERBOSE:
        err_console.print(traceback.format_exc(), markup=False, highlight=False)
    sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="smc")
@click.option('--verbose', '-v', is_flag=True, help='Show full error tracebacks for debugging')
def cli(verbose: bool):
    """
    Compile Step Functions state machines into CloudFormation resources.

    \b
    Commands:
      compile  - Compile every state machine in a service document
      lint     - Lint every state machine definition
      config   - Show effective settings
    """
    global VERBOSE
    VERBOSE = verbose


@cli.command(name="compile")
@click.argument('service_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--template', '-t', 'template_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Existing CloudFormation template (JSON) to merge into')
@click.option('--output', '-o', 'output_file', type=click.Path(dir_okay=False, path_type=Path),
              help='Write the compiled template here instead of stdout')
@click.option('--validate/--no-validate', default=None,
              help='Lint definitions (default: stepFunctions.validate, then VALIDATE_DEFINITIONS)')
def compile_command(service_file: Path, template_file: Optional[Path], output_file: Optional[Path],
            validate: Optional[bool]):
    """
    Compile the state machines of SERVICE_FILE.

    \b
    Example:
      smc compile serverless.yml
      smc compile serverless.yml --template .serverless/cloudformation-template-update-stack.json
    """
    try:
        service = load_service_document(service_file)
        template = load_template(template_file)
        context = build_context(service, template, validate=validate)
        compile_state_machines(service.step_functions.state_machines, template, context)
    except StateMachineCompilerError as exc:
        _fail(exc)
        return

    rendered = json.dumps(template, indent=2, ensure_ascii=False)
    if output_file is None:
        click.echo(rendered)
        return

    output_file.write_text(rendered + "\n", encoding="utf-8")
    count = len(service.step_functions.state_machines)
    err_console.print(f"[green]✓[/green] Compiled {count} state machine(s) into {output_file}")


@cli.command()
@click.argument('service_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def lint(service_file: Path):
    """
    Lint every state machine definition in SERVICE_FILE.
    """
    try:
        service = load_service_document(service_file)
    except StateMachineCompilerError as exc:
        _fail(exc)
        return

    table = Table(title="State machine definitions", box=box.ROUNDED)
    table.add_column("State machine", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Errors")

    invalid = 0
    for name, state_machine in service.step_functions.state_machines.items():
        definition = state_machine.get("definition") if isinstance(state_machine, dict) else None
        if definition is None:
            invalid += 1
            table.add_row(name, "[red]✕[/red]", "missing definition")
            continue

        result = lint_definition(definition)
        if result.is_valid:
            table.add_row(name, "[green]✓[/green]", "")
        else:
            invalid += 1
            details = "\n".join(f"{error.path}: {error.message}" for error in result.errors)
            table.add_row(name, "[red]✕[/red]", details)

    console.print(table)
    if invalid:
        sys.exit(1)


@cli.command()
@click.option('--format', '-f', 'fmt', type=click.Choice(['json', 'table']), default='table', help='Output format')
def config(fmt: str):
    """
    Show current configuration.

    Displays configuration values loaded from environment variables and .env file.
    """
    from shared.config import config as compiler_config

    settings = [
        ("validate_definitions", "VALIDATE_DEFINITIONS"),
        ("placeholder_strategy", "PLACEHOLDER_STRATEGY"),
        ("placeholder_length", "PLACEHOLDER_LENGTH"),
        ("definition_indent", "DEFINITION_INDENT"),
        ("log_level", "LOG_LEVEL"),
    ]

    if fmt == 'json':
        output = {attr: getattr(compiler_config, attr) for attr, _ in settings}
        click.echo(json.dumps(output, indent=2, default=str))
        return

    console.print(Panel.fit("[bold cyan]State Machine Compiler Configuration[/bold cyan]", border_style="cyan"))
    table = Table(box=box.ROUNDED)
    table.add_column("Setting", style="cyan")
    table.add_column("Env Variable", style="dim")
    table.add_column("Value")
    for attr, env_var in settings:
        table.add_row(attr, env_var, str(getattr(compiler_config, attr)))
    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
