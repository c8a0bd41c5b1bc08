"""
neo-access-rbac: command line front end for the permission catalog compiler.

    neo-access-rbac                 validate, then generate (default)
    neo-access-rbac generate        same as above
    neo-access-rbac validate        validation pass only, exit 0 or 1
"""

from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...core.exceptions import CatalogValidationError, SchemaError
from .entities.catalog import CatalogValidationReport, CompiledCatalog, FindingSeverity
from .services.catalog_compiler import CatalogCompiler

console = Console()

SEVERITY_STYLES = {
    FindingSeverity.ERROR: ("❌", "red"),
    FindingSeverity.WARNING: ("⚠️ ", "yellow"),
    FindingSeverity.INFO: ("ℹ️ ", "blue"),
}

schema_option = click.option(
    "--schema",
    "schema_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="RBAC schema file (defaults to NEO_ACCESS_RBAC_SCHEMA_PATH)",
)


def _print_report(catalog: CompiledCatalog, report: CatalogValidationReport) -> None:
    console.print(f"Roles: {report.role_count}   Permissions: {report.permission_count}")
    console.print(
        f"Errors: {len(report.errors)}   Warnings: {len(report.warnings)}   Info: {len(report.infos)}"
    )

    if catalog.roles:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Role", style="cyan")
        table.add_column("Permissions", justify="right")
        for role in catalog.roles:
            table.add_row(role, str(len(catalog.role_permissions.get(role, ()))))
        console.print(table)

    for finding in report.findings:
        icon, style = SEVERITY_STYLES[finding.severity]
        console.print(f"[{style}]{icon} {finding.message}[/{style}]")

    if report.is_valid:
        console.print("[green]✅ Schema validation passed![/green]")
    else:
        console.print("[red]🚨 Schema validation failed[/red]")


def _run_validate(
    compiler: CatalogCompiler, schema_path: Optional[Path]
) -> Tuple[CompiledCatalog, CatalogValidationReport]:
    catalog = compiler.load(schema_path)
    report = compiler.validate(catalog)
    _print_report(catalog, report)
    return catalog, report


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """RBAC catalog compiler"""
    if ctx.invoked_subcommand is None:
        ctx.invoke(generate)


@cli.command()
@schema_option
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for generated artifacts (defaults to NEO_ACCESS_OUTPUT_DIR)",
)
@click.pass_context
def generate(ctx, schema_path, output_dir):
    """Validate the schema, then generate catalog artifacts"""
    console.print(Panel.fit("🏗️  RBAC Generator", style="bold blue"))
    compiler = CatalogCompiler()

    try:
        catalog, report = _run_validate(compiler, schema_path)
        if not report.is_valid:
            console.print("\n[red]❌ Schema validation failed. Fix issues before generating files.[/red]")
            ctx.exit(1)
        result = compiler.write(
            catalog, report, source_name=compiler.schema_path(schema_path).name, output_dir=output_dir
        )
    except (SchemaError, CatalogValidationError) as e:
        console.print(f"[red]❌ Error: {e.message}[/red]")
        ctx.exit(1)

    for path in result.written:
        console.print(f"[green]✅ Generated: {path}[/green]")
    console.print(
        f"\n🎉 {len(result.catalog.roles)} roles, {len(result.catalog.permissions)} permissions, "
        f"{len(result.written)} files"
    )


@cli.command()
@schema_option
@click.pass_context
def validate(ctx, schema_path):
    """Run the validation pass only"""
    console.print(Panel.fit("🔍 RBAC Schema Validation", style="bold blue"))
    try:
        _, report = _run_validate(CatalogCompiler(), schema_path)
    except SchemaError as e:
        console.print(f"[red]❌ Error: {e.message}[/red]")
        ctx.exit(1)
    ctx.exit(0 if report.is_valid else 1)


if __name__ == "__main__":
    cli()
