"""Command-line interface for sprout."""

import logging
import os
from pathlib import Path
from typing import Any

import click
from click.shell_completion import get_completion_class

from sprout import __version__
from sprout.actions import ProjectActions
from sprout.config import SproutContext
from sprout.console import configure_logging, console
from sprout.data import (
    ArgumentDefinition,
    Command,
    Flag,
    MappingRawValues,
    MultiValue,
    Scalar,
    combine_definitions,
    resolve,
)
from sprout.data.arguments import PROJECT_NAME_ARGUMENT
from sprout.generator import GenerationAborted, ProjectGenerator
from sprout.repositories import sync_repositories
from sprout.templates import ProjectTemplate, get_all_templates, load_template_schema

logger = logging.getLogger(__name__)

COMPLETION_SHELLS = ("bash", "zsh", "fish")
PROJECT_NAME_PARAM = "project_name"


def _sprout_context(ctx: click.Context) -> SproutContext:
    """Return the context object, loading it when main did not run (completion)."""
    obj = ctx.find_object(SproutContext)
    if obj is None:
        obj = SproutContext.load()
        ctx.find_root().obj = obj
    return obj


def _templates(ctx: click.Context) -> dict[str, ProjectTemplate]:
    return get_all_templates(_sprout_context(ctx).library_roots())


def option_name(arg: ArgumentDefinition) -> str:
    """Return the long option of an argument, without dashes.

    Arguments selected by default are switched off with ``--no-<name>``
    unless the schema names the option explicitly.
    """
    if arg.long:
        return arg.long
    if arg.is_default_triggered:
        return f"no-{arg.name}"
    return arg.name


def param_name(arg: ArgumentDefinition) -> str:
    return arg.name.replace("-", "_")


def build_option(arg: ArgumentDefinition) -> click.Option:
    """Turn an argument definition into a click option."""
    decls = [f"--{option_name(arg)}"]
    if arg.short:
        decls.append(f"-{arg.short}")
    decls.append(param_name(arg))

    match arg.kind:
        case Flag() | Command():
            return click.Option(decls, is_flag=True, default=False, help=arg.help)
        case Scalar(default=default, allowed=allowed):
            return click.Option(
                decls,
                type=click.Choice(allowed) if allowed else click.STRING,
                default=None,
                show_default=default,
                help=arg.help,
            )
        case MultiValue(default=default, allowed=allowed):
            help_text = arg.help or ""
            if allowed:
                help_text = f"{help_text} [choices: {', '.join(allowed)}]".strip()
            return click.Option(
                decls,
                multiple=True,
                default=None,
                show_default=",".join(default) if default else False,
                help=help_text or None,
                metavar="VALUE[,VALUE...]",
            )
    raise TypeError(f"Unsupported argument kind: {arg.kind!r}")


def split_multi(arg: ArgumentDefinition, raw: tuple[str, ...] | None) -> list[str]:
    """Merge repeated and comma-delimited values, checking allowed values."""
    values = [
        item.strip()
        for chunk in raw or ()
        for item in chunk.split(",")
        if item.strip()
    ]
    allowed = arg.kind.allowed if isinstance(arg.kind, MultiValue) else None
    if allowed:
        invalid = [value for value in values if value not in allowed]
        if invalid:
            raise click.BadParameter(
                f"{', '.join(invalid)} not in {', '.join(allowed)}",
                param_hint=f"--{option_name(arg)}",
            )
    return values


def collect_values(
    definitions: dict[str, ArgumentDefinition], params: dict[str, Any]
) -> dict[str, Any]:
    """Map parsed click params back to argument names."""
    supplied: dict[str, Any] = {}
    for arg in definitions.values():
        value = params.get(param_name(arg))
        if isinstance(arg.kind, MultiValue):
            supplied[arg.name] = split_multi(arg, value)
        else:
            supplied[arg.name] = value
    supplied[PROJECT_NAME_ARGUMENT] = params.get(PROJECT_NAME_PARAM)
    return supplied


def generate_project(
    template: ProjectTemplate,
    schema: dict[str, ArgumentDefinition],
    supplied: dict[str, Any],
) -> None:
    """Resolve values, render the project and run its actions."""
    data = resolve(schema, MappingRawValues(supplied))

    generator = ProjectGenerator(template, data)
    try:
        report = generator.generate()
    except GenerationAborted as e:
        console.print(f"[yellow]Aborted: {e}[/yellow]")
        raise SystemExit(1) from e

    console.print(
        f"[green]✓[/green] Created [bold]{report.project_dir.name}[/bold] "
        f"from [cyan]{template.name}[/cyan] ({len(report.written)} files)"
    )
    for name in report.skipped:
        logger.debug("Template %s produced no file", name)

    ProjectActions(report.project_dir, data).run()


def build_template_command(template: ProjectTemplate) -> click.Command:
    """Build the ``sprout new <lang> <kind>`` command of a template."""
    schema = load_template_schema(template)
    definitions = combine_definitions(schema)

    params: list[click.Parameter] = [
        click.Argument([PROJECT_NAME_PARAM], metavar="PROJECT_NAME")
    ]
    params += [build_option(arg) for arg in definitions.values()]

    def callback(**kwargs: Any) -> None:
        generate_project(template, schema, collect_values(definitions, kwargs))

    return click.Command(
        name=template.kind,
        params=params,
        callback=callback,
        help=f"Create a {template.lang} {template.kind} project.",
        short_help=str(template.library),
    )


class KindGroup(click.Group):
    """Templates of one language, keyed by kind."""

    def __init__(self, lang: str, **kwargs: Any) -> None:
        super().__init__(name=lang, **kwargs)
        self.lang = lang

    def _kinds(self, ctx: click.Context) -> dict[str, ProjectTemplate]:
        return {
            template.kind: template
            for template in _templates(ctx).values()
            if template.lang == self.lang
        }

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(self._kinds(ctx))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        template = self._kinds(ctx).get(cmd_name)
        if template is None:
            return None
        return build_template_command(template)


class LanguageGroup(click.Group):
    """Languages available in the configured template libraries."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({template.lang for template in _templates(ctx).values()})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in self.list_commands(ctx):
            return None
        return KindGroup(cmd_name, help=f"Create a {cmd_name} project.")


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"sprout [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("-d", "--debug", "log_level", flag_value="DEBUG", help="Debug output.")
@click.option("-i", "--info", "log_level", flag_value="INFO", help="Info output.")
@click.option(
    "-w", "--warning", "log_level", flag_value="WARNING", help="Warnings only."
)
@click.option("-e", "--error", "log_level", flag_value="ERROR", help="Errors only.")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Sprout - scaffold new projects from template libraries."""
    configure_logging(log_level)
    if ctx.obj is None:
        ctx.obj = SproutContext.load()

    if ctx.invoked_subcommand is None:
        console.print("[bold]sprout[/bold] - scaffold new projects from templates")
        console.print("\nRun [cyan]sprout --help[/cyan] for available commands.")


main.add_command(
    LanguageGroup(name="new", help="Create a project: sprout new LANG KIND NAME.")
)


@main.command("list")
@click.option("--verbose", "-v", is_flag=True, help="Show template arguments.")
@click.pass_context
def list_templates(ctx: click.Context, verbose: bool) -> None:
    """List available templates."""
    templates = _templates(ctx)

    if not templates:
        console.print("[yellow]No templates found.[/yellow]")
        console.print(
            "[dim]Add repositories to the config and run 'sprout upgrade'.[/dim]"
        )
        return

    console.print("[bold]Available Templates:[/bold]\n")
    for name, template in sorted(templates.items()):
        console.print(
            f"  [cyan]{template.lang}[/cyan] {template.kind} "
            f"[dim]({template.library})[/dim]"
        )
        if verbose:
            for arg in load_template_schema(template).values():
                help_text = f" - {arg.help}" if arg.help else ""
                console.print(
                    f"    --{option_name(arg)} "
                    f"[dim]{type(arg.kind).__name__.lower()}{help_text}[/dim]"
                )
            console.print()


@main.command()
@click.pass_context
def upgrade(ctx: click.Context) -> None:
    """Download or update the configured template repositories."""
    sprout_ctx = _sprout_context(ctx)
    if not sprout_ctx.repositories:
        console.print("[yellow]No repositories configured.[/yellow]")
        console.print(f"[dim]Add them to {sprout_ctx.config_path}[/dim]")
        return

    results = sync_repositories(sprout_ctx.home, sprout_ctx.repositories)
    for result in results:
        if result.ok:
            console.print(f"[green]✓[/green] {result.action} {result.url}")
        else:
            console.print(f"[red]✗[/red] {result.url}: {result.error}")

    if not all(result.ok for result in results):
        raise SystemExit(1)


@main.command("get-config")
@click.pass_context
def get_config(ctx: click.Context) -> None:
    """Print the path of the global configuration file."""
    click.echo(str(_sprout_context(ctx).config_path))


def detect_completion_shell() -> str:
    """Guess the completion shell from $SHELL, defaulting to bash."""
    shell = Path(os.environ.get("SHELL", "")).name
    return shell if shell in COMPLETION_SHELLS else "bash"


@main.command()
@click.argument("shell", required=False, type=click.Choice(COMPLETION_SHELLS))
def completion(shell: str | None) -> None:
    """Print the shell completion script.

    Enable it with e.g. ``eval "$(sprout completion bash)"``.
    """
    shell = shell or detect_completion_shell()
    completion_class = get_completion_class(shell)
    if completion_class is None:
        raise click.UsageError(f"Unsupported shell: {shell}")
    script = completion_class(
        main, {}, "sprout", "_SPROUT_COMPLETE"
    ).source()
    click.echo(script)
