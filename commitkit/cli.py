#!/usr/bin/env python3
import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import DEFAULT_CONFIG_FILENAME, Config
from .core import GitCommitter
from .errors import DraftRejected
from .git import has_staged_changes
from .hooks import prepare_commit_message, validate_message_file
from .models import Draft
from .observers import ConsoleLogObserver, FileLogObserver
from .prompt import Prompter, RichPrompter, collect_draft
from .stats import CommitAnalyzer
from .templates import TemplateStore, resolve

console = Console()


def get_prompter() -> Prompter:
    return RichPrompter(console)


def show_config(config: Config, config_path: Optional[Path]) -> None:
    """Print the effective settings and where each one came from."""
    file_data = Config.read_file_data(config_path) if config_path else {}
    env_data = Config.env_values()

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path:
        console.print(f"[dim]Config file: {config_path.as_posix()}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<20} {'Value':<40} {'Source':<10}")
    console.print("-" * 72)

    values = {
        "prefixes": ", ".join(config.prefix_titles),
        "scopes": ", ".join(config.scopes) or "(any)",
        "max_subject_len": config.max_subject_len,
        "min_subject_len": config.min_subject_len,
        "sign_off_commits": config.sign_off_commits,
        "use_emoji": config.use_emoji,
        "templates_dir": config.templates_dir or "None",
        "update_changelog": config.update_changelog,
        "changelog_file": config.changelog_file,
    }
    for name, value in values.items():
        if name in file_data:
            source = "config"
        elif name in env_data:
            source = "env"
        else:
            source = "default"
        console.print(f"{name:<20} {str(value):<40} {source:<10}", markup=False)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


def show_templates(config: Config) -> None:
    templates = TemplateStore(config.templates_dir).list()

    table = Table(title="Commit templates")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Placeholders", style="dim")
    for template in templates:
        table.add_row(template.name, template.description, ", ".join(template.placeholders()))
    console.print(table)


def draft_from_template(name: str, config: Config, prompter: Prompter) -> Draft:
    """Ask for every placeholder of a template and resolve it."""
    store = TemplateStore(config.templates_dir)
    values = {key: prompter.prompt_value(key) for key in store.get(name).placeholders()}
    return resolve(name, values, config, loader=store.read_raw)


@click.command()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Config file to use instead of {DEFAULT_CONFIG_FILENAME}",
)
@click.option(
    "-d", "--dry-run", is_flag=True, help="Show the commit message without committing"
)
@click.option("-v", "--verbose", is_flag=True, help="Show progress details")
@click.option(
    "--emoji/--no-emoji",
    default=None,
    help="Prefix the header with the emoji for its type (overrides config setting)",
)
@click.option(
    "-s",
    "--sign-off/--no-sign-off",
    default=None,
    help="Add a Signed-off-by trailer (overrides config setting)",
)
@click.option("-t", "--template", help="Start the message from a named template")
@click.option("--list-templates", is_flag=True, help="List the available templates")
@click.option(
    "--changelog",
    is_flag=True,
    help="Add the commit to the changelog (overrides config setting)",
)
@click.option(
    "--install-hooks", is_flag=True, help="Install the commit-msg and prepare-commit-msg hooks"
)
@click.option("--force", is_flag=True, help="Replace existing hooks not installed by commitkit")
@click.option("--stats", is_flag=True, help="Display commit statistics")
@click.option("--days", type=click.IntRange(min=1), help="Limit statistics to the past N days")
@click.option(
    "--validate",
    "validate_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Validate a commit message file (used by the commit-msg hook)",
)
@click.option(
    "--prepare-msg",
    help="Print a conventional version of a message (used by the prepare-commit-msg hook)",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "--init-config", is_flag=True, help=f"Write a default {DEFAULT_CONFIG_FILENAME} to the repository"
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log git operations",
)
@click.option(
    "--no-verify",
    is_flag=True,
    help="Skip commit hooks when creating the commit",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    path: Path,
    config_file: Optional[Path],
    dry_run: bool,
    verbose: bool,
    emoji: Optional[bool],
    sign_off: Optional[bool],
    template: Optional[str],
    list_templates: bool,
    changelog: bool,
    install_hooks: bool,
    force: bool,
    stats: bool,
    days: Optional[int],
    validate_file: Optional[Path],
    prepare_msg: Optional[str],
    config_list: bool,
    init_config: bool,
    log_file: Optional[Path],
    no_verify: bool,
    version: bool,
):
    """
    Build Conventional Commits messages interactively and commit them.

    This tool will:
    1. Ask for the commit type, scope, subject, body and footer
    2. Validate the message against your configured rules
    3. Commit the staged changes with the rendered message
    4. Optionally add the commit to your changelog

    Configuration can be set in .commitkit.toml in the repository root or
    your home directory. Command line options override configuration file
    settings.
    """
    try:
        if version:
            from .version import display_version_info

            display_version_info(console)
            return

        repo_path = path.absolute()

        if init_config:
            config_path = repo_path / DEFAULT_CONFIG_FILENAME
            if config_path.exists():
                console.print(f"[yellow]Config file already exists: {config_path}[/yellow]")
                return
            Config().save(repo_path)
            console.print(f"[green]Created config file with default values:[/green] {config_path}")
            return

        config = Config.load(repo_path, config_file)
        config = config.with_overrides(
            use_emoji=emoji,
            update_changelog=True if changelog else None,
        )

        # Hook modes print plain text only
        if validate_file is not None:
            errors = validate_message_file(validate_file, config)
            for error in errors:
                click.echo(f"✗ {error.message}", err=True)
            sys.exit(1 if errors else 0)

        if prepare_msg is not None:
            click.echo(prepare_commit_message(prepare_msg, config))
            return

        if config_list:
            show_config(config, config_file or Config.find_config_file(repo_path))
            return

        if list_templates:
            show_templates(config)
            return

        if stats:
            analyzer = CommitAnalyzer(repo_path)
            console.print(analyzer.get_type_summary(config, days), markup=False)
            return

        committer = GitCommitter(str(repo_path), console, no_verify=no_verify)
        committer.add_observer(ConsoleLogObserver(console))
        if log_file is not None:
            committer.add_observer(FileLogObserver(str(log_file)))

        if install_hooks:
            if not asyncio.run(committer.install_hooks(force=force)):
                raise click.Abort()
            return

        if not dry_run and not has_staged_changes(committer.repo):
            console.print(
                "[yellow]No staged changes to commit. Stage your changes with 'git add' first.[/yellow]"
            )
            return

        prompter = get_prompter()
        draft = Draft.for_config(config)
        if sign_off is not None:
            draft.sign_off = sign_off

        if template:
            if verbose:
                console.print(f"[dim]Using template '{template}' from {config.templates_dir}[/dim]")
            draft.merge(draft_from_template(template, config, prompter))

        try:
            draft = collect_draft(prompter, config, draft)
        except DraftRejected as e:
            console.print(f"[red]{e}[/red]")
            raise click.Abort()

        message = committer.render(draft, config)
        console.print(Panel(Text(message), title="Commit message", border_style="blue"))

        if dry_run:
            console.print("[dim]Dry run: no commit created[/dim]")
            return

        if not prompter.confirm("Create this commit?"):
            console.print("[yellow]Commit cancelled[/yellow]")
            return

        if not asyncio.run(committer.commit(message)):
            raise click.Abort()

        if config.update_changelog:
            if verbose:
                console.print(f"[dim]Updating {config.changelog_file}[/dim]")
            asyncio.run(committer.update_changelog(draft, config))

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
    except click.Abort:
        raise
    except Exception as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    main()
