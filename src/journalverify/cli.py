# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from journalverify import settings
from journalverify.errors import VerificationError
from journalverify.gather import gather_requirement
from journalverify.runner import ResultPolicy, run_verification
from journalverify.schema import load_requirement, parse_requirement, save_requirement, to_document
from journalverify.source import load_clone_url
from journalverify.ui.console import Console, get_console, set_console

EXIT_NOT_FULFILLED = 1
EXIT_FATAL = 2


def init_requirement(config_path: Path) -> None:
    """
    Collect a requirement document interactively and write it to `config_path`.

    The collected answers go through the same validation as a loaded
    document, so a bad regex or an absolute path is caught here.
    """
    console = get_console()
    requirement = gather_requirement()
    # round-trip through the schema to validate what was typed
    requirement = parse_requirement(to_document(requirement), source="<input>")
    written = save_requirement(requirement, config_path)
    console.print_info(f"Saved {len(requirement)} tag requirement(s) to {written}")


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
def cli(debug):
    """journal-verify: check a journal repository against its tag requirements."""
    # debug is carried by the console; commands read it from there
    set_console(Console(debug=debug))


@cli.command()
@click.option("--config", "config_path", default=settings.CONFIG_PATH, show_default=True, help="Requirement document (JSON)")
@click.option("--journal-dir", default=settings.JOURNAL_DIR, show_default=True, help="Local journal repository root")
@click.option("--credentials", default=settings.CREDENTIALS_PATH, show_default=True, help="Git credentials file holding the clone URL")
@click.option("--marker", default=settings.CREDENTIALS_MARKER, show_default=True, help="Case-insensitive text identifying the journal line")
@click.option("--work-dir", default=settings.WORK_DIR, show_default=True, help="Directory the fresh clone is made in")
@click.option("--timeout", default=settings.PROCESS_TIMEOUT, type=float, show_default=True, help="Seconds allowed per git command")
@click.option(
    "--result-policy",
    type=click.Choice(ResultPolicy.choices()),
    default=ResultPolicy.BOTH.value,
    show_default=True,
    help="'both': LOCAL and REMOTE must pass; 'remote-only': only the REMOTE result counts",
)
@click.option("--init/--no-init", "allow_init", default=True, help="Collect requirements interactively if the document is missing")
def run(config_path, journal_dir, credentials, marker, work_dir, timeout, result_policy, allow_init):
    """Verify the local journal and a fresh clone of it."""
    console = get_console()
    config = Path(config_path).expanduser()

    try:
        if not config.exists():
            if not allow_init:
                console.print_error(
                    "Requirement document not found",
                    f"Could not find requirement document: {config}",
                    suggestion="Create one interactively:\n  journal-verify init",
                )
                sys.exit(EXIT_FATAL)
            init_requirement(config)
            # nothing to verify on the first run
            sys.exit(EXIT_NOT_FULFILLED)

        requirement = load_requirement(config)
        console.print_run_started(
            config=str(config),
            journal_dir=str(Path(journal_dir).expanduser()),
            tag_count=len(requirement),
        )

        clone_url = load_clone_url(credentials, marker=marker)
        console.print_debug(f"clone target: {clone_url.destination_name}")

        result = run_verification(
            requirement,
            local_root=Path(journal_dir).expanduser(),
            clone_url=clone_url,
            work_dir=work_dir,
            timeout=timeout,
            policy=ResultPolicy(result_policy),
        )

        if result.success:
            console.print_success()
        else:
            console.print_not_fulfilled(result.violation_count)
            sys.exit(EXIT_NOT_FULFILLED)

    except VerificationError as e:
        console.print_fatal(e)
        sys.exit(EXIT_FATAL)
    except (KeyboardInterrupt, click.Abort):
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.option("--config", "config_path", default=settings.CONFIG_PATH, show_default=True, help="Requirement document (JSON)")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing document")
def init(config_path, force):
    """Collect a requirement document interactively."""
    console = get_console()
    config = Path(config_path).expanduser()

    if config.exists() and not force:
        console.print_error(
            "Requirement document already exists",
            f"Refusing to overwrite {config}",
            suggestion="Pass --force to replace it.",
        )
        sys.exit(EXIT_FATAL)

    try:
        init_requirement(config)
    except VerificationError as e:
        console.print_fatal(e)
        sys.exit(EXIT_FATAL)
    except (KeyboardInterrupt, click.Abort):
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.option("--config", "config_path", default=settings.CONFIG_PATH, show_default=True, help="Requirement document (JSON)")
def show(config_path):
    """Print the tags, files and pattern counts a run would verify."""
    console = get_console()
    config = Path(config_path).expanduser()

    if not config.exists():
        console.print_error(
            "Requirement document not found",
            f"Could not find requirement document: {config}",
            suggestion="Create one interactively:\n  journal-verify init",
        )
        sys.exit(EXIT_FATAL)

    try:
        requirement = load_requirement(config)
    except VerificationError as e:
        console.print_fatal(e)
        sys.exit(EXIT_FATAL)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    console.print_header(str(config))
    console.print_requirement(requirement)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
