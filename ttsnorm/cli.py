"""
Command-line interface for ttsnorm.
"""

import logging

import click
from rich.console import Console
from rich.table import Table

from ttsnorm import __version__
from ttsnorm.abbreviations import AbbreviationRuleOptions
from ttsnorm.config import DEFAULT_URL_PLACEHOLDER
from ttsnorm.currency import get_default_registry
from ttsnorm.exceptions import ConfigurationError, TTSNormError
from ttsnorm.pipeline import DEFAULT_RULE_NAMES, build_default_pipeline
from ttsnorm.text_normalization import EmojiRuleOptions, URLReplacementStrategy, UrlRuleOptions
from ttsnorm.utils import parse_key_value

console = Console()

CLI_URL_STRATEGIES = [
    s.value for s in URLReplacementStrategy if s is not URLReplacementStrategy.CUSTOM
]


def _parse_priorities(items: tuple[str, ...]) -> dict[str, int]:
    priorities = {}
    for item in items:
        name, value = parse_key_value(item)
        try:
            priorities[name] = int(value)
        except ValueError as e:
            raise ValueError(f"Priority for '{name}' must be an integer, got '{value}'") from e
    return priorities


@click.group()
@click.version_option(version=__version__, prog_name="ttsnorm")
def main():
    """
    ttsnorm - Chat text normalization for speech synthesis

    Rewrite chat messages (emoji, currency, slang, numbers, URLs) into
    text a TTS engine can read naturally.
    """


@main.command()
@click.argument("text", nargs=-1)
@click.option(
    "--url-placeholder",
    default=DEFAULT_URL_PLACEHOLDER,
    help="Text that replaces URLs with the generic strategy (default: ' link ')",
)
@click.option(
    "--url-strategy",
    type=click.Choice(CLI_URL_STRATEGIES, case_sensitive=False),
    default=URLReplacementStrategy.GENERIC.value,
    help="How URLs are replaced (default: generic)",
)
@click.option("--emoji-prefix", default=None, help='Word spoken before each emoji name, e.g. "the"')
@click.option("--emoji-suffix", default=None, help='Word spoken after each emoji name, e.g. "emoji"')
@click.option(
    "--abbreviation",
    "-a",
    "abbreviations",
    multiple=True,
    metavar="KEY=VALUE",
    help="Custom abbreviation (repeatable), e.g. -a brb='be right back'",
)
@click.option(
    "--replace-abbreviations",
    is_flag=True,
    default=False,
    help="Use only the custom abbreviations instead of merging them with the defaults",
)
@click.option(
    "--priority",
    "-p",
    "priorities",
    multiple=True,
    metavar="RULE=N",
    help="Override a rule's priority (repeatable), e.g. -p whitespace=50",
)
@click.option(
    "--skip",
    "skipped",
    multiple=True,
    type=click.Choice(DEFAULT_RULE_NAMES),
    help="Leave a rule out of the pipeline (repeatable)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging")
def normalize(
    text: tuple[str, ...],
    url_placeholder: str,
    url_strategy: str,
    emoji_prefix: str | None,
    emoji_suffix: str | None,
    abbreviations: tuple[str, ...],
    replace_abbreviations: bool,
    priorities: tuple[str, ...],
    skipped: tuple[str, ...],
    verbose: bool,
):
    """
    Normalize TEXT for speech (reads stdin when TEXT is omitted).

    Examples:

        ttsnorm normalize 'gg!!! that was $1.50 lol'

        echo "brb 5 min" | ttsnorm normalize -a min=minutes
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        custom = dict(parse_key_value(item) for item in abbreviations)
        pipeline = build_default_pipeline(
            url_options=UrlRuleOptions(placeholder=url_placeholder, strategy=url_strategy),
            emoji_options=EmojiRuleOptions(prefix=emoji_prefix, suffix=emoji_suffix),
            abbreviation_options=AbbreviationRuleOptions(
                custom_abbreviations=custom or None,
                replace_defaults=replace_abbreviations,
            ),
            priority_overrides=_parse_priorities(priorities),
            exclude=skipped,
        )

        message = " ".join(text) if text else click.get_text_stream("stdin").read()
        result = pipeline.run(message)
    except ConfigurationError as e:
        console.print(f"\n[red]Configuration Error:[/red] {e}")
        raise click.Abort() from e
    except ValueError as e:
        console.print(f"\n[red]Invalid option:[/red] {e}")
        raise click.Abort() from e
    except TTSNormError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise click.Abort() from e

    click.echo(result.text)
    if result.failed_rules:
        console.print(
            f"[yellow]Warning:[/yellow] skipped rule(s): {', '.join(result.failed_rules)}",
            highlight=False,
        )


@main.command()
@click.option("--list", "list_rules", is_flag=True, help="List the default rules in run order")
def rules(list_rules: bool):
    """
    Show the default normalization rules.

    Examples:

        ttsnorm rules --list
    """
    if not list_rules:
        console.print("Use --list to see the default rules")
        return

    pipeline = build_default_pipeline()

    table = Table(title="Default Rules")
    table.add_column("Order", style="dim", justify="right")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Priority", style="yellow", justify="right")
    table.add_column("Description", style="white")

    for index, (rule, (name, priority)) in enumerate(
        zip(pipeline.rules, pipeline.ordered_priorities), start=1
    ):
        summary = (type(rule).__doc__ or "").strip().splitlines()
        table.add_row(str(index), name, str(priority), summary[0] if summary else "")

    console.print(table)


@main.command()
@click.option("--list", "list_currencies", is_flag=True, help="List the spoken currencies")
def currencies(list_currencies: bool):
    """
    Show the currencies the currency rule can speak.

    Examples:

        ttsnorm currencies --list
    """
    if not list_currencies:
        console.print("Use --list to see the spoken currencies")
        return

    table = Table(title="Spoken Currencies")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Unit", style="white")
    table.add_column("Fraction", style="white")
    table.add_column("Symbols", style="yellow")

    for unit in get_default_registry().units:
        table.add_row(
            unit.iso_code,
            f"{unit.singular} / {unit.plural}",
            f"{unit.fraction_singular} / {unit.fraction_plural}",
            " ".join(unit.symbols) or "-",
        )

    console.print(table)


if __name__ == "__main__":
    main()
