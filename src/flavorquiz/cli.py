"""CLI entry point for FlavorQuiz."""

import logging
from pathlib import Path
from typing import Optional

import click


def _options(lenient: bool, close_threshold: Optional[float], accept_threshold: Optional[float]):
    from flavorquiz.config.settings import ComparisonOptions, Settings

    base = Settings.load().comparison.model_dump()
    if lenient:
        base["strict_flavors"] = False
    if close_threshold is not None:
        base["close_threshold"] = close_threshold
    if accept_threshold is not None:
        base["accept_threshold"] = accept_threshold
    try:
        return ComparisonOptions(**base)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _echo_result(result) -> None:
    from flavorquiz.engine.feedback import format_feedback

    click.echo(format_feedback(result).render())
    click.echo(f"  status: {result.status.value}")
    click.echo(f"  similarity: {result.similarity:.3f}")
    click.echo(f"  award: {result.award}")
    if result.match is not None:
        click.echo(f"  match: {result.match_type.value} (x{result.xp_multiplier})")
    if result.matched_level is not None:
        click.echo(f"  level: {result.matched_level.value}")
        click.echo(f"  shared: {', '.join(result.shared_categories)}")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log comparison details to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """FlavorQuiz: flavor-name answer grading for store training."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("user_answer")
@click.argument("correct_answer")
@click.option("--lenient", is_flag=True, help="Disable forbidden flavor confusion checks")
@click.option("--close-threshold", type=float, default=None)
@click.option("--accept-threshold", type=float, default=None)
@click.pass_context
def check(ctx, user_answer, correct_answer, lenient, close_threshold, accept_threshold) -> None:
    """Grade USER_ANSWER against CORRECT_ANSWER."""
    from flavorquiz.engine.comparator import compare

    options = _options(lenient, close_threshold, accept_threshold)
    if ctx.obj.get("verbose"):
        options = options.model_copy(update={"log_details": True})
    _echo_result(compare(user_answer, correct_answer, options))


@main.command()
@click.argument("user_answer")
@click.argument("expected_answer")
@click.option("--question", "-q", default="", help="Question text used to infer specificity")
@click.option("--taxonomy", "-t", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Product taxonomy CSV/TSV/YAML file")
@click.option("--lenient", is_flag=True, help="Disable forbidden flavor confusion checks")
@click.pass_context
def reverse(ctx, user_answer, expected_answer, question, taxonomy, lenient) -> None:
    """Grade a reverse question, accepting products in the same category."""
    from flavorquiz.config.settings import Settings
    from flavorquiz.engine.comparator import compare_with_hierarchical_category
    from flavorquiz.engine.taxonomy_loader import load_taxonomy

    options = _options(lenient, None, None)
    if ctx.obj.get("verbose"):
        options = options.model_copy(update={"log_details": True})

    path = taxonomy or Settings.load().get_taxonomy_path()
    try:
        database = load_taxonomy(path) if path is not None else None
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not load taxonomy: {e}")

    _echo_result(compare_with_hierarchical_category(
        user_answer, expected_answer, question, database, options
    ))


@main.command()
@click.argument("question")
def level(question: str) -> None:
    """Show the specificity level inferred from QUESTION."""
    from flavorquiz.engine.taxonomy import detect_level

    click.echo(detect_level(question).value)


@main.command()
def flavors() -> None:
    """List flavor pairs that must never be confused."""
    from flavorquiz.engine.tables import get_flavor_distinctions

    for name, rule in get_flavor_distinctions().items():
        click.echo(f"  {name}: not {', '.join(rule.forbidden)}")


@main.command()
def variations() -> None:
    """List accepted spelling variants."""
    from flavorquiz.engine.tables import get_spelling_variations

    for canonical, variants in get_spelling_variations().items():
        click.echo(f"  {canonical}: {', '.join(variants)}")


@main.command()
def serve() -> None:
    """Run the JSON-lines grading server on stdin/stdout."""
    import asyncio

    from flavorquiz.server.__main__ import main as server_main

    asyncio.run(server_main())
