"""CLI interface for dailyphrase"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click

from dailyphrase.application.generation_job import PhraseGenerationJob
from dailyphrase.application.phrase_service import PhraseService
from dailyphrase.infrastructure.cache import EphemeralCache
from dailyphrase.infrastructure.config.config_manager import ConfigManager, ConfigurationError
from dailyphrase.infrastructure.llm.base import LLMProvider
from dailyphrase.infrastructure.llm.factory import LLMProviderFactory
from dailyphrase.infrastructure.log_format import JsonFormatter
from dailyphrase.infrastructure.storage.repository import PhraseRepository, create_db_engine

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    if json_logs:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(JsonFormatter())
    logging.getLogger().setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def _load_config(ctx) -> ConfigManager:
    try:
        return ConfigManager(config_path=ctx.obj.get("config_path"))
    except ConfigurationError as e:
        _die(str(e), verbose=ctx.obj.get("verbose", False), exc=e)


def _create_repository(config_manager: ConfigManager) -> PhraseRepository:
    db_config = config_manager.get_database_config()
    return PhraseRepository(create_db_engine(db_config.url, echo=db_config.echo))


def _create_llm_provider(
    config_manager: ConfigManager,
    provider_override: Optional[str],
    verbose: bool,
) -> LLMProvider:
    """Create LLM provider from config

    Args:
        config_manager: Configuration manager
        provider_override: Optional provider override from CLI
        verbose: Verbose mode for error reporting

    Returns:
        LLM provider instance
    """
    llm_config = config_manager.get_llm_config()
    provider_type = provider_override or llm_config.provider
    logger.info(f"Using LLM provider: {provider_type}")

    provider_config = llm_config.model_dump(exclude={"provider"})
    try:
        return LLMProviderFactory.create(provider_type, provider_config)
    except ValueError as e:
        _die(str(e), verbose=verbose, exc=e)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .dailyphrase.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, json_logs: bool, config: Path):
    """dailyphrase - a positive phrase every day"""
    ctx.ensure_object(dict)
    setup_logging(verbose, json_logs)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command("init-db")
@click.pass_context
def init_db(ctx):
    """Create the phrase table if it does not exist."""
    config_manager = _load_config(ctx)
    try:
        _create_repository(config_manager).create_schema()
    except Exception as e:
        _die(f"Failed to initialize database: {e}", verbose=ctx.obj.get("verbose", False), exc=e)
    click.echo("Database ready")


@cli.command()
@click.option(
    "--provider",
    type=str,
    help="LLM provider to use (mock, gemini). Overrides config.",
)
@click.pass_context
def generate(ctx, provider: str):
    """Generate one phrase and add it to the pool."""
    verbose = ctx.obj.get("verbose", False)
    config_manager = _load_config(ctx)
    llm_provider = _create_llm_provider(config_manager, provider, verbose)
    repository = _create_repository(config_manager)
    try:
        repository.create_schema()
    except Exception as e:
        _die(f"Failed to initialize database: {e}", verbose=verbose, exc=e)

    job = PhraseGenerationJob(
        llm_provider=llm_provider,
        repository=repository,
        retry_config=config_manager.get_retry_config(),
    )
    result = asyncio.run(job.run())

    if not result.success:
        _die(
            f"Failed to generate phrase after {result.attempts} attempt(s): {result.error}",
            verbose=verbose,
            exc=result.error,
        )

    click.echo(f"[{result.data.category}] {result.data.message}")
    click.echo(f"Phrase stored ({result.attempts} attempt(s), {result.total_time_ms}ms)")


@cli.command()
@click.pass_context
def phrase(ctx):
    """Show the next phrase in the rotation.

    The in-memory cache only lives for this process, so every run advances
    the rotation. Long-running hosts keep one PhraseService to serve the
    same phrase for the whole cache window.
    """
    verbose = ctx.obj.get("verbose", False)
    config_manager = _load_config(ctx)
    cache = EphemeralCache(duration=config_manager.get_cache_config().duration)
    service = PhraseService(_create_repository(config_manager), cache)

    try:
        current = service.get_daily_phrase()
    except Exception as e:
        _die(f"Error fetching phrase: {e}", verbose=verbose, exc=e)

    if current is None:
        _die("No phrases available yet. Please try again later.")

    click.echo(f"[{current.category}] {current.message}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
