"""CLI for the OpenAI API client."""

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import click

from .client import Client
from .config import ClientConfig, create_example_config, load_default_config
from .exceptions import OpenAIError
from .models import ChatRole
from .request_config import ChatConfig, CompletionConfig


def _load_config(config: Path | None) -> ClientConfig:
    if config:
        return ClientConfig.from_json_file(str(config))

    client_config = load_default_config()
    if client_config is None:
        click.echo(
            "Error: No configuration found. Set OPENAI_API_KEY or use --config.",
            err=True,
        )
        sys.exit(1)
    return client_config


def _run(ctx: click.Context, operation: Callable[[Client], Awaitable[Any]]) -> Any:
    """Run ``operation`` against a client built from the command's config."""

    async def runner() -> Any:
        async with Client.from_config(ctx.obj["config"]) as client:
            return await operation(client)

    try:
        return asyncio.run(runner())
    except OpenAIError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to configuration file (JSON)",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None) -> None:
    """OpenAI API client - list models, complete prompts and chat."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


def _require_config(ctx: click.Context) -> None:
    try:
        ctx.obj["config"] = _load_config(ctx.obj["config_path"])
    except OpenAIError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def models(ctx: click.Context) -> None:
    """List available models."""
    _require_config(ctx)
    for info in _run(ctx, lambda client: client.models()):
        click.echo(f"{info.id}\t{info.owned_by}")


@cli.command()
@click.argument("model_id")
@click.pass_context
def model(ctx: click.Context, model_id: str) -> None:
    """Show information about MODEL_ID."""
    _require_config(ctx)
    info = _run(ctx, lambda client: client.model(model_id))
    click.echo(json.dumps(info.model_dump(), indent=2))


@cli.command()
@click.argument("prompt")
@click.option("--model", "-m", "model_name", help="Model to use")
@click.option("--max-tokens", type=int, help="Maximum number of tokens to generate")
@click.option("--temperature", "-t", type=float, help="Sampling temperature")
@click.option("--top-p", type=float, help="Nucleus sampling probability mass")
@click.option("--n", "n", type=int, help="Number of completions")
@click.option("--stop", multiple=True, help="Stop sequence (repeatable)")
@click.option("--echo/--no-echo", default=None, help="Echo the prompt")
@click.pass_context
def complete(
    ctx: click.Context,
    prompt: str,
    model_name: str | None,
    max_tokens: int | None,
    temperature: float | None,
    top_p: float | None,
    n: int | None,
    stop: tuple[str, ...],
    echo: bool | None,
) -> None:
    """Complete PROMPT."""
    builder = CompletionConfig.builder().prompt(prompt)
    if model_name:
        builder = builder.model(model_name)
    if max_tokens is not None:
        builder = builder.max_tokens(max_tokens)
    if temperature is not None:
        builder = builder.temperature(temperature)
    if top_p is not None:
        builder = builder.top_p(top_p)
    if n is not None:
        builder = builder.n(n)
    if stop:
        builder = builder.stop(stop)
    if echo is not None:
        builder = builder.echo(echo)

    _require_config(ctx)
    completion = _run(ctx, lambda client: client.complete_prompt(builder))
    for choice in completion.choices:
        click.echo(choice.text)


@cli.command()
@click.argument("messages", nargs=-1, required=True)
@click.option("--system", "-s", help="System message sent before the conversation")
@click.option("--model", "-m", "model_name", help="Model to use")
@click.option("--max-tokens", type=int, help="Maximum number of tokens to generate")
@click.option("--temperature", "-t", type=float, help="Sampling temperature")
@click.pass_context
def chat(
    ctx: click.Context,
    messages: tuple[str, ...],
    system: str | None,
    model_name: str | None,
    max_tokens: int | None,
    temperature: float | None,
) -> None:
    """Send MESSAGES as consecutive user turns and print the answer."""
    conversation = [(ChatRole.USER, message) for message in messages]
    if system:
        conversation.insert(0, (ChatRole.SYSTEM, system))

    builder = ChatConfig.builder().messages(conversation)
    if model_name:
        builder = builder.model(model_name)
    if max_tokens is not None:
        builder = builder.max_tokens(max_tokens)
    if temperature is not None:
        builder = builder.temperature(temperature)

    _require_config(ctx)
    answer = _run(ctx, lambda client: client.chat(builder))
    click.echo(answer.content)


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Show the configuration commands will use."""
    _require_config(ctx)
    client_config: ClientConfig = ctx.obj["config"]

    click.echo(f"Configuration: {ctx.obj['config_path'] or 'default'}")
    click.echo(f"  API Key: {client_config.masked_api_key()}")
    click.echo(f"  Base URL: {client_config.base_url}")
    timeout = f"{client_config.timeout}s" if client_config.timeout else "none"
    click.echo(f"  Timeout: {timeout}")
    click.echo(f"  Log level: {client_config.log_level}")
    click.echo(f"  Log dir: {client_config.log_dir or 'none'}")


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default="openai_api_config.json",
    show_default=True,
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Create a new configuration file with examples."""
    if output.exists():
        if not click.confirm(f"File {output} already exists. Overwrite?"):
            click.echo("Cancelled.")
            return

    try:
        create_example_config().save_to_file(str(output))
    except OSError as e:
        click.echo(f"Error creating config file: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created configuration file: {output}")
    click.echo(f"Edit {output} and add your API key.")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
