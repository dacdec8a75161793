"""CLI entry point for llmhub.

Provides ``llmhub models``, ``llmhub provider``, ``llmhub resolve`` and
``llmhub clean-cache`` subcommands.

Follows Function Core / Imperative Shell:
- Pure functions: format_model_table, describe_client
- Click commands: main, models, provider, resolve, clean_cache
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING

import click

from llmhub.errors import LLMHubError
from llmhub.models import ProviderKind
from llmhub.registry import MODEL_TO_PROVIDER, get_model_provider, models_for_provider
from llmhub.tracing import (
    LLMHUB_OTEL_EXPORTER_ENV,
    ExporterType,
    init_tracing,
    resolve_tracing,
    shutdown_tracing,
)

if TYPE_CHECKING:
    from llmhub.llm_clients import LLMClient

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


# ---------------------------------------------------------------------------
# Pure functions
# ---------------------------------------------------------------------------


def format_model_table(models: list[str]) -> str:
    """Format flat model names with their provider, one per line."""
    if not models:
        return ""
    width = max(len(m) for m in models)
    return "\n".join(f"{m.ljust(width)}  {MODEL_TO_PROVIDER[m].value}" for m in models)


def describe_client(client: LLMClient) -> dict[str, str | bool]:
    """Summarize a resolved client as a JSON-friendly dict."""
    return {
        "client": type(client).__name__,
        "provider": client.kind.value,
        "model_name": client.model_name,
        "caching": client.caching_active,
    }


# ---------------------------------------------------------------------------
# Click commands
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="llmhub")
@click.option(
    "--trace-exporter",
    type=click.Choice([e.value for e in ExporterType]),
    default=None,
    help=f"Span exporter for this run. Defaults to ${LLMHUB_OTEL_EXPORTER_ENV}.",
)
@click.pass_context
def main(ctx: click.Context, trace_exporter: str | None) -> None:
    """llmhub: resolve model identifiers into LLM clients."""
    try:
        settings = resolve_tracing(ExporterType(trace_exporter) if trace_exporter else None)
    except ValueError as e:
        raise click.UsageError(str(e)) from None

    if settings.enabled:
        init_tracing(settings)
        ctx.call_on_close(shutdown_tracing)


@main.command()
@click.option(
    "--provider",
    "provider_name",
    type=click.Choice([k.value for k in ProviderKind if k is not ProviderKind.GENERIC]),
    default=None,
    help="Only list models served by this provider.",
)
@click.option("--json", "output_json", is_flag=True, help="Machine-readable JSON output.")
def models(provider_name: str | None, output_json: bool) -> None:
    """List supported flat model names."""
    if provider_name:
        names = models_for_provider(ProviderKind(provider_name))
    else:
        names = list(MODEL_TO_PROVIDER)

    if output_json:
        click.echo(json.dumps({n: MODEL_TO_PROVIDER[n].value for n in names}, indent=2))
    else:
        click.echo(format_model_table(names))


@main.command()
@click.argument("model_name")
def provider(model_name: str) -> None:
    """Print the provider of a flat model name."""
    kind = get_model_provider(model_name)
    if kind is None:
        click.echo(f"Unknown model: {model_name}", err=True)
        sys.exit(EXIT_FAILURE)
    click.echo(kind.value)


@main.command()
@click.argument("model")
@click.option("--json", "output_json", is_flag=True, help="Machine-readable JSON output.")
def resolve(model: str, output_json: bool) -> None:
    """Show which client a model identifier resolves to.

    No request is sent and no credentials are needed.
    """
    from llmhub.provider import LLMProvider

    with LLMProvider() as llm_provider:
        try:
            client = llm_provider.get_client(model)
        except LLMHubError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(EXIT_FAILURE)

    summary = describe_client(client)
    if output_json:
        click.echo(json.dumps(summary, indent=2))
    else:
        click.echo(f"Client: {summary['client']}")
        click.echo(f"Provider: {summary['provider']}")
        click.echo(f"Model: {summary['model_name']}")


@main.command("clean-cache")
@click.argument("request_id")
def clean_cache(request_id: str) -> None:
    """Delete cached responses recorded for REQUEST_ID."""
    from llmhub.cache import get_cache_path
    from llmhub.provider import LLMProvider

    cache_path = get_cache_path()
    if cache_path is None or not cache_path.exists():
        click.echo("No cache available. Set LLMHUB_CACHE_PATH to an existing cache file.", err=True)
        sys.exit(EXIT_FAILURE)

    with LLMProvider(enable_caching=True, cache_path=cache_path) as llm_provider:
        cache = llm_provider.cache
        before = cache.count(request_id)
        llm_provider.clean_request_cache(request_id)

    click.echo(f"Removed {before} cache entries for request {request_id}")
