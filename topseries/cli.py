"""Command-line entry point for TopSeries.

Ties everything together for one fetch cycle:

    1. Loads config from environment variables
    2. Creates the catalog and video platform sessions
    3. Runs a cycle through ShowBrowserState (catalog query + enrichment)
    4. Validates the enriched list and logs the summary
    5. Prints the result as JSON on stdout

All logging is structured JSON on stderr so stdout stays parseable.
"""

from __future__ import annotations

import json
import logging
import sys
from functools import partial

import click

from topseries.config import load_config
from topseries.fetchers.http_client import create_session, create_video_session
from topseries.fetchers.orchestrator import fetch_top_shows
from topseries.fetchers.tmdb_client import TMDBClient
from topseries.fetchers.youtube_client import YouTubeClient
from topseries.models import TimeWindow
from topseries.state import ShowBrowserState
from topseries.validation.validators import validate_shows

logger = logging.getLogger(__name__)


class _JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Serialize the log record to a JSON string."""
        return json.dumps({
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }, ensure_ascii=False)


def configure_logging(verbose: bool = False) -> None:
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(h.formatter, _JSONFormatter) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_JSONFormatter())
        root.addHandler(handler)


def _emit(payload: dict) -> None:
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@click.command()
@click.option(
    "--window",
    "time_window",
    type=click.Choice([w.value for w in TimeWindow]),
    default=TimeWindow.WEEK.value,
    show_default=True,
    help="Trending window; 'month' uses the discovery query",
)
@click.option("--verbose", is_flag=True, help="Log every request at DEBUG level")
def main(time_window: str, verbose: bool) -> None:
    """Print the top trending TV shows with trailers and providers."""
    configure_logging(verbose)

    try:
        catalog_config, youtube_config = load_config()
    except ValueError as exc:
        logger.error("Configuration error: %s", exc)
        _emit({"error": str(exc)})
        sys.exit(1)

    client = TMDBClient(create_session(catalog_config), catalog_config)
    youtube = YouTubeClient(create_video_session(youtube_config), youtube_config)
    state = ShowBrowserState(partial(fetch_top_shows, client, youtube))

    window = TimeWindow(time_window)
    state.refresh(window)
    snapshot = state.snapshot()

    if snapshot.error is not None:
        _emit({"time_window": window.value, "error": str(snapshot.error)})
        sys.exit(1)

    validation = validate_shows(snapshot.shows)
    for error in validation.errors:
        logger.warning("Invalid result: %s", error)

    _emit({
        "time_window": window.value,
        "shows": [show.to_dict() for show in snapshot.shows],
        "warnings": list(validation.warnings),
    })


if __name__ == "__main__":
    main()
