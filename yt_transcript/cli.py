"""Command-line interface for yt-transcript using Typer.

Features:
- `fetch` command for retrieving transcripts of one or more videos and
  exporting them as txt, json, csv, srt or vtt.
- `serve` command for running the REST API with uvicorn.
- Verbose and quiet modes for logging.
"""

import asyncio
import pathlib
import sys
from typing import Annotated

import typer

from yt_transcript import __version__
from yt_transcript.config import OutputConfig
from yt_transcript.errors import TranscriptError, ValidationError
from yt_transcript.formatting import get_formatter_spec, is_supported_format, render
from yt_transcript.transcript.models import TranscriptSegment
from yt_transcript.transcript.resolver import TranscriptResolver
from yt_transcript.utils.constant import (
    API_SERVER_NAME,
    API_SERVER_PORT,
    BATCH_DELAY_SEC,
    BATCH_SIZE,
    SUPPORTED_FORMATS,
)
from yt_transcript.utils.logging_config import configure_logging, get_logger
from yt_transcript.utils.youtube_url import extract_video_id, get_url_type

logger = get_logger(__name__)

FetchResult = list[TranscriptSegment] | TranscriptError


def version_callback(value: bool) -> None:
    """Show the application's version and exit.

    Args:
        value: When True, print the version and exit.

    Raises:
        typer.Exit: Always raised after printing when value is True.

    """
    if value:
        print(f"yt-transcript version: {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="yt-transcript",
    help="A CLI for retrieving and exporting YouTube video transcripts.",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the application's version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Print help when no subcommand is given.

    Raises:
        typer.Exit: Raised to terminate after displaying help.

    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def get_resolver() -> TranscriptResolver:
    """Build the resolver used by ``fetch``; replaced in tests."""
    return TranscriptResolver.with_default_sources()


def parse_inputs(inputs: list[str]) -> tuple[list[str], list[str]]:
    """Split raw CLI inputs into video ids and rejected inputs.

    Playlist URLs and inputs without a recognisable id are rejected.
    Duplicate ids are collapsed, keeping first-seen order.

    Returns:
        ``(video_ids, rejected_inputs)``.
    """
    video_ids: list[str] = []
    rejected: list[str] = []
    for raw in inputs:
        value = raw.strip()
        if get_url_type(value) == "playlist":
            rejected.append(raw)
            continue
        video_id = extract_video_id(value)
        if video_id is None:
            rejected.append(raw)
            continue
        if video_id not in video_ids:
            video_ids.append(video_id)
    return video_ids, rejected


async def fetch_in_batches(
    resolver: TranscriptResolver,
    video_ids: list[str],
    *,
    batch_size: int = BATCH_SIZE,
    batch_delay_sec: float = BATCH_DELAY_SEC,
) -> dict[str, FetchResult]:
    """Resolve *video_ids* in concurrent batches with a pause between batches.

    Args:
        resolver: Resolver shared by every request.
        video_ids: Ids to resolve, in output order.
        batch_size: Resolutions started together per batch.
        batch_delay_sec: Pause between consecutive batches.

    Returns:
        Mapping of video id to its segments, or the ``TranscriptError`` it
        failed with.
    """
    batch_size = max(1, batch_size)
    results: dict[str, FetchResult] = {}
    for start in range(0, len(video_ids), batch_size):
        batch = video_ids[start : start + batch_size]
        logger.info(
            "Fetching batch %d (%d video(s))", start // batch_size + 1, len(batch)
        )
        outcomes = await asyncio.gather(
            *(resolver.resolve(video_id) for video_id in batch),
            return_exceptions=True,
        )
        for video_id, outcome in zip(batch, outcomes):
            if isinstance(outcome, TranscriptError):
                results[video_id] = outcome
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results[video_id] = outcome
        if start + batch_size < len(video_ids) and batch_delay_sec > 0:
            await asyncio.sleep(batch_delay_sec)
    return results


def _write_outputs(
    results: dict[str, FetchResult],
    config: OutputConfig,
    *,
    to_stdout: bool,
) -> tuple[list[pathlib.Path], dict[str, ValidationError]]:
    """Render successful results to stdout or to ``<id>.<ext>`` files.

    Returns:
        ``(written_paths, unrendered)`` where *unrendered* maps the ids whose
        segments failed validation to the error raised.
    """
    written: list[pathlib.Path] = []
    unrendered: dict[str, ValidationError] = {}
    extension = get_formatter_spec(config.output_format).file_extension
    output_dir = config.output_dir or pathlib.Path.cwd()
    for video_id, result in results.items():
        if isinstance(result, TranscriptError):
            continue
        try:
            rendered = render(result, config.output_format)
        except ValidationError as exc:
            logger.warning("Could not render transcript for %s: %s", video_id, exc)
            unrendered[video_id] = exc
            continue
        if to_stdout:
            typer.echo(rendered)
            continue
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"{video_id}{extension}"
        path.write_text(rendered, encoding="utf-8")
        logger.info("Wrote %s (%d segments)", path, len(result))
        written.append(path)
    return written, unrendered


@app.command()
def fetch(
    inputs: Annotated[
        list[str],
        typer.Argument(
            help="YouTube video URL(s) or 11-character video id(s).",
            show_default=False,
        ),
    ],
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help=f"Export format ({', '.join(SUPPORTED_FORMATS)}).",
        ),
    ] = "txt",
    output_dir: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help=(
                "Directory for '<id>.<ext>' files. Without it a single "
                "transcript is printed to stdout."
            ),
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    batch_size: Annotated[
        int,
        typer.Option("--batch-size", min=1, help="Videos fetched concurrently per batch."),
    ] = BATCH_SIZE,
    batch_delay: Annotated[
        float,
        typer.Option("--batch-delay", min=0.0, help="Seconds to pause between batches."),
    ] = BATCH_DELAY_SEC,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", help="Suppress log output."),
    ] = False,
) -> list[pathlib.Path]:
    """Fetch transcripts for the given videos and export them.

    Examples:
        # Print a transcript as plain text:
        yt-transcript fetch dQw4w9WgXcQ

        # Export several videos as SRT files:
        yt-transcript fetch -f srt -o subs https://youtu.be/dQw4w9WgXcQ jNQXAC9IVRw

    Raises:
        typer.BadParameter: If the format is not supported.
        typer.Exit: With code 1 when any input failed.
    """
    # Logs go to stderr so stdout carries only the transcript.
    configure_logging(verbose=verbose, quiet=quiet, stream=sys.stderr)

    if not is_supported_format(output_format):
        raise typer.BadParameter(
            f"Unsupported format '{output_format}'. "
            f"Choose one of: {', '.join(SUPPORTED_FORMATS)}.",
            param_hint="--format",
        )

    config = OutputConfig(
        output_format=output_format.lower(),
        output_dir=output_dir,
        batch_size=batch_size,
        batch_delay_sec=batch_delay,
    )

    video_ids, rejected = parse_inputs(inputs)
    for raw in rejected:
        reason = "playlists are not supported" if get_url_type(raw) == "playlist" else "no video id"
        typer.secho(f"Skipping '{raw}': {reason}", fg=typer.colors.YELLOW, err=True)

    results: dict[str, FetchResult] = {}
    if video_ids:
        results = asyncio.run(
            fetch_in_batches(
                get_resolver(),
                video_ids,
                batch_size=config.batch_size,
                batch_delay_sec=config.batch_delay_sec,
            )
        )

    to_stdout = config.output_dir is None and len(inputs) == 1
    written, unrendered = _write_outputs(results, config, to_stdout=to_stdout)

    failed: dict[str, TranscriptError] = {
        vid: res for vid, res in results.items() if isinstance(res, TranscriptError)
    }
    failed.update(unrendered)
    for video_id, error in failed.items():
        first_line = str(error).splitlines()[0] if str(error) else type(error).__name__
        typer.secho(f"{video_id}: {first_line}", fg=typer.colors.RED, err=True)

    logger.info(
        "Done: %d succeeded, %d failed, %d skipped",
        len(results) - len(failed),
        len(failed),
        len(rejected),
    )
    if failed or rejected:
        raise typer.Exit(code=1)
    return written


@app.command()
def serve(
    host: Annotated[
        str,
        typer.Option("--host", help="Server hostname or IP address to bind to."),
    ] = API_SERVER_NAME,
    port: Annotated[
        int,
        typer.Option("--port", help="Server port number."),
    ] = API_SERVER_PORT,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug mode with verbose logging."),
    ] = False,
) -> None:
    """Run the transcript REST API."""
    configure_logging(level="DEBUG" if debug else "INFO")

    from yt_transcript.api import create_app

    app_instance = create_app()

    import uvicorn

    logger.info("Starting API server on %s:%d", host, port)
    uvicorn.run(
        app_instance,
        host=host,
        port=port,
        log_level="debug" if debug else "info",
    )


def main() -> None:
    """Run the yt-transcript CLI."""
    app()


if __name__ == "__main__":
    main()
