"""URL checking commands: normalise input, probe in batches, report and export."""

from __future__ import annotations

import asyncio
import json
import signal
import sys
from pathlib import Path
from typing import List, Optional

import typer

from urlchecker.batch.classify import Bucket, filter_bucket, group_by_host, status_counts, valid_results
from urlchecker.batch.export import default_filename, to_csv, to_text
from urlchecker.batch.orchestrator import BatchProgress, CancellationToken, run_batch
from urlchecker.config import settings
from urlchecker.normalizer import normalize, parse_candidates
from urlchecker.probe.fetcher import probe_url
from urlchecker.probe.models import ProbeFunc, ProbeResult
from urlchecker.probe.remote import make_remote_probe

from cli.rendering import render_grouped, render_results, render_summary


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _read_input(urls: Optional[List[str]], file: Optional[Path]) -> str:
    """Collect raw URL text from arguments, a file, or piped stdin."""
    parts: List[str] = list(urls or [])
    if file is not None:
        if not file.is_file():
            typer.echo(f"❌ File not found: {file}")
            raise typer.Exit(code=1)
        parts.append(file.read_text(encoding="utf-8", errors="replace"))
    if not parts and not sys.stdin.isatty():
        parts.append(sys.stdin.read())
    return "\n".join(parts)


def _export_path(target: Path, kind: str) -> Path:
    """Use *target* as given, or a dated default file name inside it if it is a directory."""
    if target.is_dir():
        return target / default_filename(kind)
    return target


async def _run(
    urls: List[str],
    probe: ProbeFunc,
    batch_size: Optional[int],
    delay: Optional[float],
) -> List[ProbeResult]:
    token = CancellationToken()
    loop = asyncio.get_running_loop()

    def _cancel() -> None:
        typer.echo("[check] Cancelling after the current group …", err=True)
        token.cancel()

    try:
        loop.add_signal_handler(signal.SIGINT, _cancel)
        installed = True
    except (NotImplementedError, RuntimeError, ValueError):
        # Windows event loops / non-main threads: Ctrl-C aborts instead.
        installed = False

    def _progress(progress: BatchProgress) -> None:
        typer.echo(
            f"[check] {progress.completed}/{progress.total} ({progress.percent}%)",
            err=True,
        )

    try:
        return await run_batch(
            urls,
            probe,
            on_progress=_progress,
            cancel_token=token,
            batch_size=batch_size,
            delay=delay,
        )
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def check(
    urls: Optional[List[str]] = typer.Argument(
        None, help="URLs to check (commas or spaces separate them)."
    ),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="Text or CSV file with one URL per line."
    ),
    csv_out: Optional[Path] = typer.Option(
        None, "--csv", help="Write all results as CSV to this file or directory."
    ),
    valid_out: Optional[Path] = typer.Option(
        None, "--valid-out", help="Write 2xx/3xx URLs (redirect targets preferred) to this file or directory."
    ),
    bucket: Optional[Bucket] = typer.Option(
        None, "--filter", help="Only show results in this bucket."
    ),
    by_host: bool = typer.Option(False, "--group-by-host", help="Group results by hostname."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", help="Probe through a running API, e.g. http://127.0.0.1:8000/api/check-url."
    ),
    batch_size: Optional[int] = typer.Option(
        None, "--batch-size", min=1, help="URLs probed concurrently per group."
    ),
    delay: Optional[float] = typer.Option(
        None, "--delay", min=0.0, help="Pause between groups in seconds."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.1, help="Per-request timeout in seconds."
    ),
) -> None:
    """Check the status of a batch of URLs."""
    url_list = normalize(_read_input(urls, file))
    if not url_list:
        typer.echo("❌ No URLs found. Please enter at least one valid URL.")
        raise typer.Exit(code=1)

    typer.echo(f"[check] Checking {len(url_list)} URL(s) …", err=True)
    previous_timeout = settings.request_timeout
    if timeout is not None:
        settings.request_timeout = timeout
    try:
        probe: ProbeFunc = make_remote_probe(endpoint) if endpoint else probe_url
        results = asyncio.run(_run(url_list, probe, batch_size, delay))
    finally:
        settings.request_timeout = previous_timeout
    if len(results) < len(url_list):
        typer.echo(
            f"[check] Cancelled: {len(results)} of {len(url_list)} URL(s) checked.",
            err=True,
        )

    shown = filter_bucket(results, bucket)
    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in shown], indent=2))
    else:
        if shown:
            typer.echo(render_grouped(group_by_host(shown)) if by_host else render_results(shown))
        else:
            typer.echo("No results in this category.")
        typer.echo("")
        typer.echo("Summary:")
        typer.echo(render_summary(status_counts(results)))

    if csv_out is not None:
        path = _export_path(csv_out, "csv")
        path.write_text(to_csv(results), encoding="utf-8")
        typer.echo(f"✅ Exported {len(results)} results to {path}", err=True)

    if valid_out is not None:
        valid = valid_results(results)
        if not valid:
            typer.echo("⚠️  No valid URLs to export.", err=True)
        else:
            path = _export_path(valid_out, "text")
            path.write_text(to_text(results), encoding="utf-8")
            typer.echo(f"✅ Exported {len(valid)} valid URLs to {path}", err=True)


def parse(
    urls: Optional[List[str]] = typer.Argument(None, help="Raw URL text."),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="Text or CSV file with one URL per line."
    ),
) -> None:
    """Print the URLs that would be checked, one per line."""
    candidates = parse_candidates(_read_input(urls, file))
    valid = [c.normalized for c in candidates if c.valid]
    for candidate in candidates:
        if not candidate.valid:
            typer.echo(f"[parse] Invalid URL skipped: {candidate.normalized}", err=True)
    if not valid:
        typer.echo("❌ No URLs found. Please enter at least one valid URL.")
        raise typer.Exit(code=1)
    for url in valid:
        typer.echo(url)
    typer.echo(f"[parse] {len(valid)} valid URL(s).", err=True)
