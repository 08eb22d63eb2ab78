# pngcompare/cli.py
"""
Command line entry points: png-compare and aggregate.
"""

from pathlib import Path
import sys
import click
import cv2
import logging

from pngcompare.aggregate import (
    ScoreFilter, collect_entries, copy_entries, parse_diff_flags, write_command_record,
)
from pngcompare.compare import compare_files
from pngcompare.config import DEFAULT_DIFF_FLAGS, DEFAULT_SCORE_FILTER, DEFAULT_THRESHOLD
from pngcompare.ssim_engine import InvalidComparisonError

logging.basicConfig(level=logging.INFO)


class _Command(click.Command):
    """Usage errors exit with 1 instead of click's default 2."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _quiet_opencv():
    cv2.utils.logging.setLogLevel(cv2.utils.logging.LOG_LEVEL_WARNING)


@click.command("png-compare", cls=_Command)
@click.argument("image1", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("image2", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
def compare_cmd(image1: Path, image2: Path, output_dir: Path) -> None:
    """Compute the SSIM of IMAGE1 and IMAGE2 and store diff images in OUTPUT_DIR."""
    if not output_dir.is_dir():
        logging.info(f"Creating directory {output_dir}")
        try:
            output_dir.mkdir()
        except OSError as e:
            click.echo(f"error: Failed to create output directory! {e}", err=True)
            sys.exit(1)

    _quiet_opencv()
    try:
        result = compare_files(image1, image2, output_dir)
    except (InvalidComparisonError, OSError) as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Similarity: {result.score:.2f}")


@click.command("aggregate", cls=_Command)
@click.option("-i", "--input", "input_dir", required=True,
              type=click.Path(path_type=Path),
              help="Directory containing image comparison results.")
@click.option("-o", "--output", "output_dir", required=True,
              type=click.Path(file_okay=False, path_type=Path),
              help="Directory to store aggregate results in.")
@click.option("-s", "--score-filter", default=DEFAULT_SCORE_FILTER, show_default=True,
              help="Only include outputs with a score above/below 'threshold' (less|more).")
@click.option("-d", "--diff-flags", default=DEFAULT_DIFF_FLAGS, show_default=True,
              help="Comma separated list of diff image types to include (rgb,hsv,mask).")
@click.option("-t", "--threshold", default=DEFAULT_THRESHOLD, type=float, show_default=True,
              help="Score threshold to compare against.")
@click.option("--exclude-inputs", is_flag=True,
              help="Exclude source input images (only computed diff images are included).")
@click.option("--dry-run", is_flag=True, help="Print copy actions without actually copying.")
def aggregate_cmd(input_dir: Path, output_dir: Path, score_filter: str, diff_flags: str,
                  threshold: float, exclude_inputs: bool, dry_run: bool) -> None:
    """Filter results created by png-compare based on similarity score."""
    if not input_dir.is_dir():
        click.echo(f"error: Invalid directory: {input_dir}", err=True)
        sys.exit(1)
    try:
        score_filter = ScoreFilter(score_filter)
    except ValueError:
        click.echo(f"error: Invalid filter type {score_filter!r}", err=True)
        sys.exit(1)

    flags = parse_diff_flags(diff_flags)
    entries = collect_entries(input_dir, score_filter, threshold, flags, exclude_inputs)
    try:
        copy_entries(entries, output_dir, dry_run=dry_run)
        if entries and not dry_run:
            write_command_record(output_dir, sys.argv)
    except OSError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
    logging.info(f"Aggregated {len(entries)} result(s) into {output_dir}")
