# pngcompare/aggregate.py
"""
Filters png-compare result directories by score and copies the selected
artifacts into a mirrored tree.
"""

from enum import Enum, Flag
from pathlib import Path
from typing import Dict, List, Sequence, Union
import shutil
import logging

from pngcompare.config import (
    ABSDIFF_RGB, ABSDIFF_HSV, THRESHOLD_MASK, INFO_FILE, COMMAND_FILE,
)
from pngcompare.record import parse_info

logging.basicConfig(level=logging.INFO)


class ScoreFilter(Enum):
    LESS = "less"
    MORE = "more"

    def accepts(self, score: float, threshold: float) -> bool:
        if self is ScoreFilter.LESS:
            return score <= threshold
        return score >= threshold


class DiffFlags(Flag):
    NONE = 0
    RGB = 1
    HSV = 2
    MASK = 4
    ALL = RGB | HSV | MASK


_DIFF_FILES = (
    (DiffFlags.RGB, ABSDIFF_RGB),
    (DiffFlags.HSV, ABSDIFF_HSV),
    (DiffFlags.MASK, THRESHOLD_MASK),
)

_FLAG_NAMES = {
    "rgb": DiffFlags.RGB,
    "hsv": DiffFlags.HSV,
    "mask": DiffFlags.MASK,
}


def parse_diff_flags(text: str) -> DiffFlags:
    """Comma separated rgb/hsv/mask. Unknown tokens are skipped; nothing valid means all."""
    flags = DiffFlags.NONE
    for token in text.split(","):
        try:
            flags |= _FLAG_NAMES[token.strip()]
        except KeyError:
            logging.error(f"Invalid diff flag option {token}")
    if flags in (DiffFlags.NONE, DiffFlags.ALL):
        return DiffFlags.ALL
    return flags


def select_files(names: Sequence[str], flags: DiffFlags, exclude_inputs: bool) -> List[str]:
    files = [INFO_FILE]
    files += [filename for flag, filename in _DIFF_FILES if flag in flags]
    if not exclude_inputs:
        files += list(names)
    return files


def collect_entries(input_dir: Union[str, Path], score_filter: ScoreFilter, threshold: float,
                    flags: DiffFlags = DiffFlags.ALL,
                    exclude_inputs: bool = False) -> Dict[Path, List[str]]:
    """Map each qualifying result directory to the file names to copy from it."""
    entries = {}
    for entry in sorted(Path(input_dir).iterdir()):
        if not entry.is_dir():
            continue
        info_file = entry / INFO_FILE
        if not info_file.is_file():
            logging.warning(f"Couldn't find {info_file}")
            continue
        try:
            name1, name2, score = parse_info(info_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logging.warning(f"Failed to read file {info_file}: {e}")
            continue
        if score_filter.accepts(score, threshold):
            entries[entry] = select_files((name1, name2), flags, exclude_inputs)
    return entries


def _copy_if_newer(source: Path, target: Path):
    if target.exists() and target.stat().st_mtime >= source.stat().st_mtime:
        return
    shutil.copy2(source, target)


def copy_entries(entries: Dict[Path, List[str]], output_dir: Union[str, Path],
                 dry_run: bool = False):
    output_dir = Path(output_dir)
    for source_dir, filenames in entries.items():
        result_dir = output_dir / source_dir.name
        if not result_dir.is_dir():
            if dry_run:
                logging.info(f"Create directory {result_dir}")
            else:
                result_dir.mkdir(parents=True)
        for filename in filenames:
            source = source_dir / filename
            target = result_dir / filename
            if dry_run:
                logging.info(f"Copy {source} to {target}")
            else:
                _copy_if_newer(source, target)


def write_command_record(output_dir: Union[str, Path], argv: Sequence[str]) -> Path:
    command_file = Path(output_dir) / COMMAND_FILE
    with open(command_file, "w", encoding="utf-8") as f:
        f.write("Command used: " + "".join(f"{arg} " for arg in argv))
    return command_file
