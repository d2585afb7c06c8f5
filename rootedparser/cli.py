"""Command that turns an index of filings into a JSON file of records."""

from __future__ import annotations

import argparse
import csv
import json
import math
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from tqdm import tqdm

from .builder import build_record
from .forms import ReturnParseError, parse_return
from .records import FullFilingRecord

_DLN_COLUMN = 7
_OBJECT_ID_COLUMN = 8
_BATCH_COLUMN = 9

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class ProcessResult:
    """Records built from an index and the errors met on the way."""

    records: List[FullFilingRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    requested: int = 0

    @property
    def success_rate(self) -> float:
        if self.requested == 0:
            return math.nan
        return len(self.records) / self.requested * 100


def xml_path(base_dir: PathLike, row: Sequence[str]) -> Path:
    """Location of the return document named by an index row."""
    return Path(base_dir) / row[_BATCH_COLUMN] / f"{row[_OBJECT_ID_COLUMN]}_public.xml"


def read_index(path: PathLike) -> List[List[str]]:
    """Read every row of the index CSV, header included.

    All rows must have as many fields as the first one.
    """
    with open(path, newline="", encoding="utf-8") as handle:
        try:
            rows = [row for row in csv.reader(handle, strict=True) if row]
        except csv.Error as exc:
            raise ValueError(f"malformed index {path}: {exc}") from exc
    if rows:
        width = len(rows[0])
        for number, row in enumerate(rows, start=1):
            if len(row) != width:
                raise ValueError(
                    f"record on line {number} of {path}: wrong number of fields"
                )
    return rows


def process_rows(
    rows: Iterable[Sequence[str]],
    base_dir: PathLike,
    progress: Optional[Callable[[int], Any]] = None,
) -> ProcessResult:
    """Build a record for every index row whose return document can be read."""
    result = ProcessResult()
    for row in rows:
        result.requested += 1
        if progress is not None:
            progress(1)
        path = xml_path(base_dir, row)
        try:
            handle = open(path, "rb")
        except OSError as exc:
            message = f"Error opening XML file {path}: {exc}"
            print(message)
            result.errors.append(message)
            continue
        with handle:
            try:
                filing = parse_return(handle)
            except ReturnParseError as exc:
                message = f"Error decoding XML file {path}: {exc}"
                print(message)
                result.errors.append(message)
                continue
        result.records.append(
            build_record(
                filing,
                row[_DLN_COLUMN],
                row[_OBJECT_ID_COLUMN],
                row[_BATCH_COLUMN],
            )
        )
    return result


def write_error_log(errors: Iterable[str], path: PathLike) -> None:
    """Write one error message per line."""
    with open(path, "w", encoding="utf-8") as handle:
        for message in errors:
            handle.write(message + "\n")


def _plain_numbers(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, dict):
        return {key: _plain_numbers(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain_numbers(item) for item in value]
    return value


_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def write_records(records: Iterable[FullFilingRecord], path: PathLike) -> None:
    """Write the records as one compact JSON array followed by a newline."""
    payload = _plain_numbers([record.to_dict() for record in records])
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text + "\n")


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    plain = _plain_numbers(value)
    return str(plain) if isinstance(plain, int) else repr(value)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rootedparser",
        description="Collect filer and people details from IRS e-file returns.",
    )
    parser.add_argument("index", nargs="?", default="index_2025.csv", help="index CSV file")
    parser.add_argument("--base-dir", help="directory holding the batch folders (default: current)")
    parser.add_argument("--output", default="finished_records.json", help="JSON output file")
    parser.add_argument("--error-log", default="error_log.txt", help="error log file")
    return parser


def _confirmed() -> bool:
    try:
        answer = input()
    except EOFError:
        answer = ""
    return not answer.strip()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parser().parse_args(argv)
    base_dir = Path(args.base_dir) if args.base_dir else Path.cwd()

    print("Starting to process records...")
    rows = read_index(args.index)
    if not rows:
        print(f"Index {args.index} holds no header row.", file=sys.stderr)
        return 1
    requested = len(rows) - 1
    print("Total records to process:", requested)

    print("Press Enter to continue...")
    if not _confirmed():
        print("Exiting program.")
        return 0

    print("Processing records...")
    print()
    with tqdm(total=requested) as bar:
        result = process_rows(rows[1:], base_dir, bar.update)

    if result.errors:
        print("Errors encountered during processing:")
        write_error_log(result.errors, args.error_log)
        for message in result.errors:
            print(message)
        print(f"Error log saved to {args.error_log}")

    write_records(result.records, args.output)
    print()
    print(f"Finished records saved to {args.output}")
    print("All records processed successfully.")
    print()
    print("Records requested:", requested)
    print("Total records processed:", len(result.records))
    print("Total errors encountered:", len(result.errors))
    print("Success rate: ", _format_number(result.success_rate), "%")
    print()
    print("Exiting program.")
    print("Goodbye!")
    print("--------------------------------------------------")
    return 0


if __name__ == "__main__":
    sys.exit(main())