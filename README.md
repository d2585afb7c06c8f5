# rootedparser

rootedparser reads IRS e-file returns (Form 990, 990-EZ and 990-PF) in XML and
turns them into one JSON file of filing records. Each record holds the filer's
EIN, name and address, the DLN, object id and batch id from the index, the
people named in the return, and a summary of the Form 990 or Form 990-EZ when
one is attached.

## Installation

```
pip install .
```

## Input layout

The command needs:

- An index CSV (by default `index_2025.csv` in the current directory). The
  first row is a header. In each data row, column 8 (counting from 1) is the
  DLN, column 9 the object id and column 10 the XML batch id. Blank lines are
  skipped; every other row must have as many fields as the header, or the
  command stops with a `ValueError`.
- A base directory (by default the current directory) with one sub-directory
  per batch id, each holding the returns as `<object_id>_public.xml`.

## Usage

```
rootedparser [INDEX] [--base-dir DIR] [--output FILE] [--error-log FILE]
```

| Option        | Default                  | Meaning                                  |
|---------------|--------------------------|------------------------------------------|
| `INDEX`       | `index_2025.csv`         | index CSV file                           |
| `--base-dir`  | current directory        | directory holding the batch folders      |
| `--output`    | `finished_records.json`  | JSON output file                         |
| `--error-log` | `error_log.txt`          | file for messages about failed returns   |

The command prints how many data rows the index holds and waits for Enter.
Any input other than blank (or whitespace only) stops it without processing;
end of input counts as Enter. It then works through the rows with a progress
bar. A return that cannot be opened or cannot be parsed as XML is reported on
screen and skipped. When it is done it writes:

- the output file: a compact JSON array of every record it built, followed by
  a newline. Whole-number hours are written as integers, and `<`, `>` and `&`
  are written as `\u003c`, `\u003e` and `\u0026`.
- the error log: one line per skipped return, written only if there were any.

At the end it prints how many rows it was given, how many records it built,
how many errors it hit, and the success rate as a percentage (`NaN` when the
index has a header but no data rows). If the index is empty it prints a
message to standard error and exits with status 1.

A return that carries a Form 990 but names no business officer in its header
raises a `ValueError` and stops the run.

## People in a record

People are gathered in this order:

1. the Form 990 Part VII Section A list (name, title, hours, compensation from
   the organisation);
2. the first business officer of the return header, as principal officer of a
   Form 990, with the filer's address and the officer's phone;
3. the Form 990-EZ bookkeeper ("books in care of"), marked `bookkeeper: true`;
4. the Form 990-EZ officer list;
5. the Form 990-PF officer list;
6. the business officers of the return header.

When a name is already present, later sources update that entry rather than
adding another. Finally `consolidate_people` merges any remaining entries that
share a name (later entries fill in title, phone, hours, compensation and
address where they have one), drops entries with no name, and sets addresses
whose parts are all blank and empty phone numbers to `null`. The order of
people follows their first appearance.

## Library use

```python
from rootedparser.forms import parse_return
from rootedparser.builder import build_record

with open("batch/123_public.xml", "rb") as fh:
    filing = parse_return(fh)

record = build_record(filing, dln="dln", object_id="123", xml_batch_id="batch")
print(record.to_dict())
```

Modules:

- `rootedparser.forms`: `parse_return(source)` (path or binary file) and
  `parse_return_string(text)` return a `Return` dataclass with `header`
  (`ReturnHeader`, `Filer`, `BusinessOfficer`, `PreparerPerson`, `USAddress`)
  and `data` (`ReturnData` with optional `Form990Data`, `Form990EZData`,
  `Form990PFData`). Missing elements give empty strings and zeros. Malformed
  XML or a non-numeric amount raises `ReturnParseError`, a `ValueError`.
- `rootedparser.records`: the output dataclasses `FullFilingRecord`, `Person`,
  `Address`, `Form990Summary` and `Form990EZSummary`, each with `to_dict()`
  giving its JSON shape; `Address.is_empty()` tells whether all parts are
  blank.
- `rootedparser.builder`: `build_record(filing, dln, object_id, xml_batch_id)`,
  `consolidate_people(people)` and `address_from(us_address)`.
- `rootedparser.cli`: `read_index(path)`, `xml_path(base_dir, row)`,
  `process_rows(rows, base_dir, progress)` returning a `ProcessResult`
  (`records`, `errors`, `requested`, `success_rate`), `write_records(records,
  path)`, `write_error_log(errors, path)` and `main(argv)`.

## Running the tests

```
pip install .[test]
pytest
```