#!/usr/bin/env python3
"""
Batch aim report generator using AimSkillEstimator.

Scans a directory (recursively) for .jsonl movement files, computes the aim
attributes of each, and generates a markdown report with results.

Can also generate markdown reports from pre-computed JSONL reports.

Usage:
    python report.py <movement_directory> [options]
    python report.py --input-jsonl <jsonl_file> [options]

Example:
    # Process movement files and generate report
    python report.py ./maps --output report.md --graph-dir graphs
    python report.py ./maps --sort=-fc_prob_tp,file --exclude "*.old.jsonl"

    # Generate report from pre-computed JSONL
    python report.py --input-jsonl report.jsonl --output new_report.md
"""

import argparse
import fnmatch
import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from AimSkillEstimator import AimAttributes, AimConfig, calculate_aim_attributes, load_movements

# Supported sort keys
SORT_KEYS = [
    "file",
    "movements",
    "fc_prob_tp",
    "fc_time_tp",
    "hardest_combo_tp",
    "cheese_notes",
]
REPORT_COLUMNS = SORT_KEYS


@dataclass
class MapResult:
    """Result for a single movement file."""

    file_path: str
    relative_path: str
    n_movements: int
    attributes: Optional[AimAttributes] = None
    error: Optional[str] = None


@dataclass
class FlatRow:
    """Flattened row for sorting and display."""

    file_name: str
    movements: int
    fc_prob_tp: float
    fc_time_tp: float
    hardest_combo_tp: float
    cheese_notes: float


def process_movement_file(
    file_path: str,
    base_dir: str,
    config: AimConfig,
) -> MapResult:
    """Compute the aim attributes of a single movement file."""
    relative_path = os.path.relpath(file_path, base_dir)

    try:
        movements = load_movements(file_path)
        if not movements:
            return MapResult(
                file_path=file_path,
                relative_path=relative_path,
                n_movements=0,
                error="No movements found in file",
            )

        attributes = calculate_aim_attributes(movements, config)
        return MapResult(
            file_path=file_path,
            relative_path=relative_path,
            n_movements=len(movements),
            attributes=attributes,
        )

    except Exception as e:
        return MapResult(
            file_path=file_path,
            relative_path=relative_path,
            n_movements=0,
            error=str(e),
        )


def find_movement_files(
    directory: str, exclude_patterns: Optional[list[str]] = None
) -> list[str]:
    """Recursively find all .jsonl files in a directory, with optional glob exclusions."""
    movement_files = []
    exclude_patterns = exclude_patterns or []

    for root, dirs, files in os.walk(directory):
        for file in files:
            if not file.lower().endswith(".jsonl"):
                continue

            full_path = os.path.join(root, file)
            relative_path = os.path.relpath(full_path, directory)

            excluded = any(
                fnmatch.fnmatch(relative_path, pattern) or fnmatch.fnmatch(file, pattern)
                for pattern in exclude_patterns
            )
            if not excluded:
                movement_files.append(full_path)

    return sorted(movement_files)


def result_to_row(result: MapResult) -> FlatRow:
    attributes = result.attributes
    return FlatRow(
        file_name=result.relative_path,
        movements=result.n_movements,
        fc_prob_tp=attributes.fc_prob_tp,
        fc_time_tp=attributes.fc_time_tp,
        hardest_combo_tp=float(attributes.combo_tps.max()),
        cheese_notes=attributes.cheese_note_count,
    )


def dict_to_row(record: dict) -> FlatRow:
    combo = record.get("combo_tps") or [0.0]
    return FlatRow(
        file_name=record.get("file", "-"),
        movements=record.get("movements", 0),
        fc_prob_tp=record.get("fc_prob_tp", 0.0),
        fc_time_tp=record.get("fc_time_tp", 0.0),
        hardest_combo_tp=max(combo),
        cheese_notes=record.get("cheese_note_count", 0.0),
    )


def sort_rows(rows: list[FlatRow], sort_keys: list[str]) -> list[FlatRow]:
    """Sort rows by the given keys (in order). Prefix with '-' for descending."""
    if not sort_keys:
        return rows

    def get_sort_key(row: FlatRow):
        keys = []
        for key in sort_keys:
            descending = key.startswith("-")
            key_name = key.lstrip("-")

            if key_name == "file":
                val = row.file_name.lower()
            elif key_name == "movements":
                val = row.movements
            elif key_name == "fc_prob_tp":
                val = row.fc_prob_tp
            elif key_name == "fc_time_tp":
                val = row.fc_time_tp
            elif key_name == "hardest_combo_tp":
                val = row.hardest_combo_tp
            elif key_name == "cheese_notes":
                val = row.cheese_notes
            else:
                val = 0

            # For descending, negate numeric values or reverse strings
            if descending:
                if isinstance(val, (int, float)):
                    val = -val
                elif isinstance(val, str):
                    val = [-ord(c) for c in val]

            keys.append(val)
        return tuple(keys)

    return sorted(rows, key=get_sort_key)


def render_table(rows: list[FlatRow], hide_columns: Optional[list[str]] = None) -> list[str]:
    """Markdown table lines for the visible columns."""
    hidden = set(hide_columns or [])
    col_defs = [
        ("file", "File", lambda r: r.file_name),
        ("movements", "Movements", lambda r: str(r.movements)),
        ("fc_prob_tp", "FC Prob TP", lambda r: f"{r.fc_prob_tp:.4f}"),
        ("fc_time_tp", "FC Time TP", lambda r: f"{r.fc_time_tp:.4f}"),
        ("hardest_combo_tp", "Hardest Combo TP", lambda r: f"{r.hardest_combo_tp:.4f}"),
        ("cheese_notes", "Cheese Notes", lambda r: f"{r.cheese_notes:.2f}"),
    ]
    visible_cols = [
        (key, header, getter) for key, header, getter in col_defs if key not in hidden
    ]
    if not visible_cols:
        return []

    lines = [
        "| " + " | ".join(h for _, h, _ in visible_cols) + " |",
        "|" + "|".join("------" for _ in visible_cols) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(getter(row) for _, _, getter in visible_cols) + " |")
    return lines


def generate_markdown_report(
    results: list[MapResult],
    base_dir: str,
    sort_keys: Optional[list[str]] = None,
    hide_columns: Optional[list[str]] = None,
) -> str:
    """Generate a markdown report from the results."""
    lines = []

    # Header
    lines.append("# AimSkillEstimator Report")
    lines.append("")
    lines.append(f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append(f"**Source Directory:** `{base_dir}`")
    lines.append("")

    # Summary statistics
    successful = [r for r in results if r.error is None]
    failed = [r for r in results if r.error is not None]

    lines.append("## Summary")
    lines.append("")
    lines.append(f"- **Total Movement Files:** {len(results)}")
    lines.append(f"- **Successfully Processed:** {len(successful)}")
    lines.append(f"- **Failed:** {len(failed)}")
    lines.append(f"- **Total Movements Analyzed:** {sum(r.n_movements for r in successful)}")
    lines.append("")

    rows = sort_rows([result_to_row(r) for r in successful], sort_keys or [])

    if rows:
        lines.append("## Results")
        lines.append("")
        lines.extend(render_table(rows, hide_columns))
        lines.append("")

    if failed:
        lines.append("## Errors")
        lines.append("")
        for result in failed:
            lines.append(f"- `{result.relative_path}`: {result.error}")
        lines.append("")

    return "\n".join(lines)


def generate_markdown_from_jsonl(
    jsonl_path: str,
    sort_keys: Optional[list[str]] = None,
    hide_columns: Optional[list[str]] = None,
) -> str:
    """Generate a markdown report from a pre-computed JSONL file."""
    records: list[dict] = []
    with open(jsonl_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                records.append(json.loads(line))

    lines = []
    lines.append("# AimSkillEstimator Report")
    lines.append("")
    lines.append(f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append(f"**Source JSONL:** `{jsonl_path}`")
    lines.append("")

    lines.append("## Summary")
    lines.append("")
    lines.append(f"- **Total Entries:** {len(records)}")
    lines.append("")

    rows = sort_rows([dict_to_row(r) for r in records], sort_keys or [])

    if rows:
        lines.append("## Results")
        lines.append("")
        lines.extend(render_table(rows, hide_columns))
        lines.append("")

    return "\n".join(lines)


def generate_jsonl_report(results: list[MapResult]) -> str:
    """One JSON object per successfully processed file, graph text excluded."""
    rows = []
    for result in results:
        if result.error:
            continue
        record = {"file": result.relative_path, "movements": result.n_movements}
        record.update(result.attributes.to_dict(include_graph=False))
        rows.append(record)

    return "\n".join(json.dumps(row, ensure_ascii=False) for row in rows)


def write_graph_texts(results: list[MapResult], graph_dir: str) -> int:
    """Write each result's graph text under graph_dir, mirroring relative paths."""
    written = 0
    for result in results:
        if result.error:
            continue
        target = os.path.join(graph_dir, os.path.splitext(result.relative_path)[0] + ".txt")
        os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(result.attributes.graph_text)
        written += 1
    return written


def jsonl_report_path(output_path: str) -> str:
    """Path of the JSONL report written next to the markdown report."""
    return os.path.splitext(output_path)[0] + ".jsonl"


def parse_list(value: Optional[str], allowed: list[str], what: str) -> Optional[list[str]]:
    """Split a comma-separated option and validate it against allowed names."""
    if not value:
        return None

    items = [v.strip() for v in value.split(",") if v.strip()]
    for item in items:
        if item.lstrip("-") not in allowed:
            raise ValueError(f"Invalid {what} '{item.lstrip('-')}'. Available: {', '.join(allowed)}")
    return items


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a markdown aim report for movement files using AimSkillEstimator"
    )
    parser.add_argument(
        "directory",
        type=str,
        nargs="?",
        default=None,
        help="Directory containing .jsonl movement files (searched recursively). Not required if --input-jsonl is used.",
    )
    parser.add_argument(
        "--input-jsonl",
        type=str,
        default=None,
        help="Path to pre-computed JSONL report. If provided, generates markdown from it instead of processing movement files.",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="report.md",
        help="Output markdown file path (default: report.md)",
    )
    parser.add_argument(
        "--graph-dir",
        type=str,
        default=None,
        help="Directory to write per-file graph text diagnostics",
    )
    parser.add_argument(
        "--exclude",
        type=str,
        action="append",
        default=[],
        help="Glob pattern to exclude movement files (can be specified multiple times)",
    )
    parser.add_argument(
        "--sort",
        type=str,
        default=None,
        help=f"Comma-separated sort keys (prefix with '-' for descending, e.g. --sort=-fc_prob_tp). Available: {', '.join(SORT_KEYS)}",
    )
    parser.add_argument(
        "--hide-columns",
        type=str,
        default=None,
        help=f"Comma-separated columns to hide in the report. Available: {', '.join(REPORT_COLUMNS)}",
    )
    parser.add_argument(
        "--probability-threshold",
        type=float,
        default=None,
        help="Full-combo probability targeted by fc_prob_tp (default: 0.02)",
    )
    parser.add_argument(
        "--time-threshold-base",
        type=float,
        default=None,
        help="Practice time budget in seconds added to the map length (default: 3600)",
    )
    parser.add_argument(
        "--cheese-level",
        type=float,
        default=None,
        help="Default cheese level (default: 0.3)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> AimConfig:
    overrides = {
        "probability_threshold": args.probability_threshold,
        "time_threshold_base": args.time_threshold_base,
        "default_cheese_level": args.cheese_level,
    }
    return AimConfig.from_dict({k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[list[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        sort_keys = parse_list(args.sort, SORT_KEYS, "sort key")
        hide_columns = parse_list(args.hide_columns, REPORT_COLUMNS, "column")
        config = config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Handle JSONL input mode
    if args.input_jsonl:
        if not os.path.isfile(args.input_jsonl):
            print(f"Error: '{args.input_jsonl}' is not a valid file", file=sys.stderr)
            sys.exit(1)

        print(f"Generating report from JSONL: {args.input_jsonl}")
        report = generate_markdown_from_jsonl(
            args.input_jsonl, sort_keys=sort_keys, hide_columns=hide_columns
        )
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(report)

        print(f"Markdown report saved to: {args.output}")
        return

    if not args.directory:
        print(
            "Error: directory is required when not using --input-jsonl", file=sys.stderr
        )
        sys.exit(1)

    if not os.path.isdir(args.directory):
        print(f"Error: '{args.directory}' is not a valid directory", file=sys.stderr)
        sys.exit(1)

    print(f"Scanning for movement files in: {args.directory}")
    if args.exclude:
        print(f"Excluding patterns: {args.exclude}")
    jsonl_path = jsonl_report_path(args.output)
    movement_files = find_movement_files(args.directory, exclude_patterns=args.exclude)
    # A previous run's JSONL report is not a movement file
    movement_files = [
        f for f in movement_files if os.path.abspath(f) != os.path.abspath(jsonl_path)
    ]

    if not movement_files:
        print("No .jsonl files found", file=sys.stderr)
        sys.exit(1)

    print(f"Found {len(movement_files)} movement file(s)")

    results = []
    for i, file_path in enumerate(movement_files, 1):
        relative = os.path.relpath(file_path, args.directory)
        print(f"[{i}/{len(movement_files)}] Processing: {relative}")

        result = process_movement_file(file_path, args.directory, config)
        results.append(result)

        if result.error:
            print(f"  ⚠️ Error: {result.error}")
        else:
            print(
                f"  ✓ {result.n_movements} movements: "
                f"fc_prob_tp={result.attributes.fc_prob_tp:.3f} "
                f"fc_time_tp={result.attributes.fc_time_tp:.3f}"
            )

    print("\nGenerating reports...")
    report = generate_markdown_report(
        results, args.directory, sort_keys=sort_keys, hide_columns=hide_columns
    )
    jsonl_report = generate_jsonl_report(results)

    output_path = args.output
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(report)
    print(f"Markdown report saved to: {output_path}")

    with open(jsonl_path, "w", encoding="utf-8") as f:
        f.write(jsonl_report)
    print(f"JSONL report saved to: {jsonl_path}")

    if args.graph_dir:
        written = write_graph_texts(results, args.graph_dir)
        print(f"Graph text written for {written} file(s) to: {args.graph_dir}")

    successful = sum(1 for r in results if r.error is None)
    failed = len(results) - successful
    print(f"\nSummary: {successful} successful, {failed} failed out of {len(results)} files")


if __name__ == "__main__":
    main()
