"""Command-line interface for classifying documents.

Provides subcommands for classifying a single document, classifying a
folder of documents into a CSV report, and serving the HTTP API.
"""

import argparse
import csv
import json
import os
import sys
from pathlib import Path

import uvicorn

from docsort.models import DocumentBlob, ProcessingResult
from docsort.processor import DocumentProcessor
from docsort.utils.config import CONFIG_ENV_VAR, AppConfig, load_config
from docsort.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = (
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.tiff",
    "*.tif",
    "*.bmp",
    "*.webp",
    "*.pdf",
)
_CSV_COLUMNS = ["filename", "category", "confidence", "status"]


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all supported document files in a directory.

    Args:
        input_dir: Directory to scan for documents.

    Returns:
        Sorted list of document file paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def _status(result: ProcessingResult) -> str:
    if result.is_error:
        return "error"
    return "classified" if result.is_classified else "unclassified"


def classify_folder(
    input_dir: Path,
    output_csv: Path,
    config: AppConfig | None = None,
    verbose: bool = False,
) -> dict[str, int]:
    """Classify all documents in a folder and write a CSV report.

    Args:
        input_dir: Directory containing document files.
        output_csv: Path for the output CSV file.
        config: Application configuration. Loaded from disk if omitted.
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, classified, unclassified and failed counts.
    """
    processor = DocumentProcessor(config if config is not None else load_config())

    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "classified": 0, "unclassified": 0, "failed": 0}

    logger.info("Found %d documents to classify", len(files))

    rows: list[dict[str, object]] = []
    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")
        try:
            result = processor.process(DocumentBlob.from_path(file_path))
        except Exception as exc:
            logger.error("Failed to read %s: %s", file_path.name, exc)
            result = ProcessingResult.failed()
        rows.append(
            {
                "filename": file_path.name,
                "category": result.category,
                "confidence": result.confidence,
                "status": _status(result),
            }
        )

    _write_csv(rows, output_csv)
    logger.info("Results written to %s", output_csv)

    statuses = [row["status"] for row in rows]
    summary = {
        "total": len(rows),
        "classified": statuses.count("classified"),
        "unclassified": statuses.count("unclassified"),
        "failed": statuses.count("error"),
    }
    _print_summary(summary, output_csv)
    return summary


def _write_csv(rows: list[dict[str, object]], output_path: Path) -> None:
    """Write classification rows to a CSV file.

    Args:
        rows: One dictionary per document.
        output_path: Path for the output CSV file.
    """
    if not rows:
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    print(f"\n{'=' * 50}")
    print("Classification Complete")
    print(f"{'=' * 50}")
    print(f"Total:        {summary['total']}")
    print(f"Classified:   {summary['classified']}")
    print(f"Unclassified: {summary['unclassified']}")
    print(f"Failed:       {summary['failed']}")
    print(f"Output:       {output_csv}")


def classify_single(
    file_path: Path, config: AppConfig | None = None
) -> dict[str, object]:
    """Classify a single document.

    Args:
        file_path: Path to the document file.
        config: Application configuration. Loaded from disk if omitted.

    Returns:
        Dictionary with filename, category, confidence and extracted text.
    """
    processor = DocumentProcessor(config if config is not None else load_config())
    result = processor.process(DocumentBlob.from_path(file_path))
    return {"filename": file_path.name, **result.to_dict()}


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Sort documents into categories by OCR keywords",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="YAML configuration file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    batch_parser = subparsers.add_parser("batch", help="Classify a folder of documents")
    batch_parser.add_argument(
        "input_dir", type=Path, help="Input directory with documents"
    )
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    single_parser = subparsers.add_parser("classify", help="Classify a single document")
    single_parser.add_argument("file", type=Path, help="Document file to classify")
    single_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.config is not None and not args.config.is_file():
        print(f"Error: config file {args.config} does not exist", file=sys.stderr)
        sys.exit(1)

    config = load_config(args.config)
    setup_logging(config.log_level)

    if args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        classify_folder(args.input_dir, args.output, config, args.verbose)
    elif args.command == "serve":
        if args.config is not None:
            os.environ[CONFIG_ENV_VAR] = str(args.config)
        uvicorn.run("docsort.api.app:app", host=args.host, port=args.port)
    elif args.command == "classify":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        result = classify_single(args.file, config)
        output_str = json.dumps(result, indent=2, ensure_ascii=False)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output_str, encoding="utf-8")
            print(f"Output written to {args.output}")
        else:
            print(output_str)


if __name__ == "__main__":
    main()
