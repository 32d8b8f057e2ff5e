"""Command-line interface for the similarity crawler."""

import json
import sys

from simcrawl.browser_config import BrowserConfig
from simcrawl.config import CrawlerConfig, settings
from simcrawl.logging_config import setup_logging
from simcrawl.models import CrawlOutcome, OutcomeKind
from simcrawl.orchestrator import crawl_sync
from simcrawl.responses import to_response
from simcrawl.targets import available_targets, get_target

EXIT_MATCHES = 0
EXIT_NO_MATCH = 1
EXIT_FAILED = 2


def format_percent(value: float) -> str:
    if value != value:  # NaN
        return "unknown"
    return f"{value:g}%"


def print_outcome(outcome: CrawlOutcome) -> None:
    """Print a crawl outcome in a human-readable way.

    Args:
        outcome: Outcome to print
    """
    print(f"\n{'=' * 60}")

    if outcome.kind is OutcomeKind.MATCHES:
        print(f"Found {len(outcome.records)} matching documents ({outcome.elapsed_seconds:.1f}s)")
        print(f"{'=' * 60}")
        for rank, record in enumerate(outcome.records, start=1):
            count = record.similarity_count if record.count_known else "unknown"
            print(f"\n{rank}. {record.title or '(untitled)'}")
            print(f"   {record.source_url}")
            print(f"   Similarity: {format_percent(record.similarity_percent)}, found: {count}")
            if record.description:
                print(f"   {record.description}")
    elif outcome.kind is OutcomeKind.NO_MATCH:
        print("No documents found making use of the text")
    elif outcome.kind is OutcomeKind.TIMED_OUT:
        print(f"Timed out after {outcome.elapsed_seconds:.1f}s without a result")
    else:
        print(f"Failed ({outcome.reason.value}): {outcome.detail}")

    print(f"\n{'=' * 60}\n")


def exit_code_for(outcome: CrawlOutcome) -> int:
    if outcome.kind is OutcomeKind.MATCHES:
        return EXIT_MATCHES
    if outcome.kind is OutcomeKind.NO_MATCH:
        return EXIT_NO_MATCH
    return EXIT_FAILED


def _read_text(args) -> str:
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            return f.read()
    if args.text is not None:
        return args.text
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


def check_command(args) -> int:
    """Check a text against a crawl target."""
    config = CrawlerConfig.from_file(args.config) if args.config else CrawlerConfig.from_env()
    target_name = args.target or config.target

    try:
        get_target(target_name)
    except ValueError as e:
        print(f"Error: {e}")
        return EXIT_FAILED

    text = _read_text(args)
    if not text.strip():
        print("Error: no text given. Pass TEXT, --file PATH, or pipe text on stdin.")
        return EXIT_FAILED

    browser_config = BrowserConfig(
        headless=settings.HEADLESS and not args.headed,
        browser_type=settings.BROWSER_TYPE,
        user_agent=settings.USER_AGENT,
    )

    outcome = crawl_sync(
        text,
        deadline=args.deadline,
        target=target_name,
        config=config,
        browser_config=browser_config,
    )

    if args.output == "json":
        response = to_response(outcome)
        output = json.dumps(
            {"status": response.status_code, **response.body},
            indent=2,
            ensure_ascii=False,
        )
        if args.output_file:
            with open(args.output_file, "w", encoding="utf-8") as f:
                f.write(output)
            print(f"Results written to {args.output_file}")
        else:
            print(output)
    else:
        print_outcome(outcome)

    return exit_code_for(outcome)


def targets_command(args) -> int:
    """List registered crawl targets."""
    for target in available_targets():
        print(f"{target.name:<12} {target.url}")
        if target.description:
            print(f"{'':<12} {target.description}")
    return 0


def main():
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="simcrawl - Check a text for reuse on content-similarity sites"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.LOG_LEVEL.upper(),
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=settings.LOG_FILE,
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check command parser
    check_parser = subparsers.add_parser(
        "check", help="Check a text against a crawl target."
    )
    check_parser.add_argument(
        "text", nargs="?", help="Text to check (50-1000 characters)"
    )
    check_parser.add_argument(
        "--file",
        help="Read the text from a file instead",
    )
    check_parser.add_argument(
        "--target",
        "-t",
        help="Crawl target name (default: plagium)",
    )
    check_parser.add_argument(
        "--deadline",
        "-d",
        type=float,
        help="Seconds allowed for the whole crawl (default: 180)",
    )
    check_parser.add_argument(
        "--config",
        "-c",
        help="JSON configuration file (default: environment)",
    )
    check_parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    check_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    check_parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (only for json format)",
    )
    check_parser.set_defaults(func=check_command)

    # Targets command parser
    targets_parser = subparsers.add_parser(
        "targets", help="List available crawl targets."
    )
    targets_parser.set_defaults(func=targets_command)

    args = parser.parse_args()

    # Configure logging based on flags
    setup_logging(
        level=args.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if hasattr(args, "func"):
        sys.exit(args.func(args))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
