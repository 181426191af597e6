#!/usr/bin/env python3
"""
Double-Blind Paper Checker - batch command line

Checks PDF submissions against page limits, template style and double-blind
rules, printing one line per paper.

Usage:
    python main.py [options] [folder-with-pdfs ...] [pdf-file ...]
"""

import sys
import logging
import argparse
import traceback
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from blindcheck.checker import PdfChecker
from blindcheck.config import CheckerConfig, STYLES
from blindcheck.document import Document, PdfDocument
from blindcheck.output_generator import OutputGenerator
from blindcheck.roster import PaperMetaData, Roster


class ProgressIndicator:
    """Simple progress indicator for long operations."""

    def __init__(self, message: str):
        self.message = message

    def __enter__(self):
        print(f"{self.message}...", end=" ", flush=True, file=sys.stderr)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            print("Done!", file=sys.stderr)
        else:
            print("Failed!", file=sys.stderr)


class BatchChecker:
    """Checks a series of papers and reports on each of them."""

    # Replaceable for testing
    document_factory = PdfDocument

    def __init__(
        self,
        config: CheckerConfig,
        roster: Optional[Roster] = None,
        show_text: Optional[str] = None
    ):
        """
        Initialize batch checker.

        Args:
            config: Limits and target style
            roster: Known authors per paper, if available
            show_text: Page number or 'all' to print page text for each paper
        """
        self.config = config
        self.roster = roster
        self.show_text = show_text
        self.results: List[Dict] = []
        self.failures: Dict[str, str] = {}

    def paper_metadata(self, paper: Path) -> Optional[PaperMetaData]:
        if self.roster is None:
            return None
        return self.roster.paper_for(paper.name)

    def process_paper(self, paper: Path):
        """Check a single paper; errors are reported and do not stop the batch."""
        try:
            with self.document_factory(str(paper)) as doc:
                self.display_pages(doc)
                checker = PdfChecker(doc, self.config, self.paper_metadata(paper))
                issues = checker.compute_issues()
                result = OutputGenerator.paper_result(checker, issues)
                print(result["report_line"])
                self.results.append(result)
        except Exception as e:
            # Show error, but permit progressing to next paper
            print(f"Error processing {paper.name}. {e}", file=sys.stderr)
            traceback.print_exc()
            self.failures[paper.name] = str(e)

    def process_papers(self, paper_dir: Path):
        for paper in sorted(paper_dir.glob("*.pdf")):
            self.process_paper(paper)

    def process_paths(self, paths: List[str]):
        for arg in paths:
            path = Path(arg)
            if path.is_dir():
                self.process_papers(path)
            elif path.suffix.lower() == ".pdf":
                self.process_paper(path)
            else:
                print(f"Error: Argument not a file or folder: {arg}", file=sys.stderr)
                self.failures[arg] = "not a pdf file or folder"

    def display_pages(self, doc: Document):
        """Print page text, to help craft custom patterns with grep."""
        if self.show_text is None:
            return
        if self.show_text == "all":
            print(doc.full_text())
            return

        pagenr = int(self.show_text)
        if not 1 <= pagenr <= doc.page_count():
            print(
                f"Error: Page nr {pagenr} out of range for file {doc.file_name()}",
                file=sys.stderr
            )
            return
        print(
            f"START-PAGE {pagenr} (of {doc.page_count()}) {doc.file_name()}: ---\n"
            f"{doc.text_at_page(pagenr)}END-PAGE\n"
        )


def page_selection(value: str) -> str:
    """argparse type for --showtext: a page number or 'all'."""
    if value == "all" or value.isdigit():
        return value
    raise argparse.ArgumentTypeError(f"Wrong <pages> '{value}', expected a number or 'all'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check PDF papers for page limits, template style and double-blind issues",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py papers/
  python main.py --style ACM icse2021-paper13.pdf
  python main.py --meta authors.csv papers/
  python main.py --showtext 1 paper.pdf | grep -i university
  python main.py --output results.json papers/

Environment (overridden by options):
  BLINDCHECK_PAGE_LIMIT, BLINDCHECK_REFERENCE_LIMIT, BLINDCHECK_STYLE,
  BLINDCHECK_CHECK_TITLES
        """
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="PDF files or folders containing PDF files"
    )

    parser.add_argument(
        "--style", "-s",
        type=str.upper,
        choices=STYLES,
        help="Required template style (default: IEEE)"
    )

    parser.add_argument(
        "--showtext", "-t",
        type=page_selection,
        help="Show plain text of a page (number or 'all') on stdout"
    )

    parser.add_argument(
        "--meta", "-m",
        help="CSV file with author metadata, one row per author. "
             "Columns: paper,title,first,last,affiliation,email"
    )

    parser.add_argument(
        "--page-limit",
        type=int,
        help="Pages allowed for the main text (default: 10)"
    )

    parser.add_argument(
        "--reference-limit",
        type=int,
        help="Extra pages allowed for references only (default: 2)"
    )

    parser.add_argument(
        "--check-titles",
        action="store_true",
        default=None,
        help="Also compare text, PDF metadata and roster titles (many false alarms)"
    )

    parser.add_argument(
        "--output", "-o",
        help="Path for JSON output file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log heuristic decisions"
    )

    return parser


def build_config(args: argparse.Namespace) -> CheckerConfig:
    """Configuration from the environment, overridden by command line options."""
    config = CheckerConfig.from_env()
    if args.page_limit is not None and args.page_limit <= 0:
        raise ValueError(f"Page limit must be positive: {args.page_limit}")
    return CheckerConfig(
        page_limit=config.page_limit if args.page_limit is None else args.page_limit,
        reference_limit=config.reference_limit if args.reference_limit is None else args.reference_limit,
        style=args.style or config.style,
        check_titles=config.check_titles if args.check_titles is None else args.check_titles,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    roster = None
    if args.meta:
        try:
            with ProgressIndicator(f"Loading author metadata from {args.meta}"):
                roster = Roster()
                roster.load_csv(args.meta)
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"  Found {len(roster)} papers", file=sys.stderr)

    batch = BatchChecker(config, roster=roster, show_text=args.showtext)
    batch.process_paths(args.paths)

    if args.output:
        with ProgressIndicator(f"Saving JSON output to {args.output}"):
            OutputGenerator.save_json(
                OutputGenerator.generate_json_output(batch.results, batch.failures, config),
                args.output
            )

    return 1 if batch.failures else 0


if __name__ == "__main__":
    sys.exit(main())
