"""
Output Generator Module
Formats check results as JSON.
"""

import json
from typing import Dict, List
from datetime import datetime

from .checker import Issue, PdfChecker


ANALYSIS_VERSION = "blindcheck_v1.0"


class OutputGenerator:
    """Generates JSON output for checked papers."""

    @staticmethod
    def paper_result(checker: PdfChecker, issues: List[Issue]) -> Dict:
        """
        Summarize the result for a single paper.

        Args:
            checker: Checker that analyzed the paper
            issues: Issues found for the paper

        Returns:
            Dictionary ready for JSON serialization
        """
        return {
            "file_name": checker.file_name(),
            "title": checker.title(),
            "page_count": checker.page_count(),
            "style": checker.style.classify(),
            "references_page": checker.structure.references_page(),
            "passed": not issues,
            "issues": [issue.to_dict() for issue in issues],
            "report_line": checker.report_line(issues),
        }

    @staticmethod
    def generate_json_output(paper_results: List[Dict], failures: Dict[str, str], config) -> Dict:
        """
        Generate JSON output for a batch of papers.

        Args:
            paper_results: Results from paper_result()
            failures: File name -> error message for papers that could not be checked
            config: CheckerConfig used for the run

        Returns:
            Dictionary ready for JSON serialization
        """
        return {
            "run_info": {
                "analysis_timestamp": datetime.now().isoformat(),
                "analysis_version": ANALYSIS_VERSION,
                "style": config.style,
                "page_limit": config.page_limit,
                "reference_limit": config.reference_limit,
            },
            "summary": {
                "papers": len(paper_results),
                "with_issues": sum(1 for r in paper_results if not r["passed"]),
                "failed": len(failures),
            },
            "papers": paper_results,
            "failures": [
                {"file_name": name, "error": error}
                for name, error in failures.items()
            ],
        }

    @staticmethod
    def save_json(output_dict: Dict, output_path: str):
        """
        Save JSON output to file.

        Args:
            output_dict: Dictionary to save
            output_path: Path for output file
        """
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(output_dict, f, indent=2, ensure_ascii=False)
