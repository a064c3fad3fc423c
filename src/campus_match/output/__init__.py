"""Output formatting for match results."""

from campus_match.output.markdown import format_match_results, save_markdown

__all__ = ["format_match_results", "save_markdown"]
