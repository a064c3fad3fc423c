"""Markdown output formatting."""

from pathlib import Path

from campus_match.models.result import ScoredResult
from campus_match.models.scheme import ScoringScheme


def save_markdown(content: str, output_path: str | Path) -> Path:
    """Save content to a markdown file.

    Args:
        content: Markdown content to save.
        output_path: Path to save the file.

    Returns:
        Path to the saved file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def format_match_results(
    results: list[ScoredResult],
    scheme: ScoringScheme,
    profile_id: str | None = None,
) -> str:
    """Format ranked results as a markdown report.

    Args:
        results: Ranked results, highest first.
        scheme: Scheme the results were scored with.
        profile_id: Requesting profile, shown in the heading if given.

    Returns:
        Markdown text.
    """
    output = []
    heading = f"## Matches ({scheme.name})"
    if profile_id:
        heading += f" for {profile_id}"
    output.append(heading)
    output.append("")

    if not results:
        output.append("*No compatible candidates found.*")
        output.append("")
        return "\n".join(output)

    output.append("| Rank | Candidate | Score | Matched Fields |")
    output.append("| ---: | --- | ---: | --- |")
    for position, result in enumerate(results, start=1):
        fields = ", ".join(result.matched_fields) or "-"
        output.append(f"| {position} | {result.candidate_id} | {result.score:.2f} | {fields} |")
    output.append("")

    output.append("### Score Breakdown")
    for result in results:
        output.append(f"**{result.candidate_id}**")
        for name, value in result.breakdown.items():
            sign = "+" if value > 0 else ""
            output.append(f"- {name}: {sign}{value:.2f}")
        output.append("")

    return "\n".join(output)
