"""Export of encoded documents to files.

Exports pass the encoder output through unchanged; only the Markdown
format wraps it, together with the JSON source, in fenced code blocks.
"""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Literal, Optional, Union

logger = logging.getLogger(__name__)

ExportFormat = Literal["toon", "json", "md", "txt"]
EXPORT_FORMATS = ("toon", "json", "md", "txt")


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: str
    mime_type: str = "text/plain"


def render_export(fmt: ExportFormat, toon_text: str, json_text: str, day: Optional[date] = None) -> ExportArtifact:
    """Build the file name and content for one export format.

    Args:
        fmt: One of ``toon``, ``json``, ``md`` or ``txt``
        toon_text: Encoder output
        json_text: JSON text of the same value
        day: Date stamped into the file name (default: today)

    Returns:
        The artifact to write

    Raises:
        ValueError: If ``fmt`` is not a known format
    """
    stamp = (day or date.today()).isoformat()

    if fmt == "toon":
        return ExportArtifact(f"toon_data_{stamp}.toon", toon_text)
    if fmt == "json":
        return ExportArtifact(f"data_{stamp}.json", json_text, "application/json")
    if fmt == "md":
        content = (
            "# TOON Data Export\n\n"
            f"## TOON Format\n```toon\n{toon_text}\n```\n\n"
            f"## JSON Source\n```json\n{json_text}\n```"
        )
        return ExportArtifact(f"toon_export_{stamp}.md", content)
    if fmt == "txt":
        return ExportArtifact(f"toon_data_{stamp}.txt", toon_text)

    raise ValueError(f"Unknown export format {fmt!r}; expected one of {', '.join(EXPORT_FORMATS)}")


def write_export(artifact: ExportArtifact, directory: Union[str, Path] = ".") -> Path:
    """Write ``artifact`` into ``directory`` and return the file path."""
    path = Path(directory) / artifact.filename
    path.write_text(artifact.content, encoding="utf-8")
    logger.info("Exported %s (%d chars)", path, len(artifact.content))
    return path
