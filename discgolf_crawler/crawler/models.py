"""
Data models shared by the extraction pipeline and the crawl driver.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class ImageRef:
    """An image found in the content region and its local filename."""

    # URL exactly as written in the img src attribute
    original_url: str

    # Filename under the output directory, e.g. image-1.jpg
    local_path: str


@dataclass(frozen=True)
class ParsedContent:
    """Structured content extracted from one legacy HTML page."""

    header: str
    body: str
    images: Tuple[ImageRef, ...] = ()


class SourceType(str, Enum):
    """Kinds of input source the crawler accepts."""

    HTML_FILE = "html-file"
    URL = "url"
    LIST_FILE = "list-file"


@dataclass(frozen=True)
class InputSource:
    """A single source to process."""

    type: SourceType
    value: str


@dataclass
class ExerciseData:
    """Exercise record as written to content.json."""

    header: str
    body: str
    exercise_type_id: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Serialize using the keys the import script expects."""
        return {
            "header": self.header,
            "body": self.body,
            "exerciseTypeId": self.exercise_type_id,
        }


@dataclass
class CrawlResult:
    """Results of a crawl over one or more sources."""

    output_dir: str = ""
    exercises: List[ExerciseData] = field(default_factory=list)
    errors: List[Dict[str, str]] = field(default_factory=list)
    images_downloaded: int = 0
    images_failed: int = 0
    duration_seconds: float = 0.0
