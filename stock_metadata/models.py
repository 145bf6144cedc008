"""
Data records passed between the generation pipeline, the batch processor and
the metadata writer.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Metadata:
    """Stock-submission attributes of one image."""
    title: str = ""
    description: str = ""
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "title": self.title,
            "description": self.description,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class MetadataResult(Metadata):
    """Metadata together with its 0-100 quality score."""
    score: int = 0

    @classmethod
    def from_metadata(cls, metadata: Metadata, score: int) -> "MetadataResult":
        return cls(
            title=metadata.title,
            description=metadata.description,
            keywords=list(metadata.keywords),
            score=score,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["score"] = self.score
        return result


class FileStatus(str, Enum):
    """Processing state of a loaded file."""
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


@dataclass
class TechnicalMetadata:
    """Camera and file information shown alongside the stock fields."""
    make: Optional[str] = None
    model: Optional[str] = None
    lens_model: Optional[str] = None
    iso: Optional[Any] = None
    f_number: Optional[Any] = None
    exposure_time: Optional[Any] = None
    focal_length: Optional[Any] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None
    date_time_original: Optional[str] = None
    create_date: Optional[str] = None
    modify_date: Optional[str] = None
    gps_latitude: Optional[Any] = None
    gps_longitude: Optional[Any] = None
    gps_altitude: Optional[Any] = None
    file_size: Optional[Any] = None
    file_type: Optional[str] = None
    mime_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return only the fields that are present."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class RawMetadata:
    """All tags of a file, grouped into stock, technical and other buckets."""
    stock: Metadata = field(default_factory=Metadata)
    technical: TechnicalMetadata = field(default_factory=TechnicalMetadata)
    other: Dict[str, Any] = field(default_factory=dict)
    tag_count: int = 0


@dataclass
class FileItem:
    """One image loaded by the user."""
    id: str
    file_path: str
    file_name: str
    status: FileStatus = FileStatus.PENDING
    preview: Optional[str] = None
    metadata: Optional[MetadataResult] = None
    existing_metadata: Optional[RawMetadata] = None
    has_existing_metadata: bool = False
    error: Optional[str] = None
    retry_count: int = 0


@dataclass
class ValidationResult:
    """Outcome of checking a record against stock platform limits."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    cleaned_data: Metadata = field(default_factory=Metadata)


class BatchState(str, Enum):
    """Lifecycle of a batch run."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"


@dataclass
class BatchProgress:
    """Progress counter of the current batch run."""
    current: int = 0
    total: int = 0
