"""Request models for a single analysis round trip."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "typescript",
    "javascript",
    "python",
    "java",
    "cpp",
    "rust",
    "go",
    "ruby",
    "swift",
)
DEFAULT_LANGUAGE = "typescript"


class AnalysisType(str, Enum):
    """The four analysis intents a user can pick."""

    REVIEW = "review"
    EXPLAIN = "explain"
    OPTIMIZE = "optimize"
    REFACTOR = "refactor"


class AnalysisRequest(BaseModel):
    """One submitted snippet.

    ``language`` is a free-form label; ``SUPPORTED_LANGUAGES`` only feeds
    selector UIs and is never enforced here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    code: str
    analysis_type: AnalysisType = Field(alias="type")
    language: str

    def to_payload(self) -> dict[str, str]:
        """JSON body for ``POST /analyze``."""
        return {
            "code": self.code,
            "type": self.analysis_type.value,
            "language": self.language,
        }
