from pydantic import BaseModel, Field, field_validator
from typing import Literal

DEFAULT_EXTENSIONS = [".txt", ".md", ".log", ".sql", ".cpp", ".h", ".js", ".json", ".xml"]

_BAD_EXTENSION_CHARS = set('\\/:*?"<>|')


def normalize_extension(raw: str) -> str:
    """Trim, lower-case and dot-prefix an extension entry."""
    ext = raw.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class ClassifierConfig(BaseModel):
    allowed_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    content_regexes: list[str] = Field(default_factory=list)
    word_count_limit: int = Field(default=5, gt=0)

    @field_validator("allowed_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        seen: list[str] = []
        for raw in v:
            if _BAD_EXTENSION_CHARS & set(raw):
                raise ValueError(f"extension {raw!r} contains an invalid character")
            ext = normalize_extension(raw)
            if ext and ext not in seen:
                seen.append(ext)
        return seen


class FeatureConfig(BaseModel):
    create_empty: bool = True
    create_with_content: bool = True
    create_tree: bool = True
    skip_existing_dirs: bool = True
    auto_create_parent_dirs: bool = True


class MaterializeConfig(BaseModel):
    large_tree_threshold: int = Field(default=10, ge=0)
    max_rename_attempts: int = Field(default=1000, gt=0)
    max_temp_attempts: int = Field(default=100, gt=0)


class DestinationConfig(BaseModel):
    paths: list[str] = Field(default_factory=list)
    policy: Literal["single", "first"] = "single"


class ClipboardConfig(BaseModel):
    poll_interval: float = Field(default=0.5, gt=0)


class ClipToFileConfig(BaseModel):
    enabled: bool = True
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    features: FeatureConfig = Field(default_factory=FeatureConfig)
    materialize: MaterializeConfig = Field(default_factory=MaterializeConfig)
    destination: DestinationConfig = Field(default_factory=DestinationConfig)
    clipboard: ClipboardConfig = Field(default_factory=ClipboardConfig)
    extensions_file: str | None = None
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
