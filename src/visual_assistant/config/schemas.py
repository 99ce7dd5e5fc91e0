"""
Pydantic schemas for configuration validation.

Provides type-safe, declarative validation with clear error messages.
Every section is optional; omitted values fall back to the defaults the
tracker was tuned with.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils import constants as c


class StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class ViewportConfig(StrictModel):
    """Size of the view that detection boxes are expressed in."""

    width: float = Field(default=c.DEFAULT_VIEWPORT_WIDTH, gt=0)
    height: float = Field(default=c.DEFAULT_VIEWPORT_HEIGHT, gt=0)


class TrackingConfig(StrictModel):
    """Association and expiry settings."""

    iou_threshold: float = Field(default=c.DEFAULT_IOU_THRESHOLD, ge=0.0, lt=1.0)
    expiry_seconds: float = Field(default=c.DEFAULT_EXPIRY_SECONDS, gt=0)
    min_confidence: float = Field(
        default=0.0, ge=0.0, le=1.0, description="Detections below are ignored"
    )


class ApproachConfig(StrictModel):
    """Approach alert debounce settings."""

    frames_required: int = Field(default=c.DEFAULT_APPROACH_FRAMES, ge=1)
    cooldown_seconds: float = Field(default=c.DEFAULT_APPROACH_COOLDOWN, ge=0)
    cosine_threshold: float = Field(default=c.DEFAULT_COSINE_THRESHOLD, ge=-1.0, le=1.0)


class SignalConfig(StrictModel):
    """Pedestrian light labels and re-announcement interval."""

    repeat_frames: int = Field(default=c.DEFAULT_SIGNAL_REPEAT_FRAMES, ge=1)
    red_labels: list[str] = Field(default_factory=lambda: list(c.DEFAULT_RED_LABELS))
    green_labels: list[str] = Field(
        default_factory=lambda: list(c.DEFAULT_GREEN_LABELS)
    )

    @model_validator(mode="after")
    def validate_labels(self):
        red = {label.strip().lower() for label in self.red_labels}
        green = {label.strip().lower() for label in self.green_labels}
        overlap = red & green
        if overlap:
            raise ValueError(f"Labels cannot be both red and green: {sorted(overlap)}")
        return self


class MotionConfig(StrictModel):
    """Motion vector sampling settings."""

    sample_frames: int = Field(default=c.DEFAULT_ARROW_FRAMES, ge=1)
    min_displacement: float = Field(default=c.DEFAULT_ARROW_MIN_DISPLACEMENT, ge=0)


class SummaryConfig(StrictModel):
    """Traffic summary settings."""

    interval_seconds: float = Field(default=c.DEFAULT_SUMMARY_INTERVAL, ge=0)
    congested_below: float = Field(default=c.DEFAULT_CONGESTED_BELOW, ge=0)
    moderate_below: float = Field(default=c.DEFAULT_MODERATE_BELOW, ge=0)
    left_edge: float = Field(default=c.DEFAULT_LEFT_EDGE, gt=0, lt=1)
    right_edge: float = Field(default=c.DEFAULT_RIGHT_EDGE, gt=0, lt=1)
    keywords: list[str] = Field(
        default_factory=lambda: list(c.DEFAULT_SUMMARY_KEYWORDS), min_length=1
    )

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: list[str]) -> list[str]:
        if any(not keyword.strip() for keyword in v):
            raise ValueError("Summary keywords cannot be empty")
        return [keyword.strip().lower() for keyword in v]

    @model_validator(mode="after")
    def validate_ranges(self):
        if self.moderate_below < self.congested_below:
            raise ValueError("moderate_below must be >= congested_below")
        if self.right_edge <= self.left_edge:
            raise ValueError("right_edge must be > left_edge")
        return self


class OutputConfig(StrictModel):
    """Where events go."""

    speech_command: str | None = Field(
        default=None,
        description="Shell command used to speak; '{text}' is replaced by the phrase",
    )
    speech_timeout_seconds: int = Field(default=c.DEFAULT_SPEECH_TIMEOUT, gt=0)
    json_log: bool = False
    json_dir: str = Field(default=c.DEFAULT_JSON_DIR, min_length=1)
    webhook_url: str | None = None

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: str | None) -> str | None:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("webhook_url must start with http:// or https://")
        return v


class SourceConfig(StrictModel):
    """Live detection source (camera + YOLO model)."""

    camera_url: str | None = None
    model_file: str = Field(default="yolov8n.pt", min_length=1)
    confidence_threshold: float = Field(default=0.25, ge=0.0, le=1.0)

    @field_validator("model_file")
    @classmethod
    def validate_model_file(cls, v: str) -> str:
        if not v.endswith(".pt"):
            raise ValueError("Model file must be .pt format")
        return v


class Config(StrictModel):
    """Complete configuration schema."""

    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    tracking: TrackingConfig = Field(default_factory=TrackingConfig)
    approach: ApproachConfig = Field(default_factory=ApproachConfig)
    signal: SignalConfig = Field(default_factory=SignalConfig)
    motion: MotionConfig = Field(default_factory=MotionConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)


def validate_config_pydantic(config: dict) -> Config:
    """
    Validate config dict using Pydantic schema.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated Config object

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return Config.model_validate(config)
