from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ChangeType = Literal["create", "update", "replace", "delete"]
Phase = Literal["in", "loop", "out"]
Direction = Literal["normal", "reverse", "alternate", "alternate-reverse"]
ElementType = Literal[
    "text",
    "shape",
    "image",
    "icon",
    "chart",
    "table",
    "map",
    "video",
    "ticker",
    "countdown",
    "line",
    "svg",
]


class _Content(BaseModel):
    """Common base for element payloads; unknown renderer keys pass through."""

    model_config = ConfigDict(extra="allow", frozen=True)


class TextContent(_Content):
    type: Literal["text"] = "text"
    text: str = "Text"


class ShapeContent(_Content):
    type: Literal["shape"] = "shape"
    shape: str = "rectangle"
    fill: str = "#3B82F6"
    cornerRadius: float = 0


class ImageContent(_Content):
    type: Literal["image"] = "image"
    src: str = ""
    fit: str = "cover"


class IconContent(_Content):
    type: Literal["icon"] = "icon"
    library: str = "lucide"
    iconName: str = "Sparkles"
    size: float = 48
    color: str = "#FFFFFF"


class ChartDataset(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    label: str = "Data"
    data: list[Any] = Field(default_factory=lambda: [0])


class ChartData(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    labels: list[Any] = Field(default_factory=lambda: ["A", "B", "C", "D"])
    datasets: list[ChartDataset] = Field(
        default_factory=lambda: [ChartDataset(data=[25, 50, 75, 100])]
    )


class ChartContent(_Content):
    type: Literal["chart"] = "chart"
    chartType: str = "bar"
    data: ChartData = Field(default_factory=ChartData)
    options: dict[str, Any] = Field(default_factory=dict)


class TableContent(_Content):
    type: Literal["table"] = "table"
    columns: list[Any] = Field(default_factory=list)
    rows: list[Any] = Field(default_factory=list)


class MapContent(_Content):
    type: Literal["map"] = "map"
    center: list[float] = Field(default_factory=lambda: [-98.5795, 39.8283])
    zoom: float = 3
    mapStyle: str = "dark"


class VideoContent(_Content):
    type: Literal["video"] = "video"
    src: str = ""
    loop: bool = True
    muted: bool = True
    autoplay: bool = True


class TickerContent(_Content):
    type: Literal["ticker"] = "ticker"
    items: list[Any] = Field(default_factory=list)
    speed: float = 50


class CountdownContent(_Content):
    type: Literal["countdown"] = "countdown"
    targetTime: str | None = None
    durationSeconds: float | None = None
    format: str = "mm:ss"


class LineContent(_Content):
    type: Literal["line"] = "line"
    points: list[Any] = Field(default_factory=list)
    stroke: str = "#FFFFFF"
    strokeWidth: float = 2


class SvgContent(_Content):
    type: Literal["svg"] = "svg"
    src: str = ""
    svgContent: str | None = None


ElementContent = Annotated[
    Union[
        TextContent,
        ShapeContent,
        ImageContent,
        IconContent,
        ChartContent,
        TableContent,
        MapContent,
        VideoContent,
        TickerContent,
        CountdownContent,
        LineContent,
        SvgContent,
    ],
    Field(discriminator="type"),
]

CONTENT_MODELS: dict[str, type[_Content]] = {
    "text": TextContent,
    "shape": ShapeContent,
    "image": ImageContent,
    "icon": IconContent,
    "chart": ChartContent,
    "table": TableContent,
    "map": MapContent,
    "video": VideoContent,
    "ticker": TickerContent,
    "countdown": CountdownContent,
    "line": LineContent,
    "svg": SvgContent,
}


class Binding(BaseModel):
    """Data-driven template binding for an element."""

    model_config = ConfigDict(frozen=True)

    field: str
    type: str = "text"


class ElementSpec(BaseModel):
    """One element to create or update.

    For update change sets only the fields the AI specified are set, so the
    renderer should serialize with ``exclude_unset=True``.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    element_type: ElementType | None = None
    position_x: float = 0
    position_y: float = 0
    width: float = 200
    height: float = 100
    rotation: float = 0
    opacity: float = 1
    scale_x: float = 1
    scale_y: float = 1
    z_index: int | None = None
    delay: float | None = None  # stagger offset (ms) from dynamic rows
    styles: dict[str, Any] = Field(default_factory=dict)
    content: ElementContent | None = None
    binding: Binding | None = None


class KeyframeSpec(BaseModel):
    """Property values at one point (0-100) of an animation's duration."""

    model_config = ConfigDict(frozen=True)

    position: float
    properties: dict[str, Any] = Field(default_factory=dict)
    easing: str | None = None


class AnimationSpec(BaseModel):
    """Animation of a single element for one phase."""

    model_config = ConfigDict(frozen=True)

    element_name: str
    element_id: str | None = None
    phase: Phase = "in"
    duration: float = 500  # ms
    delay: float = 0  # ms
    easing: str = "ease-out"
    iterations: int = 1  # -1 = infinite
    direction: Direction = "normal"
    keyframes: list[KeyframeSpec] = Field(default_factory=list)


class DynamicBlock(BaseModel):
    """Row data plus element templates expanded once per row."""

    model_config = ConfigDict(frozen=True)

    data: list[dict[str, Any]] = Field(default_factory=list)
    elements: list[dict[str, Any]] = Field(default_factory=list)


class ValidationHint(BaseModel):
    """Non-fatal observation about the AI payload, surfaced to the user."""

    model_config = ConfigDict(frozen=True)

    type: Literal["error", "warning", "info"]
    field: str
    message: str
    suggestion: str | None = None


class ChangeSet(BaseModel):
    """Canonical, validated scene mutation for one AI turn."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: ChangeType = "create"
    layer_type: str | None = Field(default=None, alias="layerType")
    elements: list[ElementSpec] = Field(default_factory=list)
    animations: list[AnimationSpec] = Field(default_factory=list)
    elements_to_delete: list[str] = Field(default_factory=list, alias="elementsToDelete")
    dynamic_elements: DynamicBlock | None = Field(default=None, alias="dynamicElements")
    validation_hints: list[ValidationHint] = Field(
        default_factory=list, alias="validationHints"
    )
    truncation_warning: str | None = Field(default=None, alias="truncationWarning")


class PlaceholderCacheEntry(BaseModel):
    """Generated image stored for an organization, keyed by prompt hash."""

    organization_id: str
    prompt_hash: str
    url: str
    prompt: str = ""
    thumbnail_url: str | None = None
    storage_path: str | None = None
    size: int | None = None
    tags: list[str] = Field(default_factory=lambda: ["ai-generated", "auto"])
    width: int | None = None
    height: int | None = None
    uploaded_by: str | None = None


class KnownElement(BaseModel):
    """Element already on the canvas, used to resolve update references."""

    id: str | None = None
    name: str | None = None


class InterpretRequest(BaseModel):
    text: str
    known_elements: list[KnownElement] = Field(default_factory=list)
    expand_dynamic: bool = False


class InterpretResponse(BaseModel):
    changes: ChangeSet | None
    drastic: bool = False


class ResolveRequest(BaseModel):
    text: str
    organization_id: str | None = None
    user_id: str | None = None
    access_token: str | None = None
    parallel: bool = False


class ProgressEvent(BaseModel):
    message: str
    current: int
    total: int


class ResolveResponse(BaseModel):
    text: str
    progress: list[ProgressEvent] = Field(default_factory=list)
