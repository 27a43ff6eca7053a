"""
CSS gradient builder.
"""

import secrets
from random import Random
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

GradientType = Literal["linear", "radial", "conic"]

NEW_STOP_COLOR = "#8b5cf6"

RANDOM_COLORS = (
    "#ff6b6b", "#4ecdc4", "#45b7d1", "#96ceb4", "#ffd93d",
    "#ff9ff3", "#54a0ff", "#5f27cd", "#00d2d3", "#ff9f43",
    "#48dbfb", "#0abde3", "#006ba6", "#f39801", "#8e44ad",
)

DIRECTION_OPTIONS: Dict[str, List[Dict[str, str]]] = {
    "linear": [
        {"value": "0deg", "label": "Top (0°)"},
        {"value": "45deg", "label": "Top Right (45°)"},
        {"value": "90deg", "label": "Right (90°)"},
        {"value": "135deg", "label": "Bottom Right (135°)"},
        {"value": "180deg", "label": "Bottom (180°)"},
        {"value": "225deg", "label": "Bottom Left (225°)"},
        {"value": "270deg", "label": "Left (270°)"},
        {"value": "315deg", "label": "Top Left (315°)"},
        {"value": "to right", "label": "To Right"},
        {"value": "to left", "label": "To Left"},
        {"value": "to bottom", "label": "To Bottom"},
        {"value": "to top", "label": "To Top"},
    ],
    "radial": [
        {"value": "circle", "label": "Circle"},
        {"value": "ellipse", "label": "Ellipse"},
        {"value": "circle at center", "label": "Circle at Center"},
        {"value": "circle at top left", "label": "Circle at Top Left"},
        {"value": "circle at top right", "label": "Circle at Top Right"},
        {"value": "circle at bottom left", "label": "Circle at Bottom Left"},
        {"value": "circle at bottom right", "label": "Circle at Bottom Right"},
    ],
    "conic": [
        {"value": "from 0deg", "label": "From 0°"},
        {"value": "from 45deg", "label": "From 45°"},
        {"value": "from 90deg", "label": "From 90°"},
        {"value": "from 180deg", "label": "From 180°"},
        {"value": "from 270deg", "label": "From 270°"},
    ],
}


class ColorStop(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    color: str = Field(..., min_length=1)
    position: float = Field(..., ge=0, le=100, description="Percent along the gradient")


class GradientConfig(BaseModel):
    type: GradientType = "linear"
    direction: str = "45deg"
    stops: List[ColorStop] = Field(
        default_factory=lambda: [
            ColorStop(color="#ff6b6b", position=0),
            ColorStop(color="#4ecdc4", position=100),
        ],
        min_length=2,
    )
    repeating: bool = False

    @field_validator("direction")
    @classmethod
    def validate_direction(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("direction must not be empty")
        return v.strip()


class GradientPreset(BaseModel):
    name: str
    config: GradientConfig


class GradientOutput(BaseModel):
    value: str
    css: str


PRESETS: List[GradientPreset] = [
    GradientPreset(
        name="Sunset",
        config=GradientConfig(
            direction="45deg",
            stops=[ColorStop(color="#ff7e5f", position=0), ColorStop(color="#feb47b", position=100)],
        ),
    ),
    GradientPreset(
        name="Ocean",
        config=GradientConfig(
            direction="135deg",
            stops=[ColorStop(color="#667eea", position=0), ColorStop(color="#764ba2", position=100)],
        ),
    ),
    GradientPreset(
        name="Rainbow",
        config=GradientConfig(
            direction="90deg",
            stops=[
                ColorStop(color="#ff0000", position=0),
                ColorStop(color="#ff8c00", position=16.66),
                ColorStop(color="#ffd700", position=33.33),
                ColorStop(color="#90ee90", position=50),
                ColorStop(color="#87ceeb", position=66.66),
                ColorStop(color="#9370db", position=83.33),
                ColorStop(color="#ff1493", position=100),
            ],
        ),
    ),
]


def _format_position(position: float) -> str:
    return str(int(position)) if position == int(position) else repr(position)


def gradient_value(config: GradientConfig) -> str:
    """The gradient function, e.g. ``linear-gradient(45deg, #fff 0%, #000 100%)``."""
    function = f"{config.type}-gradient"
    if config.repeating:
        function = f"repeating-{function}"
    stops = ", ".join(
        f"{stop.color} {_format_position(stop.position)}%"
        for stop in sorted(config.stops, key=lambda s: s.position)
    )
    return f"{function}({config.direction}, {stops})"


def gradient_css(config: GradientConfig) -> str:
    return f"background: {gradient_value(config)};"


def gradient_stylesheet(config: GradientConfig) -> str:
    """Downloadable stylesheet with the prefixed fallbacks."""
    value = gradient_value(config)
    return (
        ".gradient {\n"
        f"  {gradient_css(config)}\n"
        "  width: 100%;\n"
        "  height: 100%;\n"
        "}\n"
        "\n"
        "/* Alternative formats */\n"
        ".gradient-webkit {\n"
        f"  background: -webkit-{value};\n"
        f"  background: -moz-{value};\n"
        f"  background: {value};\n"
        "}"
    )


def render(config: GradientConfig) -> GradientOutput:
    return GradientOutput(value=gradient_value(config), css=gradient_css(config))


def add_color_stop(config: GradientConfig, color: str = NEW_STOP_COLOR) -> GradientConfig:
    """Append a stop halfway between the last stop and 100%."""
    position = round((config.stops[-1].position + 100) / 2)
    return config.model_copy(
        update={"stops": [*config.stops, ColorStop(color=color, position=position)]}
    )


def remove_color_stop(config: GradientConfig, index: int) -> GradientConfig:
    if len(config.stops) <= 2:
        raise ValueError("Gradient must have at least 2 color stops")
    stops = [stop for i, stop in enumerate(config.stops) if i != index]
    return config.model_copy(update={"stops": stops})


def random_gradient(rng: Optional[Random] = None) -> GradientConfig:
    """Two to four evenly spaced random stops, a random type and direction."""
    rng = rng or secrets.SystemRandom()
    count = rng.randint(2, 4)
    stops = [
        ColorStop(color=rng.choice(RANDOM_COLORS), position=100 / (count - 1) * i)
        for i in range(count)
    ]
    gradient_type = rng.choice(("linear", "radial", "conic"))
    return GradientConfig(
        type=gradient_type,
        direction=rng.choice(DIRECTION_OPTIONS[gradient_type])["value"],
        stops=stops,
        repeating=rng.random() > 0.8,
    )
