"""Configuration models for the ten component kinds."""

from typing import Annotated, Any, Literal, Union

from pydantic import Discriminator, Field, Tag

from .types import (
    DEFAULT_KEY,
    PIXELS,
    ArtifactKind,
    BorderStyle,
    ComponentConfig,
    Flag,
    HexColor,
    MembershipRule,
    Number,
    SchemaModel,
    Size,
    Text,
    pixels,
)

COLOR_RULE = "All color values MUST be in hex format (#RRGGBB)."

Radius = pixels(0, 100)
SmallRadius = pixels(0, 50)
BorderWidth = pixels(0, 20)
ThinBorderWidth = pixels(0, 10)
BarHeight = pixels(1, 100)
PositivePixels = Annotated[Number, Field(gt=0)]

# === SHARED MODELS ===


class Padding(SchemaModel):
    px: PositivePixels = Field(description="Horizontal padding", json_schema_extra=PIXELS)
    py: PositivePixels = Field(description="Vertical padding", json_schema_extra=PIXELS)


class ButtonStyles(SchemaModel):
    borderRadius: Radius | None = Field(None, description="Corner radius", json_schema_extra=PIXELS)
    backgroundColor: HexColor | None = Field(None, description="Background color")
    fontColor: HexColor | None = Field(None, description="Label text color")
    borderColor: HexColor | None = Field(None, description="Border color")
    borderStyle: BorderStyle | None = None
    borderWidth: BorderWidth | None = Field(None, description="Border width", json_schema_extra=PIXELS)
    padding: Padding | None = None


class IconButtonStyles(ButtonStyles):
    fontColor: HexColor | None = Field(None, description="Icon and label color")


# === MODELS ===


class ButtonConfig(ComponentConfig):
    kind = ArtifactKind.BUTTON
    display_name = "Button"
    rules = (COLOR_RULE, "borderRadius must be between 0 and 100.")
    hint = (
        'If user says "make it blue", change backgroundColor to "#0000FF", '
        "and keep other properties."
    )
    example = {
        "label": "Click me",
        "variant": "contained",
        "size": "medium",
        "styles": {
            "backgroundColor": "#1976D2",
            "fontColor": "#FFFFFF",
            "borderRadius": 4,
        },
    }

    label: Text = Field(description="Button text")
    variant: Literal["contained", "outlined", "text"]
    size: Size
    disabled: Flag | None = Field(None, json_schema_extra={DEFAULT_KEY: "false"})
    styles: ButtonStyles | None = Field(None, description="Visual overrides")


class IconButtonConfig(ComponentConfig):
    kind = ArtifactKind.ICON_BUTTON
    display_name = "Icon Button"
    rules = (
        COLOR_RULE,
        "If showLabel is true, ensure label has a value.",
        "borderRadius must be between 0 and 100.",
    )
    hint = (
        'If user says "make it blue", change backgroundColor to "#0000FF", '
        "and keep other properties."
    )
    example = {
        "label": "Settings",
        "showLabel": True,
        "variant": "outlined",
        "size": "medium",
        "styles": {
            "borderColor": "#1976D2",
            "borderStyle": "solid",
            "borderWidth": 1,
        },
    }

    label: Text | None = Field(None, description="Optional button text")
    showLabel: Flag | None = Field(None, description="Whether to show label text")
    variant: Literal["contained", "outlined"]
    size: Size
    styles: IconButtonStyles | None = Field(None, description="Visual overrides")


class AccordionStyles(SchemaModel):
    borderRadius: Radius | None = Field(None, description="Corner radius", json_schema_extra=PIXELS)
    backgroundColor: HexColor | None = Field(None, description="Background color")
    borderColor: HexColor | None = Field(None, description="Border color")
    titleColor: HexColor | None = Field(None, description="Title text color")
    answerColor: HexColor | None = Field(None, description="Answer/content text color")


class AccordionConfig(ComponentConfig):
    kind = ArtifactKind.ACCORDION
    display_name = "Accordion"
    rules = (COLOR_RULE, "borderRadius must be between 0 and 100.")
    hint = (
        'If user says "make the title red", change styles.titleColor to '
        '"#FF0000", and keep other properties.'
    )
    example = {
        "title": "What is this?",
        "content": "A collapsible section of text.",
        "size": "medium",
        "styles": {
            "borderRadius": 8,
            "backgroundColor": "#FFFFFF",
            "titleColor": "#111111",
            "answerColor": "#555555",
        },
    }

    title: Text | None = Field(None, description="Header text")
    content: Text | None = Field(None, description="Body text shown when expanded")
    size: Size | None = Field(None, json_schema_extra={DEFAULT_KEY: '"medium"'})
    styles: AccordionStyles | None = Field(None, description="Visual overrides")


class InputStyles(SchemaModel):
    borderRadius: Radius | None = Field(None, description="Corner radius", json_schema_extra=PIXELS)
    borderColor: HexColor | None = Field(None, description="Border color")
    focusColor: HexColor | None = Field(None, description="Border color while focused")
    backgroundColor: HexColor | None = Field(None, description="Background color")
    fontColor: HexColor | None = Field(None, description="Text color")
    padding: Padding | None = None


class InputConfig(ComponentConfig):
    kind = ArtifactKind.INPUT
    display_name = "Input"
    rules = (
        COLOR_RULE,
        "borderRadius must be between 0 and 100.",
        'variant must be either "outlined" or "standard".',
    )
    hint = (
        'If user says "change background to blue", change backgroundColor to '
        '"#0000FF", and keep other properties.'
    )
    example = {
        "label": "Email",
        "placeholder": "you@example.com",
        "variant": "outlined",
        "size": "medium",
        "styles": {"focusColor": "#1976D2", "padding": {"px": 12, "py": 8}},
    }

    label: Text = Field(description="Input label")
    placeholder: Text = Field(description="Input placeholder")
    variant: Literal["outlined", "standard"]
    size: Size
    styles: InputStyles | None = Field(None, description="Visual overrides")


# Tags appear in validation error locations after the list index.
STRING_OPTION = "string"
OBJECT_OPTION = "object"
UNION_TAGS = frozenset({STRING_OPTION, OBJECT_OPTION})


class SelectOption(SchemaModel):
    value: Text
    label: Text


def _option_tag(value: Any) -> str | None:
    if isinstance(value, str):
        return STRING_OPTION
    if isinstance(value, (dict, SelectOption)):
        return OBJECT_OPTION
    return None


OptionEntry = Annotated[
    Union[
        Annotated[Text, Tag(STRING_OPTION)],
        Annotated[SelectOption, Tag(OBJECT_OPTION)],
    ],
    Discriminator(
        _option_tag,
        custom_error_type="option_type",
        custom_error_message="Input should be a string or an object with value and label",
    ),
]


class SelectStyles(SchemaModel):
    color: HexColor | None = Field(None, description="Text or primary color")
    backgroundColor: HexColor | None = Field(None, description="Background color")
    borderRadius: Radius | None = Field(None, description="Corner radius", json_schema_extra=PIXELS)
    borderColor: HexColor | None = Field(None, description="Border color")


class SelectConfig(ComponentConfig):
    kind = ArtifactKind.SELECT
    display_name = "Select"
    rules = (
        COLOR_RULE,
        "options must have at least one item.",
        "value must match one of the option values.",
    )
    membership = (
        MembershipRule(
            field="value",
            among="options",
            key="value",
            message="Value must match one of the option values",
        ),
    )
    hint = (
        'If user says "add an option Cherry", append "Cherry" to options, '
        "and keep other properties."
    )
    example = {
        "options": ["Apple", {"value": "banana", "label": "Banana"}],
        "value": "Apple",
        "placeholder": "Pick a fruit",
        "size": "medium",
    }

    options: list[OptionEntry] = Field(min_length=1)
    value: Text = Field(description="Currently selected option value")
    placeholder: Text | None = None
    label: Text | None = None
    size: Size | None = None
    disabled: Flag | None = None
    styles: SelectStyles | None = Field(None, description="Visual overrides")


class RadioStyles(SchemaModel):
    color: HexColor | None = Field(None, description="Text/main color")
    backgroundColor: HexColor | None = Field(None, description="Background color")
    borderColor: HexColor | None = Field(None, description="Border color")


class RadioConfig(ComponentConfig):
    kind = ArtifactKind.RADIO
    display_name = "Radio"
    rules = (
        "All colors in styles MUST be in hex format (#RRGGBB).",
        "options must have at least one item.",
        "selectedValue must match one of the options.",
    )
    membership = (
        MembershipRule(
            field="selectedValue",
            among="options",
            message="Selected value must be one of the options",
        ),
    )
    hint = (
        'If user says "select the second option", set selectedValue to the '
        "second entry of options, and keep other properties."
    )
    example = {
        "options": ["Small", "Medium", "Large"],
        "selectedValue": "Medium",
        "size": "medium",
        "disabled": False,
        "styles": {"color": "#1976D2"},
    }

    options: list[Text] = Field(min_length=1)
    selectedValue: Text = Field(description="Must be one of the options")
    size: Size | None = None
    disabled: Flag | None = None
    color: Text | None = Field(None, description="Legacy color prop")
    styles: RadioStyles | None = Field(None, description="Visual overrides")


class CardStyles(SchemaModel):
    backgroundColor: HexColor | None = Field(None, description="Background color")
    borderColor: HexColor | None = Field(None, description="Border color")
    borderWidth: ThinBorderWidth | None = Field(
        None, description="Border width", json_schema_extra=PIXELS
    )
    borderRadius: SmallRadius | None = Field(
        None, description="Corner radius", json_schema_extra=PIXELS
    )
    titleColor: HexColor | None = Field(None, description="Title text color")
    fontColor: HexColor | None = Field(None, description="Body text color")
    padding: Padding | None = None
    shadow: Literal["none", "sm", "md", "lg"] | None = None


class CardConfig(ComponentConfig):
    kind = ArtifactKind.CARD
    display_name = "Card"
    rules = (COLOR_RULE, "borderRadius must be between 0 and 50.")
    hint = (
        'If user says "remove the picture", set image to false, '
        "and keep other properties."
    )
    example = {
        "title": "Card title",
        "description": "Card body text",
        "image": True,
        "styles": {
            "borderWidth": 1,
            "borderRadius": 12,
            "shadow": "md",
            "padding": {"px": 16, "py": 16},
        },
    }

    title: Text = Field(description="Card title")
    description: Text = Field(description="Card body text")
    image: Flag | None = Field(
        None, description="Whether to show an image", json_schema_extra={DEFAULT_KEY: "true"}
    )
    styles: CardStyles | None = Field(None, description="Visual overrides")


class ModalStyles(SchemaModel):
    borderRadius: SmallRadius | None = Field(
        None, description="Corner radius", json_schema_extra=PIXELS
    )
    backgroundColor: HexColor | None = Field(None, description="Background of the modal content")
    titleColor: HexColor | None = Field(None, description="Title color")
    textColor: HexColor | None = Field(None, description="Content text color")
    overlayColor: Text | None = Field(None, description="Color of the overlay/backdrop")


class ModalConfig(ComponentConfig):
    kind = ArtifactKind.MODAL
    display_name = "Modal"
    rules = (COLOR_RULE, "borderRadius must be between 0 and 50.")
    hint = (
        'If user says "darker background", change styles.backgroundColor to a '
        'darker hex such as "#222222", and keep other properties.'
    )
    example = {
        "title": "Confirm",
        "content": "Are you sure you want to continue?",
        "styles": {"borderRadius": 8, "overlayColor": "rgba(0, 0, 0, 0.5)"},
    }

    title: Text = Field(description="Modal title")
    content: Text = Field(description="Body text of the modal")
    styles: ModalStyles | None = Field(None, description="Visual overrides")


class TabItem(SchemaModel):
    label: Text
    value: Text
    content: Text


class TabsStyles(SchemaModel):
    activeColor: HexColor | None = Field(None, description="Active tab text/indicator color")
    inactiveColor: HexColor | None = Field(None, description="Inactive tab color")
    backgroundColor: HexColor | None = Field(None, description="Tab list background")
    borderRadius: SmallRadius | None = Field(
        None, description="Corner radius", json_schema_extra=PIXELS
    )
    padding: Number | None = Field(None, json_schema_extra=PIXELS)


class TabsConfig(ComponentConfig):
    kind = ArtifactKind.TABS
    display_name = "Tabs"
    rules = (
        COLOR_RULE,
        "tabs must have at least one item.",
        "defaultValue must match one of the tab values.",
    )
    membership = (
        MembershipRule(
            field="defaultValue",
            among="tabs",
            key="value",
            message="Default value must match one of the tab values",
        ),
    )
    hint = (
        'If user says "highlight the active tab in green", change '
        'styles.activeColor to "#00FF00", and keep other properties.'
    )
    example = {
        "tabs": [
            {"label": "Overview", "value": "overview", "content": "Summary text"},
            {"label": "Details", "value": "details", "content": "Detail text"},
        ],
        "defaultValue": "overview",
        "orientation": "horizontal",
        "variant": "standard",
    }

    tabs: list[TabItem] = Field(min_length=1)
    defaultValue: Text = Field(description="Value of the initially active tab")
    orientation: Literal["horizontal", "vertical"] | None = None
    variant: Literal["standard", "enclosed", "outline", "soft", "solid"] | None = None
    styles: TabsStyles | None = Field(None, description="Visual overrides")


class ProgressStyles(SchemaModel):
    indicatorColor: HexColor | None = Field(None, description="Active part of the bar")
    trackColor: HexColor | None = Field(None, description="Background track")
    height: BarHeight | None = Field(None, description="Bar height", json_schema_extra=PIXELS)
    borderRadius: Radius | None = Field(None, description="Corner radius", json_schema_extra=PIXELS)


class ProgressConfig(ComponentConfig):
    kind = ArtifactKind.PROGRESS
    display_name = "Progress"
    rules = (
        COLOR_RULE,
        "value should be between 0 and max.",
        "indicatorColor is the active part, trackColor is the background.",
    )
    hint = (
        'If user says "make the bar green", change indicatorColor to "#00FF00", '
        "and keep other properties."
    )
    example = {
        "value": 10,
        "max": 100,
        "size": "medium",
        "label": "Uploading",
        "styles": {
            "indicatorColor": "#1976D2",
            "trackColor": "#E0E0E0",
            "height": 8,
            "borderRadius": 4,
        },
    }

    value: Annotated[Number, Field(ge=0)] | None = Field(None, description="Current progress")
    max: Annotated[Number, Field(ge=1)] | None = Field(
        None, description="Maximum progress value", json_schema_extra={DEFAULT_KEY: "100"}
    )
    size: Size | None = None
    label: Text | None = Field(None, description="Text shown with the bar")
    styles: ProgressStyles | None = Field(None, description="Visual overrides")


SCHEMA_REGISTRY: dict[ArtifactKind, type[ComponentConfig]] = {
    model.kind: model
    for model in (
        ButtonConfig,
        IconButtonConfig,
        AccordionConfig,
        InputConfig,
        SelectConfig,
        RadioConfig,
        CardConfig,
        ModalConfig,
        TabsConfig,
        ProgressConfig,
    )
}

__all__ = [
    "SCHEMA_REGISTRY",
    "COLOR_RULE",
    "UNION_TAGS",
    "Padding",
    "SelectOption",
    "TabItem",
    "ButtonConfig",
    "IconButtonConfig",
    "AccordionConfig",
    "InputConfig",
    "SelectConfig",
    "RadioConfig",
    "CardConfig",
    "ModalConfig",
    "TabsConfig",
    "ProgressConfig",
]
