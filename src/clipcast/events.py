"""Interaction events captured alongside a recording.

The capture side writes a JSON array of records, one per interaction,
in camelCase:

  {"type": "click", "timestamp": 1200, "x": 640, "y": 300,
   "viewportWidth": 1280, "viewportHeight": 720,
   "scrollX": 0, "scrollY": 120, "tagName": "BUTTON"}

Every record carries timestamp, viewport size and scroll offset at
capture time. Type-specific fields:
  - click, mouse, mousedown, mouseup: x, y (mouse also isDragging,
    click also tagName)
  - keydown: key, code, ctrlKey, metaKey, shiftKey, altKey
  - url: url
  - mutation: no extra fields

Records of an unknown type are dropped by parse_events.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaseEvent:
    timestamp: float
    viewport_width: float = 0.0
    viewport_height: float = 0.0
    scroll_x: float = 0.0
    scroll_y: float = 0.0


@dataclass(frozen=True)
class ClickEvent(BaseEvent):
    x: float = 0.0
    y: float = 0.0
    tag_name: str = ""
    type: str = "click"


@dataclass(frozen=True)
class MouseEvent(BaseEvent):
    x: float = 0.0
    y: float = 0.0
    is_dragging: bool = False
    type: str = "mouse"


@dataclass(frozen=True)
class MouseDownEvent(BaseEvent):
    x: float = 0.0
    y: float = 0.0
    type: str = "mousedown"


@dataclass(frozen=True)
class MouseUpEvent(BaseEvent):
    x: float = 0.0
    y: float = 0.0
    type: str = "mouseup"


@dataclass(frozen=True)
class UrlEvent(BaseEvent):
    url: str = ""
    type: str = "url"


@dataclass(frozen=True)
class KeydownEvent(BaseEvent):
    key: str = ""
    code: str = ""
    ctrl_key: bool = False
    meta_key: bool = False
    shift_key: bool = False
    alt_key: bool = False
    type: str = "keydown"


@dataclass(frozen=True)
class MutationEvent(BaseEvent):
    type: str = "mutation"


EVENT_TYPES = {
    "click": ClickEvent,
    "mouse": MouseEvent,
    "mousedown": MouseDownEvent,
    "mouseup": MouseUpEvent,
    "url": UrlEvent,
    "keydown": KeydownEvent,
    "mutation": MutationEvent,
}

# camelCase capture field -> dataclass field
_FIELD_NAMES = {
    "timestamp": "timestamp",
    "viewportWidth": "viewport_width",
    "viewportHeight": "viewport_height",
    "scrollX": "scroll_x",
    "scrollY": "scroll_y",
    "x": "x",
    "y": "y",
    "tagName": "tag_name",
    "isDragging": "is_dragging",
    "url": "url",
    "key": "key",
    "code": "code",
    "ctrlKey": "ctrl_key",
    "metaKey": "meta_key",
    "shiftKey": "shift_key",
    "altKey": "alt_key",
}


def parse_event(raw: dict) -> BaseEvent:
    """Convert one capture record into its event dataclass.

    Fields that do not belong to the record's type are ignored, and
    missing geometry fields default to 0.

    Raises:
        ValueError: unknown type or missing timestamp.
    """
    event_type = raw.get("type")
    cls = EVENT_TYPES.get(event_type)
    if cls is None:
        raise ValueError(
            f"Unknown event type '{event_type}'. Valid: {sorted(EVENT_TYPES)}"
        )
    if "timestamp" not in raw:
        raise ValueError(f"Event of type '{event_type}' missing 'timestamp'")

    allowed = cls.__dataclass_fields__
    kwargs = {}
    for key, value in raw.items():
        name = _FIELD_NAMES.get(key)
        if name is not None and name in allowed:
            kwargs[name] = value
    return cls(**kwargs)


def parse_events(raw_events: list[dict]) -> list[BaseEvent]:
    """Parse a capture log, dropping records that cannot be parsed."""
    events = []
    for i, raw in enumerate(raw_events):
        try:
            events.append(parse_event(raw))
        except ValueError as exc:
            logger.debug("Skipping event %d: %s", i, exc)
    return events


def load_event_log(path: str | Path) -> list[BaseEvent]:
    """Read the JSON event array written by the capture side.

    Raises:
        ValueError: the file does not hold a JSON array.
    """
    with open(path) as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"Event log {path}: expected a JSON array of events")
    return parse_events(raw)


def event_to_dict(event: BaseEvent) -> dict:
    """Inverse of parse_event: camelCase capture record."""
    reverse = {v: k for k, v in _FIELD_NAMES.items()}
    record = {"type": event.type}
    for name in event.__dataclass_fields__:
        if name == "type":
            continue
        record[reverse[name]] = getattr(event, name)
    return record
