"""Key/value trees rendered as YAML for benchmark reports."""

from __future__ import annotations

import math
from datetime import datetime
from pathlib import Path
from typing import Iterator, Union

YamlValue = Union[str, int, float]


def format_value(value: YamlValue) -> str:
    """Render a scalar the way a default-formatted output stream does.

    Integers are written in full, floats with six significant digits in the
    shortest of fixed or scientific notation, strings unchanged.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "-nan" if math.copysign(1.0, value) < 0 else "nan"
        return "%g" % value
    raise TypeError(f"unsupported YAML value type: {type(value).__name__}")


class YamlElement:
    """A key with either a scalar value or a list of child elements."""

    def __init__(self, key: str = "", value: str = "") -> None:
        self.key = key
        self.value = value
        self.children: list[YamlElement] = []

    def __iter__(self) -> Iterator["YamlElement"]:
        return iter(self.children)

    def __repr__(self) -> str:
        return f"YamlElement({self.key!r}, {self.value!r}, children={len(self.children)})"

    def add(self, key: str, value: YamlValue) -> "YamlElement":
        """Append a child element and return it.

        An element with children carries no value of its own, so this
        element's value is cleared.
        """
        self.value = ""
        element = YamlElement(key, format_value(value))
        self.children.append(element)
        return element

    def get(self, key: str) -> "YamlElement | None":
        """Return the first child with the given key, or None."""
        return next((child for child in self.children if child.key == key), None)

    def print_yaml(self, space: str = "") -> str:
        """Render this element and its children, indented by ``space``."""
        lines = [f"{space}{self.key}: {self.value}\n"]
        child_space = space + "  "
        lines.extend(child.print_yaml(child_space) for child in self.children)
        return "".join(lines)


class YamlDoc(YamlElement):
    """Top-level YAML report for an application run, saved to a dated file."""

    def __init__(
        self,
        mini_app_name: str,
        mini_app_version: str,
        destination_directory: str = "",
        destination_file_name: str = "",
    ) -> None:
        super().__init__()
        self.mini_app_name = mini_app_name
        self.mini_app_version = mini_app_version
        self.destination_directory = destination_directory
        self.destination_file_name = destination_file_name
        self.output_path: Path | None = None

    def render(self) -> str:
        """Return the YAML text of the document without writing it."""
        header = f"{self.mini_app_name} version: {self.mini_app_version}\n"
        return header + "".join(child.print_yaml("") for child in self.children)

    def file_name(self, now: datetime) -> str:
        """Return the report file name for a run at ``now``."""
        stem = self.destination_file_name or f"{self.mini_app_name}-{self.mini_app_version}_"
        return stem + now.strftime("%Y.%m.%d.%H.%M.%S") + ".yaml"

    def generate_yaml(self, now: datetime | None = None) -> str:
        """Write the document to its report file and return the YAML text."""
        if now is None:
            now = datetime.now()
        yaml = self.render()
        name = self.file_name(now)
        directory = self.destination_directory
        if directory not in ("", "."):
            Path(directory).mkdir(parents=True, exist_ok=True)
            path = Path(directory) / name
        else:
            path = Path(".") / name
        path.write_text(yaml)
        self.output_path = path
        return yaml