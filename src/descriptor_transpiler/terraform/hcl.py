"""
Minimal HCL writer.

Builds blocks and attributes in insertion order and formats them the way
``terraform fmt`` does: two-space indentation and ``=`` signs aligned
across each run of consecutive attributes. The same calls always
produce the same bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

INDENT = "  "

HclValue = str | int | bool


@dataclass(frozen=True)
class _Attribute:
    name: str
    value: HclValue


@dataclass(frozen=True)
class _Newline:
    pass


@dataclass
class HclBlock:
    """A block such as ``module "name" { ... }``."""

    type: str
    labels: list[str] = field(default_factory=list)
    _items: list[_Attribute | _Newline | HclBlock] = field(default_factory=list, repr=False)

    def set_attribute(self, name: str, value: HclValue) -> HclBlock:
        """Set an attribute, replacing an existing one in place."""
        for index, item in enumerate(self._items):
            if isinstance(item, _Attribute) and item.name == name:
                self._items[index] = _Attribute(name, value)
                return self
        self._items.append(_Attribute(name, value))
        return self

    def append_newline(self) -> HclBlock:
        """Append a blank line, which also ends the current alignment run."""
        self._items.append(_Newline())
        return self

    def append_block(self, type: str, labels: list[str] | None = None) -> HclBlock:
        """Append and return a nested block."""
        block = HclBlock(type, list(labels or []))
        self._items.append(block)
        return block

    @property
    def attributes(self) -> dict[str, HclValue]:
        """Attributes in order of first assignment."""
        return {item.name: item.value for item in self._items if isinstance(item, _Attribute)}

    def render(self, depth: int = 0) -> list[str]:
        """Render the block as lines."""
        indent = INDENT * depth
        header = " ".join([self.type, *(format_value(label) for label in self.labels)])
        lines = [f"{indent}{header} {{"]

        run: list[_Attribute] = []
        for item in self._items:
            if isinstance(item, _Attribute):
                run.append(item)
                continue
            lines.extend(_render_attributes(run, depth + 1))
            run = []
            if isinstance(item, _Newline):
                lines.append("")
            else:
                lines.extend(item.render(depth + 1))
        lines.extend(_render_attributes(run, depth + 1))

        lines.append(f"{indent}}}")
        return lines


@dataclass
class HclFile:
    """An HCL document made of top-level blocks."""

    blocks: list[HclBlock] = field(default_factory=list)

    def append_block(self, type: str, labels: list[str] | None = None) -> HclBlock:
        """Append and return a top-level block."""
        block = HclBlock(type, list(labels or []))
        self.blocks.append(block)
        return block

    def render(self) -> str:
        """Render the document. Top-level blocks are separated by a blank line."""
        if not self.blocks:
            return ""
        return "\n\n".join("\n".join(block.render()) for block in self.blocks) + "\n"

    def to_bytes(self) -> bytes:
        return self.render().encode("utf-8")


def _render_attributes(run: list[_Attribute], depth: int) -> list[str]:
    if not run:
        return []
    indent = INDENT * depth
    width = max(len(attribute.name) for attribute in run)
    return [
        f"{indent}{attribute.name.ljust(width)} = {format_value(attribute.value)}"
        for attribute in run
    ]


def format_value(value: HclValue) -> str:
    """Format a Python value as an HCL literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return quote(value)


def quote(text: str) -> str:
    """Quote a string, escaping characters HCL would otherwise interpret."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("${", "$${")
        .replace("%{", "%%{")
    )
    return f'"{escaped}"'
