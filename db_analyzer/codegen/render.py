"""Rendering of generated structs into a single Rust source document."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from .emitter import AttributeStyle, GeneratedStruct

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"
DOCUMENT_TEMPLATE: Final[str] = "types.rs.j2"


@dataclass
class RenderContext:
    """Jinja environment with the document template pre-compiled."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        self._document_template = self.template_env.get_template(DOCUMENT_TEMPLATE)

    @property
    def document_template(self) -> Template:
        return self._document_template


def render_document(
    structs: Sequence[GeneratedStruct],
    style: AttributeStyle = AttributeStyle.SERDE,
    ctx: RenderContext | None = None,
) -> str:
    """Concatenate structs into one document, in the given order.

    The document starts with a header comment and the ``use`` declarations
    of the selected attribute style.
    """
    ctx = ctx or RenderContext()
    return ctx.document_template.render(imports=style.imports, structs=structs)
