"""Document and segment models produced by the parser"""

from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PlainMarkup(BaseModel):
    """Literal markup text, passed through unmodified."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str
    line: int = 1                   # source line where the text starts


class CodeBlock(BaseModel):
    """A highlight region: language tag plus opaque source text."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    language: Optional[str] = None
    options: Optional[str] = None   # trailing tag markup, e.g. "linenos"
    open_tag: str
    close_tag: str = ""             # empty only for hand-built, unclosed blocks
    source: str = ""
    line: int = 1

    @property
    def text(self) -> str:
        return self.open_tag + self.source + self.close_tag


class TemplateDirective(BaseModel):
    """A paired block directive wrapping child segments."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["directive"] = "directive"
    name: str
    arg: Optional[str] = None
    open_tag: str
    close_tag: str = ""
    children: list["Segment"] = []
    line: int = 1

    @property
    def text(self) -> str:
        return self.open_tag + "".join(c.text for c in self.children) + self.close_tag


Segment = Annotated[
    Union[PlainMarkup, TemplateDirective, CodeBlock],
    Field(discriminator="kind"),
]

TemplateDirective.model_rebuild()


class Document(BaseModel):
    """A metadata header followed by an ordered sequence of body segments.

    `header` keeps the raw header text (delimiters included) so that
    `source()` reproduces the parsed input exactly.
    """
    model_config = ConfigDict(frozen=True)

    metadata: dict[str, str] = {}
    header: Optional[str] = None
    body: list[Segment] = []
    body_offset: int = 1            # 1-based source line of the first body line

    def body_text(self) -> str:
        """Concatenate every segment's text, directive markers included."""
        return "".join(s.text for s in self.body)

    def source(self) -> str:
        return (self.header or "") + self.body_text()

    def walk(self) -> Iterator[Union[PlainMarkup, TemplateDirective, CodeBlock]]:
        """Yield every segment depth-first, parents before their children."""
        stack = list(reversed(self.body))
        while stack:
            seg = stack.pop()
            yield seg
            if isinstance(seg, TemplateDirective):
                stack.extend(reversed(seg.children))
