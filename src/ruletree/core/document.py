"""
Document tree produced by the script parser.

The tree is built incrementally during a single scan and handed to the
reply-selection layer as-is. Models are pydantic so that trees compare by
value and can be dumped to plain dictionaries.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Trigger(BaseModel):
    """
    A pattern with its responses, conditions and optional redirect.

    Params:
        trigger: Pattern text of the `+` line
        reply: Responses in document order
        condition: Condition lines in document order
        redirect: Name of another trigger whose replies are reused
        previous: Required pattern of the bot's previous reply, if any
    """

    trigger: str
    reply: list[str] = Field(default_factory=list)
    condition: list[str] = Field(default_factory=list)
    redirect: str | None = None
    previous: str | None = None


class Topic(BaseModel):
    """Named group of triggers and its declared relations to other topics."""

    includes: set[str] = Field(default_factory=set)
    inherits: set[str] = Field(default_factory=set)
    triggers: list[Trigger] = Field(default_factory=list)


class ObjectMacro(BaseModel):
    """Embedded source block, kept verbatim."""

    name: str
    language: str
    code: list[str] = Field(default_factory=list)


class BeginBlock(BaseModel):
    """Definition tables filled by `!` lines."""

    model_config = ConfigDict(populate_by_name=True)

    global_: dict[str, str] = Field(default_factory=dict, alias="global")
    var: dict[str, str] = Field(default_factory=dict)
    sub: dict[str, str] = Field(default_factory=dict)
    person: dict[str, str] = Field(default_factory=dict)
    array: dict[str, list[str]] = Field(default_factory=dict)

    def table(self, kind: str) -> dict:
        """Return the table for a definition type (`global`, `var`, ...)."""
        if kind == "global":
            return self.global_
        if kind in ("var", "sub", "person", "array"):
            return getattr(self, kind)
        raise KeyError(f"Unknown definition table: {kind}")


class Document(BaseModel):
    """Root of the parsed tree."""

    begin: BeginBlock = Field(default_factory=BeginBlock)
    topics: dict[str, Topic] = Field(default_factory=dict)
    objects: list[ObjectMacro] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Dump the tree to plain dictionaries, using `global` as the table key."""
        return self.model_dump(by_alias=True)


def new_document() -> Document:
    """Create an empty document with all begin tables present."""
    return Document()


def init_topic(topics: dict[str, Topic], name: str) -> Topic:
    """
    Return the topic entry for `name`, creating an empty one on first use.

    Params:
        topics: The document's topic mapping
        name: Topic name

    Returns:
        The existing or newly created Topic
    """
    if name not in topics:
        topics[name] = Topic()
    return topics[name]
