"""Node definitions for the marked-up stylesheet tree."""

from typing import Annotated, Literal, Union
from pydantic import BaseModel, Field, TypeAdapter


class StringNode(BaseModel):
    type: Literal["string"] = "string"
    code: str


class ImportNode(BaseModel):
    type: Literal["import"] = "import"
    id: str


class BlockNode(BaseModel):
    """A named override point, or the anonymous document root."""

    type: Literal["block"] = "block"
    id: str | None = None
    children: list["Node"] = Field(default_factory=list)

    @property
    def last_child(self) -> "Node | None":
        return self.children[-1] if self.children else None

    def add_child(self, node: "Node") -> None:
        self.children.append(node)

    def add_string(self, code: str) -> None:
        last = self.last_child
        if isinstance(last, StringNode):
            last.code += code
        else:
            self.children.append(StringNode(code=code))


Node = Annotated[Union[BlockNode, StringNode, ImportNode], Field(discriminator="type")]

BlockNode.model_rebuild()

NODE_ADAPTER = TypeAdapter(Node)
NODE_TYPES = (BlockNode, StringNode, ImportNode)
