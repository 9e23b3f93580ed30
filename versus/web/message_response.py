from pydantic import BaseModel

from versus.debate_engine.models import Statement


class MessageResponse(BaseModel):
    """Response model for debate statements."""

    sender: str
    content: str
    type: str

    @classmethod
    def from_statement(cls, statement: Statement) -> "MessageResponse":
        return cls(
            sender=statement.sender,
            content=statement.content,
            type=statement.kind.value,
        )
