from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity: storage-assigned integer id and epoch-millisecond timestamps."""

    id: int | None = PydanticField(
        default=None, description="Identifier assigned by storage on insert"
    )
    create_at: int = PydanticField(default=0, description="Creation time, epoch ms")
    update_at: int = PydanticField(default=0, description="Last update time, epoch ms; 0 = never")


class EntityTable(SQLModel, table=False):
    """Base table with an auto-increment primary key and epoch-millisecond timestamps."""

    id: int | None = Field(default=None, primary_key=True)
    create_at: int = Field(default=0)
    update_at: int = Field(default=0)
