from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel


class LeagueDocument(SQLModel, table=True):  # type: ignore[call-arg]
    """The whole league graph, stored as one JSON document per key."""

    __tablename__ = "league_documents"

    key: str = Field(primary_key=True, description="Document key, e.g. 'default'")
    payload: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False),
    )
    updated_at: datetime = Field(default_factory=datetime.utcnow)
