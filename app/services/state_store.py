"""Load and save the league graph as a single JSON document.

The store is whole-graph: ``save_graph`` replaces the stored payload in one
statement, and ``load_graph`` never hands back a partially valid graph.
"""

import logging
from datetime import datetime

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.entities import LeagueGraph
from app.schemas.league_documents import LeagueDocument
from app.services.context import LeagueContext, seed_graph

logger = logging.getLogger(__name__)


def dump_graph(graph: LeagueGraph) -> dict:
    return graph.model_dump(mode="json", by_alias=True)


def parse_graph(payload: dict) -> LeagueGraph:
    return LeagueGraph.model_validate(payload)


async def load_graph(db: AsyncSession, key: str | None = None) -> LeagueGraph:
    """Return the stored graph, or a freshly seeded one.

    A missing row and an unreadable payload both fall back to seed data, which
    is written back straight away so later requests see the same ids. Caller
    owns the transaction.
    """
    key = key or settings.document_key
    result = await db.execute(
        select(LeagueDocument).where(LeagueDocument.key == key)  # type: ignore[arg-type]
    )
    document = result.scalar_one_or_none()
    if document is not None:
        try:
            graph = parse_graph(document.payload)
            if graph.leagues:
                return graph
            logger.warning(f"League document {key!r} has no leagues; reseeding")
        except ValidationError as exc:
            logger.error(f"League document {key!r} failed validation: {exc}")

    ctx = LeagueContext(graph=LeagueGraph())
    graph = seed_graph(ctx)
    await save_graph(db, graph, key)
    return graph


async def load_context(db: AsyncSession, key: str | None = None) -> LeagueContext:
    return LeagueContext(graph=await load_graph(db, key))


async def save_graph(
    db: AsyncSession, graph: LeagueGraph, key: str | None = None
) -> LeagueDocument:
    """Replace the stored document with ``graph``. Caller owns the transaction."""
    key = key or settings.document_key
    payload = dump_graph(graph)

    document = await db.get(LeagueDocument, key)
    if document is None:
        document = LeagueDocument(key=key, payload=payload)
        db.add(document)
    else:
        document.payload = payload
        document.updated_at = datetime.utcnow()

    await db.flush()
    logger.debug(f"Saved league document {key!r}")
    return document
