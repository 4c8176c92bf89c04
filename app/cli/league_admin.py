"""League maintenance commands that work on the stored league document.

Usage:
    python -m app.cli.league_admin seed [--reset]
    python -m app.cli.league_admin generate --division "Div.1" --cycles 2
    python -m app.cli.league_admin standings [--division ID_OR_NAME]
    python -m app.cli.league_admin export --output league.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.entities import Division, LeagueGraph
from app.models.standings import StandingsRow
from app.services.context import LeagueContext, seed_graph
from app.services.errors import LeagueValidationError
from app.services.schedule_service import ScheduleOptions, generate_schedule
from app.services.standings_service import compute_standings
from app.services.state_store import dump_graph, load_context, save_graph
from app.utils.db_async import SessionLocal, dispose_engine, init_db

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("league_admin")


def resolve_division(ctx: LeagueContext, ref: Optional[str]) -> Division:
    """Find a division of the active season by id or (case-insensitive) name."""
    if not ref:
        division = ctx.active_division()
        if division is None:
            raise ValueError("Active season has no divisions")
        return division
    season = ctx.active_season()
    for division in season.divisions:
        if division.id == ref or division.name.casefold() == ref.casefold():
            return division
    raise ValueError(f"Division {ref!r} not found in season {season.number}")


def format_table(rows: Sequence[StandingsRow]) -> str:
    header = f"{'#':>3}    {'Team':<20} {'P':>3} {'W':>3} {'D':>3} {'L':>3} {'GF':>4} {'GA':>4} {'GD':>4} {'Pts':>4}  Form"
    lines = [header]
    for row in rows:
        form = "".join(result.value for result in row.form)
        band = f"  [{row.band.label or row.band.color}]" if row.band else ""
        lines.append(
            f"{row.rank:>3} {row.movement.glyph}  {row.team_name[:20]:<20} "
            f"{row.played:>3} {row.w:>3} {row.d:>3} {row.l:>3} "
            f"{row.gf:>4} {row.ga:>4} {row.gd:>+4} {row.pts:>4}  {form}{band}"
        )
    return "\n".join(lines)


async def cmd_seed(session: AsyncSession, args: argparse.Namespace) -> None:
    if args.reset:
        graph = seed_graph(LeagueContext(graph=LeagueGraph()))
        await save_graph(session, graph, args.key)
        logger.info("League document reset to seed data")
        return
    ctx = await load_context(session, args.key)
    league = ctx.active_league()
    logger.info(f"League document ready; active league {league.name!r}")


async def cmd_generate(session: AsyncSession, args: argparse.Namespace) -> None:
    ctx = await load_context(session, args.key)
    division = resolve_division(ctx, args.division)
    options = ScheduleOptions(cycles=args.cycles, alternate_home_away=not args.no_alternate)
    fixtures = generate_schedule(ctx, division.id, options)
    await save_graph(session, ctx.graph, args.key)
    print(f"{division.name}: {len(fixtures)} fixtures over {max((m.round for m in fixtures), default=0)} rounds")


async def cmd_standings(session: AsyncSession, args: argparse.Namespace) -> None:
    ctx = await load_context(session, args.key)
    division = resolve_division(ctx, args.division)
    rows = compute_standings(ctx, division.id)
    await save_graph(session, ctx.graph, args.key)
    print(division.name)
    print(format_table(rows))


async def cmd_export(session: AsyncSession, args: argparse.Namespace) -> None:
    ctx = await load_context(session, args.key)
    text = json.dumps(dump_graph(ctx.graph), indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(text + "\n")
        logger.info(f"Wrote league document to {args.output}")
    else:
        print(text)


COMMANDS = {
    "seed": cmd_seed,
    "generate": cmd_generate,
    "standings": cmd_standings,
    "export": cmd_export,
}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Maintain the stored league document.")
    parser.add_argument(
        "--key", default=None, help="Document key (defaults to DOCUMENT_KEY setting)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Create the tables and the seed league")
    seed.add_argument("--reset", action="store_true", help="Overwrite any stored league")

    generate = sub.add_parser("generate", help="Regenerate a division's round robin")
    generate.add_argument("--division", help="Division id or name (defaults to active)")
    generate.add_argument("--cycles", type=int, default=1, help="Number of full passes")
    generate.add_argument(
        "--no-alternate",
        action="store_true",
        help="Keep the same home/away orientation on every pass",
    )

    standings = sub.add_parser("standings", help="Print a division's table")
    standings.add_argument("--division", help="Division id or name (defaults to active)")

    export = sub.add_parser("export", help="Dump the league document as JSON")
    export.add_argument("--output", help="File to write (stdout when omitted)")

    return parser.parse_args(argv)


async def main_async(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        await init_db()
        async with SessionLocal() as session:
            async with session.begin():
                await COMMANDS[args.command](session, args)
    except LeagueValidationError as exc:
        logger.error(f"Rejected: {exc}")
        return 2
    except ValueError as exc:
        logger.error(str(exc))
        return 1
    finally:
        await dispose_engine()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(asyncio.run(main_async(argv)))


if __name__ == "__main__":
    main()
