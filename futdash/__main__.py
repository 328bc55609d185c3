"""
FUTDash Main Executor
"""

import argparse
import asyncio
import logging
import sys
import traceback

from futdash import constants
from futdash.context import DashboardContext
from futdash.models import DashboardView, FilterCriteria, ItemCategory
from futdash.output_generator import write_to_file
from futdash.pipeline import build_dashboard

LOGGER: logging.Logger = logging.getLogger(__name__)


def criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    """
    Player filters requested on the command line
    :param args: Parsed arguments
    :return: Filter criteria
    """
    return FilterCriteria(
        rating_min=args.min_rating,
        rating_max=args.max_rating,
        positions=args.positions,
        nations=args.nations,
        leagues=args.leagues,
        teams=args.teams,
        types=[ItemCategory(item_type) for item_type in args.types],
        multiple_copies_only=args.multiple_copies_only,
    )


def log_dashboard(view: DashboardView) -> None:
    """
    Print the headline numbers of a refresh
    :param view: Refreshed dashboard
    """
    summary = view.summary
    for warning in view.warnings:
        LOGGER.warning(f"Partial data: {warning}")

    LOGGER.info(
        f"{summary.unique_players:,} players, {summary.total_cards:,} cards, "
        f"average rating {summary.average_rating}, {summary.duplicates:,} duplicates"
    )
    if summary.top_clubs:
        top = ", ".join(f"{item.name} ({item.count})" for item in summary.top_clubs[:5])
        LOGGER.info(f"Top clubs: {top}")


async def build_players(ctx: DashboardContext, args: argparse.Namespace) -> DashboardView:
    """
    Refresh the owned players table and write it out
    :param ctx: Shared services
    :param args: Parsed arguments
    :return: Refreshed dashboard
    """
    view = await build_dashboard(ctx, args.sid, criteria_from_args(args))
    log_dashboard(view)

    write_to_file("Players", view.players, args.pretty)
    write_to_file("FilterOptions", view.filter_options, args.pretty)
    write_to_file("Statistics", view.summary, args.pretty)
    write_to_file("Warnings", view.warnings, args.pretty)
    return view


async def build_sbc_ranking(ctx: DashboardContext, args: argparse.Namespace) -> None:
    """
    Rank open SBC sets and write them out
    :param ctx: Shared services
    :param args: Parsed arguments
    """
    ranking = await ctx.sbc_service.rank_sbcs(args.sid)
    for sbc in ranking[:10]:
        LOGGER.info(
            f"{sbc.rank_score:.3f}  {sbc.name} ({sbc.challenges_count} left, "
            f"{sbc.like_percent:.0f}% of {sbc.likes + sbc.dislikes} votes)"
        )
    write_to_file("SbcRanking", ranking, args.pretty)


async def build_sbc_challenges(ctx: DashboardContext, args: argparse.Namespace) -> None:
    """
    Write out the challenges of every requested SBC set
    :param ctx: Shared services
    :param args: Parsed arguments
    """
    for set_id in args.challenges:
        details = await ctx.sbc_service.sbc_challenge_details(args.sid, set_id)
        LOGGER.info(f"SBC set {set_id}: {len(details)} challenge(s)")
        write_to_file(f"SbcChallenges_{set_id}", details, args.pretty)


async def dispatcher(args: argparse.Namespace) -> None:
    """
    FUTDash Dispatcher
    """
    from futdash.futdash_config import FutdashConfig

    async with DashboardContext() as ctx:
        if args.sbc:
            await build_sbc_ranking(ctx, args)

        if args.challenges:
            await build_sbc_challenges(ctx, args)

        if not args.players:
            return

        refreshes = 0
        while True:
            if args.clear_cache:
                ctx.invalidate()
            await build_players(ctx, args)
            refreshes += 1

            if not args.refresh or (args.refresh_count and refreshes >= args.refresh_count):
                break
            await asyncio.sleep(FutdashConfig().refresh_seconds)


def validate_config_file_in_place() -> None:
    """
    Check to see if the FUTDash config file was found.
    If not, kill the system with an error message.
    """
    if not constants.CONFIG_PATH.exists():
        LOGGER.error(
            f"{constants.CONFIG_PATH.name} was not found ({constants.CONFIG_PATH}). "
            "Please create this file and re-run the program."
        )
        raise ValueError("ConfigPath not found")


def main() -> int:
    """
    FUTDash safe main call
    """
    from futdash.arg_parser import parse_args
    from futdash.futdash_config import FutdashConfig
    from futdash.utils import init_logger

    args = parse_args()
    init_logger()
    validate_config_file_in_place()

    LOGGER.info(
        f"Starting FUTDash {FutdashConfig().futdash_version} on {constants.FUTDASH_BUILD_DATE}"
    )

    try:
        asyncio.run(dispatcher(args))
    except KeyboardInterrupt:
        LOGGER.info("Interrupted, stopping")
    except Exception as error:
        LOGGER.fatal(f"Exception caught: {error} {traceback.format_exc()}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
