"""
FUTDash Arg Parser to determine what actions to take
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import constants
from .models import ItemCategory

LOGGER = logging.getLogger(__name__)


def parse_list(value: str) -> List[str]:
    """Split a comma separated flag value, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments from user to determine how to spawn up
    FUTDash and complete the request.
    :param argv: Arguments to parse, defaults to sys.argv
    :return: Namespace of requests
    """
    parser = argparse.ArgumentParser("futdash")

    parser.add_argument(
        "--sid",
        metavar="SESSION_ID",
        default="",
        help="Web app session id (X-UT-SID). Never written to disk.",
    )
    parser.add_argument(
        "--use-envvars",
        action="store_true",
        help="Read the session id from the FUTDASH_SID environment variable.",
    )

    # What to build
    parser.add_argument(
        "--players",
        action="store_true",
        help="Build the owned players table (default when no other action is given).",
    )
    parser.add_argument(
        "--sbc",
        action="store_true",
        help="Rank open Squad Building Challenges by community votes.",
    )
    parser.add_argument(
        "--challenges",
        type=int,
        metavar="SET_ID",
        nargs="*",
        default=[],
        help="List the challenges (and team rating requirements) of SBC set(s).",
    )

    # Player filters
    filters = parser.add_argument_group("player filters")
    filters.add_argument(
        "--min-rating",
        type=int,
        default=constants.MIN_RATING,
        help=f"Lowest rating to keep (default {constants.MIN_RATING}).",
    )
    filters.add_argument(
        "--max-rating",
        type=int,
        default=constants.MAX_RATING,
        help=f"Highest rating to keep (default {constants.MAX_RATING}).",
    )
    filters.add_argument(
        "--positions",
        type=parse_list,
        default=[],
        help="Comma separated positions, e.g. ST,CAM.",
    )
    filters.add_argument(
        "--nations", type=parse_list, default=[], help="Comma separated nation names."
    )
    filters.add_argument(
        "--leagues", type=parse_list, default=[], help="Comma separated league names."
    )
    filters.add_argument(
        "--teams", type=parse_list, default=[], help="Comma separated club names."
    )
    filters.add_argument(
        "--types",
        type=parse_list,
        default=[],
        help=f"Comma separated sources: {', '.join(t.value for t in ItemCategory)}.",
    )
    filters.add_argument(
        "--multiple-copies-only",
        action="store_true",
        help="Only keep cards owned more than once.",
    )

    # Output and refresh
    parser.add_argument(
        "--pretty",
        "-p",
        action="store_true",
        help="When dumping JSON files, prettify the contents instead of minifying them.",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Keep re-fetching the players table on the configured interval.",
    )
    parser.add_argument(
        "--refresh-count",
        type=int,
        default=0,
        metavar="N",
        help="Stop after N refreshes (0 = until interrupted).",
    )
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="Drop cached reference data and SBC rankings before every refresh.",
    )

    parsed_args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if parsed_args.use_envvars:
        parsed_args.sid = os.environ.get("FUTDASH_SID", parsed_args.sid)

    parsed_args.sid = parsed_args.sid.strip()
    if not parsed_args.sid:
        parser.error("a session id is required (--sid, or --use-envvars with FUTDASH_SID)")

    if parsed_args.min_rating > parsed_args.max_rating:
        parser.error("--min-rating cannot be above --max-rating")

    valid_types = {item_type.value for item_type in ItemCategory}
    unknown_types = [t for t in parsed_args.types if t not in valid_types]
    if unknown_types:
        parser.error(f"unknown --types value(s): {', '.join(unknown_types)}")

    if not (parsed_args.players or parsed_args.sbc or parsed_args.challenges):
        parsed_args.players = True

    return parsed_args
