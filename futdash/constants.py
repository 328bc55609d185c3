"""
FUTDash Constants that cannot be changed and are hardcoded intentionally
"""

import datetime
import os
import pathlib
from typing import Dict, Tuple

TOP_LEVEL_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
RESOURCE_PATH: pathlib.Path = TOP_LEVEL_DIR.joinpath("futdash").joinpath("resources")
CONFIG_PATH: pathlib.Path = RESOURCE_PATH.joinpath("futdash.properties")
ENV_OUT_PATH: pathlib.Path = (
    pathlib.Path(os.environ.get("FUTDASH_OUTPUT_PATH", TOP_LEVEL_DIR))
    .expanduser()
    .resolve()
)
LOG_PATH: pathlib.Path = ENV_OUT_PATH.joinpath("futdash_logs")

FUTDASH_BUILD_DATE: str = datetime.datetime.today().strftime("%Y-%m-%d")

# Upstream services
RELAY_PREFIX: str = "https://cors-anywhere-lorenzo.herokuapp.com/"
EA_CONTENT_URL: str = (
    "https://www.ea.com/ea-sports-fc/ultimate-team/web-app/content/"
    "26E4D4D6-8DBB-4A9A-BD99-9C47D3AA341D/2026/fut/items"
)
EA_STATIC_URL: str = f"{EA_CONTENT_URL}/web"
EA_IMAGES_URL: str = f"{EA_CONTENT_URL}/images/mobile"
FUT_API_URL: str = "https://utas.mob.v4.prd.futc-ext.gcp.ea.com/ut/game/fc26"
FUTGG_API_URL: str = "https://www.fut.gg/api/fut/fc-core-data"
FUTNEXT_API_URL: str = "https://enhancer-api.futnext.com"

# Only clubs, nations and leagues are needed from the fut.gg core data
FUTGG_QUERY_FLAGS: Dict[str, str] = {
    "evolution_names": "false",
    "clubs": "true",
    "nations": "true",
    "leagues": "true",
    "rarities": "false",
    "rarity_squads": "false",
    "evolutions_lite": "false",
    "evolutions": "false",
    "active_evolutions": "false",
    "rarity_groups": "false",
    "roles": "false",
    "base_roles": "false",
    "play_styles": "false",
    "build_up_styles": "false",
    "defensive_approaches": "false",
}

SESSION_HEADER: str = "X-UT-SID"
REQUESTED_WITH_HEADER: Tuple[str, str] = ("X-Requested-With", "XMLHttpRequest")
DEFAULT_ACCEPT: str = "application/json"

# Image folder and art variant per entity kind
IMAGE_PATHS: Dict[str, str] = {
    "club": "clubs/dark",
    "nation": "flags/light",
    "league": "leagues/dark",
}

UNKNOWN_NAME: str = "Unknown"
POSITION_SEPARATOR: str = " / "

MIN_RATING: int = 47
MAX_RATING: int = 99

# (label, min, max) inclusive
RATING_BUCKETS: Tuple[Tuple[str, int, int], ...] = (
    ("87+", 87, 99),
    ("84-86", 84, 86),
    ("≤83", 0, 83),
)

SBC_CACHE_SECONDS: float = 5 * 60
WILSON_Z: float = 1.96
TEAM_RATING_REQUIREMENT: str = "TEAM_RATING_1_TO_100"
