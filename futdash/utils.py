"""
FUTDash simple utilities
"""

import logging
import math
import os
import time

from . import constants


def init_logger() -> None:
    """
    Initialize the main system logger
    """
    constants.LOG_PATH.mkdir(parents=True, exist_ok=True)

    start_time = time.strftime("%Y-%m-%d_%H.%M.%S")

    logging.basicConfig(
        level=(
            logging.DEBUG
            if os.environ.get("FUTDASH_DEBUG", "").lower() in ["true", "1"]
            else logging.INFO
        ),
        format="[%(levelname)s] %(asctime)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(
                str(constants.LOG_PATH.joinpath(f"futdash_{start_time}.log"))
            ),
        ],
    )
    logging.getLogger("aiohttp").setLevel(logging.ERROR)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up (2.5 -> 3)
    :param value: Value to round
    :return: Rounded value
    """
    return int(math.floor(value + 0.5))
