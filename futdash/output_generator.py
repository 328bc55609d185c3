"""
FUTDash output generator to write out contents to file & accessory methods
"""

import datetime
import json
import logging
import pathlib
from typing import Any, Dict, Optional

from .futdash_config import FutdashConfig
from .models import FutdashModel

LOGGER = logging.getLogger(__name__)


def build_meta() -> Dict[str, str]:
    """
    Meta block written at the top of every output file
    :return: Date and version of this build
    """
    return {
        "date": datetime.datetime.today().strftime("%Y-%m-%d %H:%M:%S"),
        "version": FutdashConfig().futdash_version,
    }


def _default(obj: Any) -> Any:
    if isinstance(obj, FutdashModel):
        return obj.to_json()
    if isinstance(obj, (datetime.datetime, datetime.date)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def write_to_file(
    file_name: str,
    file_contents: Any,
    pretty_print: bool,
    output_path: Optional[pathlib.Path] = None,
) -> pathlib.Path:
    """
    Dump content to a file in the outputs directory
    :param file_name: File to dump to
    :param file_contents: Contents to dump
    :param pretty_print: Pretty or minimal
    :param output_path: Directory to write into, defaults to the configured one
    :return: Path of the written file
    """
    write_file = (output_path or FutdashConfig().output_path).joinpath(
        f"{file_name}.json"
    )
    write_file.parent.mkdir(parents=True, exist_ok=True)

    with write_file.open("w", encoding="utf-8") as file:
        json.dump(
            obj={"meta": build_meta(), "data": file_contents},
            fp=file,
            indent=(4 if pretty_print else None),
            ensure_ascii=False,
            default=_default,
        )

    LOGGER.debug(f"Wrote {write_file}")
    return write_file
