"""
FUTDash Configuration Service
"""

import configparser
import logging
import pathlib
from typing import Optional

from singleton_decorator import singleton

from . import constants


@singleton
class FutdashConfig:
    """
    Configuration Class that loads in the appropriate configuration file
    and provides the contents for the running program
    """

    logger: logging.Logger
    config_parser: configparser.ConfigParser
    futdash_version: str
    relay_prefix: str
    request_timeout: float
    max_attempts: int
    retry_delay: float
    sbc_cache_seconds: float
    refresh_seconds: float
    output_path: pathlib.Path

    def __init__(self, config_path: Optional[pathlib.Path] = None):
        self.logger = logging.getLogger(__name__)
        self.config_parser = configparser.ConfigParser()

        config_path = config_path or constants.CONFIG_PATH
        self.logger.info(f"Loading configuration from {config_path}")
        self.config_parser.read(str(config_path))

        self.futdash_version = self.get(
            "FUTDASH", "version", fallback="NO_VERSION_FOUND"
        )
        self.relay_prefix = self.config_parser.get(
            "Relay", "prefix", fallback=constants.RELAY_PREFIX
        )
        self.request_timeout = self.get_float("Requests", "timeout", 30.0)
        self.max_attempts = self.get_int("Requests", "max_attempts", 3)
        self.retry_delay = self.get_float("Requests", "retry_delay", 1.0)
        self.sbc_cache_seconds = self.get_float(
            "SBC", "cache_seconds", constants.SBC_CACHE_SECONDS
        )
        self.refresh_seconds = self.get_float("Dashboard", "refresh_seconds", 60.0)
        self.output_path = constants.ENV_OUT_PATH.joinpath("futdash_output")

    def get(self, section: str, option: str, fallback: str = "") -> str:
        """
        Get a specific value from configuration
        :param section: Section header
        :param option: Key in section
        :param fallback: Default value to use if key not found in section
        :returns Configuration value to use
        """
        if self.has_option(section, option):
            return self.config_parser.get(section, option, fallback=fallback)
        return fallback

    def get_int(self, section: str, option: str, fallback: int = 0) -> int:
        """
        Get a specific value from configuration
        :param section: Section header
        :param option: Key in section
        :param fallback: Default value to use if key not found in section
        :returns Configuration value to use (as an Integer)
        """
        if self.has_option(section, option):
            return self.config_parser.getint(section, option, fallback=fallback)
        return fallback

    def get_float(self, section: str, option: str, fallback: float = 0.0) -> float:
        """
        Get a specific value from configuration
        :param section: Section header
        :param option: Key in section
        :param fallback: Default value to use if key not found in section
        :returns Configuration value to use (as a Float)
        """
        if self.has_option(section, option):
            return self.config_parser.getfloat(section, option, fallback=fallback)
        return fallback

    def has_option(self, section: str, option: str) -> bool:
        """
        Check if Configuration has a specific option in a specific section
        and has a defined value (ala not VAR=)
        :param section: Section header to find
        :param option: Option to find in section
        :return Does option exist in section
        """
        return (
            self.config_parser.has_option(section, option)
            and len(str(self.config_parser.get(section, option))) > 0
        )
