"""Dynamic version read from futdash.properties."""

import configparser
import pathlib

_config = configparser.ConfigParser()
_config.read(pathlib.Path(__file__).parent / "resources" / "futdash.properties")
__version__ = _config.get("FUTDASH", "version", fallback="1.0.0+fallback")
