"""Upkeep — interactive maintenance-task runner"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("upkeep")
except PackageNotFoundError:
    __version__ = "dev"

__author__ = "Upkeep"
