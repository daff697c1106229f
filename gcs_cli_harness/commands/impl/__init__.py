"""
Command implementations wrapping individual gsutil / gcloud storage subcommands.

Each command validates the captured CLI output against its own grammar
before converting it into a typed result.
"""

from .cat_command import CatCommand
from .du_command import DuCommand
from .rm_command import RmCommand, RmCommandStatus
from .sign_url_command import SignUrlCommand

__all__ = ["CatCommand", "DuCommand", "RmCommand", "RmCommandStatus", "SignUrlCommand"]
