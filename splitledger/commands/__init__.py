"""Command parsing package."""

from splitledger.commands.parser import USAGE, CommandParser, tokenize

__all__ = ["USAGE", "CommandParser", "tokenize"]
