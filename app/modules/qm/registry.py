"""Command registry shared by the QM slash command and its interactions."""

from infrastructure.commands.registry import CommandRegistry

registry = CommandRegistry("qm")
