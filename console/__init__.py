"""Console interaction shell for the blackjack engine."""

from console.shell import ConsoleShell

__all__ = ["ConsoleShell"]
