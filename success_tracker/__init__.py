"""Daily win/loss tracker: streaks, trends and insights over day logs."""

__version__ = "0.1.0"
