"""Polytile solver configuration."""

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the polytile solver."""

    catalog_path: str = "catalogs/reference.txt"
    """Path to the piece catalog used by the command-line entry point."""

    prune_isolated_cells: bool = True
    """Whether to discard boards containing an empty cell walled in on all four sides.

    Only applied while every remaining piece covers more than one cell. Default: True.
    """

    keep_boards: bool = False
    """Whether the exploration record stores a snapshot of every board it logs.

    Snapshots are never freed during a search and cost roughly 0.4 KB per board on an
    8x8 board, so leave this off for long runs. Counters and parent links are kept
    either way. Default: False.
    """

    report_interval: int = 100_000
    """Interval (in number of boards checked) at which to report progress. Default: 100,000."""

    max_boards_checked: int | None = None
    """Stop the search after this many boards have been checked. If None (default), no limit."""

    time_limit: float | None = None
    """Stop the search after this many seconds. If None (default), no limit."""

    log_dir: str = "logs"
    """Directory for run logs written by the command-line entry point."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SolverConfig()
