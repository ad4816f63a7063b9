"""SVN Visualizer - commit statistics and dashboards for Subversion repositories."""

__version__ = "1.0.0"
