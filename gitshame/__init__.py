"""
git-shame: per-author shame and fame leaderboards from git history.
"""
__version__ = "1.0.0"
