"""ronlog CLI commands."""
