"""Module entry point for `python -m m3u8tweaks.cli`."""
import sys

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    # Titles and paths often contain non-ASCII characters
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8", errors="replace")

    from m3u8tweaks.cli import cli

    cli()
