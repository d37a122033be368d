"""Allow running the application with ``python -m retroboy_backup``."""

from .app import main

main()
