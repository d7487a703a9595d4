"""Allow ``python -m expressgen``."""

from .cli import main

main()
