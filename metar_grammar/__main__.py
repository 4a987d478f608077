"""Run the command line interface with ``python -m metar_grammar``."""
from .cli import main

raise SystemExit(main())
