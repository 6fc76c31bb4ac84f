"""Entry point: python -m mimcp"""

from mimcp.cli.main import main

main()
