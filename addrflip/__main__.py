"""Run the addrflip CLI: python -m addrflip"""

from addrflip.cli import main

main()
