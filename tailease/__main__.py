"""Allow ``python -m tailease``."""

from tailease.pipeline import main

main()
