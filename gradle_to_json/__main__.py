"""Allow ``python -m gradle_to_json``."""

from gradle_to_json.cli import main

main()
