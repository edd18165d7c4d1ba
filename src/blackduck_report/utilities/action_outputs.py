# blackduck_report/utilities/action_outputs.py

import logging
import os
from typing import Mapping, Optional

logger = logging.getLogger("blackduck-report")

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"
OUTPUT_DELIMITER = "EOF"


def write_action_output(name: str, value: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Publishes a multi-line value as a CI step output.

    When the ``GITHUB_OUTPUT`` environment variable points to a file, the value is
    appended to it between ``name<<EOF`` and ``EOF`` markers. Otherwise the value
    is printed to stdout.

    Args:
        name: Output name
        value: Output value, may span several lines
        environ: Environment to read from (defaults to os.environ)

    Returns:
        bool: True if the value went to the output file, False if it was printed
    """
    if not name:
        raise ValueError("Output name must not be empty")
    environ = os.environ if environ is None else environ
    output_path = (environ.get(GITHUB_OUTPUT_ENV) or "").strip()

    if not output_path:
        logger.debug(f"{GITHUB_OUTPUT_ENV} is not set, printing '{name}' to the console")
        print(value)
        return False

    logger.debug(f"Writing output '{name}' to {output_path}")
    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{OUTPUT_DELIMITER}\n")
        f.write(value)
        if not value.endswith("\n"):
            f.write("\n")
        f.write(f"{OUTPUT_DELIMITER}\n")
    return True
