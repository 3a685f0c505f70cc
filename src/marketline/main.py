#!/usr/bin/env python3
"""Terminal dashboard entry point.

Run with: python -m marketline.main (or the `marketline` console script)
"""

import sys
import logging

from marketline.config.logging_config import setup_logging
from marketline.core.exceptions import CredentialError


def main() -> None:
    """Launch the dashboard."""
    setup_logging()
    logger = logging.getLogger(__name__)

    from marketline.app_context import get_app_context
    from marketline.ui.app import run_dashboard

    context = get_app_context()
    logger.info("Starting %s", context.settings.app_name)

    try:
        context.credential
    except CredentialError as e:
        logger.error("Could not obtain provider credential: %s", e.message)
        print(f"\nError: could not connect to the quote provider: {e.message}", file=sys.stderr)
        sys.exit(1)

    try:
        run_dashboard(context)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.exception(f"Application error: {e}")
        print(f"\nApplication error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        context.close()


if __name__ == "__main__":
    main()
