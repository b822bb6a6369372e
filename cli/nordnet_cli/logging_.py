from __future__ import annotations

import logging


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # httpx is noisy at debug level; only let it through with --verbose
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("nordnet_client").setLevel(logging.DEBUG if verbose else logging.WARNING)


def debug_enabled() -> bool:
    return logging.getLogger("nordnet_client").isEnabledFor(logging.DEBUG)
