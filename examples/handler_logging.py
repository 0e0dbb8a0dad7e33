"""Route stdlib logging records to a stream through the shipped handler."""

from __future__ import annotations

import logging
import os

import ovhlogs


def main() -> None:
    ovhlogs.configure(
        {
            "client": {
                "token": os.environ.get("OVHLOGS_TOKEN", "STREAM_TOKEN"),
                "protocol": "tls",
                "compression": "none",
                "async": True,
                "on_error": "log",
            },
        }
    )
    logger = logging.getLogger("examples.orders")
    logger.setLevel(logging.INFO)
    logger.addHandler(ovhlogs.get_handler())
    for order_id in range(1, 4):
        logger.info("processed order", extra={"order_id": order_id, "total": order_id * 19.99})
    ovhlogs.shutdown(timeout=10.0)


if __name__ == "__main__":
    main()
