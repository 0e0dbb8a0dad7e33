"""Send a single entry and print the outcome."""

from __future__ import annotations

import logging

from ovhlogs import Entry, OvhLogs, OvhLogsError


def main() -> None:
    logs = OvhLogs.create("STREAM_TOKEN", "udp", "none", asynchronous=False)
    entry = Entry(host="localhost", full_message="helo world", level=6)
    try:
        logs.send(entry)
    except OvhLogsError as exc:
        logging.error("send failed: %s", exc)
    else:
        logging.info("entry sent")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
