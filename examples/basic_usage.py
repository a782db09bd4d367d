#!/usr/bin/env python3
"""Basic usage example"""

import sys

from fieldlog import LoggerBuilder, LogLevel, new_logger
from fieldlog.formatters import TextFormatter


class PaymentService:
    def __init__(self, logger):
        self.log = logger.with_field("component", "payments")

    def charge(self, user_id, amount):
        log = self.log.with_field("user_id", user_id).with_field("amount", amount)
        log.debug("charging card")
        try:
            if amount <= 0:
                raise ValueError(f"invalid amount {amount}")
        except ValueError as e:
            log.with_error(e).error("charge rejected")
            return False
        log.info("charge accepted")
        return True


def main():
    # JSON lines on stdout
    logger = new_logger(sys.stdout, None, "DEBUG")
    logger.info("Application started")

    service = PaymentService(logger)
    service.charge(42, 10)
    service.charge(42, -1)

    # Human readable output on stderr, warnings and above only
    console = (LoggerBuilder()
        .with_level(LogLevel.WARN)
        .with_console()
        .with_formatter(TextFormatter(colored=True))
        .with_thread_safety()
        .build())

    console.info("This is suppressed")
    console.with_field("disk", "/var").warn("Disk almost full")


if __name__ == "__main__":
    main()
