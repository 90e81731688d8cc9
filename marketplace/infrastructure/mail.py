# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import sys
from typing import TextIO

from marketplace.domain.users.entities import User
from marketplace.domain.users.repositories import Mailer
from marketplace.shared.logging import logger


class ConsoleMailer(Mailer):
    """Development mailer: prints the verification link instead of sending it.

    The link goes straight to ``stream`` because the log sanitizer would mask
    the token in it.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def send_verification(self, user: User, verification_url: str) -> None:
        stream = self._stream or sys.stderr
        banner = "=" * 80
        print(
            f"\n{banner}\nEMAIL VERIFICATION LINK for {user.email}\n{verification_url}\n{banner}\n",
            file=stream,
            flush=True,
        )
        logger.info(f"mail: verification link issued for user_id={user.id}")


class RecordingMailer(Mailer):
    """Keeps sent links in memory; handy for tests and local scripting."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send_verification(self, user: User, verification_url: str) -> None:
        self.sent.append((user.email, verification_url))


__all__ = ["ConsoleMailer", "RecordingMailer"]
