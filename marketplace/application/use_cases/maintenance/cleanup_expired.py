# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.domain.users.repositories import SessionRepository, VerificationTokenRepository
from marketplace.shared.logging import logger


class CleanupExpiredUseCase:
    def __init__(
        self,
        *,
        sessions: SessionRepository,
        verification_tokens: VerificationTokenRepository,
    ) -> None:
        self._sessions = sessions
        self._verification_tokens = verification_tokens

    def execute(self) -> dict[str, int]:
        counts = {
            "sessions": self._sessions.cleanup_expired(),
            "verification_tokens": self._verification_tokens.cleanup_expired(),
        }
        if any(counts.values()):
            logger.info(
                f"cleanup: removed {counts['sessions']} session(s), "
                f"{counts['verification_tokens']} verification token(s)"
            )
        return counts
