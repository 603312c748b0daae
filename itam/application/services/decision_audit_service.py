"""Decision audit: log each authorization gate transition (AuthorizationService hook)."""

from __future__ import annotations

import logging

from itam.application.dtos.decision import AuditRecord
from itam.domain.enums import DecisionState
from itam.shared.telemetry.logging import get_logger


class LoggingAuditHook:
    """Audit hook that writes one log line per transition.

    Intermediate transitions and grants log at INFO (DEBUG when quiet is
    set); denials always log at WARNING.
    """

    def __init__(self, logger: logging.Logger | None = None, *, quiet: bool = False) -> None:
        self.logger = logger or get_logger("itam.authz.audit")
        self.quiet = quiet

    def __call__(self, record: AuditRecord) -> None:
        data = record.to_log_dict()
        if record.state == DecisionState.DENIED:
            self.logger.warning(
                "Authorization denied: principal=%s policy=%s reason=%s scope=%s",
                data["principal_id"],
                data["policy"],
                data["reason"],
                data["scope"],
                extra={"authz": data},
            )
            return
        level = logging.DEBUG if self.quiet else logging.INFO
        self.logger.log(
            level,
            "Authorization %s: principal=%s policy=%s",
            record.state.value,
            data["principal_id"],
            data["policy"],
            extra={"authz": data},
        )
