# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Logging setup for the command-line driver."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_STANDARD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message"}


class JsonFormatter(logging.Formatter):
	"""One JSON object per record; `extra=` fields are kept under "fields"."""

	def format(self, record: logging.LogRecord) -> str:
		payload: dict[str, object] = {
			"ts": datetime.now(timezone.utc).isoformat(),
			"level": record.levelname,
			"logger": record.name,
			"msg": record.getMessage(),
		}
		extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
		if extras:
			payload["fields"] = extras
		if record.exc_info:
			payload["exc_info"] = self.formatException(record.exc_info)
		return json.dumps(payload, ensure_ascii=True, default=repr)


def configure_logging(level_name: str = "WARNING", fmt: str = "text") -> None:
	"""Install a single console handler on the `overmatch` logger."""
	logger = logging.getLogger("overmatch")
	logger.handlers.clear()
	logger.setLevel(getattr(logging, level_name.upper(), logging.WARNING))
	handler = logging.StreamHandler()
	if fmt.strip().lower() == "json":
		handler.setFormatter(JsonFormatter())
	else:
		handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
	logger.addHandler(handler)


__all__ = ["JsonFormatter", "configure_logging"]
