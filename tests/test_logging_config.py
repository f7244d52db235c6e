from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.processor",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Skipping row %d: %s",
        args=(3, "invalid humidity"),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extra_keys() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    output = formatter.format(_record(source="data.csv", row_number=3, reason="invalid humidity", unrelated="x"))

    assert output == "WARNING Skipping row 3: invalid humidity | source=data.csv row_number=3 reason=invalid humidity"


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["source", "status"])

    assert formatter.format(_record(source=None)) == "Skipping row 3: invalid humidity"
