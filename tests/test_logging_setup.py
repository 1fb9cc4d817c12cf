import io
import logging

from chapter_ledger.logging_setup import configure_logging, get_logger, resolve_level


def test_resolve_level_names_numbers_and_env(monkeypatch):
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" 30 ") == 30
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level(None) == logging.INFO
    monkeypatch.setenv("LEDGER_LOG_LEVEL", "WARNING")
    assert resolve_level(None) == logging.WARNING


def test_configure_once_and_route_package_records():
    first, second = io.StringIO(), io.StringIO()
    configure_logging("INFO", fmt="%(levelname)s %(message)s", stream=first)
    configure_logging("DEBUG", stream=second)

    log = get_logger("chapter_ledger.ingest.statement")
    log.debug("hidden")
    log.info("Imported %d transaction(s)", 3)

    assert first.getvalue() == "INFO Imported 3 transaction(s)\n"
    assert second.getvalue() == ""


def test_format_from_env(monkeypatch):
    monkeypatch.setenv("LEDGER_LOG_FORMAT", "[%(name)s] %(message)s")
    out = io.StringIO()
    configure_logging(stream=out)
    get_logger("chapter_ledger.workflow").warning("balance unchanged")
    assert out.getvalue() == "[chapter_ledger.workflow] balance unchanged\n"
