import contextlib
import csv
from pathlib import Path

import pytest
from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput
from typer.testing import CliRunner

from chapter_ledger.cli import app, cmd_review

from tests.helpers.db import MEMBER_EMAIL, TREASURER_EMAIL, bootstrap_sqlite_db

DATA = Path(__file__).resolve().parent / "data" / "checking_statement.csv"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep INFO lines out of the captured command output.
    monkeypatch.setenv("LEDGER_LOG_LEVEL", "WARNING")


@pytest.fixture()
def db_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    url = bootstrap_sqlite_db(tmp_path / "cli.db")
    monkeypatch.setenv("DATABASE_URL", url)
    return url


def _run(*args: str):
    return runner.invoke(app, list(args))


def _ok(*args: str) -> str:
    result = _run(*args)
    assert result.exit_code == 0, result.output
    return result.output


def _seed_people() -> None:
    _ok("add-profile", TREASURER_EMAIL, "Tess Treasurer", "--role", "treasurer")
    _ok("add-profile", MEMBER_EMAIL, "Max Member")


def test_no_subcommand_shows_help():
    assert "Usage" in _run().output


def test_dry_run_import_needs_no_database():
    out = _ok("import-statement", str(DATA), "--dry-run")
    assert "6 transaction(s) parsed" in out
    assert "JANE DOE" in out


def test_import_reports_user_facing_message_for_empty_batch(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("hdr\n1,03/01/2024,,X,0,0,Posted,,\n", encoding="utf-8")
    result = _run("import-statement", str(path), "--dry-run")
    assert result.exit_code == 1
    assert "No valid transactions found" in result.output


def test_database_url_is_required(tmp_path):
    result = _run("balance")
    assert result.exit_code == 1
    assert "DATABASE_URL is not set" in result.output


def test_officer_positions_are_single_holder(db_url):
    _seed_people()
    result = _run("add-profile", "other@chapter.org", "Other Person", "--role", "treasurer")
    assert result.exit_code == 1
    assert "Treasurer position is already held by Tess Treasurer" in result.output
    _ok("add-profile", "pres@chapter.org", "Pat President", "--role", "President")


def test_import_requires_treasurer(db_url):
    _seed_people()
    result = _run("import-statement", str(DATA), "--user", MEMBER_EMAIL)
    assert result.exit_code == 1
    assert "requires the Treasurer role" in result.output

    result = _run("import-statement", str(DATA), "--user", "stranger@x.org")
    assert result.exit_code == 1
    assert "no profile registered" in result.output


def test_import_submit_approve_and_reports(db_url, tmp_path, monkeypatch):
    _seed_people()
    monkeypatch.setenv("LEDGER_USER_EMAIL", TREASURER_EMAIL)

    out = _ok("import-statement", str(DATA))
    assert "Imported 6 transaction(s)." in out
    assert "$1,855.31" in out
    assert _ok("balance").strip() == "$1,855.31"

    out = _ok(
        "submit",
        "42.50",
        "Publix",
        "--category",
        "catering & food",
        "--date",
        "2024-03-28",
        "--description",
        "Snacks for general meeting",
        "--user",
        MEMBER_EMAIL,
    )
    assert "(PENDING)" in out

    pending = _ok("pending")
    tx_id = pending.splitlines()[0].split("\t")[0]
    assert "Max Member" in pending

    denied = _run("approve", tx_id, "--user", MEMBER_EMAIL)
    assert denied.exit_code == 1

    out = _ok("approve", tx_id)
    assert "APPROVED" in out
    assert "$1,812.81" in out

    again = _run("reject", tx_id)
    assert again.exit_code == 1
    assert "only PENDING" in again.output

    assert "No pending requests." in _ok("pending")

    dash = _ok("dashboard")
    assert "Current balance:   $1,812.81" in dash
    assert "Total income:      $855.50" in dash
    assert "Total expenses:    $242.69" in dash

    report = _ok("report", "2024-03")
    assert "Net:            $612.81" in report
    assert "Catering & Food" in report

    bad = _run("report", "2024-3")
    assert bad.exit_code == 1

    hits = _ok("search", "zoom")
    assert "1 match(es)." in hits

    export_path = tmp_path / "out.csv"
    out = _ok("export", "--output", str(export_path))
    assert "Exported 7 transaction(s)" in out
    with export_path.open(encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Date", "Merchant", "Category", "Payment Source", "Type", "Status", "Amount"]
    amounts = {r[1]: r[6] for r in rows[1:]}
    assert amounts["Publix"] == "-42.50"
    assert amounts["PayPal"] == "500.00"


def test_export_default_filename_in_cwd(db_url, tmp_path):
    out = _ok("export")
    assert "Exported 0 transaction(s) to chapter-transactions-" in out
    assert list(tmp_path.glob("chapter-transactions-*.csv"))


def test_submit_validation_errors(db_url):
    _seed_people()
    result = _run("submit", "0", "Publix", "--category", "Bank Fees", "--user", MEMBER_EMAIL)
    assert result.exit_code == 1
    result = _run("submit", "5", "Publix", "--category", "Sponsorship", "--user", MEMBER_EMAIL)
    assert result.exit_code == 1
    assert "unknown category" in result.output
    result = _run("submit", "5", "Publix", "--category", "Bank Fees")
    assert result.exit_code == 1
    assert "requires --user" in result.output


def test_committee_commands(db_url, monkeypatch):
    _seed_people()

    denied = _run("add-committee", "Programs", "--budget", "500", "--user", MEMBER_EMAIL)
    assert denied.exit_code == 1

    monkeypatch.setenv("LEDGER_USER_EMAIL", TREASURER_EMAIL)
    out = _ok("add-committee", "Programs", "--budget", "500", "--chair", "Pat")
    assert "Added committee 1: Programs ($500.00)." in out

    _ok(
        "submit", "450", "Venue Co", "--category", "Venue Rental", "--type", "expense",
        "--committee", "1",
    )
    tx_id = _ok("pending").splitlines()[0].split("\t")[0]
    _ok("approve", tx_id)

    listing = _ok("committees")
    assert "spent $450.00" in listing
    assert "90.0%" in listing
    assert "warning" in listing

    out = _ok("update-committee", "1", "--budget", "400", "--inactive")
    assert "($400.00)" in out
    listing = _ok("committees")
    assert "(inactive)" in listing
    assert "over" in listing
    assert "No committees." in _ok("committees", "--active-only")

    assert "Deleted committee Programs." in _ok("delete-committee", "1")
    missing = _run("delete-committee", "1")
    assert missing.exit_code == 1
    assert "committee not found" in missing.output


def test_set_balance(db_url):
    _seed_people()
    assert _run("set-balance", "100", "--user", MEMBER_EMAIL).exit_code == 1
    assert _run("set-balance", "abc", "--user", TREASURER_EMAIL).exit_code == 1
    out = _ok("set-balance", "$1,250.00", "--user", TREASURER_EMAIL)
    assert "Balance set to $1,250.00." in out


@contextlib.contextmanager
def pipe_session():
    with create_pipe_input() as pipe:
        sess = PromptSession(input=pipe, output=DummyOutput())
        yield pipe, sess


def test_interactive_review(db_url, capsys):
    _seed_people()
    for merchant in ("First", "Second", "Third"):
        _ok("submit", "10", merchant, "--category", "Bank Fees", "--user", MEMBER_EMAIL)

    with pipe_session() as (pipe, sess):
        pipe.send_text("a\rr\rs\r")
        rc = cmd_review(user=TREASURER_EMAIL, database_url=db_url, prompt_session=sess)
    assert rc == 0
    assert "Approved 1, rejected 1, skipped 1." in capsys.readouterr().out

    remaining = _ok("pending")
    assert len(remaining.strip().splitlines()) == 1


def test_review_requires_treasurer(db_url):
    _seed_people()
    rc = cmd_review(user=MEMBER_EMAIL, database_url=db_url)
    assert rc == 1


def test_out_of_range_amount_is_reported_not_raised(db_url, tmp_path):
    _seed_people()
    path = tmp_path / "huge.csv"
    path.write_text(f"hdr\n1,03/01/2024,,DEPOSIT,,{'9' * 40},Posted,5.00,\n", encoding="utf-8")
    result = _run("import-statement", str(path), "--user", TREASURER_EMAIL)
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Error: import failed" in result.output


def test_non_ascii_digit_id_is_not_found(db_url):
    _seed_people()
    result = _run("approve", "²", "--user", TREASURER_EMAIL)
    assert result.exit_code == 1
    assert "transaction not found" in result.output
