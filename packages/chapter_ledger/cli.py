# ruff: noqa: I001
"""CLI for the ``chapter_ledger`` package.

This module exposes callable command handlers (``cmd_*``, each returning a
process exit code) and a Typer-based console interface that wraps them.
Environment variables (``DATABASE_URL``, ``LEDGER_USER_EMAIL``, ...) are
loaded from a local ``.env`` using ``python-dotenv`` in the root callback.
Business logic lives in ``chapter_ledger.workflow``, ``chapter_ledger.reports``
and related modules; handlers only parse arguments, open a session, and print.

Errors are written to stderr as a single ``Error: ...`` line and the handler
returns ``1``.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path

import typer
from dotenv import load_dotenv
from prompt_toolkit import PromptSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typer.models import OptionInfo

from ledger_db.client import session_scope

from . import persistence
from .categories import categories_for
from .committees import budget_statuses, summarize_budgets
from .export import default_export_filename, write_transactions_csv
from .ingest.errors import StatementImportError
from .ingest.fields import parse_amount
from .ingest.profiles import get_profile
from .ingest.statement import import_statement_file
from .logging_setup import configure_logging, get_logger
from .models import CommitteeForm, PaymentSource, TransactionRecord, TransactionStatus
from .reports import build_monthly_report, search_transactions, summarize_dashboard
from .roles import PermissionDeniedError, Role, UserProfile, check_position_availability
from .roles import require_treasurer
from .workflow import WorkflowError, import_into_ledger, process_transaction, submit_request

USER_ENV = "LEDGER_USER_EMAIL"

logger = get_logger(__name__)

# Failures reported as a single line on stderr. Pydantic's ValidationError is
# a ValueError; InvalidOperation comes from quantizing out-of-range amounts.
_REPORTED_ERRORS = (
    PermissionDeniedError,
    WorkflowError,
    StatementImportError,
    ValueError,
    InvalidOperation,
    RuntimeError,
    SQLAlchemyError,
)


# ---- Small module-level helpers used by CLI commands -------------------------


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _resolve_actor(session: Session, user: str | None) -> UserProfile | None:
    """Look up the acting profile from ``--user`` or ``LEDGER_USER_EMAIL``.

    Returns ``None`` when no user is configured; an email with no profile is
    an error.
    """

    email = (user or os.getenv(USER_ENV) or "").strip()
    if not email:
        return None
    profile = persistence.get_profile_by_email(session, email)
    if profile is None:
        raise PermissionDeniedError(f"no profile registered for {email!r}")
    logger.debug("Acting as %s (%s)", profile.email, profile.role.value)
    return profile


def _require_amount(raw: str, what: str) -> Decimal:
    value = parse_amount(raw)
    if value is None:
        raise ValueError(f"invalid {what}: {raw!r}")
    return value


def _match_label(raw: str, options: Sequence[str], what: str) -> str:
    lowered = {o.lower(): o for o in options}
    try:
        return lowered[raw.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown {what}: {raw!r} (choose from: {', '.join(options)})") from None


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


def _tx_line(tx: TransactionRecord) -> str:
    signed = tx.signed_amount
    return "\t".join(
        [
            tx.id,
            tx.date,
            tx.type.value,
            f"{signed:.2f}",
            tx.merchant,
            str(tx.category),
            tx.status.value,
        ]
    )


# ---- Command handlers -------------------------------------------------------


def cmd_import_statement(
    csv_path: str,
    *,
    database_url: str | None = None,
    user: str | None = None,
    profile: str | None = None,
    update_balance: bool = True,
    dry_run: bool = False,
) -> int:
    """Import a bank CSV export as approved ``Bank Import`` transactions."""

    try:
        result = import_statement_file(csv_path, profile=get_profile(profile))
    except _REPORTED_ERRORS as e:
        return _fail(str(e))

    if dry_run:
        for tx in result.transactions:
            print(_tx_line(tx))
        print(f"{len(result)} transaction(s) parsed (dry run, nothing saved).")
        return 0

    try:
        with session_scope(database_url=database_url) as session:
            actor = _resolve_actor(session, user)
            saved = import_into_ledger(session, result, actor, update_balance=update_balance)
            balance = persistence.get_balance(session)
    except _REPORTED_ERRORS as e:
        return _fail(f"import failed: {e}")

    print(f"Imported {len(saved)} transaction(s).")
    if update_balance and result.balance is not None:
        print(f"Balance updated to {_money(balance)}.")
    return 0


def cmd_export(
    output: str | None = None,
    *,
    database_url: str | None = None,
    status: str | None = None,
    query: str | None = None,
) -> int:
    """Write ledger transactions to CSV (``-`` for stdout)."""

    try:
        wanted = TransactionStatus(status.upper()) if status else None
        with session_scope(database_url=database_url) as session:
            txs = persistence.list_transactions(session, status=wanted)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    txs = search_transactions(txs, query)

    if output == "-":
        write_transactions_csv(txs, sys.stdout)
        return 0
    target = Path(output or default_export_filename())
    try:
        with target.open("w", encoding="utf-8", newline="") as f:
            count = write_transactions_csv(txs, f)
    except OSError as e:
        return _fail(f"cannot write {target}: {e}")
    print(f"Exported {count} transaction(s) to {target}")
    return 0


def cmd_submit(
    amount: str,
    merchant: str,
    *,
    category: str | None = None,
    tx_type: str = "REIMBURSEMENT",
    date: str | None = None,
    description: str = "",
    payment_source: str = PaymentSource.OTHER.value,
    committee_id: str | None = None,
    user: str | None = None,
    database_url: str | None = None,
    prompt_session: PromptSession | None = None,
) -> int:
    """Submit a reimbursement, direct payment, or deposit for approval."""

    from .term_ui import select_category

    try:
        kind = tx_type.strip().upper()
        offered = [c.value for c in categories_for(kind)]
        if category is None:
            chosen = select_category(offered, session=prompt_session)
        else:
            chosen = _match_label(category, offered, "category")
        form: dict[str, object] = {
            "amount": amount,
            "merchant": merchant,
            "category": chosen,
            "description": description,
            "type": kind,
            "payment_source": _match_label(
                payment_source, [p.value for p in PaymentSource], "payment source"
            ),
            "committee_id": committee_id,
        }
        if date:
            form["date"] = date
        with session_scope(database_url=database_url) as session:
            actor = _resolve_actor(session, user)
            if actor is None:
                raise PermissionDeniedError(
                    f"submitting a request requires --user or {USER_ENV}"
                )
            saved = submit_request(session, form, actor)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))

    print(f"Submitted {saved.type.value.lower()} {saved.id} for {_money(saved.amount)} (PENDING).")
    return 0


def cmd_pending(*, database_url: str | None = None) -> int:
    try:
        with session_scope(database_url=database_url) as session:
            pending = persistence.list_transactions(session, status=TransactionStatus.PENDING)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    if not pending:
        print("No pending requests.")
        return 0
    for tx in pending:
        print(f"{_tx_line(tx)}\t{tx.submitted_by}")
    return 0


def cmd_decide(
    tx_id: str,
    status: TransactionStatus,
    *,
    user: str | None = None,
    database_url: str | None = None,
) -> int:
    """Approve or reject one pending request."""

    try:
        with session_scope(database_url=database_url) as session:
            actor = _resolve_actor(session, user)
            outcome = process_transaction(session, tx_id, status, actor)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))

    print(f"{outcome.record.id} {outcome.record.status.value}.")
    if outcome.balance is not None:
        print(f"Balance is now {_money(outcome.balance)}.")
    return 0


def cmd_review(
    *,
    user: str | None = None,
    database_url: str | None = None,
    prompt_session: PromptSession | None = None,
) -> int:
    """Walk pending requests interactively, one decision per request."""

    from .term_ui import Decision, prompt_decision

    try:
        with session_scope(database_url=database_url) as session:
            require_treasurer(_resolve_actor(session, user), "review requests")
            pending = persistence.list_transactions(session, status=TransactionStatus.PENDING)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))

    if not pending:
        print("No pending requests.")
        return 0

    counts = {Decision.APPROVE: 0, Decision.REJECT: 0, Decision.SKIP: 0}
    for tx in pending:
        try:
            decision = prompt_decision(tx, session=prompt_session)
        except (EOFError, KeyboardInterrupt):
            decision = Decision.QUIT
        if decision is Decision.QUIT:
            break
        if decision is Decision.SKIP:
            counts[Decision.SKIP] += 1
            continue
        status = (
            TransactionStatus.APPROVED if decision is Decision.APPROVE else TransactionStatus.REJECTED
        )
        rc = cmd_decide(tx.id, status, user=user, database_url=database_url)
        if rc != 0:
            return rc
        counts[decision] += 1

    print(
        f"Approved {counts[Decision.APPROVE]}, rejected {counts[Decision.REJECT]}, "
        f"skipped {counts[Decision.SKIP]}."
    )
    return 0


def cmd_dashboard(*, database_url: str | None = None) -> int:
    try:
        with session_scope(database_url=database_url) as session:
            txs = persistence.list_transactions(session)
            balance = persistence.get_balance(session)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))

    s = summarize_dashboard(txs, balance)
    print(f"Current balance:   {_money(s.balance)}")
    print(f"Available balance: {_money(s.available_balance)}")
    print(f"Total income:      {_money(s.total_income)}")
    print(f"Total expenses:    {_money(s.total_expenses)}")
    print(f"Pending requests:  {len(s.pending)} ({_money(s.pending_debits)} outgoing)")
    if s.expenses_by_category:
        print("Expenses by category:")
        for name, total in s.expenses_by_category:
            print(f"  {name}\t{_money(total)}")
    return 0


def cmd_report(month: str, *, database_url: str | None = None) -> int:
    """Print the monthly report for ``month`` (``YYYY-MM``)."""

    try:
        with session_scope(database_url=database_url) as session:
            txs = persistence.list_transactions(session)
        report = build_monthly_report(txs, month)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))

    print(f"Monthly report {report.month}")
    print(f"Total income:   {_money(report.total_income)}")
    print(f"Total expenses: {_money(report.total_expenses)}")
    print(f"Net:            {_money(report.net)}")
    for title, groups in (
        ("Income", report.income_by_category),
        ("Expenses", report.expenses_by_category),
    ):
        if not groups:
            continue
        print(f"{title} by category:")
        for g in groups:
            print(f"  {g.category}\t{_money(g.total)}\t({len(g.transactions)})")
            for tx in g.transactions:
                print(f"    {tx.date}\t{tx.merchant}\t{_money(tx.amount)}")
    for title, totals in (
        ("Income", report.income_by_source),
        ("Expenses", report.expenses_by_source),
    ):
        if not totals:
            continue
        print(f"{title} by payment source:")
        for source, total in totals:
            print(f"  {source}\t{_money(total)}")
    return 0


def cmd_search(query: str, *, database_url: str | None = None) -> int:
    try:
        with session_scope(database_url=database_url) as session:
            txs = persistence.list_transactions(session)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    hits = search_transactions(txs, query)
    for tx in hits:
        print(_tx_line(tx))
    print(f"{len(hits)} match(es).")
    return 0


def cmd_balance(*, database_url: str | None = None) -> int:
    try:
        with session_scope(database_url=database_url) as session:
            balance = persistence.get_balance(session)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    print(_money(balance))
    return 0


def cmd_set_balance(
    amount: str, *, user: str | None = None, database_url: str | None = None
) -> int:
    try:
        value = _require_amount(amount, "balance")
        with session_scope(database_url=database_url) as session:
            require_treasurer(_resolve_actor(session, user), "set balance")
            stored = persistence.set_balance(session, value)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    print(f"Balance set to {_money(stored)}.")
    return 0


def cmd_committees(*, database_url: str | None = None, active_only: bool = False) -> int:
    try:
        with session_scope(database_url=database_url) as session:
            committees = persistence.list_committees(session, active_only=active_only)
            txs = persistence.list_transactions(session)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))

    if not committees:
        print("No committees.")
        return 0
    for st in budget_statuses(committees, txs):
        c = st.committee
        pct = f"{st.percent_used}%" if st.percent_used is not None else "-"
        flag = "" if c.is_active else " (inactive)"
        print(
            f"{c.id}\t{c.name}{flag}\tbudget {_money(c.annual_budget)}\tspent {_money(st.spent)}"
            f"\tremaining {_money(st.remaining)}\t{pct}\t{st.level.value}"
        )
    totals = summarize_budgets(committees, txs)
    print(
        f"Total budget {_money(totals.total_budget)}, spent {_money(totals.total_spent)}, "
        f"remaining {_money(totals.total_remaining)}"
    )
    return 0


def cmd_add_committee(
    name: str,
    *,
    budget: str = "0",
    description: str | None = None,
    chair: str | None = None,
    user: str | None = None,
    database_url: str | None = None,
) -> int:
    try:
        form = CommitteeForm(
            name=name,
            annual_budget=_require_amount(budget, "budget"),
            description=description,
            chair_name=chair,
        )
        with session_scope(database_url=database_url) as session:
            require_treasurer(_resolve_actor(session, user), "add committee")
            created = persistence.add_committee(session, form)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    print(f"Added committee {created.id}: {created.name} ({_money(created.annual_budget)}).")
    return 0


def cmd_update_committee(
    committee_id: str,
    *,
    name: str | None = None,
    budget: str | None = None,
    description: str | None = None,
    chair: str | None = None,
    active: bool | None = None,
    user: str | None = None,
    database_url: str | None = None,
) -> int:
    """Change the given fields of a committee; omitted fields are kept."""

    try:
        with session_scope(database_url=database_url) as session:
            require_treasurer(_resolve_actor(session, user), "update committee")
            current = persistence.get_committee(session, committee_id)
            if current is None:
                raise WorkflowError(f"committee not found: {committee_id}")
            form = CommitteeForm(
                name=name if name is not None else current.name,
                annual_budget=(
                    _require_amount(budget, "budget")
                    if budget is not None
                    else current.annual_budget
                ),
                description=description if description is not None else current.description,
                chair_name=chair if chair is not None else current.chair_name,
                is_active=active if active is not None else current.is_active,
            )
            updated = persistence.update_committee(session, committee_id, form)
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    assert updated is not None
    print(f"Updated committee {updated.id}: {updated.name} ({_money(updated.annual_budget)}).")
    return 0


def cmd_delete_committee(
    committee_id: str, *, user: str | None = None, database_url: str | None = None
) -> int:
    try:
        with session_scope(database_url=database_url) as session:
            require_treasurer(_resolve_actor(session, user), "delete committee")
            deleted = persistence.delete_committee(session, committee_id)
            if deleted is None:
                raise WorkflowError(f"committee not found: {committee_id}")
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    print(f"Deleted committee {deleted.name}.")
    return 0


def cmd_add_profile(
    email: str,
    full_name: str,
    *,
    role: str = Role.MEMBER.value,
    database_url: str | None = None,
) -> int:
    """Register a profile; officer positions can only be held by one person."""

    try:
        wanted = Role(_match_label(role, [r.value for r in Role], "role"))
        with session_scope(database_url=database_url) as session:
            availability = check_position_availability(session, wanted)
            if not availability.available:
                held = f" by {availability.taken_by}" if availability.taken_by else ""
                raise PermissionDeniedError(
                    f"The {wanted.label} position is already held{held}. "
                    "Please select a different role."
                )
            created = persistence.add_profile(
                session, email=email, full_name=full_name, role=wanted
            )
    except _REPORTED_ERRORS as e:
        return _fail(str(e))
    print(f"Added {created.full_name} <{created.email}> as {created.role.label}.")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Chapter ledger: import bank statements, track requests and approvals, "
        "committee budgets and monthly reports. Loads DATABASE_URL and "
        "LEDGER_USER_EMAIL from a local .env before running."
    ),
)

# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults). Typer inspects these when used as default values below.
DATABASE_URL_OPTION: OptionInfo = typer.Option(
    None, "--database-url", help="Override DATABASE_URL (falls back to env var)."
)
USER_OPTION: OptionInfo = typer.Option(
    None, "--user", help=f"Acting user's email (falls back to {USER_ENV})."
)


@app.command("import-statement")
def import_statement_cmd(
    csv_path: Path = typer.Argument(..., dir_okay=False, help="Bank CSV export to import."),
    profile: str | None = typer.Option(
        None, help="Bank format profile (defaults to LEDGER_BANK_PROFILE or 'checking')."
    ),
    update_balance: bool = typer.Option(
        True, help="Replace the stored balance with the statement's latest balance."
    ),
    dry_run: bool = typer.Option(False, help="Parse and print without saving."),
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Import a bank statement CSV (treasurer only)."""

    raise typer.Exit(
        cmd_import_statement(
            str(csv_path),
            database_url=database_url,
            user=user,
            profile=profile,
            update_balance=update_balance,
            dry_run=dry_run,
        )
    )


@app.command("export")
def export_cmd(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output file ('-' for stdout; default dated filename)."
    ),
    status: str | None = typer.Option(None, help="Only PENDING, APPROVED or REJECTED."),
    query: str | None = typer.Option(None, help="Only transactions matching this search."),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Export transactions to CSV."""

    raise typer.Exit(cmd_export(output, database_url=database_url, status=status, query=query))


@app.command("submit")
def submit_cmd(
    amount: str = typer.Argument(..., help="Amount, e.g. 45.00"),
    merchant: str = typer.Argument(..., help="Vendor or payer."),
    category: str | None = typer.Option(None, help="Category (prompted when omitted)."),
    tx_type: str = typer.Option(
        "REIMBURSEMENT", "--type", help="REIMBURSEMENT, EXPENSE or INCOME."
    ),
    date: str | None = typer.Option(None, help="YYYY-MM-DD (default today)."),
    description: str = typer.Option("", help="Purpose of the transaction."),
    payment_source: str = typer.Option(PaymentSource.OTHER.value, help="Payment source."),
    committee_id: str | None = typer.Option(None, "--committee", help="Committee id."),
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Submit a request for the treasurer's approval."""

    raise typer.Exit(
        cmd_submit(
            amount,
            merchant,
            category=category,
            tx_type=tx_type,
            date=date,
            description=description,
            payment_source=payment_source,
            committee_id=committee_id,
            user=user,
            database_url=database_url,
        )
    )


@app.command("pending")
def pending_cmd(database_url: str | None = DATABASE_URL_OPTION) -> None:
    """List requests awaiting approval."""

    raise typer.Exit(cmd_pending(database_url=database_url))


@app.command("approve")
def approve_cmd(
    tx_id: str = typer.Argument(..., help="Transaction id."),
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Approve a pending request (treasurer only)."""

    raise typer.Exit(
        cmd_decide(tx_id, TransactionStatus.APPROVED, user=user, database_url=database_url)
    )


@app.command("reject")
def reject_cmd(
    tx_id: str = typer.Argument(..., help="Transaction id."),
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Reject a pending request (treasurer only)."""

    raise typer.Exit(
        cmd_decide(tx_id, TransactionStatus.REJECTED, user=user, database_url=database_url)
    )


@app.command("review")
def review_cmd(
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Interactively approve or reject pending requests (treasurer only)."""

    raise typer.Exit(cmd_review(user=user, database_url=database_url))


@app.command("dashboard")
def dashboard_cmd(database_url: str | None = DATABASE_URL_OPTION) -> None:
    """Show balance, totals and pending requests."""

    raise typer.Exit(cmd_dashboard(database_url=database_url))


@app.command("report")
def report_cmd(
    month: str = typer.Argument(..., help="Month as YYYY-MM."),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Print the monthly financial report."""

    raise typer.Exit(cmd_report(month, database_url=database_url))


@app.command("search")
def search_cmd(
    query: str = typer.Argument(..., help="Text to find in merchant, description or category."),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Search transactions."""

    raise typer.Exit(cmd_search(query, database_url=database_url))


@app.command("balance")
def balance_cmd(database_url: str | None = DATABASE_URL_OPTION) -> None:
    """Print the stored current balance."""

    raise typer.Exit(cmd_balance(database_url=database_url))


@app.command("set-balance")
def set_balance_cmd(
    amount: str = typer.Argument(..., help="New balance, e.g. 1250.00"),
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Overwrite the stored current balance (treasurer only)."""

    raise typer.Exit(cmd_set_balance(amount, user=user, database_url=database_url))


@app.command("committees")
def committees_cmd(
    active_only: bool = typer.Option(False, help="Hide inactive committees."),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """List committees with budget usage."""

    raise typer.Exit(cmd_committees(database_url=database_url, active_only=active_only))


@app.command("add-committee")
def add_committee_cmd(
    name: str = typer.Argument(..., help="Committee name."),
    budget: str = typer.Option("0", help="Annual budget."),
    description: str | None = typer.Option(None, help="Description."),
    chair: str | None = typer.Option(None, help="Chair's name."),
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Create a committee (treasurer only)."""

    raise typer.Exit(
        cmd_add_committee(
            name,
            budget=budget,
            description=description,
            chair=chair,
            user=user,
            database_url=database_url,
        )
    )


@app.command("update-committee")
def update_committee_cmd(
    committee_id: str = typer.Argument(..., help="Committee id."),
    name: str | None = typer.Option(None, help="New name."),
    budget: str | None = typer.Option(None, help="New annual budget."),
    description: str | None = typer.Option(None, help="New description."),
    chair: str | None = typer.Option(None, help="New chair's name."),
    active: bool | None = typer.Option(None, "--active/--inactive", help="Activation state."),
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Edit a committee (treasurer only)."""

    raise typer.Exit(
        cmd_update_committee(
            committee_id,
            name=name,
            budget=budget,
            description=description,
            chair=chair,
            active=active,
            user=user,
            database_url=database_url,
        )
    )


@app.command("delete-committee")
def delete_committee_cmd(
    committee_id: str = typer.Argument(..., help="Committee id."),
    user: str | None = USER_OPTION,
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Delete a committee; its transactions keep the committee name (treasurer only)."""

    raise typer.Exit(cmd_delete_committee(committee_id, user=user, database_url=database_url))


@app.command("add-profile")
def add_profile_cmd(
    email: str = typer.Argument(..., help="Email address."),
    full_name: str = typer.Argument(..., help="Full name."),
    role: str = typer.Option(
        Role.MEMBER.value,
        help="treasurer, president, vice_president, secretary or member.",
    ),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Register a chapter profile."""

    raise typer.Exit(cmd_add_profile(email, full_name, role=role, database_url=database_url))


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging("DEBUG" if verbose else None)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    app()
