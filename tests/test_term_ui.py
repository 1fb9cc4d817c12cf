import contextlib
from decimal import Decimal

from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from chapter_ledger.categories import EXPENSE_CATEGORIES, Category
from chapter_ledger.models import TransactionRecord, TransactionStatus, TransactionType
from chapter_ledger.term_ui import Decision, describe_request, prompt_decision, select_category

CATEGORIES = [c.value for c in EXPENSE_CATEGORIES]


@contextlib.contextmanager
def pipe_session():
    with create_pipe_input() as pipe:
        sess = PromptSession(input=pipe, output=DummyOutput())
        yield pipe, sess


def _pending() -> TransactionRecord:
    return TransactionRecord(
        id="3",
        date="2024-03-05",
        amount=Decimal("42.50"),
        merchant="Publix",
        category=Category.CATERING_FOOD,
        description="Snacks",
        type=TransactionType.REIMBURSEMENT,
        status=TransactionStatus.PENDING,
        submitted_by="Max Member",
        committee_name="Programs",
    )


def test_select_category_accepts_default_with_enter():
    with pipe_session() as (pipe, sess):
        pipe.send_text("\r")
        assert select_category(CATEGORIES, default="Bank Fees", session=sess) == "Bank Fees"


def test_select_category_exact_value_case_insensitive():
    with pipe_session() as (pipe, sess):
        pipe.send_text("speaker gifts\r")
        assert select_category(CATEGORIES, session=sess) == "Speaker Gifts"


def test_select_category_enter_completes_prefix():
    with pipe_session() as (pipe, sess):
        pipe.send_text("Cater\r")
        assert select_category(CATEGORIES, session=sess) == "Catering & Food"


def test_select_category_tab_completes_prefix():
    with pipe_session() as (pipe, sess):
        pipe.send_text("Subs\t\r")
        assert select_category(CATEGORIES, session=sess) == "Subscriptions"


def test_prompt_decision_keys():
    for keys, expected in (
        ("a\r", Decision.APPROVE),
        ("REJECT\r", Decision.REJECT),
        ("\r", Decision.SKIP),
        ("q\r", Decision.QUIT),
    ):
        with pipe_session() as (pipe, sess):
            pipe.send_text(keys)
            assert prompt_decision(_pending(), session=sess) is expected


def test_describe_request_mentions_key_fields():
    text = describe_request(_pending())
    assert "$42.50" in text
    assert "Publix [Programs]" in text
    assert "Catering & Food via Other" in text
    assert "Max Member" in text
