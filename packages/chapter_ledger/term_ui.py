"""Terminal prompts for the treasurer (prompt_toolkit).

Used by the interactive ``review`` command and ``submit`` when a category is
not given on the command line. Prompts accept an optional ``session`` so
tests can drive them with pipe input.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import StrEnum

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style
from prompt_toolkit.validation import ValidationError, Validator

from .models import TransactionRecord


def _session(session: PromptSession | None, kb: KeyBindings) -> PromptSession:
    if session is None:
        return PromptSession(key_bindings=kb)
    return PromptSession(
        input=getattr(session, "input", None),
        output=getattr(session, "output", None),
        key_bindings=kb,
    )


# ----------------------------------------------------------------------------
# Category selector
# ----------------------------------------------------------------------------


class _PrefixSuggest(AutoSuggest):
    def __init__(self, vocab: Sequence[str]) -> None:
        self._vocab = list(vocab)

    def get_suggestion(self, buffer, document):
        text = document.text
        if not text:
            return None
        lower = text.lower()
        for w in self._vocab:
            if w.lower().startswith(lower):
                remainder = w[len(text) :]
                return Suggestion(remainder) if remainder else None
        return None


def select_category(
    categories: Sequence[str] | Iterable[str],
    *,
    default: str = "",
    message: str = "Category (Tab to complete, Enter to accept): ",
    session: PromptSession | None = None,
) -> str:
    """Prompt for one of ``categories``; returns its canonical spelling.

    A prefix is completed on Enter; input that matches nothing is rejected
    inline and the prompt stays open.
    """

    words = list(categories)
    canonical = {w.lower(): w for w in words}

    def _best_prefix_match(text: str) -> str | None:
        lower = text.lower()
        if not lower:
            return None
        for w in words:
            if w.lower().startswith(lower):
                return w
        return None

    kb = KeyBindings()

    @kb.add("tab", eager=True)
    def _(event) -> None:  # pragma: no cover - integration path
        b = event.app.current_buffer
        cand = _best_prefix_match(b.document.text)
        if cand:
            b.insert_text(cand[len(b.document.text) :])
        elif b.complete_state is None:
            b.start_completion(select_first=True)
        else:
            b.complete_next()

    @kb.add("enter", eager=True)
    def _(event) -> None:  # pragma: no cover
        b = event.app.current_buffer
        cs = b.complete_state
        if cs is not None and cs.current_completion is not None:
            b.apply_completion(cs.current_completion)
        elif b.document.text.lower() not in canonical:
            cand = _best_prefix_match(b.document.text)
            if cand:
                b.text = cand
                b.cursor_position = len(cand)
        b.validate_and_handle()

    class _InList(Validator):
        def validate(self, document) -> None:
            if document.text.strip().lower() not in canonical:
                raise ValidationError(message="Pick a category from the list.")

    sess = _session(session, kb)
    result = sess.prompt(
        message,
        default=default,
        completer=WordCompleter(words, ignore_case=True, match_middle=True, sentence=True),
        auto_suggest=_PrefixSuggest(words),
        validator=_InList(),
        validate_while_typing=False,
        style=Style.from_dict({"auto-suggestion": "fg:#888888"}),
        key_bindings=kb,
    )
    return canonical[result.strip().lower()]


# ----------------------------------------------------------------------------
# Approve / reject prompt
# ----------------------------------------------------------------------------


class Decision(StrEnum):
    APPROVE = "approve"
    REJECT = "reject"
    SKIP = "skip"
    QUIT = "quit"


_DECISION_KEYS = {
    "a": Decision.APPROVE,
    "approve": Decision.APPROVE,
    "r": Decision.REJECT,
    "reject": Decision.REJECT,
    "s": Decision.SKIP,
    "skip": Decision.SKIP,
    "": Decision.SKIP,
    "q": Decision.QUIT,
    "quit": Decision.QUIT,
}


def describe_request(tx: TransactionRecord) -> str:
    committee = f" [{tx.committee_name}]" if tx.committee_name else ""
    lines = [
        f"{tx.date}  {tx.type.value:<13} ${tx.amount:,.2f}  {tx.merchant}{committee}",
        f"  {tx.category} via {tx.payment_source or 'Other'}, submitted by {tx.submitted_by}",
    ]
    if tx.description:
        lines.append(f"  {tx.description}")
    return "\n".join(lines)


def prompt_decision(
    tx: TransactionRecord,
    *,
    session: PromptSession | None = None,
    message: str = "[a]pprove / [r]eject / [s]kip / [q]uit: ",
) -> Decision:
    """Ask what to do with a pending request. Esc quits the review."""

    kb = KeyBindings()

    @kb.add("escape")
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result="q")

    class _V(Validator):
        def validate(self, document) -> None:
            if document.text.strip().lower() not in _DECISION_KEYS:
                raise ValidationError(message="Type a, r, s or q.")

    sess = _session(session, kb)
    answer = sess.prompt(
        f"{describe_request(tx)}\n{message}",
        validator=_V(),
        validate_while_typing=False,
    )
    return _DECISION_KEYS[(answer or "").strip().lower()]


__all__ = ["Decision", "describe_request", "prompt_decision", "select_category"]
