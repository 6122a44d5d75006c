"""Tests for rendering hierarchical messages as trees."""

import karma
from karma import Karma, describe, render


def output(*lines: str) -> str:
    return "\n".join(lines)


class CustomError(Exception):
    pass


def test_empty_message():
    """An empty leaf message renders as an empty string."""
    assert str(karma.format(None, "")) == ""


def test_simple_message():
    """A leaf message renders as its text."""
    assert str(karma.format(None, "simple error")) == "simple error"


def test_message_with_args():
    """Template arguments are interpolated printf-style."""
    assert str(karma.format(None, "integer: %d", 9)) == "integer: 9"


def test_template_without_args_is_verbatim():
    """Without arguments the template is kept verbatim."""
    assert str(karma.format(None, "100%")) == "100%"


def test_mismatched_args_do_not_raise():
    """Argument mismatches show up in the text instead of raising."""
    message = karma.format(None, "%d and %d", 1).text

    assert message.startswith("%d and %d")
    assert "1" in message


def test_simple_reason():
    """A terminal reason is drawn under the delimiter."""
    assert str(karma.format(ValueError("reason"), "everything has a reason")) == output(
        "everything has a reason",
        "└─ reason",
    )


def test_hierarchical_reason():
    """Nested messages are indented level by level."""
    err = karma.format(karma.format(ValueError("reason"), "cause"), "karma")

    assert str(err) == output(
        "karma",
        "└─ cause",
        "   └─ reason",
    )


def test_hierarchical_reason_with_string():
    """String reasons render like error reasons."""
    err = karma.format(karma.format("reason", "cause"), "karma")

    assert str(err) == output(
        "karma",
        "└─ cause",
        "   └─ reason",
    )


def test_bytes_reason():
    """Bytes reasons are decoded as text."""
    assert str(karma.format(b"self", "no")) == output("no", "└─ self")


def test_empty_message_shows_reason_text():
    """A message-less wrapper renders as its reason."""
    assert str(karma.format(CustomError("boom"), "")) == "boom"


def test_multiple_context_pairs_follow_reason():
    """Context pairs trail the reason in append order."""
    err = describe("host", "example.com").describe("operation", "resolv").format(
        "system error", "unable to resolve"
    )

    assert str(err) == output(
        "unable to resolve",
        "├─ system error",
        "├─ host: example.com",
        "└─ operation: resolv",
    )


def test_context_without_hierarchy():
    """Context attached with reason() adds no level."""
    err = describe("host", "example.com").reason(
        describe("operation", "resolv").reason("system error")
    )

    assert str(err) == output(
        "system error",
        "├─ operation: resolv",
        "└─ host: example.com",
    )


def test_context_on_reason_is_spliced_into_parent():
    """A message-less node does not add a tree level of its own."""
    err = describe("host", "example.com").format(
        describe("os", "linux").reason("system error"),
        "unable to resolve",
    )

    assert str(err) == output(
        "unable to resolve",
        "├─ system error",
        "├─ os: linux",
        "└─ host: example.com",
    )


def test_single_line_branches_are_not_prolongated():
    """Single-line siblings get no spacer lines."""
    err = describe("resolver", "local").describe("host", "example.com").format(
        describe("os", "linux").reason("system error"),
        "unable to resolve",
    )

    assert str(err) == output(
        "unable to resolve",
        "├─ system error",
        "├─ os: linux",
        "├─ resolver: local",
        "└─ host: example.com",
    )


def test_multiline_values_are_indented():
    """Continuation lines of values follow their branch."""
    err = describe("host", "unable to connect\ntemporary unavailable").format(
        describe("context", "a\nb").reason("system error"),
        "unable to resolve",
    )

    assert str(err) == output(
        "unable to resolve",
        "├─ system error",
        "├─ context: a",
        "│  b",
        "└─ host: unable to connect",
        "   temporary unavailable",
    )


def test_non_string_context_value():
    """Non-string values use their str() form."""
    err = describe("code", 88).format(None, "unable to run external command")

    assert str(err) == output(
        "unable to run external command",
        "└─ code: 88",
    )


def test_empty_string_context_value():
    """Empty strings render as <empty>."""
    err = describe("user", "").format(None, "login failed")

    assert str(err) == output("login failed", "└─ user: <empty>")


def test_derived_contexts_render_independently():
    """Lists derived from one base render only their own pairs."""
    void = describe("void", 0).describe("emptiness", 0)

    assert str(void.describe("space", 1).format(None, "the story")) == output(
        "the story",
        "├─ void: 0",
        "├─ emptiness: 0",
        "└─ space: 1",
    )
    assert str(void.describe("time", 1).format(None, "the story")) == output(
        "the story",
        "├─ void: 0",
        "├─ emptiness: 0",
        "└─ time: 1",
    )


def test_context_merges_across_call_depths():
    """Context attached at several depths ends up as siblings of one message."""
    err = describe("level", "baz").reason(describe("level", "bar").reason(CustomError("unable to foo")))

    assert str(err) == output(
        "unable to foo",
        "├─ level: bar",
        "└─ level: baz",
    )


def test_nested_subtrees_are_prolongated():
    """Sibling subtrees are separated by a chainer-only spacer line."""
    foo = describe("wox", 84).format(karma.format(EOFError("EOF"), "eof or something"), "foo")
    bar = describe("barval", 42).format(foo, "bar")
    err = karma.format(bar, "twix")

    assert str(err) == output(
        "twix",
        "└─ bar",
        "   ├─ foo",
        "   │  ├─ eof or something",
        "   │  │  └─ EOF",
        "   │  │",
        "   │  └─ wox: 84",
        "   │",
        "   └─ barval: 42",
    )


def test_context_only_children_are_not_prolongated():
    """A sibling with only context does not trigger spacers."""
    inner = describe("free", "512Kb").format(None, "tcp: out of memory")
    err = describe("host", "example.com").format(inner, "unable to connect")

    assert str(err) == output(
        "unable to connect",
        "├─ tcp: out of memory",
        "│  └─ free: 512Kb",
        "└─ host: example.com",
    )


def test_sequence_reason_renders_siblings():
    """A list reason renders as sibling branches."""
    err = karma.format([ValueError("disk full"), "quota exceeded"], "unable to write")

    assert str(err) == output(
        "unable to write",
        "├─ disk full",
        "└─ quota exceeded",
    )


def test_push_adds_branches():
    """push appends non-None reasons as siblings."""
    err = karma.push(karma.format("first", "root"), "second", None, "third")

    assert err.reasons() == ["first", "second", "third"]
    assert str(err) == output(
        "root",
        "├─ first",
        "├─ second",
        "└─ third",
    )


def test_push_on_plain_value_uses_its_text():
    """push on a plain value uses its text as the message."""
    err = karma.push("root", "branch")

    assert str(err) == output("root", "└─ branch")


def test_custom_exception_renders_with_its_str():
    """Custom exceptions render through their own __str__."""
    class UpperError(Exception):
        def __init__(self, text, reason):
            super().__init__(text)
            self.text = text
            self.reason = reason

        def __str__(self):
            return str(karma.format(self.reason, self.text.upper()))

    err = karma.format(UpperError("upper", ValueError("hierarchical")), "example of custom error")

    assert str(err) == output(
        "example of custom error",
        "└─ UPPER",
        "   └─ hierarchical",
    )


def test_render_accepts_plain_values():
    """render handles values that are not messages."""
    assert render("plain") == "plain"
    assert render(b"bytes") == "bytes"
    assert render(KeyError("missing")) == "'missing'"


def test_karma_can_be_raised():
    """Karma can be raised and caught like any exception."""
    try:
        raise karma.format(ValueError("reason"), "failed")
    except Karma as e:
        assert e.message == "failed"
        assert str(e) == output("failed", "└─ reason")


def test_push_keeps_parent_context():
    """Context of the parent message stays attached after pushing branches."""
    parent = describe("host", "example.com").format("first", "root")

    err = karma.push(parent, "second")

    assert err.context.pairs() == [("host", "example.com")]
    assert str(err) == output(
        "root",
        "├─ first",
        "├─ second",
        "└─ host: example.com",
    )
