import pytest

from otp_bot.core.commands import Command, CommandKind, classify


@pytest.mark.parametrize("body", ["buy", "BUY", "/buy", "buy plan", "  Buy Plan \n"])
def test_buy(body):
    assert classify(body) == Command(CommandKind.BUY)


@pytest.mark.parametrize("body", ["stop", "Stop", "/STOP", "unsubscribe", " Unsubscribe "])
def test_stop(body):
    assert classify(body) == Command(CommandKind.STOP)


def test_login_command_with_token():
    assert classify("/login abc123") == Command(CommandKind.LOGIN, token="abc123")


def test_login_command_is_case_insensitive_and_takes_second_token():
    cmd = classify("/LOGIN   xyz  trailing words")
    assert cmd.kind is CommandKind.LOGIN
    assert cmd.token == "xyz"


def test_bare_alphanumeric_token():
    assert classify("abc123") == Command(CommandKind.LOGIN, token="abc123")
    assert classify("  A1B2C3D4E5 ") == Command(CommandKind.LOGIN, token="A1B2C3D4E5")


@pytest.mark.parametrize(
    "body",
    ["hi", "abc12", "hello world", "", None, "/login", "abc-123456", "stop please", "buy   plan", "token!123456"],
)
def test_ignored(body):
    assert classify(body) == Command(CommandKind.IGNORE)


def test_buy_words_take_precedence_over_token_shape():
    # "unsubscribe" is 11 alphanumerics but must still be a stop request
    assert classify("unsubscribe").kind is CommandKind.STOP
