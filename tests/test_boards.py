import pytest
from pydantic import ValidationError

from pinboard_digest.core.boards import board_info, encode_segment, parse_board
from pinboard_digest.core.errors import InvalidInputError
from pinboard_digest.core.models import BoardReference


@pytest.mark.parametrize("value, owner, slug", [
    ("https://pinterest.com/alice/travel-2024/?x=1", "alice", "travel-2024"),
    ("https://www.pinterest.com/alice/travel-2024/", "alice", "travel-2024"),
    ("https://www.pinterest.com/alice/travel-2024/more-ideas/#top", "alice", "travel-2024"),
    ("HTTP://pinterest.co.uk//alice//recipes", "alice", "recipes"),
    ("  https://www.pinterest.com/bob/cats  ", "bob", "cats"),
])
def test_parse_board_url_takes_first_two_segments(value: str, owner: str, slug: str) -> None:
    assert parse_board(value) == BoardReference(owner=owner, slug=slug)


@pytest.mark.parametrize("value, owner, slug", [
    ("alice/travel", "alice", "travel"),
    ("alice/travel/extra", "alice", "travel"),
    ("/alice/travel/", "alice", "travel"),
    (" alice/travel ", "alice", "travel"),
])
def test_parse_board_shorthand(value: str, owner: str, slug: str) -> None:
    board = parse_board(value)
    assert (board.owner, board.slug) == (owner, slug)


def test_parse_board_keeps_percent_encoding() -> None:
    board = parse_board("https://www.pinterest.com/al%20ice/travel/")
    assert board.owner == "al%20ice"


@pytest.mark.parametrize("value", [
    None,
    "",
    "   ",
    "alice",
    "/alice/",
    "https://www.pinterest.com/alice/",
    "https://www.pinterest.com/",
    "https:///alice/travel",
    "https://[::1/alice/travel",
])
def test_parse_board_rejects_incomplete_input(value) -> None:
    with pytest.raises(InvalidInputError):
        parse_board(value)


def test_parse_board_error_messages_are_user_facing() -> None:
    with pytest.raises(InvalidInputError, match="username/board format"):
        parse_board("alice")
    with pytest.raises(InvalidInputError, match="must contain the username and board slug"):
        parse_board("https://www.pinterest.com/alice/")


def test_board_reference_is_immutable_and_validated() -> None:
    board = BoardReference(owner="alice", slug="travel")
    with pytest.raises(ValidationError):
        board.owner = "mallory"
    with pytest.raises(ValidationError):
        BoardReference(owner="", slug="travel")
    with pytest.raises(ValidationError):
        BoardReference(owner="alice", slug="a/b")


def test_board_info_uses_readable_name_and_canonical_url() -> None:
    info = board_info(BoardReference(owner="alice", slug="summer-travel-2024"))
    assert info.name == "summer travel 2024"
    assert info.owner == "alice"
    assert info.url == "https://www.pinterest.com/alice/summer-travel-2024/"


@pytest.mark.parametrize("value", [
    "https://www.pinterest.com/alice/caf%C3%A9-ideas/",
    "alice/café-ideas",
])
def test_board_info_encodes_pasted_segments_once(value) -> None:
    info = board_info(parse_board(value))
    assert info.url == "https://www.pinterest.com/alice/caf%C3%A9-ideas/"
    assert info.name == "café ideas"


def test_encode_segment_is_stable_for_encoded_and_plain_input() -> None:
    assert encode_segment("al ice") == "al%20ice"
    assert encode_segment("al%20ice") == "al%20ice"
    assert encode_segment("caf%C3%A9") == encode_segment("café") == "caf%C3%A9"
