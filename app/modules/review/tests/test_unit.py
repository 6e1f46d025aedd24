import pytest

from app.modules.conftest import seed_review
from app.modules.review.components import EMPTY_REVIEW, OTHER_GAME_ERROR, ReviewModal
from app.modules.review.models import Review
from app.modules.review.repositories import ReviewRepository
from app.modules.review.services import ReviewService
from core.pocketbase import ClientResponseError, ErrorKind
from core.state import FormStatus
from core.validation import FormValidationError


@pytest.fixture()
def service(fake_pocketbase):
    return ReviewService(ReviewRepository(fake_pocketbase))


@pytest.fixture()
def added():
    return []


@pytest.fixture()
def modal(service, added):
    return ReviewModal(service, on_review_added=added.append)


@pytest.mark.parametrize(
    "name, rating, comment, field, message",
    [
        ("", 4, "Great game", "name", "Name is required"),
        ("   ", 4, "Great game", "name", "Name is required"),
        ("Bob", 0, "Great game", "rating", "Rating is required"),
        ("Bob", None, "Great game", "rating", "Rating is required"),
        ("Bob", "abc", "Great game", "rating", "Rating must be between 1 and 5"),
        ("Bob", 4.7, "Great game", "rating", "Rating must be between 1 and 5"),
        ("Bob", "4.5", "Great game", "rating", "Rating must be between 1 and 5"),
        ("Bob", True, "Great game", "rating", "Rating must be between 1 and 5"),
        ("Bob", "-1", "Great game", "rating", "Rating must be between 1 and 5"),
        (123, 4, "Great game", "name", "Name is required"),
        ("Bob", 4, ["Great game"], "comment", "Comment is required"),
        ("Bob", 6, "Great game", "rating", "Rating must be between 1 and 5"),
        ("Bob", -1, "Great game", "rating", "Rating must be between 1 and 5"),
        ("Bob", 4, "  ", "comment", "Comment is required"),
    ],
)
def test_validate_rejects(service, name, rating, comment, field, message):
    with pytest.raises(FormValidationError) as excinfo:
        service.validate(name, rating, comment)
    assert excinfo.value.errors == {field: message}


def test_validate_cleans_values(service):
    assert service.validate("  Bob ", "4", " Great game\n") == ("Bob", 4, "Great game")


def test_open_fetches_reviews_newest_first(modal, fake_pocketbase):
    seed_review(fake_pocketbase, "abc123", name="First")
    seed_review(fake_pocketbase, "abc123", name="Second")
    seed_review(fake_pocketbase, "other", name="Elsewhere")

    modal.open("abc123")

    assert [review.name for review in modal.reviews] == ["Second", "First"]
    (kind, collection, params), = fake_pocketbase.calls[-1:]
    assert (kind, collection) == ("list", "wap_games_comments")
    assert params["filter"] == "wap_game = 'abc123'"
    assert params["perPage"] == 50
    assert params["sort"] == "-created"


def test_open_same_game_twice_fetches_once(modal, fake_pocketbase):
    modal.open("abc123")
    modal.open("abc123")
    assert len(fake_pocketbase.calls) == 1


def test_open_without_game_does_nothing(modal, fake_pocketbase):
    modal.open("")
    assert fake_pocketbase.calls == []
    assert modal.game_id is None


def test_reopen_with_other_game_never_shows_previous(modal, fake_pocketbase):
    seed_review(fake_pocketbase, "game-a", name="About A")
    modal.open("game-a")
    assert [review.game_id for review in modal.reviews] == ["game-a"]

    fake_pocketbase.fail_next(ClientResponseError.cancelled())
    modal.open("game-b")

    assert modal.game_id == "game-b"
    assert modal.reviews == []
    assert modal.error is None


def test_reopen_after_close_fetches_again(modal, fake_pocketbase):
    modal.open("abc123")
    modal.close()
    modal.open("abc123")
    assert len(fake_pocketbase.calls) == 2


def test_cancelled_fetch_does_not_set_error(modal, fake_pocketbase):
    seed_review(fake_pocketbase, "abc123")
    modal.open("abc123")

    fake_pocketbase.fail_next(ClientResponseError.cancelled())
    modal.list_reviews("abc123")

    assert modal.error is None
    assert len(modal.reviews) == 1


def test_failed_fetch_sets_error_and_clears_list(modal, fake_pocketbase):
    seed_review(fake_pocketbase, "abc123")
    modal.open("abc123")

    fake_pocketbase.fail_next(ClientResponseError(ErrorKind.COLLABORATOR_ERROR, "Something went wrong.", 500))
    modal.list_reviews("abc123")

    assert modal.error == "Failed to load reviews: Something went wrong."
    assert modal.reviews == []


def test_submit_review_scenario(modal, fake_pocketbase, added):
    modal.open("abc123")
    modal.form.update(name="Bob", rating=4, comment="Great game")

    review = modal.submit_review("abc123", "Bob", 4, "Great game")

    assert review is not None
    assert modal.reviews[0].id == review.id
    assert (modal.reviews[0].name, modal.reviews[0].rating, modal.reviews[0].comment) == ("Bob", 4, "Great game")
    assert modal.form.fields == EMPTY_REVIEW
    assert modal.form.status is FormStatus.SUCCESS
    assert added == [review]

    (_, collection, body), = fake_pocketbase.writes()
    assert collection == "wap_games_comments"
    assert body == {"name": "Bob", "comment": "Great game", "rating": 4, "wap_game": "abc123"}


def test_submit_review_rating_zero_makes_no_request(modal, fake_pocketbase, added):
    result = modal.submit_review("abc123", "Bob", 0, "Great game")

    assert result is None
    assert fake_pocketbase.calls == []
    assert modal.form.field_errors == {"rating": "Rating is required"}
    assert modal.error == "Failed to submit review: Rating is required"
    assert modal.form.error_kind is ErrorKind.VALIDATION_FAILED
    assert modal.form.fields["name"] == "Bob"
    assert added == []


@pytest.mark.parametrize("name, rating, comment", [("", 3, "ok"), ("Bob", 9, "ok"), ("Bob", 3, "")])
def test_submit_review_invalid_never_writes(modal, fake_pocketbase, name, rating, comment):
    assert modal.submit_review("abc123", name, rating, comment) is None
    assert fake_pocketbase.writes() == []


def test_submit_review_collaborator_failure(modal, fake_pocketbase, added):
    fake_pocketbase.fail_next(
        ClientResponseError(
            ErrorKind.VALIDATION_FAILED,
            "Failed to create record.",
            status=400,
            data={"wap_game": {"code": "validation_missing_rel_records", "message": "Failed to find all relation records."}},
        )
    )

    result = modal.submit_review("abc123", "Bob", 4, "Great game")

    assert result is None
    assert modal.error == "Failed to submit review: Failed to create record."
    assert modal.form.field_errors == {"wap_game": "Failed to find all relation records."}
    assert modal.form.fields["comment"] == "Great game"
    assert added == []


def test_review_created_date():
    review = Review.from_record({"id": "r1", "wap_game": "g1", "rating": "3", "created": "2025-03-01 12:00:05.000Z"})
    assert review.rating == 3
    assert review.created_date.isoformat() == "2025-03-01"
    assert Review(id="r2", game_id="g1", name="x", rating=1, comment="y", created="garbage").created_date is None


def test_submit_review_with_non_text_name_fails_cleanly(modal, fake_pocketbase):
    assert modal.submit_review("abc123", 123, 4, "ok") is None

    assert modal.form.status is FormStatus.FAILED
    assert modal.form.field_errors == {"name": "Name is required"}
    assert fake_pocketbase.writes() == []


def test_submit_review_unexpected_error_releases_form(modal, service, fake_pocketbase, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(service, "add_review", boom)
    assert modal.submit_review("abc123", "Bob", 4, "Great game") is None
    assert modal.form.status is FormStatus.FAILED
    assert modal.form.error_kind is ErrorKind.COLLABORATOR_ERROR
    assert modal.error.startswith("Failed to submit review: ")

    monkeypatch.undo()
    assert modal.submit_review("abc123", "Bob", 4, "Great game") is not None
    assert modal.form.status is FormStatus.SUCCESS


def test_list_reviews_for_other_game_switches_modal(modal, fake_pocketbase):
    seed_review(fake_pocketbase, "game-a", name="About A")
    seed_review(fake_pocketbase, "game-b", name="About B")
    modal.open("game-a")

    modal.list_reviews("game-b")

    assert modal.game_id == "game-b"
    assert [review.name for review in modal.reviews] == ["About B"]


def test_submit_review_for_other_game_is_rejected(modal, fake_pocketbase, added):
    modal.open("game-a")

    assert modal.submit_review("game-b", "Bob", 4, "Great game") is None

    assert modal.game_id == "game-a"
    assert modal.form.field_errors == {"game_id": OTHER_GAME_ERROR}
    assert modal.form.error_kind is ErrorKind.VALIDATION_FAILED
    assert fake_pocketbase.writes() == []
    assert added == []


def test_submit_review_adopts_game_when_closed(modal, fake_pocketbase):
    review = modal.submit_review("abc123", "Bob", 4, "Great game")

    assert modal.game_id == "abc123"
    assert [item.id for item in modal.reviews] == [review.id]
