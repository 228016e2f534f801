from healthcheck.core.security import HeaderTokenAuthorizer
from tests.fakes import make_request


def test_empty_secret_authorizes_everyone() -> None:
    authorize = HeaderTokenAuthorizer("")

    assert authorize(make_request()) is True


def test_matching_token_is_authorized() -> None:
    authorize = HeaderTokenAuthorizer("secret-123")

    assert authorize(make_request(headers={"X-Health-Token": "secret-123"})) is True


def test_wrong_or_missing_token_is_rejected() -> None:
    authorize = HeaderTokenAuthorizer("secret-123")

    assert authorize(make_request(headers={"X-Health-Token": "wrong-secret"})) is False
    assert authorize(make_request()) is False


def test_custom_header() -> None:
    authorize = HeaderTokenAuthorizer("abc", header="Authorization")

    assert authorize(make_request(headers={"Authorization": "abc"})) is True
