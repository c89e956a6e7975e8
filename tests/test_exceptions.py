import pytest

from app.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    SocialError,
)


@pytest.mark.parametrize("error_class, status_code", [
    (BadRequestError, 400),
    (ForbiddenError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
])
def test_default_detail_when_none_given(error_class, status_code):
    error = error_class()

    assert error.status_code == status_code
    assert error.detail == error_class.default_detail
    assert str(error) == error_class.default_detail


def test_explicit_detail_and_value_error_compatibility():
    error = NotFoundError("Friendship not found")

    assert error.detail == "Friendship not found"
    assert isinstance(error, SocialError)
    with pytest.raises(ValueError):
        raise error
